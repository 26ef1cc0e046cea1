"""ViewSets for the HRM module."""
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from api.v1.pagination import RosterPagination, StandardResultsSetPagination
from api.v1.permissions import IsStaffOrReadOnly
from hrm.models import Employee, SalaryComponent
from hrm.serializers import (
    EmployeeSerializer,
    SalaryComponentSerializer,
    SalarySettingSerializer,
    SalarySummarySerializer,
)
from hrm.services import get_salary_settings, save_salary_settings, summarize_salary


# ---------------------------------------------------------------------------
# Employee
# ---------------------------------------------------------------------------

class EmployeeViewSet(viewsets.ModelViewSet):
    """CRUD for the employee roster plus per-employee salary settings."""

    serializer_class = EmployeeSerializer
    queryset = Employee.objects.select_related("store")
    permission_classes = [permissions.IsAuthenticated, IsStaffOrReadOnly]
    pagination_class = RosterPagination
    filterset_fields = ["position", "store", "compensation_mode", "is_active"]
    search_fields = ["name", "position"]
    ordering_fields = ["name", "position", "hire_date", "created_at"]

    @action(detail=True, methods=["get", "put"], url_path="salary-settings")
    def salary_settings(self, request, pk=None):
        employee = self.get_object()
        if request.method == "PUT":
            payload = request.data
            if isinstance(payload, dict):
                payload = payload.get("settings", [])
            serializer = SalarySettingSerializer(data=payload, many=True)
            serializer.is_valid(raise_exception=True)
            try:
                save_salary_settings(employee, serializer.validated_data)
            except ValueError as exc:
                raise ValidationError({"detail": str(exc)})
        settings = get_salary_settings(employee)
        return Response(SalarySettingSerializer(settings, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"], url_path="salary-summary")
    def salary_summary(self, request, pk=None):
        employee = self.get_object()
        return Response(SalarySummarySerializer(summarize_salary(employee)).data)


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------

class SalaryComponentViewSet(viewsets.ModelViewSet):
    """CRUD for allowance and deduction components."""

    serializer_class = SalaryComponentSerializer
    queryset = SalaryComponent.objects.all()
    permission_classes = [permissions.IsAuthenticated, IsStaffOrReadOnly]
    pagination_class = StandardResultsSetPagination
    filterset_fields = ["component_type", "is_fixed", "is_active"]
    search_fields = ["name"]
