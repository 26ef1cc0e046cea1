"""Serializers for the HRM module."""
from rest_framework import serializers

from hrm.models import Employee, SalaryComponent


# ---------------------------------------------------------------------------
# Employee
# ---------------------------------------------------------------------------

class EmployeeSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source="store.name", read_only=True, default=None)
    compensation_mode_display = serializers.CharField(
        source="get_compensation_mode_display", read_only=True
    )

    class Meta:
        model = Employee
        fields = [
            "id", "name", "position", "store", "store_name",
            "compensation_mode", "compensation_mode_display",
            "base_salary", "hire_date", "is_active",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("이름을 입력해주세요.")
        return value

    def validate_position(self, value):
        return (value or "").strip()


# ---------------------------------------------------------------------------
# Salary components
# ---------------------------------------------------------------------------

class SalaryComponentSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalaryComponent
        fields = [
            "id", "name", "component_type", "is_taxable", "is_fixed",
            "default_amount", "is_active",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class SalarySettingSerializer(serializers.Serializer):
    """One line of the merged per-employee salary settings view."""

    component = serializers.UUIDField()
    name = serializers.CharField(read_only=True)
    component_type = serializers.CharField(read_only=True)
    is_taxable = serializers.BooleanField(read_only=True)
    default_amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    is_configured = serializers.BooleanField(read_only=True)


class SalarySummarySerializer(serializers.Serializer):
    base_salary = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_allowances = serializers.DecimalField(max_digits=14, decimal_places=2)
    taxable_allowances = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_deductions = serializers.DecimalField(max_digits=14, decimal_places=2)
    gross_pay = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_pay = serializers.DecimalField(max_digits=14, decimal_places=2)
