"""API v1 store endpoints."""
import logging

from django.db.models import Count, Q
from rest_framework import permissions, viewsets

from api.v1.pagination import StandardResultsSetPagination
from api.v1.permissions import IsStaffOrReadOnly
from api.v1.serializers import StoreSerializer
from stores.models import Store

logger = logging.getLogger("incentive_desk")


class StoreViewSet(viewsets.ModelViewSet):
    """CRUD for service-center stores."""

    serializer_class = StoreSerializer
    queryset = Store.objects.annotate(
        employee_count=Count("employees", filter=Q(employees__is_active=True)),
    )
    permission_classes = [permissions.IsAuthenticated, IsStaffOrReadOnly]
    pagination_class = StandardResultsSetPagination
    filterset_fields = ["is_active"]
    search_fields = ["name", "code"]
    ordering_fields = ["name", "created_at"]

    def perform_create(self, serializer):
        store = serializer.save()
        logger.info("Store created: %s", store.name)

    def perform_destroy(self, instance):
        logger.info("Store deleted: %s", instance.name)
        instance.delete()
