"""Serializers for store endpoints."""
from rest_framework import serializers

from stores.models import UNASSIGNED_STORE_NAME, Store


class StoreSerializer(serializers.ModelSerializer):
    employee_count = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = ["id", "name", "code", "is_active", "employee_count", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def get_employee_count(self, obj):
        count = getattr(obj, "employee_count", None)
        if count is None:
            count = obj.employees.filter(is_active=True).count()
        return count

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("점포명을 입력해주세요.")
        if value == UNASSIGNED_STORE_NAME:
            raise serializers.ValidationError(f"'{UNASSIGNED_STORE_NAME}'은(는) 사용할 수 없는 점포명입니다.")
        qs = Store.objects.filter(name=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("이미 등록된 점포명입니다.")
        return value
