"""Django admin configuration for the incentives app."""
from django.contrib import admin

from incentives.models import IncentiveDetail, MonthlyRecord, PositionThreshold


@admin.register(PositionThreshold)
class PositionThresholdAdmin(admin.ModelAdmin):
    list_display = ("position", "base", "level1_end", "level2_end", "updated_at")
    search_fields = ("position",)
    readonly_fields = ("id", "created_at", "updated_at")


class IncentiveDetailInline(admin.TabularInline):
    model = IncentiveDetail
    extra = 0
    fields = (
        "employee_name", "position", "store_name", "category",
        "net_sales", "profit_margin", "level", "multiplier",
        "incentive_amount", "outcome",
    )
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(MonthlyRecord)
class MonthlyRecordAdmin(admin.ModelAdmin):
    list_display = (
        "year", "month", "employee_count",
        "total_revenue", "total_profit", "total_incentive", "created_at",
    )
    list_filter = ("year",)
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [IncentiveDetailInline]
