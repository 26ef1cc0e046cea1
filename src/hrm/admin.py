"""Django admin configuration for the HRM app."""
from django.contrib import admin

from hrm.models import Employee, EmployeeSalaryComponent, SalaryComponent


class EmployeeSalaryComponentInline(admin.TabularInline):
    model = EmployeeSalaryComponent
    extra = 0
    autocomplete_fields = ("component",)


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("name", "position", "store", "compensation_mode", "base_salary", "is_active")
    list_filter = ("compensation_mode", "is_active", "store")
    search_fields = ("name", "position")
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [EmployeeSalaryComponentInline]
    list_per_page = 50


@admin.register(SalaryComponent)
class SalaryComponentAdmin(admin.ModelAdmin):
    list_display = ("name", "component_type", "is_taxable", "is_fixed", "default_amount", "is_active")
    list_filter = ("component_type", "is_taxable", "is_fixed", "is_active")
    search_fields = ("name",)
    readonly_fields = ("id", "created_at", "updated_at")
