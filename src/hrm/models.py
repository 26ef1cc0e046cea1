"""HRM models: employee roster and salary components."""
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from core.models import TimeStampedModel


# ---------------------------------------------------------------------------
# Employee
# ---------------------------------------------------------------------------

class Employee(TimeStampedModel):
    """Service-center staff member, matched to uploaded sales rows by name."""

    class CompensationMode(models.TextChoices):
        INCENTIVE = "INCENTIVE", "인센티브"
        BASIC = "BASIC", "기본급 전용"

    name = models.CharField("이름", max_length=100, unique=True)
    position = models.CharField("직급", max_length=50, default="기사")
    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="employees",
        verbose_name="점포",
    )
    compensation_mode = models.CharField(
        "급여 형태",
        max_length=20,
        choices=CompensationMode.choices,
        default=CompensationMode.INCENTIVE,
        db_index=True,
    )
    base_salary = models.DecimalField(
        "기본급",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    hire_date = models.DateField("입사일", null=True, blank=True)
    is_active = models.BooleanField("재직", default=True)

    class Meta:
        verbose_name = "직원"
        verbose_name_plural = "직원"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.position})"

    def clean(self):
        self.name = (self.name or "").strip()
        self.position = (self.position or "").strip()
        if not self.name:
            raise ValidationError({"name": "이름을 입력해주세요."})

    @property
    def store_name(self):
        return self.store.name if self.store_id else ""


# ---------------------------------------------------------------------------
# Salary components
# ---------------------------------------------------------------------------

class SalaryComponent(TimeStampedModel):
    """Reusable allowance or fixed deduction (e.g. night-shift allowance)."""

    class ComponentType(models.TextChoices):
        ALLOWANCE = "ALLOWANCE", "수당"
        DEDUCTION = "DEDUCTION", "공제"

    name = models.CharField("항목명", max_length=100, unique=True)
    component_type = models.CharField(
        "구분",
        max_length=20,
        choices=ComponentType.choices,
        default=ComponentType.ALLOWANCE,
    )
    is_taxable = models.BooleanField("과세", default=True)
    is_fixed = models.BooleanField("고정 금액", default=True)
    default_amount = models.DecimalField(
        "기본 금액",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    is_active = models.BooleanField("사용", default=True)

    class Meta:
        verbose_name = "급여 항목"
        verbose_name_plural = "급여 항목"
        ordering = ["component_type", "created_at"]

    def __str__(self):
        return f"{self.name} ({self.get_component_type_display()})"


class EmployeeSalaryComponent(TimeStampedModel):
    """Amount of a salary component configured for one employee."""

    employee = models.ForeignKey(
        Employee,
        on_delete=models.CASCADE,
        related_name="salary_components",
        verbose_name="직원",
    )
    component = models.ForeignKey(
        SalaryComponent,
        on_delete=models.CASCADE,
        related_name="employee_assignments",
        verbose_name="급여 항목",
    )
    amount = models.DecimalField(
        "금액",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )

    class Meta:
        verbose_name = "직원 급여 설정"
        verbose_name_plural = "직원 급여 설정"
        unique_together = [("employee", "component")]

    def __str__(self):
        return f"{self.employee.name} - {self.component.name}"
