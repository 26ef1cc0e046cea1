"""Business logic for the employee roster and salary settings."""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.db import transaction

from hrm.models import Employee, EmployeeSalaryComponent, SalaryComponent
from incentives.engine import CompensationMode, EmploymentClassification

logger = logging.getLogger("incentive_desk")

ZERO = Decimal("0.00")


def classification_for(employee):
    """Return the engine view of an employee; ``None`` when not on the roster."""
    if employee is None:
        return None
    return EmploymentClassification(
        compensation_mode=CompensationMode(employee.compensation_mode),
        base_salary=employee.base_salary or ZERO,
    )


def build_roster_index(queryset=None):
    """Map employee name -> Employee across the whole roster.

    Sales rows only carry the worker's name, so the name is the join key.
    Inactive staff are included; an active row wins when stripped names
    collide.
    """
    if queryset is None:
        queryset = Employee.objects.select_related("store").order_by("is_active")
    return {employee.name.strip(): employee for employee in queryset}


# ---------------------------------------------------------------------------
# Salary settings
# ---------------------------------------------------------------------------

def get_salary_settings(employee):
    """Active fixed components with the employee's amount (or the default)."""
    components = SalaryComponent.objects.filter(is_active=True, is_fixed=True)
    assigned = {
        row.component_id: row.amount
        for row in EmployeeSalaryComponent.objects.filter(employee=employee)
    }
    settings = []
    for component in components:
        configured = component.pk in assigned
        settings.append({
            "component": component.pk,
            "name": component.name,
            "component_type": component.component_type,
            "is_taxable": component.is_taxable,
            "default_amount": component.default_amount,
            "amount": assigned[component.pk] if configured else component.default_amount,
            "is_configured": configured,
        })
    return settings


@transaction.atomic
def save_salary_settings(employee, entries):
    """Upsert per-employee amounts for fixed components.

    ``entries`` is an iterable of ``{"component": <id>, "amount": <number>}``.
    Unknown, inactive or non-fixed components raise ``ValueError`` and nothing
    is written.
    """
    entries = list(entries)
    component_ids = [entry.get("component") for entry in entries]
    components = SalaryComponent.objects.in_bulk(
        [cid for cid in component_ids if cid is not None]
    )
    components = {str(pk): component for pk, component in components.items()}

    saved = []
    for entry in entries:
        component = components.get(str(entry.get("component")))
        if component is None or not component.is_active:
            raise ValueError(f"알 수 없는 급여 항목입니다: {entry.get('component')}")
        if not component.is_fixed:
            raise ValueError(f"고정 금액 항목이 아닙니다: {component.name}")
        amount = _parse_amount(entry.get("amount"))
        if amount is None or amount < 0:
            raise ValueError(f"금액이 올바르지 않습니다: {component.name}")

        assignment, _created = EmployeeSalaryComponent.objects.update_or_create(
            employee=employee,
            component=component,
            defaults={"amount": amount},
        )
        saved.append(assignment)

    logger.info(
        "Salary settings saved employee=%s components=%d", employee.name, len(saved),
    )
    return saved


@dataclass(frozen=True)
class SalarySummary:
    base_salary: Decimal
    total_allowances: Decimal
    taxable_allowances: Decimal
    total_deductions: Decimal

    @property
    def gross_pay(self):
        return self.base_salary + self.total_allowances

    @property
    def net_pay(self):
        return self.gross_pay - self.total_deductions


def summarize_salary(employee):
    """Aggregate base salary plus configured allowances and deductions."""
    allowances = ZERO
    taxable = ZERO
    deductions = ZERO
    for setting in get_salary_settings(employee):
        amount = setting["amount"] or ZERO
        if setting["component_type"] == SalaryComponent.ComponentType.DEDUCTION:
            deductions += amount
        else:
            allowances += amount
            if setting["is_taxable"]:
                taxable += amount
    return SalarySummary(
        base_salary=employee.base_salary or ZERO,
        total_allowances=allowances,
        taxable_allowances=taxable,
        total_deductions=deductions,
    )


def _parse_amount(value):
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value).replace(",", ""))
    except (InvalidOperation, ValueError):
        return None
