"""
Service functions for the incentives app.

Thresholds, batch calculation over imported rows, monthly persistence and
per-store labor-share statistics. The arithmetic itself lives in
``incentives.engine``; this module only feeds it and stores its results.
"""
import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import transaction

from hrm.services import build_roster_index, classification_for
from incentives import engine
from incentives.models import IncentiveDetail, MonthlyRecord, PositionThreshold
from stores.models import UNASSIGNED_STORE_NAME

logger = logging.getLogger("incentive_desk")

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class RecordExistsError(Exception):
    """A monthly record already exists for the requested period."""

    def __init__(self, year, month):
        self.year = year
        self.month = month
        super().__init__(f"{year}년 {month}월 기록이 이미 존재합니다.")


# =========================================================================
# Thresholds
# =========================================================================

def get_threshold_table():
    """Return ``{position: (base, level1_end, level2_end)}`` or ``None`` if unset."""
    rows = list(PositionThreshold.objects.all())
    if not rows:
        return None
    return {row.position: row.as_triple() for row in rows}


@transaction.atomic
def reset_thresholds_to_defaults():
    PositionThreshold.objects.all().delete()
    created = [
        PositionThreshold.objects.create(
            position=position, base=base, level1_end=level1_end, level2_end=level2_end,
        )
        for position, (base, level1_end, level2_end) in engine.DEFAULT_THRESHOLDS.items()
    ]
    logger.info("Thresholds reset to defaults (%d positions).", len(created))
    return created


# =========================================================================
# Batch calculation
# =========================================================================

@dataclass(frozen=True)
class BatchRow:
    record: engine.SalesRecord
    result: engine.IncentiveResult
    store_name: str
    on_roster: bool


@dataclass(frozen=True)
class BatchSummary:
    employee_count: int
    total_net_sales: Decimal
    total_incentive: int
    total_salary: Decimal


def calculate_batch(records, thresholds=None, roster=None):
    """Run the engine over every record.

    The roster is matched by exact worker name; workers that are not on the
    roster are calculated with the default classification and reported under
    the unassigned store.
    """
    if thresholds is None:
        thresholds = get_threshold_table()
    if roster is None:
        roster = build_roster_index()

    rows = []
    for record in records:
        employee = roster.get((record.employee_name or "").strip())
        result = engine.calculate(record, classification_for(employee), thresholds)
        store_name = employee.store_name if employee is not None else ""
        rows.append(BatchRow(
            record=record,
            result=result,
            store_name=store_name or UNASSIGNED_STORE_NAME,
            on_roster=employee is not None,
        ))
    return rows


def summarize_batch(rows):
    return BatchSummary(
        employee_count=len(rows),
        total_net_sales=sum((Decimal(row.record.net_sales) for row in rows), ZERO),
        total_incentive=sum(row.result.incentive_amount for row in rows),
        total_salary=sum((Decimal(row.result.total_salary) for row in rows), ZERO),
    )


# =========================================================================
# Monthly history
# =========================================================================

@transaction.atomic
def save_monthly_record(year, month, records, overwrite=False, thresholds=None, roster=None):
    """
    Calculate ``records`` and store them as the record for (year, month).

    Raises ``RecordExistsError`` when the period is already saved and
    ``overwrite`` is false; with ``overwrite`` the old record and its
    details are replaced.
    """
    year, month = int(year), int(month)
    if not 1 <= month <= 12:
        raise ValueError("월은 1에서 12 사이여야 합니다.")
    records = list(records)
    if not records:
        raise ValueError("저장할 데이터가 없습니다.")

    existing = MonthlyRecord.objects.select_for_update().filter(year=year, month=month).first()
    if existing is not None:
        if not overwrite:
            raise RecordExistsError(year, month)
        existing.delete()
        logger.info("Monthly record %d-%02d overwritten.", year, month)

    rows = calculate_batch(records, thresholds=thresholds, roster=roster)
    total_profit = sum((row.record.gross_profit for row in rows), ZERO)

    monthly = MonthlyRecord.objects.create(
        year=year,
        month=month,
        total_revenue=sum((Decimal(row.record.net_sales) for row in rows), ZERO),
        total_incentive=sum(row.result.incentive_amount for row in rows),
        total_profit=int(total_profit.quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
        employee_count=len(rows),
    )
    IncentiveDetail.objects.bulk_create([
        IncentiveDetail(
            record=monthly,
            employee_name=row.record.employee_name,
            position=row.record.position or "",
            store_name=row.store_name,
            category=row.record.category or "",
            net_sales=row.record.net_sales,
            profit_margin=row.record.profit_margin,
            incentive_amount=row.result.incentive_amount,
            level=row.result.level,
            multiplier=row.result.multiplier,
            outcome=row.result.outcome.value,
        )
        for row in rows
    ])

    logger.info(
        "Monthly record %d-%02d saved: %d employee(s), incentive total %s.",
        year, month, monthly.employee_count, monthly.total_incentive,
    )
    return monthly


def list_monthly_records():
    return MonthlyRecord.objects.all().order_by("-year", "-month")


def get_monthly_details(record):
    return record.details.all().order_by("-incentive_amount", "employee_name")


# =========================================================================
# Statistics
# =========================================================================

@dataclass
class EmployeeStatistics:
    employee_name: str
    position: str
    net_sales: Decimal
    gross_profit: Decimal
    incentive: int
    base_salary: Decimal
    labor_cost: Decimal
    labor_share: Decimal
    band: str


@dataclass
class StoreStatistics:
    store_name: str
    employee_count: int = 0
    net_sales: Decimal = ZERO
    gross_profit: Decimal = ZERO
    total_incentive: int = 0
    total_base_salary: Decimal = ZERO
    labor_cost: Decimal = ZERO
    labor_share: Decimal = ZERO
    band: str = "NORMAL"
    employees: list = field(default_factory=list)


@dataclass
class StatisticsReport:
    year: int
    month: int
    stores: list
    total_net_sales: Decimal
    total_gross_profit: Decimal
    total_labor_cost: Decimal
    labor_share: Decimal
    band: str


def labor_share_percent(labor_cost, gross_profit):
    """``labor / profit x 100`` rounded to one decimal; 0 when there is no profit."""
    if gross_profit <= 0:
        return Decimal("0.0")
    return (Decimal(labor_cost) / Decimal(gross_profit) * HUNDRED).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP
    )


def labor_share_band(share):
    if share > settings.LABOR_SHARE_HIGH_PERCENT:
        return "HIGH"
    if share > settings.LABOR_SHARE_WARNING_PERCENT:
        return "WARNING"
    return "NORMAL"


def compute_store_statistics(record, roster=None):
    """Group a saved record's details by store and compute labor shares.

    Base salaries come from the current roster, matched by name.
    """
    if roster is None:
        roster = build_roster_index()

    stores = {}
    for detail in get_monthly_details(record):
        employee = roster.get(detail.employee_name.strip())
        base_salary = (employee.base_salary if employee is not None else None) or ZERO
        gross_profit = detail.gross_profit
        labor_cost = Decimal(detail.incentive_amount) + base_salary
        share = labor_share_percent(labor_cost, gross_profit)

        store_name = detail.store_name or UNASSIGNED_STORE_NAME
        store = stores.setdefault(store_name, StoreStatistics(store_name=store_name))
        store.employee_count += 1
        store.net_sales += detail.net_sales
        store.gross_profit += gross_profit
        store.total_incentive += detail.incentive_amount
        store.total_base_salary += base_salary
        store.labor_cost += labor_cost
        store.employees.append(EmployeeStatistics(
            employee_name=detail.employee_name,
            position=detail.position,
            net_sales=detail.net_sales,
            gross_profit=gross_profit,
            incentive=detail.incentive_amount,
            base_salary=base_salary,
            labor_cost=labor_cost,
            labor_share=share,
            band=labor_share_band(share),
        ))

    for store in stores.values():
        store.labor_share = labor_share_percent(store.labor_cost, store.gross_profit)
        store.band = labor_share_band(store.labor_share)

    ordered = sorted(stores.values(), key=lambda s: s.net_sales, reverse=True)
    total_profit = sum((s.gross_profit for s in ordered), ZERO)
    total_labor = sum((s.labor_cost for s in ordered), ZERO)
    overall = labor_share_percent(total_labor, total_profit)
    return StatisticsReport(
        year=record.year,
        month=record.month,
        stores=ordered,
        total_net_sales=sum((s.net_sales for s in ordered), ZERO),
        total_gross_profit=total_profit,
        total_labor_cost=total_labor,
        labor_share=overall,
        band=labor_share_band(overall),
    )
