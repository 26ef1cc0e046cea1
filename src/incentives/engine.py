"""Incentive calculation engine for service-center staff.

Core design principles:
- Pure function of (sales record, employment classification, threshold table):
  no database access, no hidden state, safe to call per row in any order
- Never raises: ineligible rows come back as zero results tagged with an
  ``IncentiveOutcome`` so a single bad row cannot abort a batch
- Progressive tiers: each tier pays its rate only on the slice of net sales
  that falls inside it, scaled by one margin-based multiplier
- Decimal arithmetic so the final floor is exact
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from enum import Enum
from typing import Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

MANAGER_POSITION = "공장장"
# Lowest-seniority position: no real third tier, the excess keeps the tier-2 rate.
JUNIOR_POSITION = "기사"
TAXI_CATEGORY_MARKER = "택시"

Thresholds = Tuple[int, int, int]
ThresholdTable = Mapping[str, Sequence[int]]

# position -> (base, level 1 end, level 2 end)
DEFAULT_THRESHOLDS: dict[str, Thresholds] = {
    "기사": (21_500_000, 25_500_000, 40_000_000),
    "선임기사": (23_000_000, 27_000_000, 42_000_000),
    "팀장": (24_500_000, 28_500_000, 45_500_000),
}

TIER_RATES = (Decimal("0.03"), Decimal("0.07"), Decimal("0.10"))

MULTIPLIER_BY_COLUMN = (
    Decimal("0.90"),
    Decimal("0.95"),
    Decimal("1.00"),
    Decimal("1.10"),
    Decimal("1.20"),
    Decimal("1.30"),
    Decimal("1.40"),
    Decimal("1.50"),
    Decimal("1.60"),
)

ZERO = Decimal("0")


class CompensationMode(str, Enum):
    INCENTIVE = "INCENTIVE"
    BASIC = "BASIC"


class IncentiveOutcome(str, Enum):
    """Why a result has the amount it has.

    ``CALCULATED`` covers every row that went through the tiers, including
    rows below the base threshold (level 0, amount 0, no message).
    """

    CALCULATED = "CALCULATED"
    BASIC_SALARY_ONLY = "BASIC_SALARY_ONLY"
    MANAGER_ROLE = "MANAGER_ROLE"
    UNKNOWN_POSITION = "UNKNOWN_POSITION"


OUTCOME_MESSAGES = {
    IncentiveOutcome.BASIC_SALARY_ONLY: "basic-salary only (no incentive)",
    IncentiveOutcome.MANAGER_ROLE: "manager role (no incentive)",
    IncentiveOutcome.UNKNOWN_POSITION: "unknown position",
}


@dataclass(frozen=True)
class MarginScale:
    """Ordered ``(inclusive upper bound, column)`` pairs plus a catch-all column."""

    breakpoints: Tuple[Tuple[Decimal, int], ...]
    catch_all_column: int

    def column_for(self, margin: Decimal) -> int:
        for upper_bound, column in self.breakpoints:
            if margin <= upper_bound:
                return column
        return self.catch_all_column


TAXI_MARGIN_SCALE = MarginScale(
    breakpoints=(
        (Decimal("36.5"), 1),
        (Decimal("38.0"), 2),
        (Decimal("39.5"), 3),
        (Decimal("41.0"), 4),
    ),
    catch_all_column=5,
)

GENERAL_MARGIN_SCALE = MarginScale(
    breakpoints=(
        (Decimal("36.5"), 1),
        (Decimal("38.0"), 2),
        (Decimal("39.5"), 3),
        (Decimal("41.0"), 4),
        (Decimal("42.5"), 5),
        (Decimal("44.0"), 6),
        (Decimal("45.5"), 7),
        (Decimal("47.0"), 8),
    ),
    catch_all_column=9,
)


# ---------------------------------------------------------------------------
# Value records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SalesRecord:
    employee_name: str
    position: str
    category: str
    net_sales: Decimal
    profit_margin: Decimal  # percentage, 37.6 means 37.6%

    @property
    def gross_profit(self) -> Decimal:
        return _to_decimal(self.net_sales) * _to_decimal(self.profit_margin) / Decimal("100")


@dataclass(frozen=True)
class EmploymentClassification:
    compensation_mode: CompensationMode = CompensationMode.INCENTIVE
    base_salary: Decimal = ZERO


@dataclass(frozen=True)
class IncentiveResult:
    incentive_amount: int
    level: int
    multiplier: Decimal
    base_deductible: int
    base_salary: Decimal
    total_salary: Decimal
    outcome: IncentiveOutcome = IncentiveOutcome.CALCULATED
    message: Optional[str] = None

    @property
    def is_ineligible(self) -> bool:
        return self.outcome is not IncentiveOutcome.CALCULATED


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def calculate(
    record: SalesRecord,
    classification: Optional[EmploymentClassification] = None,
    thresholds: Optional[ThresholdTable] = None,
) -> IncentiveResult:
    """Compute the incentive and total salary for one employee and period.

    Short-circuits, in order: basic-salary-only employees, the manager role,
    positions without thresholds. Everything else goes through the tiers.
    """
    base_salary = _to_decimal(classification.base_salary) if classification else ZERO

    if classification is not None and classification.compensation_mode == CompensationMode.BASIC:
        return _ineligible(IncentiveOutcome.BASIC_SALARY_ONLY, base_salary)

    position = (record.position or "").strip()
    if position == MANAGER_POSITION:
        return _ineligible(IncentiveOutcome.MANAGER_ROLE, base_salary)

    triple = resolve_thresholds(position, thresholds)
    if triple is None:
        logger.debug("No thresholds for position=%r (employee=%r)", position, record.employee_name)
        return _ineligible(IncentiveOutcome.UNKNOWN_POSITION, base_salary)

    base, level1_end, level2_end = (Decimal(value) for value in triple)
    net_sales = _to_decimal(record.net_sales)
    _, multiplier = resolve_multiplier(record.profit_margin, record.category)

    top_rate = TIER_RATES[1] if position == JUNIOR_POSITION else TIER_RATES[2]
    tiers = (
        (1, base, level1_end, TIER_RATES[0]),
        (2, level1_end, level2_end, TIER_RATES[1]),
        (3, level2_end, None, top_rate),
    )

    total = ZERO
    level = 0
    for tier_level, start, end, rate in tiers:
        if net_sales <= start:
            continue
        limit = net_sales if end is None else min(net_sales, end)
        amount = limit - start
        if amount > 0:
            total += amount * rate * multiplier
            level = tier_level

    incentive = int(total.to_integral_value(rounding=ROUND_FLOOR))
    return IncentiveResult(
        incentive_amount=incentive,
        level=level,
        multiplier=multiplier,
        base_deductible=int(base),
        base_salary=base_salary,
        total_salary=incentive + base_salary,
    )


def resolve_thresholds(position: str, thresholds: Optional[ThresholdTable] = None) -> Optional[Thresholds]:
    """Override table first, then the built-in defaults; ``None`` if neither knows the position."""
    position = (position or "").strip()
    if thresholds is not None:
        triple = _as_triple(thresholds.get(position))
        if triple is not None:
            return triple
    return DEFAULT_THRESHOLDS.get(position)


def resolve_multiplier(profit_margin, category: str) -> Tuple[int, Decimal]:
    """Return ``(column, multiplier)`` for a margin percentage and category."""
    scale = TAXI_MARGIN_SCALE if TAXI_CATEGORY_MARKER in (category or "") else GENERAL_MARGIN_SCALE
    column = scale.column_for(_to_decimal(profit_margin))
    return column, MULTIPLIER_BY_COLUMN[column - 1]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _ineligible(outcome: IncentiveOutcome, base_salary: Decimal) -> IncentiveResult:
    return IncentiveResult(
        incentive_amount=0,
        level=0,
        multiplier=ZERO,
        base_deductible=0,
        base_salary=base_salary,
        total_salary=base_salary,
        outcome=outcome,
        message=OUTCOME_MESSAGES[outcome],
    )


def _as_triple(value) -> Optional[Thresholds]:
    if value is None:
        return None
    try:
        base, level1_end, level2_end = (int(v) for v in value)
    except (TypeError, ValueError, OverflowError):
        return None
    return base, level1_end, level2_end


def _to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    # NaN would make every ordering comparison raise.
    return number if number.is_finite() else ZERO
