"""Incentive models: position thresholds, monthly records and their details."""
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimeStampedModel
from incentives.engine import IncentiveOutcome


# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------

class PositionThreshold(TimeStampedModel):
    """Net-sales breakpoints (in won) for one position."""

    position = models.CharField("직급", max_length=50, unique=True)
    base = models.PositiveBigIntegerField("기본 공제액")
    level1_end = models.PositiveBigIntegerField("1구간 상한")
    level2_end = models.PositiveBigIntegerField("2구간 상한")

    class Meta:
        verbose_name = "직급별 기준 매출"
        verbose_name_plural = "직급별 기준 매출"
        ordering = ["base", "position"]

    def __str__(self):
        return f"{self.position}: {self.base:,} / {self.level1_end:,} / {self.level2_end:,}"

    def clean(self):
        self.position = (self.position or "").strip()
        if not self.position:
            raise ValidationError({"position": "직급을 입력해주세요."})
        if None in (self.base, self.level1_end, self.level2_end):
            return
        if not self.base <= self.level1_end <= self.level2_end:
            raise ValidationError(
                "기준 매출은 기본 공제액 ≤ 1구간 상한 ≤ 2구간 상한 순서여야 합니다."
            )

    def as_triple(self):
        return (self.base, self.level1_end, self.level2_end)


# ---------------------------------------------------------------------------
# Monthly history
# ---------------------------------------------------------------------------

class MonthlyRecord(TimeStampedModel):
    """Saved calculation for one (year, month)."""

    year = models.PositiveSmallIntegerField(
        "연도", validators=[MinValueValidator(2000), MaxValueValidator(2100)]
    )
    month = models.PositiveSmallIntegerField(
        "월", validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    total_revenue = models.DecimalField(
        "총 순매출", max_digits=20, decimal_places=2, default=Decimal("0.00")
    )
    total_incentive = models.BigIntegerField("총 인센티브", default=0)
    total_profit = models.BigIntegerField("총 매출이익", default=0)
    employee_count = models.PositiveIntegerField("인원", default=0)

    class Meta:
        verbose_name = "월별 기록"
        verbose_name_plural = "월별 기록"
        ordering = ["-year", "-month"]
        unique_together = [("year", "month")]

    def __str__(self):
        return f"{self.year}년 {self.month}월"

    @property
    def period_label(self):
        return f"{self.year}-{self.month:02d}"


class IncentiveDetail(TimeStampedModel):
    """One employee line of a saved monthly record."""

    OUTCOME_CHOICES = [
        (IncentiveOutcome.CALCULATED.value, "계산됨"),
        (IncentiveOutcome.BASIC_SALARY_ONLY.value, "기본급 전용"),
        (IncentiveOutcome.MANAGER_ROLE.value, "공장장"),
        (IncentiveOutcome.UNKNOWN_POSITION.value, "알 수 없는 직급"),
    ]

    record = models.ForeignKey(
        MonthlyRecord,
        on_delete=models.CASCADE,
        related_name="details",
        verbose_name="월별 기록",
    )
    employee_name = models.CharField("작업자명", max_length=100)
    position = models.CharField("직급", max_length=50, blank=True, default="")
    store_name = models.CharField("점포", max_length=120, blank=True, default="")
    category = models.CharField("인센적용", max_length=100, blank=True, default="")
    net_sales = models.DecimalField(
        "순매출액", max_digits=16, decimal_places=2, default=Decimal("0.00")
    )
    profit_margin = models.DecimalField(
        "매익율", max_digits=6, decimal_places=2, default=Decimal("0.00")
    )
    incentive_amount = models.BigIntegerField("인센티브", default=0)
    level = models.PositiveSmallIntegerField("달성 구간", default=0)
    multiplier = models.DecimalField(
        "배수", max_digits=4, decimal_places=2, default=Decimal("0.00")
    )
    outcome = models.CharField(
        "결과",
        max_length=30,
        choices=OUTCOME_CHOICES,
        default=IncentiveOutcome.CALCULATED.value,
    )

    class Meta:
        verbose_name = "인센티브 내역"
        verbose_name_plural = "인센티브 내역"
        ordering = ["-incentive_amount", "employee_name"]

    def __str__(self):
        return f"{self.record} {self.employee_name}: {self.incentive_amount:,}"

    @property
    def gross_profit(self):
        return (self.net_sales or Decimal("0")) * (self.profit_margin or Decimal("0")) / Decimal("100")
