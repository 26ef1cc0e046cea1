from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from incentives.engine import DEFAULT_THRESHOLDS, IncentiveOutcome, SalesRecord
from incentives.models import IncentiveDetail, MonthlyRecord, PositionThreshold
from incentives.services import (
    RecordExistsError,
    calculate_batch,
    get_threshold_table,
    reset_thresholds_to_defaults,
    save_monthly_record,
    summarize_batch,
)
from stores.models import UNASSIGNED_STORE_NAME


def _record(name, position="기사", net_sales=30_000_000, margin="40.0", category="일반"):
    return SalesRecord(
        employee_name=name,
        position=position,
        category=category,
        net_sales=Decimal(str(net_sales)),
        profit_margin=Decimal(margin),
    )


# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestThresholds:
    def test_no_rows_means_no_override(self):
        assert get_threshold_table() is None

    def test_reset_to_defaults(self):
        PositionThreshold.objects.create(position="수습", base=1, level1_end=2, level2_end=3)

        reset_thresholds_to_defaults()

        assert get_threshold_table() == DEFAULT_THRESHOLDS

    def test_order_is_validated(self):
        threshold = PositionThreshold(
            position="기사", base=30_000_000, level1_end=20_000_000, level2_end=40_000_000,
        )

        with pytest.raises(ValidationError):
            threshold.full_clean()

    def test_equal_breakpoints_are_allowed(self):
        threshold = PositionThreshold(
            position="기사", base=20_000_000, level1_end=20_000_000, level2_end=20_000_000,
        )

        threshold.full_clean()


# ---------------------------------------------------------------------------
# Batch calculation
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestCalculateBatch:
    def test_roster_supplies_classification_and_store(self, junior, basic_only):
        rows = calculate_batch([
            _record("김기사"),
            _record("최사무"),
            _record("홍길동"),
        ])

        by_name = {row.record.employee_name: row for row in rows}
        assert by_name["김기사"].store_name == "강남점"
        assert by_name["김기사"].result.incentive_amount == 478_500
        assert by_name["김기사"].result.total_salary == Decimal("3478500")
        assert by_name["최사무"].result.outcome is IncentiveOutcome.BASIC_SALARY_ONLY
        assert by_name["최사무"].store_name == "분당점"
        assert by_name["홍길동"].store_name == UNASSIGNED_STORE_NAME
        assert by_name["홍길동"].on_roster is False

    def test_inactive_basic_employee_keeps_pay_mode(self, basic_only):
        basic_only.is_active = False
        basic_only.save()

        row = calculate_batch([_record("최사무", margin="39.0")])[0]

        assert row.on_roster is True
        assert row.store_name == "분당점"
        assert row.result.outcome is IncentiveOutcome.BASIC_SALARY_ONLY
        assert row.result.incentive_amount == 0

    def test_database_thresholds_override_defaults(self, db):
        PositionThreshold.objects.create(
            position="기사", base=10_000_000, level1_end=20_000_000, level2_end=30_000_000,
        )

        row = calculate_batch([_record("홍길동", net_sales=15_000_000, margin="39.0")])[0]

        assert row.result.base_deductible == 10_000_000
        assert row.result.incentive_amount == 150_000

    def test_one_bad_row_does_not_stop_the_batch(self, db):
        rows = calculate_batch([
            _record("홍길동", position="알수없음"),
            _record("김기사"),
        ])

        assert rows[0].result.outcome is IncentiveOutcome.UNKNOWN_POSITION
        assert rows[1].result.incentive_amount == 478_500

    def test_summary(self, junior):
        rows = calculate_batch([_record("김기사"), _record("홍길동", net_sales=10_000_000)])

        summary = summarize_batch(rows)

        assert summary.employee_count == 2
        assert summary.total_net_sales == Decimal("40000000")
        assert summary.total_incentive == 478_500
        assert summary.total_salary == Decimal("3478500")


# ---------------------------------------------------------------------------
# Monthly records
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestSaveMonthlyRecord:
    def test_saves_totals_and_details(self, junior, senior):
        record = save_monthly_record(2024, 5, [
            _record("김기사"),
            _record("박선임", position="선임기사", net_sales=20_000_000, margin="30.0"),
            _record("홍길동", net_sales=10_000_000, margin="50.0"),
        ])

        record.refresh_from_db()
        assert record.employee_count == 3
        assert record.total_revenue == Decimal("60000000")
        assert record.total_incentive == 478_500
        assert record.total_profit == 23_000_000

        details = list(record.details.all())
        assert [d.employee_name for d in details][0] == "김기사"
        kim = record.details.get(employee_name="김기사")
        assert kim.level == 2
        assert kim.multiplier == Decimal("1.10")
        assert kim.store_name == "강남점"
        assert kim.outcome == IncentiveOutcome.CALCULATED.value
        assert kim.gross_profit == Decimal("12000000")
        assert record.details.get(employee_name="홍길동").store_name == UNASSIGNED_STORE_NAME

    def test_profit_is_rounded(self, db):
        record = save_monthly_record(2024, 6, [_record("홍길동", net_sales=1_001, margin="37.5")])

        # 1,001 x 37.5% = 375.375
        assert record.total_profit == 375

    def test_existing_period_is_refused(self, db):
        save_monthly_record(2024, 5, [_record("홍길동")])

        with pytest.raises(RecordExistsError):
            save_monthly_record(2024, 5, [_record("김기사")])
        assert MonthlyRecord.objects.count() == 1

    def test_overwrite_replaces_details(self, db):
        first = save_monthly_record(2024, 5, [_record("홍길동"), _record("김기사")])

        second = save_monthly_record(2024, 5, [_record("이몽룡")], overwrite=True)

        assert MonthlyRecord.objects.count() == 1
        assert not IncentiveDetail.objects.filter(record_id=first.pk).exists()
        assert list(second.details.values_list("employee_name", flat=True)) == ["이몽룡"]

    def test_empty_input_is_refused(self, db):
        with pytest.raises(ValueError):
            save_monthly_record(2024, 5, [])

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_range(self, db, month):
        with pytest.raises(ValueError):
            save_monthly_record(2024, month, [_record("홍길동")])

    def test_deleting_a_record_removes_details(self, db):
        record = save_monthly_record(2024, 5, [_record("홍길동")])

        record.delete()

        assert IncentiveDetail.objects.count() == 0

    def test_history_is_newest_first(self, db):
        save_monthly_record(2023, 12, [_record("홍길동")])
        save_monthly_record(2024, 2, [_record("홍길동")])
        save_monthly_record(2024, 1, [_record("홍길동")])

        periods = [(r.year, r.month) for r in MonthlyRecord.objects.all()]

        assert periods == [(2024, 2), (2024, 1), (2023, 12)]
