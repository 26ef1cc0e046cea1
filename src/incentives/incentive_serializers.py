"""Serializers for the incentives API."""
from rest_framework import serializers

from incentives.engine import SalesRecord
from incentives.importers import MAX_NET_SALES, normalize_margin
from incentives.models import IncentiveDetail, MonthlyRecord, PositionThreshold


# ────────────────────────────────────────────────────────────
# Thresholds
# ────────────────────────────────────────────────────────────

class PositionThresholdSerializer(serializers.ModelSerializer):
    class Meta:
        model = PositionThreshold
        fields = ["id", "position", "base", "level1_end", "level2_end", "updated_at"]
        read_only_fields = ["id", "updated_at"]

    def validate_position(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("직급을 입력해주세요.")
        return value

    def validate(self, attrs):
        base = attrs.get("base", getattr(self.instance, "base", None))
        level1_end = attrs.get("level1_end", getattr(self.instance, "level1_end", None))
        level2_end = attrs.get("level2_end", getattr(self.instance, "level2_end", None))
        if None not in (base, level1_end, level2_end) and not base <= level1_end <= level2_end:
            raise serializers.ValidationError(
                "기준 매출은 기본 공제액 ≤ 1구간 상한 ≤ 2구간 상한 순서여야 합니다."
            )
        return attrs


# ────────────────────────────────────────────────────────────
# Calculation input / output
# ────────────────────────────────────────────────────────────

class SalesRowSerializer(serializers.Serializer):
    """One worker row, as parsed from the workbook or edited in the preview."""

    employee_name = serializers.CharField(max_length=100)
    position = serializers.CharField(max_length=50, allow_blank=True, default="")
    category = serializers.CharField(max_length=100, allow_blank=True, default="")
    net_sales = serializers.DecimalField(
        max_digits=16, decimal_places=2, min_value=0, max_value=MAX_NET_SALES,
    )
    profit_margin = serializers.CharField()

    def validate_employee_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("작업자명을 입력해주세요.")
        return value

    def validate_profit_margin(self, value):
        try:
            return normalize_margin(value)
        except ValueError as exc:
            raise serializers.ValidationError(str(exc))

    def to_record(self, data=None) -> SalesRecord:
        data = data if data is not None else self.validated_data
        return SalesRecord(
            employee_name=data["employee_name"],
            position=(data.get("position") or "").strip(),
            category=(data.get("category") or "").strip(),
            net_sales=data["net_sales"],
            profit_margin=data["profit_margin"],
        )


class CalculateRequestSerializer(serializers.Serializer):
    rows = SalesRowSerializer(many=True, allow_empty=False)

    def to_records(self):
        row_serializer = SalesRowSerializer()
        return [row_serializer.to_record(row) for row in self.validated_data["rows"]]


class SaveMonthlyRecordSerializer(CalculateRequestSerializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    month = serializers.IntegerField(min_value=1, max_value=12)
    overwrite = serializers.BooleanField(default=False)


class BatchRowSerializer(serializers.Serializer):
    employee_name = serializers.CharField(source="record.employee_name")
    position = serializers.CharField(source="record.position")
    category = serializers.CharField(source="record.category")
    net_sales = serializers.DecimalField(source="record.net_sales", max_digits=16, decimal_places=2)
    profit_margin = serializers.DecimalField(source="record.profit_margin", max_digits=6, decimal_places=1)
    gross_profit = serializers.DecimalField(source="record.gross_profit", max_digits=18, decimal_places=0)
    store_name = serializers.CharField()
    on_roster = serializers.BooleanField()
    incentive_amount = serializers.IntegerField(source="result.incentive_amount")
    level = serializers.IntegerField(source="result.level")
    multiplier = serializers.DecimalField(source="result.multiplier", max_digits=4, decimal_places=2)
    base_deductible = serializers.IntegerField(source="result.base_deductible")
    base_salary = serializers.DecimalField(source="result.base_salary", max_digits=14, decimal_places=0)
    total_salary = serializers.DecimalField(source="result.total_salary", max_digits=16, decimal_places=0)
    outcome = serializers.CharField(source="result.outcome.value")
    message = serializers.CharField(source="result.message", allow_null=True)


class BatchSummarySerializer(serializers.Serializer):
    employee_count = serializers.IntegerField()
    total_net_sales = serializers.DecimalField(max_digits=18, decimal_places=0)
    total_incentive = serializers.IntegerField()
    total_salary = serializers.DecimalField(max_digits=18, decimal_places=0)


# ────────────────────────────────────────────────────────────
# Monthly history
# ────────────────────────────────────────────────────────────

class MonthlyRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = MonthlyRecord
        fields = [
            "id", "year", "month", "total_revenue", "total_incentive",
            "total_profit", "employee_count", "created_at", "updated_at",
        ]
        read_only_fields = fields


class IncentiveDetailSerializer(serializers.ModelSerializer):
    gross_profit = serializers.DecimalField(max_digits=18, decimal_places=0, read_only=True)
    outcome_display = serializers.CharField(source="get_outcome_display", read_only=True)

    class Meta:
        model = IncentiveDetail
        fields = [
            "id", "employee_name", "position", "store_name", "category",
            "net_sales", "profit_margin", "gross_profit", "incentive_amount",
            "level", "multiplier", "outcome", "outcome_display",
        ]
        read_only_fields = fields


# ────────────────────────────────────────────────────────────
# Statistics
# ────────────────────────────────────────────────────────────

class EmployeeStatisticsSerializer(serializers.Serializer):
    employee_name = serializers.CharField()
    position = serializers.CharField()
    net_sales = serializers.DecimalField(max_digits=18, decimal_places=0)
    gross_profit = serializers.DecimalField(max_digits=18, decimal_places=0)
    incentive = serializers.IntegerField()
    base_salary = serializers.DecimalField(max_digits=14, decimal_places=0)
    labor_cost = serializers.DecimalField(max_digits=18, decimal_places=0)
    labor_share = serializers.DecimalField(max_digits=8, decimal_places=1)
    band = serializers.CharField()


class StoreStatisticsSerializer(serializers.Serializer):
    store_name = serializers.CharField()
    employee_count = serializers.IntegerField()
    net_sales = serializers.DecimalField(max_digits=18, decimal_places=0)
    gross_profit = serializers.DecimalField(max_digits=18, decimal_places=0)
    total_incentive = serializers.IntegerField()
    total_base_salary = serializers.DecimalField(max_digits=18, decimal_places=0)
    labor_cost = serializers.DecimalField(max_digits=18, decimal_places=0)
    labor_share = serializers.DecimalField(max_digits=8, decimal_places=1)
    band = serializers.CharField()
    employees = EmployeeStatisticsSerializer(many=True)


class StatisticsReportSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    month = serializers.IntegerField()
    stores = StoreStatisticsSerializer(many=True)
    total_net_sales = serializers.DecimalField(max_digits=18, decimal_places=0)
    total_gross_profit = serializers.DecimalField(max_digits=18, decimal_places=0)
    total_labor_cost = serializers.DecimalField(max_digits=18, decimal_places=0)
    labor_share = serializers.DecimalField(max_digits=8, decimal_places=1)
    band = serializers.CharField()
