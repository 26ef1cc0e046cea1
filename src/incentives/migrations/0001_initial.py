import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PositionThreshold",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                ("position", models.CharField(max_length=50, unique=True, verbose_name="직급")),
                ("base", models.PositiveBigIntegerField(verbose_name="기본 공제액")),
                ("level1_end", models.PositiveBigIntegerField(verbose_name="1구간 상한")),
                ("level2_end", models.PositiveBigIntegerField(verbose_name="2구간 상한")),
            ],
            options={
                "verbose_name": "직급별 기준 매출",
                "verbose_name_plural": "직급별 기준 매출",
                "ordering": ["base", "position"],
            },
        ),
        migrations.CreateModel(
            name="MonthlyRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                ("year", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(2000), django.core.validators.MaxValueValidator(2100)], verbose_name="연도")),
                ("month", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name="월")),
                ("total_revenue", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=20, verbose_name="총 순매출")),
                ("total_incentive", models.BigIntegerField(default=0, verbose_name="총 인센티브")),
                ("total_profit", models.BigIntegerField(default=0, verbose_name="총 매출이익")),
                ("employee_count", models.PositiveIntegerField(default=0, verbose_name="인원")),
            ],
            options={
                "verbose_name": "월별 기록",
                "verbose_name_plural": "월별 기록",
                "ordering": ["-year", "-month"],
                "unique_together": {("year", "month")},
            },
        ),
        migrations.CreateModel(
            name="IncentiveDetail",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                ("employee_name", models.CharField(max_length=100, verbose_name="작업자명")),
                ("position", models.CharField(blank=True, default="", max_length=50, verbose_name="직급")),
                ("store_name", models.CharField(blank=True, default="", max_length=120, verbose_name="점포")),
                ("category", models.CharField(blank=True, default="", max_length=100, verbose_name="인센적용")),
                ("net_sales", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16, verbose_name="순매출액")),
                ("profit_margin", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=6, verbose_name="매익율")),
                ("incentive_amount", models.BigIntegerField(default=0, verbose_name="인센티브")),
                ("level", models.PositiveSmallIntegerField(default=0, verbose_name="달성 구간")),
                ("multiplier", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=4, verbose_name="배수")),
                ("outcome", models.CharField(choices=[("CALCULATED", "계산됨"), ("BASIC_SALARY_ONLY", "기본급 전용"), ("MANAGER_ROLE", "공장장"), ("UNKNOWN_POSITION", "알 수 없는 직급")], default="CALCULATED", max_length=30, verbose_name="결과")),
                ("record", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="details", to="incentives.monthlyrecord", verbose_name="월별 기록")),
            ],
            options={
                "verbose_name": "인센티브 내역",
                "verbose_name_plural": "인센티브 내역",
                "ordering": ["-incentive_amount", "employee_name"],
            },
        ),
    ]
