import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("stores", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="SalaryComponent",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="항목명")),
                ("component_type", models.CharField(choices=[("ALLOWANCE", "수당"), ("DEDUCTION", "공제")], default="ALLOWANCE", max_length=20, verbose_name="구분")),
                ("is_taxable", models.BooleanField(default=True, verbose_name="과세")),
                ("is_fixed", models.BooleanField(default=True, verbose_name="고정 금액")),
                ("default_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal("0"))], verbose_name="기본 금액")),
                ("is_active", models.BooleanField(default=True, verbose_name="사용")),
            ],
            options={
                "verbose_name": "급여 항목",
                "verbose_name_plural": "급여 항목",
                "ordering": ["component_type", "created_at"],
            },
        ),
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="이름")),
                ("position", models.CharField(default="기사", max_length=50, verbose_name="직급")),
                ("compensation_mode", models.CharField(choices=[("INCENTIVE", "인센티브"), ("BASIC", "기본급 전용")], db_index=True, default="INCENTIVE", max_length=20, verbose_name="급여 형태")),
                ("base_salary", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal("0"))], verbose_name="기본급")),
                ("hire_date", models.DateField(blank=True, null=True, verbose_name="입사일")),
                ("is_active", models.BooleanField(default=True, verbose_name="재직")),
                ("store", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employees", to="stores.store", verbose_name="점포")),
            ],
            options={
                "verbose_name": "직원",
                "verbose_name_plural": "직원",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="EmployeeSalaryComponent",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal("0"))], verbose_name="금액")),
                ("component", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="employee_assignments", to="hrm.salarycomponent", verbose_name="급여 항목")),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="salary_components", to="hrm.employee", verbose_name="직원")),
            ],
            options={
                "verbose_name": "직원 급여 설정",
                "verbose_name_plural": "직원 급여 설정",
                "unique_together": {("employee", "component")},
            },
        ),
    ]
