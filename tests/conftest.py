from decimal import Decimal
from io import BytesIO

import openpyxl
import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from hrm.models import Employee, SalaryComponent
from stores.models import Store

SALES_HEADERS = ["작업자명", "직급", "인센적용", "순매출액", "매익율"]
XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def staff_user(db):
    return get_user_model().objects.create_user(
        username="manager",
        password="testpass123",
        is_staff=True,
    )


@pytest.fixture
def regular_user(db):
    return get_user_model().objects.create_user(
        username="clerk",
        password="testpass123",
    )


@pytest.fixture
def staff_api(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture
def user_api(regular_user):
    client = APIClient()
    client.force_authenticate(user=regular_user)
    return client


@pytest.fixture
def store(db):
    return Store.objects.create(name="강남점", code="GN-01")


@pytest.fixture
def other_store(db):
    return Store.objects.create(name="분당점", code="BD-01")


@pytest.fixture
def junior(store):
    return Employee.objects.create(
        name="김기사",
        position="기사",
        store=store,
        base_salary=Decimal("3000000"),
    )


@pytest.fixture
def senior(store):
    return Employee.objects.create(
        name="박선임",
        position="선임기사",
        store=store,
        base_salary=Decimal("5000000"),
    )


@pytest.fixture
def basic_only(other_store):
    return Employee.objects.create(
        name="최사무",
        position="기사",
        store=other_store,
        compensation_mode=Employee.CompensationMode.BASIC,
        base_salary=Decimal("2500000"),
    )


@pytest.fixture
def salary_components(db):
    return {
        "night": SalaryComponent.objects.create(
            name="야간수당",
            component_type=SalaryComponent.ComponentType.ALLOWANCE,
            default_amount=Decimal("100000"),
        ),
        "meal": SalaryComponent.objects.create(
            name="식대",
            component_type=SalaryComponent.ComponentType.ALLOWANCE,
            is_taxable=False,
            default_amount=Decimal("200000"),
        ),
        "dorm": SalaryComponent.objects.create(
            name="기숙사비",
            component_type=SalaryComponent.ComponentType.DEDUCTION,
            default_amount=Decimal("50000"),
        ),
        "bonus": SalaryComponent.objects.create(
            name="성과급",
            component_type=SalaryComponent.ComponentType.ALLOWANCE,
            is_fixed=False,
        ),
        "retired": SalaryComponent.objects.create(
            name="교통비",
            component_type=SalaryComponent.ComponentType.ALLOWANCE,
            default_amount=Decimal("70000"),
            is_active=False,
        ),
    }


def build_workbook(rows, headers=SALES_HEADERS) -> bytes:
    """Return the bytes of an .xlsx file with ``headers`` on row 1."""
    wb = openpyxl.Workbook()
    ws = wb.active
    if headers:
        ws.append(list(headers))
    for row in rows:
        ws.append(list(row))
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sales_workbook():
    def _make(rows, headers=SALES_HEADERS):
        return BytesIO(build_workbook(rows, headers))
    return _make


@pytest.fixture
def sales_upload():
    def _make(rows, headers=SALES_HEADERS, name="sales.xlsx"):
        return SimpleUploadedFile(name, build_workbook(rows, headers), content_type=XLSX_CONTENT_TYPE)
    return _make
