import pytest

from incentives.models import MonthlyRecord, PositionThreshold

ROWS = [
    {"employee_name": "김기사", "position": "기사", "category": "일반", "net_sales": 30000000, "profit_margin": "40%"},
    {"employee_name": "박선임", "position": "선임기사", "category": "일반", "net_sales": 20000000, "profit_margin": 30},
    {"employee_name": "홍길동", "position": "기사", "category": "일반", "net_sales": 10000000, "profit_margin": 0.5},
]


def _save(client, year=2024, month=5, overwrite=False, rows=ROWS):
    return client.post(
        "/api/v1/monthly-records/",
        {"year": year, "month": month, "overwrite": overwrite, "rows": rows},
        format="json",
    )


# ────────────────────────────────────────────────────────────
# Preview
# ────────────────────────────────────────────────────────────

@pytest.mark.django_db
class TestUpload:
    def test_upload_returns_calculated_rows(self, user_api, junior, sales_upload):
        upload = sales_upload([
            ["김기사", "기사", "일반", 30000000, "40%"],
            ["박선임", "선임기사", "일반", "잘못된값", 30],
        ])

        response = user_api.post("/api/v1/incentives/upload/", {"file": upload}, format="multipart")

        assert response.status_code == 200
        payload = response.json()
        assert len(payload["rows"]) == 1
        row = payload["rows"][0]
        assert row["employee_name"] == "김기사"
        assert row["store_name"] == "강남점"
        assert row["incentive_amount"] == 478500
        assert row["level"] == 2
        assert row["outcome"] == "CALCULATED"
        assert row["message"] is None
        assert payload["errors"] == 1
        assert payload["error_details"][0].startswith("3행:")
        assert payload["summary"]["total_incentive"] == 478500
        assert not MonthlyRecord.objects.exists()

    def test_upload_requires_a_file(self, user_api):
        response = user_api.post("/api/v1/incentives/upload/", {}, format="multipart")

        assert response.status_code == 400

    def test_upload_rejects_other_extensions(self, user_api, sales_upload):
        upload = sales_upload([["김기사", "기사", "일반", 1, 40]], name="sales.csv")

        response = user_api.post("/api/v1/incentives/upload/", {"file": upload}, format="multipart")

        assert response.status_code == 400

    def test_upload_without_valid_rows(self, user_api, sales_upload):
        response = user_api.post(
            "/api/v1/incentives/upload/", {"file": sales_upload([])}, format="multipart",
        )

        assert response.status_code == 400
        assert "file" in response.json()


@pytest.mark.django_db
class TestCalculate:
    def test_recalculates_edited_rows(self, user_api, basic_only):
        rows = ROWS + [
            {"employee_name": "최사무", "position": "기사", "category": "일반", "net_sales": 50000000, "profit_margin": 45},
        ]

        response = user_api.post("/api/v1/incentives/calculate/", {"rows": rows}, format="json")

        assert response.status_code == 200
        by_name = {row["employee_name"]: row for row in response.json()["rows"]}
        assert by_name["김기사"]["incentive_amount"] == 478500
        assert by_name["홍길동"]["profit_margin"] == "50.0"
        assert by_name["최사무"]["outcome"] == "BASIC_SALARY_ONLY"
        assert by_name["최사무"]["message"] == "basic-salary only (no incentive)"
        assert response.json()["summary"]["employee_count"] == 4

    def test_rejects_negative_sales(self, user_api):
        rows = [dict(ROWS[0], net_sales=-1)]

        response = user_api.post("/api/v1/incentives/calculate/", {"rows": rows}, format="json")

        assert response.status_code == 400

    def test_rejects_out_of_range_margin(self, user_api):
        rows = [dict(ROWS[0], profit_margin="1234567")]

        response = user_api.post("/api/v1/incentives/calculate/", {"rows": rows}, format="json")

        assert response.status_code == 400
        assert "profit_margin" in response.json()["rows"][0]

    def test_rejects_out_of_range_sales(self, user_api):
        rows = [dict(ROWS[0], net_sales=10**13)]

        response = user_api.post("/api/v1/incentives/calculate/", {"rows": rows}, format="json")

        assert response.status_code == 400
        assert "net_sales" in response.json()["rows"][0]

    def test_rejects_empty_rows(self, user_api):
        response = user_api.post("/api/v1/incentives/calculate/", {"rows": []}, format="json")

        assert response.status_code == 400


# ────────────────────────────────────────────────────────────
# Monthly records
# ────────────────────────────────────────────────────────────

@pytest.mark.django_db
class TestMonthlyRecords:
    def test_create_and_conflict(self, user_api, junior, senior):
        created = _save(user_api)
        assert created.status_code == 201
        assert created.json()["employee_count"] == 3
        assert created.json()["total_incentive"] == 478500

        conflict = _save(user_api)
        assert conflict.status_code == 409
        assert conflict.json()["year"] == 2024

        replaced = _save(user_api, overwrite=True, rows=ROWS[:1])
        assert replaced.status_code == 201
        assert MonthlyRecord.objects.get().employee_count == 1

    def test_invalid_month(self, user_api):
        response = _save(user_api, month=13)

        assert response.status_code == 400

    def test_list_newest_first(self, user_api):
        _save(user_api, 2024, 1)
        _save(user_api, 2024, 3)

        response = user_api.get("/api/v1/monthly-records/")

        assert response.status_code == 200
        assert [r["month"] for r in response.json()["results"]] == [3, 1]

    def test_details_are_sorted_by_incentive(self, user_api, junior):
        record_id = _save(user_api).json()["id"]

        response = user_api.get(f"/api/v1/monthly-records/{record_id}/details/")

        assert response.status_code == 200
        assert response.json()[0]["employee_name"] == "김기사"
        assert response.json()[0]["gross_profit"] == "12000000"

    def test_statistics_action(self, user_api, junior, senior):
        record_id = _save(user_api).json()["id"]

        response = user_api.get(f"/api/v1/monthly-records/{record_id}/statistics/")

        assert response.status_code == 200
        payload = response.json()
        assert payload["stores"][0]["store_name"] == "강남점"
        assert payload["stores"][0]["labor_share"] == "47.1"
        assert payload["stores"][0]["band"] == "WARNING"
        assert payload["labor_share"] == "36.9"

    def test_export(self, user_api, junior):
        record_id = _save(user_api).json()["id"]

        response = user_api.get(f"/api/v1/monthly-records/{record_id}/export/")

        assert response.status_code == 200
        assert response["Content-Type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "incentive_2024_05.xlsx" in response["Content-Disposition"]

    def test_delete(self, user_api):
        record_id = _save(user_api).json()["id"]

        response = user_api.delete(f"/api/v1/monthly-records/{record_id}/")

        assert response.status_code == 204
        assert not MonthlyRecord.objects.exists()

    def test_statistics_by_period(self, user_api, junior, senior):
        _save(user_api)

        found = user_api.get("/api/v1/statistics/", {"year": 2024, "month": 5})
        missing = user_api.get("/api/v1/statistics/", {"year": 2023, "month": 5})
        invalid = user_api.get("/api/v1/statistics/", {"year": "x"})

        assert found.status_code == 200
        assert found.json()["month"] == 5
        assert missing.status_code == 404
        assert invalid.status_code == 400


# ────────────────────────────────────────────────────────────
# Thresholds
# ────────────────────────────────────────────────────────────

@pytest.mark.django_db
class TestThresholdApi:
    payload = {"position": "수습", "base": 10000000, "level1_end": 15000000, "level2_end": 20000000}

    def test_staff_can_create(self, staff_api):
        response = staff_api.post("/api/v1/thresholds/", self.payload, format="json")

        assert response.status_code == 201
        assert PositionThreshold.objects.filter(position="수습").exists()

    def test_regular_user_can_read_but_not_write(self, user_api):
        assert user_api.get("/api/v1/thresholds/").status_code == 200
        assert user_api.post("/api/v1/thresholds/", self.payload, format="json").status_code == 403

    def test_order_is_validated(self, staff_api):
        payload = dict(self.payload, level1_end=5000000)

        response = staff_api.post("/api/v1/thresholds/", payload, format="json")

        assert response.status_code == 400

    def test_reset(self, staff_api, user_api):
        assert user_api.post("/api/v1/thresholds/reset/").status_code == 403

        response = staff_api.post("/api/v1/thresholds/reset/")

        assert response.status_code == 200
        assert {row["position"] for row in response.json()} == {"기사", "선임기사", "팀장"}

    def test_override_is_used_by_calculation(self, staff_api):
        staff_api.post(
            "/api/v1/thresholds/",
            {"position": "기사", "base": 10000000, "level1_end": 20000000, "level2_end": 30000000},
            format="json",
        )
        rows = [{"employee_name": "홍길동", "position": "기사", "category": "일반",
                 "net_sales": 15000000, "profit_margin": "39"}]

        response = staff_api.post("/api/v1/incentives/calculate/", {"rows": rows}, format="json")

        assert response.json()["rows"][0]["incentive_amount"] == 150000


@pytest.mark.django_db
def test_endpoints_require_authentication(client):
    assert client.get("/api/v1/monthly-records/").status_code in (401, 403)
    assert client.post("/api/v1/incentives/calculate/", {}, content_type="application/json").status_code in (401, 403)
