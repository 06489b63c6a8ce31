"""Monthly forecast/actual records."""
from decimal import Decimal

import pytest


@pytest.fixture
def triple(tenant_a):
    project = tenant_a.create_project()
    resource = tenant_a.create_resource()
    return project["id"], resource["id"]


class TestUpsert:

    def test_insert_then_overwrite(self, tenant_a, triple):
        project_id, resource_id = triple
        body = {"project_id": project_id, "resource_id": resource_id, "period": "2025-06", "forecast_days": "10"}
        first = tenant_a.post("/monthly-records", body)
        assert first.status_code == 201
        assert Decimal(first.json()["actual_cost"]) == 0

        second = tenant_a.post("/monthly-records", {**body, "forecast_days": "12", "actual_cost": "900"})
        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert Decimal(second.json()["forecast_days"]) == Decimal("12")
        assert Decimal(second.json()["actual_cost"]) == Decimal("900")

        rows = tenant_a.get("/monthly-records", params={"project_id": project_id}).json()
        assert len(rows) == 1

    def test_distinct_periods_are_separate(self, tenant_a, triple):
        project_id, resource_id = triple
        for period in ("2025-06", "2025-07"):
            resp = tenant_a.post(
                "/monthly-records",
                {"project_id": project_id, "resource_id": resource_id, "period": period, "forecast_days": "1"},
            )
            assert resp.status_code == 201
        rows = tenant_a.get("/monthly-records", params={"period": "2025-07"}).json()
        assert [r["period"] for r in rows] == ["2025-07"]

    @pytest.mark.parametrize("period", ["2025-13", "2025-6", "25-06", "2025-00"])
    def test_bad_period(self, tenant_a, triple, period):
        project_id, resource_id = triple
        resp = tenant_a.post(
            "/monthly-records",
            {"project_id": project_id, "resource_id": resource_id, "period": period, "forecast_days": "1"},
        )
        assert resp.status_code == 400

    def test_negative_forecast(self, tenant_a, triple):
        project_id, resource_id = triple
        resp = tenant_a.post(
            "/monthly-records",
            {"project_id": project_id, "resource_id": resource_id, "period": "2025-01", "forecast_days": "-1"},
        )
        assert resp.status_code == 400


class TestUpdate:

    def test_put_changes_values_only(self, tenant_a, triple):
        project_id, resource_id = triple
        record = tenant_a.create(
            "/monthly-records",
            {"project_id": project_id, "resource_id": resource_id, "period": "2025-03", "forecast_days": "8"},
        )
        resp = tenant_a.put(f"/monthly-records/{record['id']}", {"actual_cost": "640", "period": "2030-01"})
        assert resp.status_code == 200
        assert resp.json()["period"] == "2025-03"
        assert Decimal(resp.json()["actual_cost"]) == Decimal("640")
        assert tenant_a.delete(f"/monthly-records/{record['id']}").status_code == 204
        assert tenant_a.delete(f"/monthly-records/{record['id']}").status_code == 404
