"""Summary and dashboard routes."""
from decimal import Decimal

import pytest


@pytest.fixture
def seeded(tenant_a):
    project = tenant_a.create_project(budget="10000")
    resource = tenant_a.create_resource(day_rate="100")
    tenant_a.create(
        "/monthly-records",
        {
            "project_id": project["id"],
            "resource_id": resource["id"],
            "period": "2025-06",
            "forecast_days": "10",
            "actual_cost": "900",
        },
    )
    tenant_a.create(
        "/cost-items",
        {"project_id": project["id"], "type": "license", "description": "CI", "amount": "500", "date_incurred": "2025-06-10"},
    )
    tenant_a.create("/features", {"project_id": project["id"], "title": "A", "story_points": 5, "completed_points": 2})
    return project, resource


class TestProjectSummaryRoute:

    def test_trend_and_totals(self, tenant_a, seeded):
        project, _ = seeded
        resp = tenant_a.get(f"/projects/{project['id']}/summary")
        assert resp.status_code == 200
        body = resp.json()
        row = body["trend"][0]
        assert row["period"] == "2025-06"
        assert Decimal(row["forecast_cost"]) == Decimal("1000")
        assert Decimal(row["actual_cost"]) == Decimal("900")
        assert Decimal(row["diff_cost"]) == Decimal("-100")
        assert Decimal(row["pct_diff"]) == Decimal("-10")
        assert Decimal(body["non_personnel_cost"]) == Decimal("500")
        assert Decimal(body["remaining_budget"]) == Decimal("8600")
        assert body["currency_code"] == "GBP"
        assert body["features"]["total_story_points"] == 5
        assert body["features"]["completed_points"] == 2

    def test_missing_project(self, tenant_a):
        assert tenant_a.get("/projects/nope/summary").status_code == 404


class TestPeriodBreakdownRoute:

    def test_breakdown(self, tenant_a, seeded):
        project, resource = seeded
        resp = tenant_a.get(f"/projects/{project['id']}/summary/2025-06")
        assert resp.status_code == 200
        body = resp.json()
        assert body["days_in_month"] == 30
        row = body["resources"][0]
        assert row["resource_id"] == resource["id"]
        assert Decimal(row["actual_days"]) == Decimal("9")
        assert Decimal(row["forecast_pct"]) == Decimal("33.33")

    def test_bad_period(self, tenant_a, seeded):
        project, _ = seeded
        assert tenant_a.get(f"/projects/{project['id']}/summary/2025-13").status_code == 400


class TestDashboardRoute:

    def test_only_own_projects(self, tenant_a, tenant_b, seeded):
        project, _ = seeded
        tenant_b.create_project()
        cards = tenant_a.get("/dashboard").json()
        assert [c["project_id"] for c in cards] == [project["id"]]
        card = cards[0]
        assert Decimal(card["forecast_to_date"]) == Decimal("1000")
        assert Decimal(card["actual_to_date"]) == Decimal("900")
        assert Decimal(card["pct_budget_diff"]) == Decimal("-91")
        assert Decimal(card["pct_forecast_diff"]) == Decimal("-10")
        assert Decimal(card["budget_utilization"]) == Decimal("9")
