"""Sprints, features, allocations, cost items and absences."""
from decimal import Decimal

import pytest

# =============================================================================
# Sprints
# =============================================================================


class TestSprints:

    def test_list_requires_project(self, tenant_a):
        assert tenant_a.get("/sprints").status_code == 400

    def test_list_sorted_by_start(self, tenant_a):
        project = tenant_a.create_project()
        for name, start, end in [("S2", "2025-01-20", "2025-01-31"), ("S1", "2025-01-06", "2025-01-17")]:
            tenant_a.create(
                "/sprints",
                {"project_id": project["id"], "name": name, "start_date": start, "end_date": end},
            )
        resp = tenant_a.get("/sprints", params={"project_id": project["id"]})
        assert resp.status_code == 200
        assert [s["name"] for s in resp.json()] == ["S1", "S2"]

    def test_create_in_unknown_project(self, tenant_a):
        resp = tenant_a.post(
            "/sprints",
            {"project_id": "missing", "name": "S", "start_date": "2025-01-01", "end_date": "2025-01-10"},
        )
        assert resp.status_code == 404

    def test_update_and_delete(self, tenant_a):
        project = tenant_a.create_project()
        sprint = tenant_a.create(
            "/sprints",
            {"project_id": project["id"], "name": "S1", "start_date": "2025-01-06", "end_date": "2025-01-17"},
        )
        resp = tenant_a.put(f"/sprints/{sprint['id']}", {"name": "Sprint One"})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Sprint One"
        assert tenant_a.delete(f"/sprints/{sprint['id']}").status_code == 204
        assert tenant_a.delete(f"/sprints/{sprint['id']}").status_code == 404


# =============================================================================
# Features
# =============================================================================


class TestFeatures:

    @pytest.fixture
    def project(self, tenant_a):
        return tenant_a.create_project()

    def test_defaults(self, tenant_a, project):
        feature = tenant_a.create("/features", {"project_id": project["id"], "title": "Login", "story_points": 5})
        assert feature["status"] == "backlog"
        assert feature["completed_points"] == 0
        assert feature["description"] == ""
        assert feature["sprint_ids"] == []

    def test_bad_status_rejected(self, tenant_a, project):
        resp = tenant_a.post(
            "/features",
            {"project_id": project["id"], "title": "X", "story_points": 1, "status": "finished"},
        )
        assert resp.status_code == 400

    def test_filter_by_status(self, tenant_a, project):
        tenant_a.create("/features", {"project_id": project["id"], "title": "A", "story_points": 3})
        tenant_a.create(
            "/features",
            {"project_id": project["id"], "title": "B", "story_points": 2, "status": "done"},
        )
        done = tenant_a.get("/features", params={"project_id": project["id"], "status": "done"}).json()
        assert [f["title"] for f in done] == ["B"]

    def test_assign_sprints(self, tenant_a, project):
        feature = tenant_a.create("/features", {"project_id": project["id"], "title": "A", "story_points": 3})
        resp = tenant_a.put(f"/features/{feature['id']}", {"sprint_ids": ["s1", "s2", "s1"], "status": "in-progress"})
        assert resp.status_code == 200
        assert resp.json()["sprint_ids"] == ["s1", "s2"]
        assert resp.json()["status"] == "in-progress"


# =============================================================================
# Allocations
# =============================================================================


def allocation_body(project_id, resource_id, **overrides):
    body = {
        "project_id": project_id,
        "resource_id": resource_id,
        "from_date": "2025-05-01",
        "to_date": "2025-05-31",
        "allocation_pct": "50",
        "planned_days": "10",
    }
    body.update(overrides)
    return body


class TestAllocations:

    @pytest.mark.parametrize("pct", ["0", "100"])
    def test_pct_bounds_accepted(self, tenant_a, pct):
        project = tenant_a.create_project()
        resource = tenant_a.create_resource()
        allocation = tenant_a.create("/allocations", allocation_body(project["id"], resource["id"], allocation_pct=pct))
        assert Decimal(allocation["allocation_pct"]) == Decimal(pct)
        assert Decimal(allocation["actual_days"]) == 0

    @pytest.mark.parametrize("pct", ["-1", "101"])
    def test_pct_out_of_range(self, tenant_a, pct):
        project = tenant_a.create_project()
        resource = tenant_a.create_resource()
        resp = tenant_a.post("/allocations", allocation_body(project["id"], resource["id"], allocation_pct=pct))
        assert resp.status_code == 400

    def test_list_filters_and_order(self, tenant_a):
        project = tenant_a.create_project()
        other = tenant_a.create_project()
        resource = tenant_a.create_resource()
        tenant_a.create("/allocations", allocation_body(project["id"], resource["id"], from_date="2025-07-01"))
        tenant_a.create("/allocations", allocation_body(project["id"], resource["id"], from_date="2025-02-01"))
        tenant_a.create("/allocations", allocation_body(other["id"], resource["id"]))
        rows = tenant_a.get("/allocations", params={"project_id": project["id"]}).json()
        assert [a["from_date"] for a in rows] == ["2025-02-01", "2025-07-01"]
        assert len(tenant_a.get("/allocations", params={"resource_id": resource["id"]}).json()) == 3

    def test_update(self, tenant_a):
        project = tenant_a.create_project()
        resource = tenant_a.create_resource()
        allocation = tenant_a.create("/allocations", allocation_body(project["id"], resource["id"]))
        resp = tenant_a.put(f"/allocations/{allocation['id']}", {"actual_days": "4.5"})
        assert resp.status_code == 200
        assert Decimal(resp.json()["actual_days"]) == Decimal("4.5")
        assert tenant_a.put(f"/allocations/{allocation['id']}", {"allocation_pct": "150"}).status_code == 400


# =============================================================================
# Cost items
# =============================================================================


class TestCostItems:

    def test_create_update_clear_vendor(self, tenant_a):
        project = tenant_a.create_project()
        item = tenant_a.create(
            "/cost-items",
            {
                "project_id": project["id"],
                "type": "equipment",
                "description": "Laptops",
                "amount": "3200",
                "date_incurred": "2025-03-15",
                "vendor": "Dell",
            },
        )
        assert item["vendor"] == "Dell"
        resp = tenant_a.put(f"/cost-items/{item['id']}", {"vendor": None})
        assert resp.status_code == 200
        assert resp.json()["vendor"] is None

    def test_bad_type_and_amount(self, tenant_a):
        project = tenant_a.create_project()
        base = {"project_id": project["id"], "description": "x", "amount": "1", "date_incurred": "2025-01-01"}
        assert tenant_a.post("/cost-items", {**base, "type": "travel"}).status_code == 400
        assert tenant_a.post("/cost-items", {**base, "type": "other", "amount": "-1"}).status_code == 400

    def test_list_by_project(self, tenant_a):
        project = tenant_a.create_project()
        other = tenant_a.create_project()
        for pid in (project["id"], other["id"]):
            tenant_a.create(
                "/cost-items",
                {"project_id": pid, "type": "other", "description": "x", "amount": "1", "date_incurred": "2025-01-01"},
            )
        assert len(tenant_a.get("/cost-items", params={"project_id": project["id"]}).json()) == 1
        assert len(tenant_a.get("/cost-items").json()) == 2


# =============================================================================
# Absences
# =============================================================================


class TestAbsences:

    def test_list_sorted_and_filtered(self, tenant_a):
        resource = tenant_a.create_resource()
        other = tenant_a.create_resource(name="Eve")
        tenant_a.create("/absences", {"resource_id": resource["id"], "from_date": "2025-08-01", "to_date": "2025-08-10", "type": "holiday"})
        tenant_a.create("/absences", {"resource_id": resource["id"], "from_date": "2025-02-03", "to_date": "2025-02-04", "type": "sick"})
        tenant_a.create("/absences", {"resource_id": other["id"], "from_date": "2025-01-01", "to_date": "2025-01-01", "type": "other"})
        rows = tenant_a.get("/absences", params={"resource_id": resource["id"]}).json()
        assert [a["type"] for a in rows] == ["sick", "holiday"]

    def test_bad_type(self, tenant_a):
        resource = tenant_a.create_resource()
        resp = tenant_a.post(
            "/absences",
            {"resource_id": resource["id"], "from_date": "2025-01-01", "to_date": "2025-01-02", "type": "vacation"},
        )
        assert resp.status_code == 400

    def test_update_note(self, tenant_a):
        resource = tenant_a.create_resource()
        absence = tenant_a.create(
            "/absences",
            {"resource_id": resource["id"], "from_date": "2025-01-01", "to_date": "2025-01-02", "type": "other", "note": "dentist"},
        )
        resp = tenant_a.put(f"/absences/{absence['id']}", {"note": None, "to_date": "2025-01-03"})
        assert resp.status_code == 200
        assert resp.json()["note"] is None
        assert resp.json()["to_date"] == "2025-01-03"
