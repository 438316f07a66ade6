from datetime import datetime, timedelta

import pytest

from smartrent.extensions import db
from smartrent.models import Maintenance
from smartrent.utils import utcnow


@pytest.fixture
def lease(owner, renter, make_property, make_tenant):
    prop = make_property(owner)
    return make_tenant(owner, renter, prop["id"])


@pytest.fixture
def request_id(client, renter, headers, lease):
    resp = client.post(
        "/api/maintenance",
        json={"issue": "Leaking tap", "description": "Kitchen tap drips all night"},
        headers=headers(renter),
    )
    assert resp.status_code == 201
    return resp.get_json()["maintenance"]["id"]


def _put(client, headers, user, request_id, **body):
    return client.put(f"/api/maintenance/{request_id}", json=body, headers=headers(user))


def test_tenant_report_derives_property_and_role(client, renter, headers, make_property, owner, lease):
    elsewhere = make_property(owner, name="Elsewhere")
    resp = client.post(
        "/api/maintenance",
        json={"issue": "Heater", "description": "No heat", "priority": "high",
              "propertyId": elsewhere["id"], "reportedBy": "owner"},
        headers=headers(renter),
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Maintenance request submitted successfully"
    m = body["maintenance"]
    assert m["property"]["id"] == lease["property"]["id"]
    assert m["tenant"]["id"] == lease["id"]
    assert m["reportedBy"] == "tenant"
    assert m["status"] == "pending"
    assert m["priority"] == "high"


def test_owner_report_has_no_tenant(client, owner, headers, make_property):
    prop = make_property(owner)
    resp = client.post(
        "/api/maintenance",
        json={"issue": "Gutters", "description": "Clean before winter", "propertyId": prop["id"]},
        headers=headers(owner),
    )
    m = resp.get_json()["maintenance"]
    assert m["tenant"] is None
    assert m["reportedBy"] == "owner"
    assert m["priority"] == "medium"


def test_owner_report_needs_existing_property(client, owner, headers):
    body = {"issue": "x", "description": "y"}
    assert client.post("/api/maintenance", json=body, headers=headers(owner)).status_code == 400
    body["propertyId"] = 404
    assert client.post("/api/maintenance", json=body, headers=headers(owner)).status_code == 404


def test_tenant_without_lease(client, other_renter, headers):
    resp = client.post(
        "/api/maintenance", json={"issue": "x", "description": "y"}, headers=headers(other_renter)
    )
    assert resp.status_code == 404


def test_invalid_priority(client, renter, headers, lease):
    resp = client.post(
        "/api/maintenance",
        json={"issue": "x", "description": "y", "priority": "whenever"},
        headers=headers(renter),
    )
    assert resp.status_code == 400


def test_listing_is_scoped(client, owner, renter, other_renter, headers, request_id, make_property):
    prop = make_property(owner, name="Owner only")
    client.post(
        "/api/maintenance",
        json={"issue": "Roof", "description": "Inspect", "propertyId": prop["id"]},
        headers=headers(owner),
    )
    assert len(client.get("/api/maintenance", headers=headers(owner)).get_json()["maintenance"]) == 2
    mine = client.get("/api/maintenance", headers=headers(renter)).get_json()["maintenance"]
    assert [m["id"] for m in mine] == [request_id]
    assert client.get("/api/maintenance", headers=headers(other_renter)).get_json()["maintenance"] == []


def test_full_workflow_stamps_completion(client, owner, headers, request_id):
    resp = _put(client, headers, owner, request_id, status="assigned",
                assignedTo={"name": "Pat", "phone": "555-0111", "company": "FixIt"}, estimatedCost=80)
    assert resp.status_code == 200
    m = resp.get_json()["maintenance"]
    assert m["assignedTo"]["company"] == "FixIt"
    assert m["estimatedCost"] == 80.0
    assert m["completionDate"] is None

    assert _put(client, headers, owner, request_id, status="in-progress").status_code == 200

    before = utcnow() - timedelta(seconds=1)
    resp = _put(client, headers, owner, request_id, status="completed", actualCost=95.5)
    after = utcnow() + timedelta(seconds=1)
    m = resp.get_json()["maintenance"]
    assert m["status"] == "completed"
    assert m["actualCost"] == 95.5
    stamped = datetime.fromisoformat(m["completionDate"])
    assert before <= stamped <= after


def test_completion_date_is_immutable(client, owner, headers, request_id):
    for status in ("assigned", "in-progress", "completed"):
        _put(client, headers, owner, request_id, status=status)
    stamped = db.session.get(Maintenance, request_id).completion_date

    resp = _put(client, headers, owner, request_id, status="cancelled")
    assert resp.status_code == 400
    resp = _put(client, headers, owner, request_id, completionDate="2001-01-01T00:00:00", priority="low")
    assert resp.status_code == 200
    m = resp.get_json()["maintenance"]
    assert m["priority"] == "low"
    assert datetime.fromisoformat(m["completionDate"]) == stamped


def test_illegal_jump_leaves_record_untouched(client, owner, headers, request_id):
    resp = _put(client, headers, owner, request_id, status="completed", priority="emergency")
    assert resp.status_code == 400
    assert "Cannot move" in resp.get_json()["message"]
    m = db.session.get(Maintenance, request_id)
    assert m.status == "pending"
    assert m.priority == "medium"
    assert m.completion_date is None


def test_null_priority_on_update_is_rejected(client, owner, headers, request_id):
    assert _put(client, headers, owner, request_id, priority="high").status_code == 200
    resp = _put(client, headers, owner, request_id, priority=None)
    assert resp.status_code == 400
    assert "priority" in resp.get_json()["message"]
    assert db.session.get(Maintenance, request_id).priority == "high"


def test_non_finite_cost_rejected(client, owner, headers, request_id):
    resp = _put(client, headers, owner, request_id, estimatedCost="NaN")
    assert resp.status_code == 400
    assert "estimatedCost" in resp.get_json()["message"]


def test_cancel_from_pending(client, owner, headers, request_id):
    resp = _put(client, headers, owner, request_id, status="cancelled")
    assert resp.get_json()["maintenance"]["status"] == "cancelled"


def test_reported_by_not_writable(client, owner, headers, request_id):
    resp = _put(client, headers, owner, request_id, reportedBy="owner")
    assert resp.get_json()["maintenance"]["reportedBy"] == "tenant"


def test_tenant_cannot_update_or_delete(client, renter, headers, request_id):
    assert _put(client, headers, renter, request_id, status="assigned").status_code == 403
    assert client.delete(f"/api/maintenance/{request_id}", headers=headers(renter)).status_code == 403
    # Role is checked before existence
    assert _put(client, headers, renter, 9999, status="assigned").status_code == 403


def test_owner_unknown_request(client, owner, headers):
    assert _put(client, headers, owner, 9999, status="assigned").status_code == 404
    assert client.delete("/api/maintenance/9999", headers=headers(owner)).status_code == 404


def test_delete(client, owner, headers, request_id):
    resp = client.delete(f"/api/maintenance/{request_id}", headers=headers(owner))
    assert resp.status_code == 200
    assert db.session.get(Maintenance, request_id) is None
