from datetime import datetime

from conftest import lease_payload, property_payload, public_ids


def test_lease_lifecycle_and_revenue(client, owner, renter, headers):
    # Owner lists a property; it shows up publicly
    resp = client.post("/api/properties", json=property_payload(), headers=headers(owner))
    prop_id = resp.get_json()["property"]["id"]
    assert prop_id in public_ids(client)

    # Leasing it hides it
    resp = client.post("/api/tenants", json=lease_payload(renter, prop_id), headers=headers(owner))
    assert resp.status_code == 201
    tenant_id = resp.get_json()["tenant"]["id"]
    assert prop_id not in public_ids(client)

    # Tenant pays while the lease is live
    resp = client.post(
        "/api/payments", json={"amount": 1200, "month": "2024-05"}, headers=headers(renter)
    )
    assert resp.status_code == 201

    # Ending the lease brings it back
    resp = client.delete(f"/api/tenants/{tenant_id}", headers=headers(owner))
    assert resp.status_code == 200
    assert prop_id in public_ids(client)

    stats = client.get("/api/payments/stats", headers=headers(owner)).get_json()["stats"]
    assert stats["yearlyRevenue"] >= 1200
    assert stats["monthlyRevenue"] >= 1200
    assert stats["paymentMethods"] == [{"method": "online", "count": 1, "total": 1200.0}]


def test_health(client):
    body = client.get("/api/health").get_json()
    assert body["status"] == "ok"
    datetime.fromisoformat(body["time"])


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_garbage_token_rejected(client):
    resp = client.get("/api/tenants", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Token is not valid"}
