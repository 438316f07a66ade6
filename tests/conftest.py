"""
Pytest fixtures for the SmartRent API.

Every test gets a fresh app on in-memory SQLite with the schema created, plus
helpers to seed users, mint bearer tokens and create records over HTTP.
"""
import pytest

from smartrent import create_app
from smartrent.config import TestingConfig
from smartrent.extensions import db
from smartrent.models import User
from smartrent.security import issue_token


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(name, email, role):
    u = User(name=name, email=email, role=role, phone="555-0100")
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def owner(app):
    return _make_user("Olivia Owner", "owner@example.com", "owner")


@pytest.fixture
def other_owner(app):
    return _make_user("Oscar Owner", "oscar@example.com", "owner")


@pytest.fixture
def renter(app):
    return _make_user("Rita Renter", "rita@example.com", "tenant")


@pytest.fixture
def other_renter(app):
    return _make_user("Ravi Renter", "ravi@example.com", "tenant")


@pytest.fixture
def headers(app):
    def _headers(user):
        return {"Authorization": f"Bearer {issue_token(user)}"}
    return _headers


def property_payload(**overrides):
    data = {
        "name": "Maple Court 4B",
        "address": {"street": "12 Maple Ct", "city": "Springfield", "state": "IL", "zipCode": "62704"},
        "rent": 1200,
        "bedrooms": 2,
        "bathrooms": 1.5,
        "area": 850,
        "description": "Sunny corner unit",
        "features": ["parking", "laundry"],
    }
    data.update(overrides)
    return data


def lease_payload(user, prop_id, **overrides):
    data = {
        "userId": user.id,
        "propertyId": prop_id,
        "unit": "4B",
        "leaseStart": "2024-01-01",
        "leaseEnd": "2024-12-31",
        "rent": 1200,
        "securityDeposit": 600,
        "emergencyContact": {"name": "Sam", "phone": "555-0199", "relationship": "sibling"},
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_property(client, headers):
    def _make(user, **overrides):
        resp = client.post("/api/properties", json=property_payload(**overrides), headers=headers(user))
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["property"]
    return _make


@pytest.fixture
def make_tenant(client, headers):
    def _make(owner_user, renter_user, prop_id, **overrides):
        resp = client.post(
            "/api/tenants", json=lease_payload(renter_user, prop_id, **overrides), headers=headers(owner_user)
        )
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["tenant"]
    return _make


def public_ids(client):
    return {p["id"] for p in client.get("/api/properties").get_json()["properties"]}
