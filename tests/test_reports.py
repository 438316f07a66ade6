from datetime import datetime

import pytest

from smartrent.extensions import db
from smartrent.models import Payment
from smartrent.policy import Caller
from smartrent.services import reports


def _payment(amount, when, status="paid", method="online"):
    db.session.add(Payment(
        amount=amount, payment_date=when, due_date=when, status=status, method=method, month=when.strftime("%Y-%m"),
    ))
    db.session.commit()


def test_empty_ledger_yields_zero(client, owner, headers):
    resp = client.get("/api/payments/stats", headers=headers(owner))
    assert resp.status_code == 200
    assert resp.get_json()["stats"] == {"monthlyRevenue": 0, "yearlyRevenue": 0, "paymentMethods": []}


def test_tenant_forbidden(client, renter, headers):
    resp = client.get("/api/payments/stats", headers=headers(renter))
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Only owners can view payment statistics"


def test_windows_and_statuses(app, owner):
    now = datetime(2024, 5, 15, 12, 0)
    _payment(100, datetime(2024, 5, 1, 0, 0))
    _payment(200, datetime(2024, 5, 31, 23, 59))
    _payment(400, datetime(2024, 6, 1, 0, 0))          # next month, same year
    _payment(800, datetime(2024, 1, 2))                  # earlier this year
    _payment(1600, datetime(2023, 12, 31, 23, 59))       # last year
    _payment(3200, datetime(2024, 5, 10), status="pending")

    stats = reports.payment_stats(Caller(owner.id, "owner"), now=now)
    assert stats["monthlyRevenue"] == 300
    assert stats["yearlyRevenue"] == 1500
    assert reports.monthly_revenue(datetime(2024, 2, 1)) == 0


def test_method_breakdown_counts_only_paid(app):
    when = datetime(2024, 3, 3)
    _payment(10, when, method="cash")
    _payment(15, when, method="cash")
    _payment(99, datetime(2019, 1, 1), method="check")
    _payment(5, when, method="online", status="overdue")

    assert reports.payment_methods() == [
        {"method": "cash", "count": 2, "total": 25.0},
        {"method": "check", "count": 1, "total": 99.0},
    ]


def test_december_rolls_into_next_year(app):
    _payment(70, datetime(2024, 12, 31, 23, 0))
    _payment(30, datetime(2025, 1, 1, 0, 0))
    assert reports.monthly_revenue(datetime(2024, 12, 5)) == 70
    assert reports.yearly_revenue(datetime(2024, 12, 5)) == pytest.approx(70)
