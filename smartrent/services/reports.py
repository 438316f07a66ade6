from datetime import datetime

from dateutil.relativedelta import relativedelta
from sqlalchemy import and_, func

from ..extensions import db
from ..models import Payment
from ..policy import authorize
from ..utils import utcnow


def _paid_total(start, end):
    total = db.session.query(func.coalesce(func.sum(Payment.amount), 0)).filter(
        and_(
            Payment.status == "paid",
            Payment.payment_date >= start,
            Payment.payment_date < end,
        )
    ).scalar()
    return float(total or 0)


def monthly_revenue(now=None):
    now = now or utcnow()
    start = datetime(now.year, now.month, 1)
    return _paid_total(start, start + relativedelta(months=1))


def yearly_revenue(now=None):
    now = now or utcnow()
    start = datetime(now.year, 1, 1)
    return _paid_total(start, start + relativedelta(years=1))


def payment_methods():
    rows = (
        db.session.query(
            Payment.method,
            func.count(Payment.id),
            func.coalesce(func.sum(Payment.amount), 0),
        )
        .filter(Payment.status == "paid")
        .group_by(Payment.method)
        .order_by(Payment.method)
        .all()
    )
    return [
        {"method": method, "count": int(count), "total": float(total or 0)}
        for method, count, total in rows
    ]


def payment_stats(caller, now=None):
    authorize(caller, "payment:stats")
    return {
        "monthlyRevenue": monthly_revenue(now),
        "yearlyRevenue": yearly_revenue(now),
        "paymentMethods": payment_methods(),
    }
