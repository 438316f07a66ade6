from flask import current_app

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Payment, Property, Tenant
from ..models.payment import METHODS
from ..policy import OWNER, TENANT, authorize
from ..utils import parse_int, parse_number, utcnow
from .tenants import find_own_tenant, own_tenant_ids


def list_for_caller(caller):
    authorize(caller, "payment:read")
    query = Payment.query
    if caller.role == TENANT:
        ids = own_tenant_ids(caller.user_id)
        if not ids:
            return []
        query = query.filter(Payment.tenant_id.in_(ids))
    return query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()


def _resolve_owner_target(data):
    if not data.get("tenantId"):
        raise ValidationError("Tenant ID is required for owner payments")
    tenant = db.session.get(Tenant, parse_int(data["tenantId"], "tenantId"))
    if tenant is None:
        raise NotFoundError("Tenant not found")

    if data.get("propertyId"):
        prop = db.session.get(Property, parse_int(data["propertyId"], "propertyId"))
        if prop is None:
            raise NotFoundError("Property not found")
    else:
        prop = tenant.property
    return tenant, prop


def record_payment(caller, data):
    """Log a payment as an already-settled fact.

    Tenants always pay against their own lease; any ``propertyId`` they send is
    ignored. Owners name the tenant and may override the property.
    """
    authorize(caller, "payment:create")

    if caller.role == OWNER:
        tenant, prop = _resolve_owner_target(data)
    else:
        tenant = find_own_tenant(caller.user_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        prop = tenant.property

    if data.get("amount") in (None, ""):
        raise ValidationError("amount is required")
    amount = parse_number(data["amount"], "amount", minimum=0)

    month = data.get("month")
    if not month or not str(month).strip():
        raise ValidationError("month is required")

    method = data.get("method") or "online"
    if method not in METHODS:
        raise ValidationError(f"Invalid payment method: {method}")

    now = utcnow()
    payment = Payment(
        tenant_id=tenant.id,
        property_id=prop.id,
        amount=amount,
        method=method,
        month=str(month).strip(),
        payment_date=now,
        due_date=now,
        reference=data.get("reference"),
        notes=data.get("notes"),
        status="paid",
    )
    db.session.add(payment)
    db.session.commit()
    current_app.logger.info(
        "Payment %s of %.2f recorded for tenant %s by %s %s",
        payment.id, amount, tenant.id, caller.role, caller.user_id,
    )
    return payment
