from flask import current_app

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Property, Tenant, User
from ..models.tenant import STATUSES
from ..policy import OWNER, TENANT_FIELDS, authorize, availability_for, pick_fields
from ..utils import parse_datetime, parse_int, parse_number, require_fields

REQUIRED_FIELDS = ["userId", "propertyId", "unit", "leaseStart", "leaseEnd", "rent"]
CONTACT_KEYS = ("name", "phone", "relationship")


def find_own_tenant(user_id):
    """The lease record of a tenant-role user, active leases first."""
    return (
        Tenant.query.filter_by(user_id=user_id)
        .order_by((Tenant.status == "active").desc(), Tenant.created_at.desc())
        .first()
    )


def own_tenant_ids(user_id):
    return [t.id for t in Tenant.query.filter_by(user_id=user_id).with_entities(Tenant.id)]


def list_for_caller(caller):
    if caller.role == OWNER:
        return Tenant.query.order_by(Tenant.created_at.desc(), Tenant.id.desc()).all()
    tenant = find_own_tenant(caller.user_id)
    return [tenant] if tenant else []


def sync_availability(prop):
    """Recompute ``is_available`` from the tenants still in the session."""
    statuses = [
        s for (s,) in Tenant.query.filter_by(property_id=prop.id).with_entities(Tenant.status)
    ]
    available = availability_for(statuses)
    if prop.is_available != available:
        current_app.logger.info(
            "Property %s availability %s -> %s", prop.id, prop.is_available, available
        )
        prop.is_available = available
    return available


def _clean_contact(value):
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("emergencyContact must be an object")
    return {k: value[k] for k in CONTACT_KEYS if value.get(k) is not None}


def _coerce(attr, value):
    if attr in ("lease_start", "lease_end"):
        return parse_datetime(value, "leaseStart" if attr == "lease_start" else "leaseEnd")
    if attr == "rent":
        return parse_number(value, "rent", minimum=0, exclusive=True)
    if attr == "security_deposit":
        return parse_number(value or 0, "securityDeposit", minimum=0)
    if attr == "status":
        if value not in STATUSES:
            raise ValidationError(f"Invalid status: {value}")
        return value
    if attr == "emergency_contact":
        return _clean_contact(value)
    if attr == "unit":
        if not value or not str(value).strip():
            raise ValidationError("unit is required")
        return str(value).strip()
    return value


def _check_lease_window(tenant):
    if tenant.lease_start >= tenant.lease_end:
        raise ValidationError("leaseEnd must be after leaseStart")


def _load_for_owner(caller, tenant_id, action):
    authorize(caller, action)
    tenant = db.session.get(Tenant, tenant_id)
    if tenant is None:
        raise NotFoundError("Tenant not found")
    authorize(caller, action, owner_id=tenant.property.owner_id)
    return tenant


def create_tenant(caller, data):
    authorize(caller, "tenant:create")
    require_fields(data, REQUIRED_FIELDS)
    user_id = parse_int(data["userId"], "userId")
    property_id = parse_int(data["propertyId"], "propertyId")

    user = User.query.filter_by(id=user_id, role="tenant").first()
    if user is None:
        raise ValidationError("User not found or is not a tenant")

    prop = Property.query.filter_by(id=property_id, owner_id=caller.user_id).first()
    if prop is None:
        raise ValidationError("Property not found or access denied")

    if Tenant.query.filter_by(user_id=user_id, property_id=property_id).first():
        raise ValidationError("Tenant already exists for this property")

    values = {attr: _coerce(attr, v) for attr, v in pick_fields(data, TENANT_FIELDS).items()}
    values["status"] = "active"
    values.setdefault("security_deposit", 0)
    tenant = Tenant(user_id=user.id, property_id=prop.id, **values)
    _check_lease_window(tenant)

    # Lease and availability flip commit together
    db.session.add(tenant)
    prop.is_available = False
    db.session.commit()
    current_app.logger.info(
        "Tenant %s (user %s) added to property %s", tenant.id, user.id, prop.id
    )
    return tenant


def update_tenant(caller, tenant_id, data):
    tenant = _load_for_owner(caller, tenant_id, "tenant:update")

    previous_status = tenant.status
    for attr, value in pick_fields(data, TENANT_FIELDS).items():
        setattr(tenant, attr, _coerce(attr, value))
    _check_lease_window(tenant)

    if tenant.status != previous_status:
        db.session.flush()
        sync_availability(tenant.property)
    db.session.commit()
    return tenant


def delete_tenant(caller, tenant_id):
    tenant = _load_for_owner(caller, tenant_id, "tenant:delete")
    prop = tenant.property

    db.session.delete(tenant)
    db.session.flush()
    sync_availability(prop)
    db.session.commit()
    current_app.logger.info("Tenant %s removed from property %s", tenant_id, prop.id)


def reconcile_availability(dry_run=False):
    """Recompute every property's flag; returns ``[(property, old, new)]``."""
    corrections = []
    for prop in Property.query.order_by(Property.id).all():
        before = prop.is_available
        statuses = [t.status for t in prop.tenants]
        after = availability_for(statuses)
        if before != after:
            corrections.append((prop, before, after))
            if not dry_run:
                prop.is_available = after
    if not dry_run:
        db.session.commit()
    return corrections
