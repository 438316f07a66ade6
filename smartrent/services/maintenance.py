from flask import current_app

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Maintenance, Property
from ..models.maintenance import PRIORITIES
from ..policy import (
    MAINTENANCE_FIELDS,
    TENANT,
    authorize,
    check_maintenance_transition,
    pick_fields,
)
from ..utils import parse_int, parse_number, require_fields, utcnow
from .tenants import find_own_tenant, own_tenant_ids

ASSIGNEE_KEYS = ("name", "phone", "company")


def list_for_caller(caller):
    authorize(caller, "maintenance:read")
    query = Maintenance.query
    if caller.role == TENANT:
        ids = own_tenant_ids(caller.user_id)
        if not ids:
            return []
        query = query.filter(Maintenance.tenant_id.in_(ids))
    return query.order_by(Maintenance.created_at.desc(), Maintenance.id.desc()).all()


def _priority(value, default="medium"):
    if not value:
        value = default
    if value not in PRIORITIES:
        raise ValidationError(f"Invalid priority: {value}")
    return value


def _images(value):
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError("images must be a list of strings")
    return value


def _assignee(value):
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("assignedTo must be an object")
    return {k: value[k] for k in ASSIGNEE_KEYS if value.get(k) is not None}


def create_request(caller, data):
    authorize(caller, "maintenance:create")
    require_fields(data, ["issue", "description"])

    tenant = None
    if caller.role == TENANT:
        tenant = find_own_tenant(caller.user_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        prop = tenant.property
    else:
        if not data.get("propertyId"):
            raise ValidationError("propertyId is required")
        prop = db.session.get(Property, parse_int(data["propertyId"], "propertyId"))
        if prop is None:
            raise NotFoundError("Property not found")

    request_ = Maintenance(
        property_id=prop.id,
        tenant_id=tenant.id if tenant else None,
        issue=str(data["issue"]).strip(),
        description=data["description"],
        priority=_priority(data.get("priority")),
        status="pending",
        reported_by=caller.role,
        images=_images(data.get("images")),
    )
    db.session.add(request_)
    db.session.commit()
    current_app.logger.info(
        "Maintenance %s reported by %s %s on property %s",
        request_.id, caller.role, caller.user_id, prop.id,
    )
    return request_


def _load(caller, request_id, action):
    authorize(caller, action)
    request_ = db.session.get(Maintenance, request_id)
    if request_ is None:
        raise NotFoundError("Maintenance request not found")
    return request_


def update_request(caller, request_id, data):
    request_ = _load(caller, request_id, "maintenance:update")
    changes = pick_fields(data, MAINTENANCE_FIELDS)

    target = changes.pop("status", None)
    if target is not None and check_maintenance_transition(request_.status, target):
        current_app.logger.info(
            "Maintenance %s %s -> %s", request_.id, request_.status, target
        )
        request_.status = target
        if target == "completed":
            request_.completion_date = utcnow()

    for attr, value in changes.items():
        if attr == "priority":
            value = _priority(value, default=None)
        elif attr in ("estimated_cost", "actual_cost"):
            label = "estimatedCost" if attr == "estimated_cost" else "actualCost"
            value = None if value is None else parse_number(value, label, minimum=0)
        elif attr == "assigned_to":
            value = _assignee(value)
        elif attr == "images":
            value = _images(value)
        elif attr in ("issue", "description") and not value:
            raise ValidationError(f"{attr} is required")
        setattr(request_, attr, value)

    db.session.commit()
    return request_


def delete_request(caller, request_id):
    request_ = _load(caller, request_id, "maintenance:delete")
    db.session.delete(request_)
    db.session.commit()
    current_app.logger.info("Maintenance %s deleted by owner %s", request_id, caller.user_id)
