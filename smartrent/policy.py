"""Authorization and state-transition rules.

Everything here is a pure function over plain values so the rules can be
checked without a request or a database. Services load the ownership chain
(the owner id of the property an entity hangs off) and hand it in.
"""
from collections import namedtuple

from .errors import AuthorizationError, ValidationError

Caller = namedtuple("Caller", ["user_id", "role"])

OWNER = "owner"
TENANT = "tenant"

# action -> (roles allowed, ownership required, denial message)
RULES = {
    "property:create": ((OWNER,), False, "Only owners can add properties"),
    "property:update": ((OWNER,), True, "Only owners can update properties"),
    "property:delete": ((OWNER,), True, "Only owners can delete properties"),
    "tenant:create": ((OWNER,), False, "Only owners can add tenants"),
    "tenant:update": ((OWNER,), True, "Only owners can update tenants"),
    "tenant:delete": ((OWNER,), True, "Only owners can remove tenants"),
    "payment:read": ((OWNER, TENANT), False, "Access denied"),
    "payment:create": ((OWNER, TENANT), False, "Access denied"),
    "payment:stats": ((OWNER,), False, "Only owners can view payment statistics"),
    "maintenance:read": ((OWNER, TENANT), False, "Access denied"),
    "maintenance:create": ((OWNER, TENANT), False, "Access denied"),
    "maintenance:update": ((OWNER,), False, "Only owners can update maintenance requests"),
    "maintenance:delete": ((OWNER,), False, "Only owners can delete maintenance requests"),
}


def authorize(caller, action, owner_id=None):
    """Raise AuthorizationError unless ``caller`` may perform ``action``.

    Call once without ``owner_id`` before any lookup to gate on role, then
    again with the resolved owner id for actions that require ownership.
    """
    roles, needs_owner, message = RULES[action]
    if caller is None or caller.role not in roles:
        raise AuthorizationError(message)
    if needs_owner and owner_id is not None and str(owner_id) != str(caller.user_id):
        raise AuthorizationError("Access denied")
    return True


def is_owned_by(caller, owner_id):
    return caller is not None and str(owner_id) == str(caller.user_id)


# Fields an update payload may touch. Everything else is ignored.
PROPERTY_FIELDS = {
    "name": "name",
    "address": "address",
    "rent": "rent",
    "bedrooms": "bedrooms",
    "bathrooms": "bathrooms",
    "area": "area",
    "description": "description",
    "features": "features",
    "images": "images",
}

TENANT_FIELDS = {
    "unit": "unit",
    "leaseStart": "lease_start",
    "leaseEnd": "lease_end",
    "rent": "rent",
    "securityDeposit": "security_deposit",
    "status": "status",
    "emergencyContact": "emergency_contact",
}

MAINTENANCE_FIELDS = {
    "issue": "issue",
    "description": "description",
    "priority": "priority",
    "status": "status",
    "assignedTo": "assigned_to",
    "estimatedCost": "estimated_cost",
    "actualCost": "actual_cost",
    "images": "images",
}


def pick_fields(data, allowed):
    """Map whitelisted payload keys onto attribute names."""
    return {attr: data[key] for key, attr in allowed.items() if key in data}


MAINTENANCE_TRANSITIONS = {
    "pending": {"assigned", "cancelled"},
    "assigned": {"in-progress", "cancelled"},
    "in-progress": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


def check_maintenance_transition(current, target):
    """Return True when the status changes, False for a no-op.

    Raises ValidationError for unknown statuses and illegal moves.
    """
    if target not in MAINTENANCE_TRANSITIONS:
        raise ValidationError(f"Invalid status: {target}")
    if target == current:
        return False
    if target not in MAINTENANCE_TRANSITIONS.get(current, set()):
        raise ValidationError(f"Cannot move maintenance request from {current} to {target}")
    return True


def availability_for(tenant_statuses):
    """A property is available iff none of its tenants is active."""
    return not any(status == "active" for status in tenant_statuses)
