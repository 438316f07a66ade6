from flask import current_app

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Property, Tenant
from ..policy import OWNER, PROPERTY_FIELDS, authorize, is_owned_by, pick_fields
from ..utils import parse_count, parse_number, require_fields

REQUIRED_FIELDS = ["name", "address", "rent", "bedrooms", "bathrooms", "area"]
ADDRESS_KEYS = ("street", "city", "state", "zipCode", "country")


def _newest_first(query):
    return query.order_by(Property.created_at.desc(), Property.id.desc())


def list_available():
    return _newest_first(Property.query.filter_by(is_available=True)).all()


def list_for_caller(caller):
    if caller.role == OWNER:
        return _newest_first(Property.query.filter_by(owner_id=caller.user_id)).all()
    return list_available()


def get_property(property_id):
    prop = db.session.get(Property, property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


def _owned_property(caller, property_id):
    # Properties of other owners are filtered out of scope, not forbidden
    prop = db.session.get(Property, property_id)
    if prop is None or not is_owned_by(caller, prop.owner_id):
        raise NotFoundError("Property not found")
    return prop


def _clean_address(value):
    if isinstance(value, str):
        return {"street": value}
    if isinstance(value, dict):
        return {k: value[k] for k in ADDRESS_KEYS if value.get(k) is not None}
    raise ValidationError("address must be a string or an object")


def _clean_list(value, field):
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field} must be a list of strings")
    return value


def _coerce(attr, value):
    if attr == "name":
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("name is required")
        return value.strip()
    if attr == "address":
        return _clean_address(value)
    if attr == "rent":
        return parse_number(value, "rent", minimum=0, exclusive=True)
    if attr == "bedrooms":
        return parse_count(value, "bedrooms")
    if attr in ("bathrooms", "area"):
        return parse_number(value, attr, minimum=0)
    if attr in ("features", "images"):
        return _clean_list(value, attr)
    return value


def create_property(caller, data):
    authorize(caller, "property:create")
    require_fields(data, REQUIRED_FIELDS)

    values = {attr: _coerce(attr, v) for attr, v in pick_fields(data, PROPERTY_FIELDS).items()}
    values.setdefault("features", [])
    values.setdefault("images", [])
    prop = Property(owner_id=caller.user_id, is_available=True, **values)
    db.session.add(prop)
    db.session.commit()
    current_app.logger.info("Property %s created by owner %s", prop.id, caller.user_id)
    return prop


def update_property(caller, property_id, data):
    authorize(caller, "property:update")
    prop = _owned_property(caller, property_id)

    for attr, value in pick_fields(data, PROPERTY_FIELDS).items():
        setattr(prop, attr, _coerce(attr, value))
    db.session.commit()
    return prop


def delete_property(caller, property_id):
    authorize(caller, "property:delete")
    prop = _owned_property(caller, property_id)

    active = Tenant.query.filter_by(property_id=prop.id, status="active").count()
    if active:
        raise ValidationError("Cannot delete property with active tenants")

    db.session.delete(prop)
    db.session.commit()
    current_app.logger.info("Property %s deleted by owner %s", property_id, caller.user_id)
