import math
from datetime import date, datetime, timezone

from dateutil import parser as date_parser

from .errors import ValidationError


def utcnow():
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value is not None else None


def parse_datetime(value, field):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        parsed = date_parser.isoparse(str(value))
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field} must be an ISO 8601 date")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_number(value, field, minimum=None, exclusive=False):
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a valid number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a valid number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a valid number")
    if minimum is not None:
        if exclusive and number <= minimum:
            raise ValidationError(f"{field} must be greater than {minimum:g}")
        if not exclusive and number < minimum:
            raise ValidationError(f"{field} must be at least {minimum:g}")
    return number


def parse_count(value, field):
    """Non-negative whole number; 2.0 is accepted, 2.7 is not."""
    number = parse_number(value, field, minimum=0)
    if not number.is_integer():
        raise ValidationError(f"{field} must be a whole number")
    return int(number)


def parse_int(value, field):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a valid id")


def require_fields(data, fields):
    """Every field must be present and truthy; the message names the first gap."""
    missing = [f for f in fields if data.get(f) in (None, "", [], {})]
    if missing:
        raise ValidationError(f"{missing[0]} is required")


def float_or_none(value):
    return float(value) if value is not None else None
