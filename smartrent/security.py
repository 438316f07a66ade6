# smartrent/security.py
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity

from .errors import AuthenticationError
from .extensions import db
from .models import User
from .models.user import ROLES
from .policy import Caller


def current_caller():
    """Caller for the verified bearer token of the current request.

    Identity is stored under "sub" (the user id) with the role as an extra
    claim; the stored user's role wins when the user is known locally.
    """
    ident = get_jwt_identity()
    if isinstance(ident, dict):
        ident, role = ident.get("userId") or ident.get("id"), ident.get("role")
    else:
        role = get_jwt().get("role")
    try:
        user_id = int(ident)
    except (TypeError, ValueError):
        raise AuthenticationError("Token is not valid")

    user = db.session.get(User, user_id)
    if user is not None:
        role = user.role
    if role not in ROLES:
        raise AuthenticationError("Token is not valid")
    return Caller(user_id=user_id, role=role)


def issue_token(user, expires_delta=None):
    claims = {"email": user.email, "role": user.role}
    kwargs = {"additional_claims": claims}
    if expires_delta is not None:
        kwargs["expires_delta"] = expires_delta
    return create_access_token(identity=str(user.id), **kwargs)
