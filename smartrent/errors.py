# smartrent/errors.py
from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException


class SmartRentError(Exception):
    status_code = 500
    message = "Unexpected error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(SmartRentError):
    status_code = 400
    message = "All required fields must be filled"


class AuthenticationError(SmartRentError):
    status_code = 401
    message = "Authentication required"


class AuthorizationError(SmartRentError):
    status_code = 403
    message = "Access denied"


class NotFoundError(SmartRentError):
    status_code = 404
    message = "Not found"


class StoreError(SmartRentError):
    status_code = 500
    message = "Database error"


def envelope(message, status_code):
    return jsonify({"success": False, "message": message}), status_code


def register_error_handlers(app):
    from .extensions import db

    @app.errorhandler(SmartRentError)
    def _domain_error(e):
        db.session.rollback()
        if e.status_code >= 500:
            app.logger.error("%s: %s", type(e).__name__, e.message)
        return envelope(e.message, e.status_code)

    @app.errorhandler(SQLAlchemyError)
    def _store_error(e):
        db.session.rollback()
        app.logger.exception("Store failure: %s", e)
        return envelope(StoreError.message, 500)

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return envelope(e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def _unexpected(e):
        db.session.rollback()
        app.logger.exception("Unhandled exception: %s", e)
        return envelope("Internal Server Error", 500)


def register_jwt_handlers(jwt):
    @jwt.unauthorized_loader
    def _missing_token(reason):
        return envelope("No token, authorization denied", 401)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        current_app.logger.info("Rejected bearer token: %s", reason)
        return envelope("Token is not valid", 401)

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return envelope("Token has expired", 401)
