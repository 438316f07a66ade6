# smartrent/__init__.py
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from .extensions import db, jwt, migrate


def _configure_logging(app: Flask) -> None:
    """JSON-shaped logs to stdout."""
    level = app.config.get("LOG_LEVEL", "INFO")
    app.logger.setLevel(level)
    root = logging.getLogger()
    root.setLevel(level)

    # avoid duplicate handlers in reloaders
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='{"ts":"%(asctime)s","level":"%(levelname)s","msg":"%(message)s","name":"%(name)s"}',
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)


def _configure_cors(app: Flask) -> None:
    CORS(
        app,
        resources={app.config["API_PREFIX"] + "/*": {"origins": app.config["CORS_ALLOWED_ORIGINS"]}},
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        max_age=86400,
    )


def _configure_proxy(app: Flask) -> None:
    """Respect X-Forwarded-* from the load balancer."""
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore


def _load_config(app: Flask, config_object: Optional[str | Any]) -> None:
    if config_object is None:
        config_object = os.getenv("CONFIG_CLASS", "smartrent.config.Config")
    if isinstance(config_object, str):
        # load "package.ClassName"
        module, _, cls = config_object.rpartition(".")
        config_object = getattr(__import__(module, fromlist=[cls]), cls)
    if hasattr(config_object, "validate"):
        config_object.validate()
    app.config.from_object(config_object)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        os.makedirs(app.instance_path, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + os.path.join(
            app.instance_path, "smartrent.db"
        )


def _init_extensions(app: Flask) -> None:
    from .errors import register_jwt_handlers

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_jwt_handlers(jwt)


def _register_blueprints(app: Flask) -> None:
    """Register all API blueprints under the API prefix."""
    from .routes import maintenance_bp, payments_bp, properties_bp, tenants_bp

    for bp in (properties_bp, tenants_bp, payments_bp, maintenance_bp):
        app.register_blueprint(bp, url_prefix=app.config["API_PREFIX"])
        app.logger.debug("Registered blueprint %s at %s", bp.name, app.config["API_PREFIX"])


# --- Application Factory ------------------------------------------------------
def create_app(config_object: Optional[str | Any] = None) -> Flask:
    """
    Standard Flask application factory.

    `config_object` may be:
      - a config class
      - dotted path to a config class (e.g., "smartrent.config.ProductionConfig")
      - None (then CONFIG_CLASS env or smartrent.config.Config)
    """
    app = Flask(__name__, instance_relative_config=True)
    _load_config(app, config_object)

    _configure_logging(app)
    _configure_proxy(app)
    _configure_cors(app)

    from . import models  # noqa: F401  register tables on the metadata
    from .cli import register_cli
    from .errors import register_error_handlers

    _init_extensions(app)
    _register_blueprints(app)
    register_error_handlers(app)
    register_cli(app)

    @app.get(app.config["API_PREFIX"] + "/health")
    def health():
        return jsonify({
            "success": True,
            "status": "ok",
            "time": datetime.now(timezone.utc).isoformat(),
            "service": "smartrent-api",
        }), 200

    @app.get("/")
    def root():
        return jsonify({"message": "SmartRent API is running"}), 200

    return app
