"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

from flask import Flask

from ..services.generation_cache import init_generation_caches
from .error_handlers import error_response, register_error_handlers
from .extensions import db, login_manager
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure the package logger, which is also ``app.logger``."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON", False),
    )
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return error_response("Authentication required.", "UNAUTHORIZED", 401)


def register_services(app: Flask) -> None:
    """Attach process-local services and connect signal subscribers."""

    init_generation_caches(app)
    from . import events  # noqa: F401


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables."""

    from .. import models  # noqa: F401

    db.create_all()
    app.logger.info("Database tables are ready.")


__all__ = [
    "configure_logging",
    "register_extensions",
    "register_services",
    "register_blueprints",
    "register_error_handlers",
    "initialize_database",
]
