"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import atexit
import logging

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

from authcore.core.errors import Forbidden, Unauthorized, api_error_response
from authcore.infra.memory.in_memory_refresh_token_store import InMemoryRefreshTokenStore
from authcore.services._shared.ports import RefreshTokenStore

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

log = logging.getLogger(__name__)

REFRESH_STORE_KEY = "refresh_token_store"

ACCESS_TOKEN_REQUIRED = "Access token required"
INVALID_ACCESS_TOKEN = "Invalid or expired token"


def _register_jwt_loaders(manager: JWTManager) -> None:
    """Render Flask-JWT-Extended rejections as problem+json.

    A missing access token is a 401; a malformed, tampered, expired or
    refresh-kind token is a 403.
    """

    @manager.unauthorized_loader
    def _missing(reason: str):
        log.info("auth.access.missing", extra={"reason": reason})
        return api_error_response(Unauthorized(ACCESS_TOKEN_REQUIRED))

    @manager.invalid_token_loader
    def _invalid(reason: str):
        log.info("auth.access.rejected", extra={"reason": reason})
        return api_error_response(Forbidden(INVALID_ACCESS_TOKEN))

    @manager.expired_token_loader
    def _expired(_jwt_header: dict, _jwt_payload: dict):
        log.info("auth.access.rejected", extra={"reason": "expired"})
        return api_error_response(Forbidden(INVALID_ACCESS_TOKEN))


_register_jwt_loaders(jwt)


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the refresh token store.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`authcore.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    The refresh token store lives for the lifetime of the process: one
    instance per application, cleared when the interpreter exits. Tokens do
    not survive a restart.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from authcore import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    store = app.extensions.get(REFRESH_STORE_KEY)
    if store is None:
        store = InMemoryRefreshTokenStore()
        app.extensions[REFRESH_STORE_KEY] = store
        atexit.register(store.clear)


def get_refresh_store(app: Flask | None = None) -> RefreshTokenStore:
    """Return the refresh token store bound to ``app`` (or the current app)."""
    target = app or current_app
    store = target.extensions.get(REFRESH_STORE_KEY)
    if store is None:
        raise RuntimeError("Refresh token store is not initialized. Call init_app() first.")
    return store
