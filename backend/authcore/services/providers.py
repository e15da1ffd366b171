"""Build the services for an application from its config and extensions."""

from __future__ import annotations

from flask import Flask, current_app

from authcore.core.extensions import get_refresh_store
from authcore.infra.jwt.flask_jwt_token_codec import FlaskJWTTokenCodec
from authcore.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from authcore.services._shared.ports import TokenLifetimes
from authcore.services.auth.service import AuthService
from authcore.services.session.service import SessionService


def token_lifetimes(app: Flask | None = None) -> TokenLifetimes:
    config = (app or current_app).config
    return TokenLifetimes(
        access_expires=config["ACCESS_TOKEN_EXPIRES"],
        refresh_expires=config["REFRESH_TOKEN_EXPIRES"],
    )


def build_token_codec(app: Flask | None = None) -> FlaskJWTTokenCodec:
    return FlaskJWTTokenCodec(lifetimes=token_lifetimes(app))


def build_session_service(app: Flask | None = None) -> SessionService:
    """
    Wire a :class:`SessionService` to the app's refresh token store.

    The store is shared by every service built for the same app, so a logout
    through one instance is seen by all of them. Token ``exp`` claims and
    store records both take their lifetimes from the codec.
    """
    target = app or current_app
    return SessionService(
        token_codec=build_token_codec(target),
        refresh_store=get_refresh_store(target),
    )


def build_auth_service(app: Flask | None = None) -> AuthService:
    target = app or current_app
    return AuthService(
        sessions=build_session_service(target),
        password_hasher=WerkzeugPasswordHasher(
            method=target.config.get("PASSWORD_HASH_METHOD", "scrypt"),
        ),
    )
