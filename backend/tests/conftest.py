"""Pytest fixtures: one fresh application, database and token store per test.

Each test gets its own Flask app built from :class:`TestingConfig`, so the
in-memory SQLite database and the refresh token store never leak between
cases.
"""

from __future__ import annotations

import os

import pytest
from authcore.core.config import TestingConfig
from authcore.core.extensions import db as _db
from authcore.core.extensions import get_refresh_store
from authcore.factory import create_app
from authcore.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from authcore.services.providers import build_auth_service, build_session_service

TEST_PASSWORD = "Passw0rd!"


@pytest.fixture()
def app():
    """Create the application and its schema inside an app context.

    Yields
    ------
    flask.Flask
        Application with :class:`TestingConfig` applied.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    return _db


@pytest.fixture()
def session(db):
    """The Flask-scoped session used by repositories and units of work."""
    return db.session


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def refresh_store(app):
    return get_refresh_store(app)


@pytest.fixture()
def session_service(app):
    return build_session_service(app)


@pytest.fixture()
def auth_service(app):
    return build_auth_service(app)


@pytest.fixture(scope="session")
def hasher():
    return WerkzeugPasswordHasher(method=TestingConfig.PASSWORD_HASH_METHOD)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the app session ------------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    if "app" not in request.fixturenames:
        yield
        return
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
