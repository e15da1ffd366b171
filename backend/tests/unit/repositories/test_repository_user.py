"""Unit tests for UserRepository."""

from datetime import UTC, datetime

import pytest
from authcore.repositories.user import UserRepository
from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self, session):
        return UserRepository(session=session)

    def test_create_and_get_by_email(self, repo, session):
        """Create a user and fetch it back regardless of email casing."""
        u = repo.create(email="Alice@Example.com", password_hash="h", name="Alice")
        session.commit()

        fetched = repo.get_by_email("ALICE@example.com ")
        assert fetched is not None
        assert fetched.id == u.id
        assert fetched.email == "alice@example.com"
        assert fetched.client_type == "unknown"

    def test_exists_by_email(self, repo, session):
        UserFactory(email="bob@example.com")
        session.commit()

        assert repo.exists_by_email("BOB@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")

    def test_inactive_users_are_invisible(self, repo, session):
        u = UserFactory(email="old@example.com", is_active=False)
        session.commit()

        assert repo.get(u.id) is None
        assert repo.get_by_email("old@example.com") is None
        assert not repo.exists_by_email("old@example.com")

    def test_update_last_login(self, repo, session):
        u = UserFactory()
        session.commit()
        when = datetime(2030, 1, 1, tzinfo=UTC)

        assert repo.update_last_login(u.id, when) is True
        assert repo.update_last_login(9999, when) is False
        assert repo.get(u.id).last_login is not None

    def test_deactivate(self, repo, session):
        u = UserFactory()
        session.commit()

        assert repo.deactivate(u.id) is True
        assert repo.deactivate(u.id) is False
        assert repo.get(u.id) is None

    def test_safe_update_fields(self, repo, session):
        """Assign whitelisted fields and reject disallowed keys."""
        u = UserFactory()
        session.commit()

        updated = repo.assign_updates(u, {"name": "New Name", "phone": "555"})
        assert updated.name == "New Name"
        assert updated.phone == "555"

        # the hash is never assignable through the public path
        with pytest.raises(ValueError):
            repo.assign_updates(u, {"password_hash": "x"})

    def test_name_is_required(self, repo):
        with pytest.raises(ValueError):
            repo.create(email="x@example.com", password_hash="h", name="  ")
