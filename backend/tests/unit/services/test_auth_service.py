"""Unit tests for AuthService against SQLite and the in-memory token store."""

from __future__ import annotations

import pytest
from authcore.models.user import User
from authcore.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    NotFoundError,
    TokenNotFoundError,
    ValidationError,
)
from authcore.services._shared.ports import TokenKind
from authcore.services.auth import (
    LoginIn,
    ProfileUpdateIn,
    RefreshIn,
    RegisterIn,
)
from tests.factories.user import UserFactory


def _register(service, **overrides):
    payload = {"email": "a@b.com", "password": "secret1", "name": "A"}
    payload.update(overrides)
    return service.register(RegisterIn(**payload))


class TestRegister:
    def test_register_returns_public_user_and_tokens(self, auth_service, refresh_store):
        result = _register(auth_service)

        assert result.user.email == "a@b.com"
        assert result.user.name == "A"
        assert result.user.client_type == "unknown"
        assert not hasattr(result.user, "password")
        assert not hasattr(result.user, "password_hash")
        assert result.tokens.access_token
        assert refresh_store.find_by_token(result.tokens.refresh_token).user_id == str(
            result.user.id
        )

    def test_password_is_stored_hashed(self, auth_service, session, hasher):
        result = _register(auth_service)

        stored = session.get(User, result.user.id)
        assert stored.password_hash != "secret1"
        assert hasher.verify("secret1", stored.password_hash)

    def test_email_is_normalized(self, auth_service):
        result = _register(auth_service, email="  Mixed@Example.COM ")

        assert result.user.email == "mixed@example.com"

    def test_reports_every_violation(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            auth_service.register(RegisterIn(email="", password="", name=""))

        assert exc_info.value.errors == [
            "Email is required",
            "Password is required",
            "Name is required",
        ]

    def test_short_password_and_bad_email(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            _register(auth_service, email="not-an-email", password="123")

        assert exc_info.value.errors == [
            "Password must be at least 6 characters long",
            "Invalid email format",
        ]

    def test_length_caps_follow_the_other_rules(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            _register(
                auth_service,
                email="x" * 250 + "@b.com",
                password="123",
                phone="5" * 51,
            )

        assert exc_info.value.errors == [
            "Password must be at least 6 characters long",
            "Email must be at most 254 characters long",
            "Phone must be at most 50 characters long",
        ]

    def test_blank_name_is_rejected(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            _register(auth_service, name="   ")

        assert exc_info.value.errors == ["Name is required"]

    def test_duplicate_email_is_case_insensitive(self, auth_service):
        _register(auth_service)

        with pytest.raises(DuplicateEmailError) as exc_info:
            _register(auth_service, email="A@B.COM")
        assert exc_info.value.detail == "User with this email already exists"


class TestLogin:
    def test_login_issues_session_and_stamps_last_login(self, auth_service, session):
        user = UserFactory(email="login@example.com", password="s3cret!")
        session.commit()

        result = auth_service.login(LoginIn(email="LOGIN@example.com", password="s3cret!"))

        assert result.user.id == user.id
        assert result.user.last_login is not None
        assert result.tokens.refresh_token

    def test_wrong_password_and_unknown_email_look_the_same(self, auth_service, session):
        UserFactory(email="known@example.com", password="s3cret!")
        session.commit()

        with pytest.raises(InvalidCredentialsError) as wrong_pw:
            auth_service.login(LoginIn(email="known@example.com", password="nope!!"))
        with pytest.raises(InvalidCredentialsError) as unknown:
            auth_service.login(LoginIn(email="ghost@example.com", password="s3cret!"))

        assert str(wrong_pw.value) == str(unknown.value) == "Invalid email or password"

    def test_inactive_user_cannot_log_in(self, auth_service, session):
        UserFactory(email="gone@example.com", password="s3cret!", is_active=False)
        session.commit()

        with pytest.raises(InvalidCredentialsError):
            auth_service.login(LoginIn(email="gone@example.com", password="s3cret!"))

    def test_missing_fields(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            auth_service.login(LoginIn(email=None, password=None))

        assert exc_info.value.errors == ["Email is required", "Password is required"]


class TestRefresh:
    def test_refresh_signs_access_with_current_email(self, auth_service, session):
        result = _register(auth_service)
        stored = session.get(User, result.user.id)
        stored.email = "renamed@b.com"
        session.commit()

        out = auth_service.refresh(RefreshIn(refresh_token=result.tokens.refresh_token))

        verified = auth_service.sessions.tokens.verify(
            out.access_token, expected_kind=TokenKind.ACCESS
        )
        assert verified.identity.email == "renamed@b.com"
        assert out.access_token_expires_in == "15m"

    def test_refresh_for_deactivated_user_is_not_found(self, auth_service, session):
        result = _register(auth_service)
        stored = session.get(User, result.user.id)
        stored.is_active = False
        session.commit()

        with pytest.raises(NotFoundError):
            auth_service.refresh(RefreshIn(refresh_token=result.tokens.refresh_token))

    def test_refresh_after_logout_fails(self, auth_service):
        result = _register(auth_service)

        auth_service.logout(result.tokens.refresh_token)

        with pytest.raises(TokenNotFoundError):
            auth_service.refresh(RefreshIn(refresh_token=result.tokens.refresh_token))

    def test_refresh_with_garbage(self, auth_service):
        with pytest.raises(InvalidOrExpiredTokenError):
            auth_service.refresh(RefreshIn(refresh_token="never-existed"))


class TestProfile:
    def test_get_profile(self, auth_service):
        result = _register(auth_service, phone="+34 600 000 000")

        profile = auth_service.get_profile(str(result.user.id))

        assert profile.email == "a@b.com"
        assert profile.phone == "+34 600 000 000"

    def test_get_profile_missing_user(self, auth_service):
        with pytest.raises(NotFoundError):
            auth_service.get_profile(999)

    def test_update_profile(self, auth_service):
        result = _register(auth_service)

        updated = auth_service.update_profile(
            result.user.id, ProfileUpdateIn(name="  New Name ", phone="123")
        )

        assert updated.name == "New Name"
        assert updated.phone == "123"
        assert auth_service.get_profile(result.user.id).name == "New Name"

    def test_update_profile_rejects_blank_name(self, auth_service):
        result = _register(auth_service)

        with pytest.raises(ValidationError):
            auth_service.update_profile(result.user.id, ProfileUpdateIn(name=" "))


class TestSessions:
    def test_logout_all_and_list_sessions(self, auth_service):
        result = _register(auth_service)
        auth_service.login(LoginIn(email="a@b.com", password="secret1"))

        assert len(auth_service.list_sessions(result.user.id)) == 2
        assert auth_service.logout_all(result.user.id) == 2
        assert auth_service.list_sessions(result.user.id) == []

    def test_logout_without_token_is_a_no_op(self, auth_service):
        auth_service.logout(None)
        auth_service.logout("")
