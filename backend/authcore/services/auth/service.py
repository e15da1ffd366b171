# authcore/services/auth/service.py
from __future__ import annotations

import logging
import re

from authcore.repositories.user import UserRepository
from authcore.services._shared.base import BaseService, ServiceContext
from authcore.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from authcore.services._shared.ports import Identity, PasswordHasher
from authcore.services.auth.dto import (
    AccessTokenOut,
    AuthResult,
    LoginIn,
    ProfileUpdateIn,
    RefreshIn,
    RegisterIn,
)
from authcore.services.session.dto import SessionView, UserPublicOut
from authcore.services.session.service import SessionService, sanitize_identity

log = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6

# column sizes of ``users`` (password is capped before hashing)
MAX_LENGTHS = {
    "email": ("Email", 254),
    "password": ("Password", 128),
    "name": ("Name", 255),
    "phone": ("Phone", 50),
    "client_type": ("Client type", 50),
}


def _length_errors(values: dict[str, str | None]) -> list[str]:
    errors: list[str] = []
    for field, value in values.items():
        label, limit = MAX_LENGTHS[field]
        if value is not None and len(value) > limit:
            errors.append(f"{label} must be at most {limit} characters long")
    return errors


def registration_errors(dto: RegisterIn) -> list[str]:
    """Return every rule ``dto`` breaks, in a stable order (empty when valid)."""
    errors: list[str] = []
    if not dto.email:
        errors.append("Email is required")
    if not dto.password:
        errors.append("Password is required")
    if not dto.name or not dto.name.strip():
        errors.append("Name is required")
    if dto.password and len(dto.password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if dto.email and not EMAIL_PATTERN.search(dto.email):
        errors.append("Invalid email format")
    errors.extend(
        _length_errors(
            {
                "email": dto.email,
                "password": dto.password,
                "name": dto.name,
                "phone": dto.phone,
                "client_type": dto.client_type,
            }
        )
    )
    return errors


def profile_update_errors(dto: ProfileUpdateIn) -> list[str]:
    errors: list[str] = []
    if dto.name is not None and not dto.name.strip():
        errors.append("Name is required")
    errors.extend(_length_errors({"name": dto.name, "phone": dto.phone}))
    return errors


def login_errors(dto: LoginIn) -> list[str]:
    errors: list[str] = []
    if not dto.email:
        errors.append("Email is required")
    if not dto.password:
        errors.append("Password is required")
    return errors


class AuthService(BaseService):
    """
    Account-facing operations: register, login, refresh, profile and logout.

    Users are read and written through the unit of work; tokens are delegated
    to :class:`SessionService`, passwords to the :class:`PasswordHasher`.
    """

    def __init__(
        self,
        *,
        sessions: SessionService,
        password_hasher: PasswordHasher,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param sessions: Token issuance/validation/revocation service.
        :param password_hasher: One-way password hashing gateway.
        """
        super().__init__(ctx=ctx)
        self.sessions = sessions
        self.hasher = password_hasher

    # ------------------------------------------------------------------ #
    # Register / Login
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthResult:
        """
        Create an account and start its first session.

        :raises ValidationError: One or more input rules are broken.
        :raises DuplicateEmailError: An active user already owns the email.
        """
        errors = registration_errors(dto)
        if errors:
            raise ValidationError(errors)

        email = str(dto.email).strip().lower()
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(email):
                raise DuplicateEmailError(email)
            user = repo.create(
                email=email,
                password_hash=self.hasher.hash(dto.password),
                name=dto.name,
                phone=dto.phone,
                client_type=dto.client_type,
            )
            public = sanitize_identity(user)

        log.info("auth.registered", extra={"user_id": public.id})
        tokens = self.sessions.issue_session(Identity(user_id=public.id, email=public.email))
        return AuthResult(user=public, tokens=tokens)

    def login(self, dto: LoginIn) -> AuthResult:
        """
        Verify credentials and start a new session.

        :raises ValidationError: Email or password missing.
        :raises InvalidCredentialsError: Unknown email or wrong password.
        """
        errors = login_errors(dto)
        if errors:
            raise ValidationError(errors)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_email(dto.email)
            if user is None or not self.hasher.verify(dto.password, user.password_hash):
                log.info("auth.login.failed")
                raise InvalidCredentialsError()
            repo.update_last_login(user.id, self.now_utc())
            public = sanitize_identity(user)

        tokens = self.sessions.issue_session(Identity(user_id=public.id, email=public.email))
        return AuthResult(user=public, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> AccessTokenOut:
        """
        Mint a new access token for the owner of a valid refresh token.

        The user is reloaded so the new token carries the current email and a
        deactivated account can no longer refresh.

        :raises InvalidOrExpiredTokenError: The refresh token failed a validity gate.
        :raises NotFoundError: The user no longer exists or is inactive.
        """
        verified = self.sessions.validate_refresh(dto.refresh_token)
        user_id = self._coerce_user_id(verified.identity.user_id)

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            identity = Identity(user_id=user.id, email=user.email)

        return AccessTokenOut(
            access_token=self.sessions.sign_access(identity),
            access_token_expires_in=self.sessions.access_expires_in,
        )

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def get_profile(self, user_id: int | str) -> UserPublicOut:
        uid = self._coerce_user_id(user_id)
        with self.ro_uow() as uow:
            user = uow.users.get(uid)
            if user is None:
                raise NotFoundError("User", uid)
            return sanitize_identity(user)

    def update_profile(self, user_id: int | str, dto: ProfileUpdateIn) -> UserPublicOut:
        """
        Update ``name`` and/or ``phone``.

        :raises ValidationError: ``name`` given but blank, or a field too long.
        :raises NotFoundError: User is gone or inactive.
        """
        errors = profile_update_errors(dto)
        if errors:
            raise ValidationError(errors)

        changes = {
            key: value
            for key, value in (("name", dto.name), ("phone", dto.phone))
            if value is not None
        }
        uid = self._coerce_user_id(user_id)
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(uid)
            if user is None:
                raise NotFoundError("User", uid)
            if changes:
                repo.assign_updates(user, changes)
            return sanitize_identity(user)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, refresh_token: str | None) -> None:
        """Revoke one refresh token; unknown or missing tokens are a no-op."""
        if refresh_token:
            self.sessions.logout(refresh_token)

    def logout_all(self, user_id: int | str) -> int:
        return self.sessions.logout_all(user_id)

    def list_sessions(self, user_id: int | str) -> list[SessionView]:
        return self.sessions.list_sessions(user_id)

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _coerce_user_id(subject: int | str) -> int:
        """Ensure the token subject can be treated as an integer user id."""
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        raise NotFoundError("User", subject)
