# authcore/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from authcore.services.session.dto import SessionTokens, UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    Fields are optional at this level; :class:`AuthService` reports every
    missing or malformed one at once.

    :param email: Login email (any case).
    :type email: str | None
    :param password: Raw password.
    :type password: str | None
    :param name: Display name.
    :type name: str | None
    :param phone: Optional phone number.
    :type phone: str | None
    :param client_type: Reporting client (``"web"``, ``"ios"``...).
    :type client_type: str | None
    """

    email: str | None
    password: str | None
    name: str | None
    phone: str | None = None
    client_type: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str | None
    :param password: Raw password (to be verified).
    :type password: str | None
    """

    email: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """Partial profile update; ``None`` leaves a field untouched."""

    name: str | None = None
    phone: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthResult:
    """
    Outcome of a successful register/login.

    :param user: Public user data.
    :type user: UserPublicOut
    :param tokens: Freshly issued token pair.
    :type tokens: SessionTokens
    """

    user: UserPublicOut
    tokens: SessionTokens


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    """New access token minted from a refresh token."""

    access_token: str
    access_token_expires_in: str
