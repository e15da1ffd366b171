# authcore/services/session/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SessionTokens:
    """
    Token pair handed to a client after login or registration.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT (tracked server-side).
    :type refresh_token: str
    :param access_token_expires_in: Human-readable access lifetime (``"15m"``).
    :type access_token_expires_in: str
    :param refresh_token_expires_in: Human-readable refresh lifetime (``"7d"``).
    :type refresh_token_expires_in: str
    """

    access_token: str
    refresh_token: str
    access_token_expires_in: str
    refresh_token_expires_in: str


@dataclass(frozen=True, slots=True)
class SessionView:
    """
    Public view of a live refresh session (never includes the token itself).

    :param created_at: Issuance instant.
    :type created_at: datetime
    :param expires_at: Absolute expiry.
    :type expires_at: datetime
    """

    created_at: datetime
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user data; the password hash has no field here.

    :param id: User identifier.
    :param email: Email address.
    :param name: Display name.
    :param phone: Optional phone number.
    :param client_type: Reporting client.
    :param created_at: Account creation time.
    :param last_login: Last successful login, if any.
    """

    id: int
    email: str
    name: str
    phone: str | None = None
    client_type: str | None = None
    created_at: datetime | None = None
    last_login: datetime | None = None
