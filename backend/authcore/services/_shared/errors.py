"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between
repositories, token adapters and application services.

The translation to HTTP responses (RFC 7807) is handled by
``authcore/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - The API layer or BaseService will later translate them to APIError.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """
    Raised when user input breaks one or more rules.

    Every violated rule is reported, not just the first one.

    :param errors: Human-readable violations, in rule order.
    :type errors: Iterable[str]
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("Validation failed")


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


class DuplicateEmailError(ConflictError):
    """An active user already owns this email (case-insensitive)."""

    def __init__(self, email: str) -> None:
        super().__init__("User", "User with this email already exists")
        self.email = email


class InvalidCredentialsError(ServiceError):
    """
    Raised on login failure.

    The message is the same for an unknown email and a wrong password so the
    response cannot be used to enumerate accounts.
    """

    MESSAGE = "Invalid email or password"

    def __init__(self) -> None:
        super().__init__(self.MESSAGE)


# --------------------------------------------------------------------------- #
# Refresh token rejections
# --------------------------------------------------------------------------- #


class InvalidOrExpiredTokenError(ServiceError):
    """
    A refresh token was rejected.

    Callers only ever see the generic message; subclasses exist so logs and
    tests can tell the reasons apart.
    """

    MESSAGE = "Invalid or expired refresh token"
    reason = "invalid"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.MESSAGE)


class TokenNotFoundError(InvalidOrExpiredTokenError):
    """Signature is fine but the store has no record (logged out or never issued)."""

    reason = "not_found"


class TokenExpiredError(InvalidOrExpiredTokenError):
    """The stored record is past its ``expires_at``."""

    reason = "expired"
