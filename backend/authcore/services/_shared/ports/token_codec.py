from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol

from authcore.services._shared.errors import ServiceError


class TokenKind(str, Enum):
    """Discriminator embedded in every token to prevent cross-use."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Signed subject of every token.

    :ivar user_id: Opaque user identifier.
    :ivar email: Email of the user at issuance time.
    """

    user_id: int | str
    email: str


@dataclass(frozen=True, slots=True)
class VerifiedToken:
    """Result of a successful verification."""

    identity: Identity
    kind: TokenKind
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class TokenLifetimes:
    """
    How long each token kind stays valid.

    The codec stamps ``exp`` from these values and the session layer reads
    the same object for store records and client labels.

    :ivar access_expires: Access token lifetime.
    :ivar refresh_expires: Refresh token (and store record) lifetime.
    """

    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)


# --------------------------------------------------------------------------- #
# Verification failures
# --------------------------------------------------------------------------- #


class TokenVerificationError(ServiceError):
    """Base class for every reason a token fails verification."""


class InvalidSignatureError(TokenVerificationError):
    """Signature mismatch, malformed structure or missing claims."""


class SignatureExpiredError(TokenVerificationError):
    """The token is past its ``exp`` claim."""


class WrongTokenKindError(TokenVerificationError):
    """The embedded kind differs from the one the caller expected."""

    def __init__(self, expected: TokenKind, actual: str) -> None:
        super().__init__(f"Expected a {expected.value} token, got {actual!r}")
        self.expected = expected
        self.actual = actual


class TokenCodec(Protocol):
    """
    Port for signing and verifying compact, tamper-evident tokens.

    Implementations sign with one symmetric secret and MUST NOT perform I/O
    during verification.
    """

    lifetimes: TokenLifetimes

    def sign_access(self, identity: Identity) -> str: ...

    def sign_refresh(self, identity: Identity) -> str: ...

    def verify(self, token: str, expected_kind: TokenKind | None = None) -> VerifiedToken:
        """
        Verify ``token`` and return its identity and kind.

        :raises InvalidSignatureError: Bad signature or structure.
        :raises SignatureExpiredError: Token past expiry.
        :raises WrongTokenKindError: ``expected_kind`` given and not matched.
        """
        ...
