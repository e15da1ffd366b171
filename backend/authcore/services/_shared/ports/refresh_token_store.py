from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    """
    Server-side record of an issued refresh token.

    :ivar token: Encoded refresh token (unique key).
    :ivar user_id: Owner user id. Several records may share it (multi-device).
    :ivar created_at: Issuance instant (UTC).
    :ivar expires_at: ``created_at`` + refresh lifetime (UTC).
    """

    token: str
    user_id: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now


class RefreshTokenStore(Protocol):
    """
    Registry of live refresh tokens.

    A refresh token is only valid while its record is present here. Lookups
    and mutations MUST be linearizable per process.
    """

    def add(
        self,
        token: str,
        user_id: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> None:
        """Insert a record for a freshly issued refresh token."""

    def remove(self, token: str) -> bool:
        """Delete by exact token. :returns: True if a record existed."""

    def remove_all_for_user(self, user_id: str) -> int:
        """Delete every record owned by ``user_id``. :returns: Count removed."""

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        """Fetch a single record (if present)."""

    def find_by_user(self, user_id: str) -> list[RefreshTokenRecord]:
        """List every record owned by ``user_id``, oldest first."""

    def clear(self) -> None:
        """Drop every record (process teardown)."""
