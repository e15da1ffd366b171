# authcore/services/session/service.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from authcore.services._shared.base import BaseService, ServiceContext
from authcore.services._shared.errors import (
    InvalidOrExpiredTokenError,
    TokenExpiredError,
    TokenNotFoundError,
)
from authcore.services._shared.ports import (
    Identity,
    RefreshTokenStore,
    TokenCodec,
    TokenKind,
    TokenVerificationError,
    VerifiedToken,
)
from authcore.services.session.dto import (
    SessionTokens,
    SessionView,
    UserPublicOut,
)

log = logging.getLogger(__name__)


def format_lifetime(delta: timedelta) -> str:
    """
    Render a lifetime as a compact label for clients (``"15m"``, ``"7d"``).

    Uses the largest unit that divides the duration exactly.
    """
    seconds = int(delta.total_seconds())
    for size, suffix in ((86400, "d"), (3600, "h"), (60, "m")):
        if seconds and seconds % size == 0:
            return f"{seconds // size}{suffix}"
    return f"{seconds}s"


def sanitize_identity(user: Any) -> UserPublicOut:
    """
    Map a user record to its public shape.

    Accepts an ORM ``User`` or a plain mapping. Only whitelisted fields are
    copied, so ``password``/``password_hash`` can never leak through.
    """
    if isinstance(user, Mapping):
        source = dict(user)
    else:
        source = {field: getattr(user, field, None) for field in UserPublicOut.__slots__}
    return UserPublicOut(
        id=source["id"],
        email=source["email"],
        name=source["name"],
        phone=source.get("phone"),
        client_type=source.get("client_type"),
        created_at=source.get("created_at"),
        last_login=source.get("last_login"),
    )


class SessionService(BaseService):
    """
    Token lifecycle: issuance, refresh-token validation and revocation.

    A refresh token is valid only if BOTH gates pass:

    1. the codec accepts it (signature, structure, ``exp``, kind = refresh);
    2. the refresh token store still holds a record for it, not yet expired.

    Removing the record revokes the token immediately, whatever its
    signature says. Access tokens are stateless and never stored.

    The refresh token is not rotated on use: ``refresh_access`` only mints a
    new access token and leaves the record in place until logout or expiry.
    Expired records are purged lazily, when that exact token is presented.
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodec,
        refresh_store: RefreshTokenStore,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_codec: Adapter for signing/verifying tokens; its
            ``lifetimes`` also size the store records.
        :param refresh_store: Registry of live refresh tokens.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_codec
        self.refresh_store = refresh_store

    @property
    def access_expires_in(self) -> str:
        return format_lifetime(self.tokens.lifetimes.access_expires)

    @property
    def refresh_expires_in(self) -> str:
        return format_lifetime(self.tokens.lifetimes.refresh_expires)

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_session(self, identity: Identity) -> SessionTokens:
        """
        Sign an access/refresh pair and record the refresh token.

        ``created_at`` and ``expires_at`` come from a single clock reading so
        every record lives exactly the configured refresh lifetime.
        """
        access = self.tokens.sign_access(identity)
        refresh = self.tokens.sign_refresh(identity)

        now = self.now_utc()
        self.refresh_store.add(
            refresh,
            str(identity.user_id),
            now,
            now + self.tokens.lifetimes.refresh_expires,
        )
        log.info("session.issued", extra={"user_id": identity.user_id})

        return SessionTokens(
            access_token=access,
            refresh_token=refresh,
            access_token_expires_in=self.access_expires_in,
            refresh_token_expires_in=self.refresh_expires_in,
        )

    def sign_access(self, identity: Identity) -> str:
        return self.tokens.sign_access(identity)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def validate_refresh(self, refresh_token: str) -> VerifiedToken:
        """
        Run both validity gates on a refresh token.

        :raises InvalidOrExpiredTokenError: Codec rejected the token.
        :raises TokenNotFoundError: Not in the store (revoked or never issued).
        :raises TokenExpiredError: Record past ``expires_at``; it is purged.
        """
        try:
            verified = self.tokens.verify(refresh_token, expected_kind=TokenKind.REFRESH)
        except TokenVerificationError as exc:
            log.info("session.refresh.rejected", extra={"reason": type(exc).__name__})
            raise InvalidOrExpiredTokenError() from exc

        record = self.refresh_store.find_by_token(refresh_token)
        if record is None:
            log.info(
                "session.refresh.rejected",
                extra={"reason": TokenNotFoundError.reason, "user_id": verified.identity.user_id},
            )
            raise TokenNotFoundError()

        if record.is_expired(self.now_utc()):
            self.refresh_store.remove(refresh_token)
            log.info(
                "session.refresh.rejected",
                extra={"reason": TokenExpiredError.reason, "user_id": record.user_id},
            )
            raise TokenExpiredError()

        return verified

    def refresh_access(self, refresh_token: str) -> str:
        """
        Mint a new access token from a valid refresh token.

        :returns: Encoded access token for the identity embedded in the refresh token.
        """
        verified = self.validate_refresh(refresh_token)
        return self.tokens.sign_access(verified.identity)

    # ------------------------------------------------------------------ #
    # Revocation
    # ------------------------------------------------------------------ #

    def logout(self, refresh_token: str) -> bool:
        """
        Revoke one refresh token. Idempotent.

        :returns: Whether a record existed; callers treat both as success.
        """
        removed = self.refresh_store.remove(refresh_token)
        log.info("session.logout", extra={"removed": removed})
        return removed

    def logout_all(self, user_id: int | str) -> int:
        """
        Revoke every refresh token of ``user_id`` (all devices). Idempotent.

        :returns: Number of records removed (may be 0).
        """
        count = self.refresh_store.remove_all_for_user(str(user_id))
        log.info("session.logout_all", extra={"user_id": user_id, "count": count})
        return count

    def list_sessions(self, user_id: int | str) -> list[SessionView]:
        """List the user's refresh sessions that have not expired yet."""
        now = self.now_utc()
        return [
            SessionView(created_at=r.created_at, expires_at=r.expires_at)
            for r in self.refresh_store.find_by_user(str(user_id))
            if not r.is_expired(now)
        ]
