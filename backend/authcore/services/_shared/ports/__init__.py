"""
authcore.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) that define the contracts
for credential hashing, token signing and refresh-token bookkeeping.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`: signing and verification of access and
    refresh tokens, plus :class:`~.Identity`, :class:`~.TokenKind` and the
    verification error kinds.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore` and :class:`~.RefreshTokenRecord`,
    implemented by :class:`authcore.infra.memory.in_memory_refresh_token_store.InMemoryRefreshTokenStore`.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`, the one-way hash/verify gateway.

Design Notes
------------
The service layer depends only on these contracts. Concrete adapters
(Flask-JWT-Extended, Werkzeug, the in-memory store) live under ``authcore.infra``.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher
from .refresh_token_store import (
    RefreshTokenRecord,
    RefreshTokenStore,
)
from .token_codec import (
    Identity,
    InvalidSignatureError,
    SignatureExpiredError,
    TokenCodec,
    TokenKind,
    TokenLifetimes,
    TokenVerificationError,
    VerifiedToken,
    WrongTokenKindError,
)

__all__ = [
    "PasswordHasher",
    "RefreshTokenStore",
    "RefreshTokenRecord",
    "TokenCodec",
    "TokenKind",
    "TokenLifetimes",
    "Identity",
    "VerifiedToken",
    "TokenVerificationError",
    "InvalidSignatureError",
    "SignatureExpiredError",
    "WrongTokenKindError",
]
