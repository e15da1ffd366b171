# authcore/infra/jwt/flask_jwt_token_codec.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from authcore.services._shared.ports import (
    Identity,
    InvalidSignatureError,
    SignatureExpiredError,
    TokenCodec,
    TokenKind,
    TokenLifetimes,
    VerifiedToken,
    WrongTokenKindError,
)


@dataclass(slots=True)
class FlaskJWTTokenCodec(TokenCodec):
    """
    TokenCodec adapter for Flask-JWT-Extended (HS256, one shared secret).

    Claims carried by every token: ``sub`` (stringified user id), ``uid``,
    ``email``, ``type`` (``access`` | ``refresh``), ``exp``, ``iat`` and a
    random ``jti`` so two tokens for the same identity never collide.

    .. note::
       Requires an active Flask app context with the JWT settings loaded;
       no other I/O is performed.
    """

    lifetimes: TokenLifetimes = field(default_factory=TokenLifetimes)

    @staticmethod
    def _claims(identity: Identity) -> dict[str, Any]:
        return {"uid": identity.user_id, "email": identity.email}

    def sign_access(self, identity: Identity) -> str:
        return cast(
            str,
            create_access_token(
                identity=str(identity.user_id),
                additional_claims=self._claims(identity),
                expires_delta=self.lifetimes.access_expires,
            ),
        )

    def sign_refresh(self, identity: Identity) -> str:
        return cast(
            str,
            create_refresh_token(
                identity=str(identity.user_id),
                additional_claims=self._claims(identity),
                expires_delta=self.lifetimes.refresh_expires,
            ),
        )

    def verify(self, token: str, expected_kind: TokenKind | None = None) -> VerifiedToken:
        try:
            decoded = cast(dict[str, Any], decode_token(token))
        except pyjwt.ExpiredSignatureError as exc:
            raise SignatureExpiredError("Token has expired") from exc
        except (pyjwt.InvalidTokenError, JWTExtendedException) as exc:
            raise InvalidSignatureError("Token signature or structure is invalid") from exc

        raw_kind = decoded.get("type")
        try:
            kind = TokenKind(raw_kind)
        except ValueError:
            raise InvalidSignatureError(f"Unknown token type: {raw_kind!r}") from None
        if expected_kind is not None and kind is not expected_kind:
            raise WrongTokenKindError(expected_kind, str(raw_kind))

        email = decoded.get("email")
        user_id = decoded.get("uid", decoded.get("sub"))
        if not isinstance(email, str) or user_id is None:
            raise InvalidSignatureError("Token is missing identity claims")

        return VerifiedToken(
            identity=Identity(user_id=user_id, email=email),
            kind=kind,
            expires_at=datetime.fromtimestamp(int(decoded["exp"]), tz=UTC),
        )
