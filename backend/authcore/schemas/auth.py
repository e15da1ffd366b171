"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class _LenientSchema(Schema):
    """Accept partial payloads; the service layer reports what is missing."""

    class Meta:
        unknown = EXCLUDE


class RegisterSchema(_LenientSchema):
    """Input payload for account registration.

    Only types are checked here. Presence, format and length rules live in
    :func:`authcore.services.auth.service.registration_errors` so a client
    sees every broken rule in one response.
    """

    email = fields.String(load_default=None)
    password = fields.String(load_default=None)
    name = fields.String(load_default=None)
    phone = fields.String(load_default=None, allow_none=True)
    client_type = fields.String(data_key="clientType", load_default=None, allow_none=True)


class LoginSchema(_LenientSchema):
    """Input payload for authenticating a user."""

    email = fields.String(load_default=None)
    password = fields.String(load_default=None)


class RefreshSchema(_LenientSchema):
    """Input payload carrying a refresh token."""

    refresh_token = fields.String(data_key="refreshToken", load_default=None, allow_none=True)


class ProfileUpdateSchema(_LenientSchema):
    name = fields.String(load_default=None)
    phone = fields.String(load_default=None, allow_none=True)


class TokenPairSchema(Schema):
    """Response payload with both tokens and their lifetimes."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)
    access_token_expires_in = fields.String(data_key="accessTokenExpiresIn")
    refresh_token_expires_in = fields.String(data_key="refreshTokenExpiresIn")


class AccessTokenSchema(Schema):
    """Response payload for a refreshed access token."""

    access_token = fields.String(data_key="accessToken", required=True)
    access_token_expires_in = fields.String(data_key="accessTokenExpiresIn")


class SessionSchema(Schema):
    """A live refresh session; the token itself is never listed."""

    created_at = fields.DateTime(data_key="createdAt")
    expires_at = fields.DateTime(data_key="expiresAt")
