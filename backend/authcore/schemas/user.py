"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class UserSchema(Schema):
    """Public representation of a user; no password field exists here."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    name = fields.String(required=True)
    phone = fields.String(allow_none=True)
    client_type = fields.String(data_key="clientType", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    last_login = fields.DateTime(data_key="lastLogin", allow_none=True)
