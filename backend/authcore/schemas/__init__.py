"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AccessTokenSchema,
    LoginSchema,
    ProfileUpdateSchema,
    RefreshSchema,
    RegisterSchema,
    SessionSchema,
    TokenPairSchema,
)
from .user import UserSchema

__all__ = [
    "AccessTokenSchema",
    "LoginSchema",
    "ProfileUpdateSchema",
    "RefreshSchema",
    "RegisterSchema",
    "SessionSchema",
    "TokenPairSchema",
    "UserSchema",
]
