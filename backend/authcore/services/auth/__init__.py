from .dto import AccessTokenOut, AuthResult, LoginIn, ProfileUpdateIn, RefreshIn, RegisterIn
from .service import AuthService

__all__ = [
    "AccessTokenOut",
    "AuthResult",
    "AuthService",
    "LoginIn",
    "ProfileUpdateIn",
    "RefreshIn",
    "RegisterIn",
]
