from .dto import SessionTokens, SessionView, UserPublicOut
from .service import SessionService, format_lifetime, sanitize_identity

__all__ = [
    "SessionService",
    "SessionTokens",
    "SessionView",
    "UserPublicOut",
    "format_lifetime",
    "sanitize_identity",
]
