"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from authcore.api.deps import (
    current_identity,
    json_response,
    require_auth,
    timing,
    translate_service_errors,
)
from authcore.core.errors import Unauthorized
from authcore.schemas import (
    AccessTokenSchema,
    LoginSchema,
    ProfileUpdateSchema,
    RefreshSchema,
    RegisterSchema,
    SessionSchema,
    TokenPairSchema,
    UserSchema,
)
from authcore.services.auth.dto import (
    AuthResult,
    LoginIn,
    ProfileUpdateIn,
    RefreshIn,
    RegisterIn,
)
from authcore.services.providers import build_auth_service

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
profile_update_schema = ProfileUpdateSchema()
token_pair_schema = TokenPairSchema()
access_token_schema = AccessTokenSchema()
session_list_schema = SessionSchema(many=True)
user_schema = UserSchema()


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _auth_body(result: AuthResult) -> dict:
    return {"user": user_schema.dump(result.user), **token_pair_schema.dump(result.tokens)}


@bp.post("/register")
@timing
@translate_service_errors
def register():
    """Create an account and return it with a fresh token pair."""

    data = register_schema.load(_payload())
    result = build_auth_service().register(RegisterIn(**data))
    body = {"data": _auth_body(result), "message": "User registered successfully"}
    return json_response(body, status=201)


@bp.post("/login")
@timing
@translate_service_errors
def login():
    """Authenticate credentials and issue a token pair."""

    data = login_schema.load(_payload())
    result = build_auth_service().login(LoginIn(**data))
    return json_response({"data": _auth_body(result), "message": "Login successful"})


@bp.get("/me")
@require_auth
@timing
@translate_service_errors
def me():
    """Return the authenticated user profile."""

    user = build_auth_service().get_profile(current_identity().user_id)
    return json_response({"data": {"user": user_schema.dump(user)}})


@bp.patch("/me")
@require_auth
@timing
@translate_service_errors
def update_me():
    """Update the authenticated user's name and/or phone."""

    data = profile_update_schema.load(_payload())
    user = build_auth_service().update_profile(
        current_identity().user_id, ProfileUpdateIn(**data)
    )
    return json_response({"data": {"user": user_schema.dump(user)}, "message": "Profile updated"})


@bp.post("/refresh")
@timing
@translate_service_errors
def refresh():
    """Mint a new access token; the refresh token itself is not rotated."""

    token = refresh_schema.load(_payload())["refresh_token"]
    if not token:
        raise Unauthorized("Refresh token required")
    out = build_auth_service().refresh(RefreshIn(refresh_token=token))
    return json_response(
        {
            "data": access_token_schema.dump(out),
            "message": "Access token refreshed successfully",
        }
    )


@bp.post("/logout")
@timing
@translate_service_errors
def logout():
    """Revoke the given refresh token. Always succeeds."""

    # anything but a string is treated as no token
    token = _payload().get("refreshToken")
    build_auth_service().logout(token if isinstance(token, str) else None)
    return json_response({"data": None, "message": "Logged out successfully"})


@bp.post("/logout-all")
@require_auth
@timing
@translate_service_errors
def logout_all():
    """Revoke every refresh token of the authenticated user."""

    count = build_auth_service().logout_all(current_identity().user_id)
    return json_response(
        {
            "data": {"removed": count},
            "message": f"Logged out from {count} devices successfully",
        }
    )


@bp.get("/sessions")
@require_auth
@timing
@translate_service_errors
def sessions():
    """List the authenticated user's live refresh sessions."""

    views = build_auth_service().list_sessions(current_identity().user_id)
    return json_response({"data": {"sessions": session_list_schema.dump(views)}})
