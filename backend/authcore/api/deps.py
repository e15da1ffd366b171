"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt, verify_jwt_in_request

from authcore.core.errors import Forbidden
from authcore.core.extensions import INVALID_ACCESS_TOKEN
from authcore.services._shared.base import BaseService
from authcore.services._shared.errors import ServiceError
from authcore.services._shared.ports import Identity

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token.

    Header parsing and signature checks go through Flask-JWT-Extended, so
    ``JWT_HEADER_TYPE`` and ``JWT_TOKEN_LOCATION`` apply. Rejections are
    rendered by the loaders in :mod:`authcore.core.extensions`. The verified
    identity is stored on ``flask.g.identity``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        claims = get_jwt() or {}
        user_id = claims.get("uid", claims.get("sub"))
        email = claims.get("email")
        if user_id is None or not isinstance(email, str):
            log.info("auth.access.rejected", extra={"reason": "missing_claims"})
            raise Forbidden(INVALID_ACCESS_TOKEN)
        g.identity = Identity(user_id=user_id, email=email)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_identity() -> Identity:
    """Identity verified by :func:`require_auth` for this request."""

    return g.identity


def translate_service_errors(func: F) -> F:
    """Re-raise service-layer errors as the matching API errors."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except ServiceError as exc:
            raise BaseService().translate_exceptions(exc) from exc

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
