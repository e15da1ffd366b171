"""Flask CLI commands for managing user accounts."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from authcore.services._shared.errors import ServiceError, ValidationError
from authcore.services.auth.dto import RegisterIn
from authcore.services.providers import build_auth_service

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """User account commands."""


@users_cli.command("create")
@click.option("--email", required=True, help="Login email.")
@click.option("--name", required=True, help="Display name.")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--phone", default=None, help="Optional phone number.")
@with_appcontext
def create_user(email: str, name: str, password: str, phone: str | None) -> None:
    """Register a user. The issued tokens are discarded, never printed."""
    service = build_auth_service()
    try:
        result = service.register(
            RegisterIn(email=email, password=password, name=name, phone=phone, client_type="cli")
        )
    except ValidationError as exc:
        raise click.UsageError("; ".join(exc.errors)) from exc
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc
    # The CLI has no use for the session it just opened.
    service.logout(result.tokens.refresh_token)
    click.echo(f"Created user id={result.user.id} email={result.user.email}")


@users_cli.command("deactivate")
@click.argument("user_id", type=int)
@with_appcontext
def deactivate_user(user_id: int) -> None:
    """Soft-delete a user and revoke their sessions."""
    service = build_auth_service()
    with service.rw_uow() as uow:
        changed = uow.users.deactivate(user_id)
    if not changed:
        raise click.ClickException(f"No active user with id={user_id}")
    revoked = service.logout_all(user_id)
    LOGGER.info("users.deactivated", extra={"user_id": user_id, "count": revoked})
    click.echo(f"Deactivated user id={user_id} (revoked {revoked} sessions)")
