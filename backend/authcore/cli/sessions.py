"""Flask CLI commands for inspecting the refresh token store."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from authcore.services.providers import build_session_service


@click.group("sessions")
def sessions_cli() -> None:
    """Refresh session commands (operate on this process's store)."""


@sessions_cli.command("list")
@click.argument("user_id")
@with_appcontext
def list_sessions(user_id: str) -> None:
    """Print the live sessions of USER_ID."""
    views = build_session_service().list_sessions(user_id)
    if not views:
        click.echo("  (no sessions)")
        return
    for view in views:
        click.echo(f"  created={view.created_at.isoformat()}  expires={view.expires_at.isoformat()}")


@sessions_cli.command("revoke-all")
@click.argument("user_id")
@with_appcontext
def revoke_all(user_id: str) -> None:
    """Revoke every refresh token of USER_ID."""
    count = build_session_service().logout_all(user_id)
    click.echo(f"Revoked {count} sessions")
