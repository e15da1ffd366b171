"""Tests for the ``flask users`` and ``flask sessions`` command groups."""

from __future__ import annotations

from authcore.services._shared.ports import Identity


def test_users_create_registers_without_leaving_a_session(app, refresh_store):
    runner = app.test_cli_runner()

    result = runner.invoke(
        args=["users", "create", "--email", "Cli@Example.com", "--name", "Cli", "--password", "secret1"]
    )

    assert result.exit_code == 0, result.output
    assert "email=cli@example.com" in result.output
    assert len(refresh_store) == 0


def test_users_create_reports_validation_errors(app):
    runner = app.test_cli_runner()

    result = runner.invoke(
        args=["users", "create", "--email", "bad", "--name", "X", "--password", "123"]
    )

    assert result.exit_code != 0
    assert "Invalid email format" in result.output


def test_users_deactivate_revokes_sessions(app, auth_service):
    from authcore.services.auth import RegisterIn

    registered = auth_service.register(RegisterIn(email="d@e.com", password="secret1", name="D"))
    runner = app.test_cli_runner()

    result = runner.invoke(args=["users", "deactivate", str(registered.user.id)])

    assert result.exit_code == 0, result.output
    assert "revoked 1 sessions" in result.output
    again = runner.invoke(args=["users", "deactivate", str(registered.user.id)])
    assert again.exit_code != 0


def test_sessions_list_and_revoke_all(app, session_service):
    session_service.issue_session(Identity(user_id=5, email="five@example.com"))
    session_service.issue_session(Identity(user_id=5, email="five@example.com"))
    runner = app.test_cli_runner()

    listed = runner.invoke(args=["sessions", "list", "5"])
    assert listed.exit_code == 0
    assert listed.output.count("created=") == 2

    revoked = runner.invoke(args=["sessions", "revoke-all", "5"])
    assert "Revoked 2 sessions" in revoked.output

    empty = runner.invoke(args=["sessions", "list", "5"])
    assert "(no sessions)" in empty.output
