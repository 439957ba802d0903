"""Tests for the click CLI."""

from unittest.mock import patch

import jwt
from click.testing import CliRunner

from hospeda.cli import cli
from hospeda.core.config import Settings

SECRET_KEY = "cli-test-secret-key-0123456789abcdefghij"


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "testing",
        "database_url": "sqlite+aiosqlite:///:memory:",
        "secret_key": SECRET_KEY,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_issue_token():
    runner = CliRunner()

    with patch("hospeda.cli.get_settings", return_value=make_settings()):
        result = runner.invoke(cli, ["issue-token", "user-9", "--role", "HOST", "--expires-minutes", "5"])

    assert result.exit_code == 0, result.output
    payload = jwt.decode(result.output.strip(), SECRET_KEY, algorithms=["HS256"], issuer="hospeda")
    assert payload["user_id"] == "user-9"
    assert payload["role"] == "HOST"


def test_issue_token_rejects_guest_role():
    runner = CliRunner()

    with patch("hospeda.cli.get_settings", return_value=make_settings()):
        result = runner.invoke(cli, ["issue-token", "user-9", "--role", "GUEST"])

    assert result.exit_code == 2


def test_init_db_refused_in_production():
    runner = CliRunner()

    with patch("hospeda.cli.get_settings", return_value=make_settings(environment="production")):
        result = runner.invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Pass --force" in result.output


def test_init_db_with_force(tmp_path):
    runner = CliRunner()
    settings = make_settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")

    with patch("hospeda.cli.get_settings", return_value=settings):
        result = runner.invoke(cli, ["init-db", "--force"])

    assert result.exit_code == 0, result.output
    assert "Database initialized successfully." in result.output
    assert (tmp_path / "cli.db").exists()


def test_serve_invalid_workers_sqlite():
    """Verify CLI fails when --workers > 1 is used with SQLite."""
    runner = CliRunner()

    with patch("hospeda.cli.get_settings", return_value=make_settings()), patch(
        "uvicorn.run"
    ) as mock_run:
        result = runner.invoke(cli, ["serve", "--workers", "2"])

    assert result.exit_code == 1
    assert "SQLite does not support multiple worker processes" in result.output
    mock_run.assert_not_called()


def test_serve_runs_uvicorn():
    runner = CliRunner()

    with patch("hospeda.cli.get_settings", return_value=make_settings()), patch(
        "uvicorn.run"
    ) as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0, result.output
    args, kwargs = mock_run.call_args
    assert args == ("hospeda.infrastructure.api.app:app",)
    assert kwargs["port"] == 9000
    assert kwargs["workers"] == 1


def test_info():
    runner = CliRunner()

    with patch("hospeda.cli.get_settings", return_value=make_settings(webhook_secret="s")):
        result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Environment:  testing" in result.output
    assert "Webhook Sig:  enabled" in result.output
