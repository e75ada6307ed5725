from __future__ import annotations

import json
from unittest.mock import patch

from typer.testing import CliRunner

from site_cms.auth import decode_access_token
from site_cms.cli import app as cli_app

runner = CliRunner()


def test_root_help_lists_command_groups():
    result = runner.invoke(cli_app, ["--help"])
    assert result.exit_code == 0
    for name in ("serve", "db", "auth"):
        assert name in result.stdout


def test_log_level_option_configures_logging(quiet_logging, cli_db):
    result = runner.invoke(cli_app, ["--log-level", "debug", "db", "ensure-indexes"])
    assert result.exit_code == 0
    assert quiet_logging == ["debug"]


def test_ensure_indexes(cli_db):
    result = runner.invoke(cli_app, ["db", "ensure-indexes"])
    assert result.exit_code == 0
    assert "index services.slug_1" in result.stdout
    assert "index users.email_1" in result.stdout
    assert "slug_1" in cli_db["blogs"].indexes


def test_seed_then_reseed(cli_db, tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(
        json.dumps({"categories": [{"name": "Tips", "type": "blog"}]}, ensure_ascii=False), encoding="utf-8"
    )

    result = runner.invoke(cli_app, ["db", "seed", "--file", str(path)])
    assert result.exit_code == 0
    assert "categories: created=1 updated=0 skipped=0" in result.stdout

    result = runner.invoke(cli_app, ["db", "seed", "--file", str(path), "--update"])
    assert "categories: created=0 updated=1 skipped=0" in result.stdout


def test_seed_missing_file(cli_db, tmp_path):
    result = runner.invoke(cli_app, ["db", "seed", "--file", str(tmp_path / "missing.json")])
    assert result.exit_code != 0


def test_seed_admin_is_idempotent(cli_db):
    result = runner.invoke(cli_app, ["auth", "seed-admin", "--email", "Owner@Example.com"])
    assert result.exit_code == 0
    assert result.stdout.startswith("created owner@example.com")

    result = runner.invoke(cli_app, ["auth", "seed-admin", "--email", "owner@example.com"])
    assert result.stdout.startswith("exists owner@example.com")
    (user,) = cli_db["users"].docs
    assert user["role"] == "admin"
    assert user["name"] == "مدير النظام"


def test_seed_admin_defaults_to_configured_email(cli_db, auth_settings):
    auth_settings.admin_email = "boss@example.com"
    result = runner.invoke(cli_app, ["auth", "seed-admin"])
    assert "boss@example.com" in result.stdout


def test_issue_token(cli_db):
    runner.invoke(cli_app, ["auth", "seed-admin", "--email", "owner@example.com"])
    result = runner.invoke(cli_app, ["auth", "issue-token", "--email", "owner@example.com", "--lifetime", "60"])
    assert result.exit_code == 0
    payload = decode_access_token(result.stdout.strip())
    assert payload["id"] == str(cli_db["users"].docs[0]["_id"])
    assert payload["exp"] - payload["iat"] == 60


def test_issue_token_unknown_user(cli_db):
    result = runner.invoke(cli_app, ["auth", "issue-token", "--email", "ghost@example.com"])
    assert result.exit_code == 1


def test_issue_token_disabled_user(cli_db):
    runner.invoke(cli_app, ["auth", "seed-admin", "--email", "owner@example.com"])
    cli_db["users"].docs[0]["isActive"] = False
    result = runner.invoke(cli_app, ["auth", "issue-token", "--email", "owner@example.com"])
    assert result.exit_code == 1


def test_serve_runs_uvicorn_factory():
    with patch("uvicorn.run") as run:
        result = runner.invoke(cli_app, ["serve", "--port", "8080"])
    assert result.exit_code == 0
    args, kwargs = run.call_args
    assert args == ("site_cms.main:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 8080
