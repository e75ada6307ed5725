"""Fixtures for CLI tests: plain console output and a Mongo-free runner."""

from __future__ import annotations

import asyncio

import pytest


@pytest.fixture(autouse=True)
def disable_rich_colors(monkeypatch):
    """Rich styling differs between a TTY and CI; help-text assertions need plain text."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("TERM", "dumb")


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    calls = []
    monkeypatch.setattr("site_cms.cli.setup_logging", lambda level=None: calls.append(level))
    return calls


@pytest.fixture
def cli_db(monkeypatch, fake_db):
    """Route every ``run_with_db`` call of the CLI to the in-memory database."""

    def _run(fn, *, mongo_url=None):
        return asyncio.run(fn(fake_db))

    monkeypatch.setattr("site_cms.cli.auth_cmds.run_with_db", _run)
    monkeypatch.setattr("site_cms.cli.db_cmds.run_with_db", _run)
    return fake_db
