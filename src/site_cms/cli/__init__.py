from __future__ import annotations

from typing import Optional

import typer

from site_cms.app import setup_logging

from .auth_cmds import app as auth_app
from .db_cmds import app as db_app
from .serve import serve

app = typer.Typer(no_args_is_help=True, add_completion=False, help="Site CMS admin API")
app.command("serve")(serve)
app.add_typer(db_app, name="db")
app.add_typer(auth_app, name="auth")


@app.callback()
def _configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Overrides LOG_LEVEL"),
):
    setup_logging(level=log_level)


def main():
    app()


__all__ = ["app", "main"]
