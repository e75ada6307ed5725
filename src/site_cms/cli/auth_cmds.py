from __future__ import annotations

from typing import Optional

import typer

from site_cms.auth import create_access_token, get_auth_settings
from site_cms.resources.users import DEFAULT_ADMIN_NAME, find_user_by_email, seed_admin

from ._runner import run_with_db

app = typer.Typer(no_args_is_help=True, help="Admin users and access tokens")

DEFAULT_ADMIN_EMAIL = "admin@tebaservices.com"


@app.command("seed-admin")
def seed_admin_cmd(
    email: Optional[str] = typer.Option(None, "--email", help="Defaults to ADMIN_EMAIL"),
    name: str = typer.Option(DEFAULT_ADMIN_NAME, "--name"),
    mongo_url: Optional[str] = typer.Option(None, "--mongo-url", help="Overrides MONGO_URL"),
):
    """Create the admin user unless it already exists."""
    email = email or get_auth_settings().admin_email or DEFAULT_ADMIN_EMAIL
    user, created = run_with_db(lambda db: seed_admin(db, email, name), mongo_url=mongo_url)
    typer.echo(f"{'created' if created else 'exists'} {user['email']} ({user['id']})")


@app.command("issue-token")
def issue_token(
    email: str = typer.Option(..., "--email"),
    lifetime: Optional[int] = typer.Option(None, "--lifetime", help="Seconds; defaults to AUTH_JWT_LIFETIME_SECONDS"),
    mongo_url: Optional[str] = typer.Option(None, "--mongo-url", help="Overrides MONGO_URL"),
):
    """Print a bearer token for an existing, active user."""
    user = run_with_db(lambda db: find_user_by_email(db, email), mongo_url=mongo_url)
    if user is None:
        typer.echo(f"No user with email {email}", err=True)
        raise typer.Exit(code=1)
    if not user.get("isActive", True):
        typer.echo(f"User {email} is disabled", err=True)
        raise typer.Exit(code=1)
    typer.echo(create_access_token(user["id"], lifetime_seconds=lifetime))
