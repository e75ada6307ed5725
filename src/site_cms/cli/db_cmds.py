from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from site_cms.resources import ALL_REPOSITORIES
from site_cms.resources.seed import load_seed_file, seed_content

from ._runner import run_with_db

app = typer.Typer(no_args_is_help=True, help="MongoDB maintenance commands")


@app.command("ensure-indexes")
def ensure_indexes(
    mongo_url: Optional[str] = typer.Option(None, "--mongo-url", help="Overrides MONGO_URL"),
):
    """Create the unique indexes (slug, email) on every collection."""

    async def _run(db):
        created = []
        for repo in ALL_REPOSITORIES:
            names = await repo.ensure_indexes(db)
            created.extend(f"{repo.collection_name}.{name}" for name in names)
        return created

    for name in run_with_db(_run, mongo_url=mongo_url):
        typer.echo(f"index {name}")


@app.command("seed")
def seed(
    file: Path = typer.Option(..., "--file", exists=True, dir_okay=False, help="JSON file with categories and blogs"),
    update: bool = typer.Option(False, "--update", help="Update records whose slug already exists"),
    mongo_url: Optional[str] = typer.Option(None, "--mongo-url", help="Overrides MONGO_URL"),
):
    """Load categories and blog posts, matching existing records by slug."""
    data = load_seed_file(file)
    results = run_with_db(lambda db: seed_content(db, data, update=update), mongo_url=mongo_url)
    for kind, counts in results.items():
        typer.echo(f"{kind}: created={counts.created} updated={counts.updated} skipped={counts.skipped}")
