from __future__ import annotations

import typer
import uvicorn


def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(5000, envvar="PORT", help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the admin API with uvicorn."""
    uvicorn.run(
        "site_cms.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )
