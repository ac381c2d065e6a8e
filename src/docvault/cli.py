from __future__ import annotations

import asyncio
from typing import Optional

import typer

from docvault.app.core.logging import setup_logging
from docvault.app.settings import get_settings
from docvault.records import SqlMetadataStore

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.command("serve")
def serve(
        host: Optional[str] = typer.Option(None, help="Bind address; defaults to HOST"),
        port: Optional[int] = typer.Option(None, help="Listening port; defaults to PORT"),
        reload: bool = typer.Option(False, help="Reload on code changes (development only)"),
):
    """Run the HTTP API under uvicorn."""
    import uvicorn

    setup_logging()
    settings = get_settings()
    uvicorn.run(
        "docvault.api.fastapi:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,  # keep our dictConfig
    )


@app.command("init-db")
def init_db(
        database_url: Optional[str] = typer.Option(None, help="Override DATABASE_URL / DB_NAME"),
):
    """Create the documents table if it does not exist."""
    setup_logging()
    settings = get_settings(database_url=database_url)

    async def _run() -> None:
        store = SqlMetadataStore.from_url(settings.resolved_database_url)
        try:
            await store.init()
        finally:
            await store.shutdown()

    asyncio.run(_run())
    typer.echo(f"Documents table ready ({settings.resolved_database_url})")


if __name__ == "__main__":
    app()
