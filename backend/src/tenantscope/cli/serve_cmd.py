"""Serve CLI command: run the API with uvicorn."""

import click
import uvicorn

from tenantscope.config import AppSettings


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=None, type=int, help="Port (default: TENANTSCOPE_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes.")
def serve(host: str, port: int | None, reload: bool):
    """Run the tenant context API."""
    settings = AppSettings.from_env()
    uvicorn.run(
        "tenantscope.api:create_app",
        factory=True,
        host=host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level,
    )
