"""Command line entry point that starts the HTTP server."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from typing_extensions import Annotated

from . import __version__
from .log import configure_logging
from .rendering import TemplateLoadError, TemplateStore
from .settings import get_settings

logger = logging.getLogger(__name__)

APP_FACTORY = "pbar_server.app:create_app_from_settings"

app = typer.Typer(
    name="pbar-server",
    help="Serve SVG progress bars rendered from query parameters.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _describe_workers(workers: int) -> str:
    return "worker serves" if workers == 1 else "workers serve"


@app.command()
def serve(
    template_file: Annotated[
        Optional[Path],
        typer.Option(
            "--template-file",
            "-f",
            help="Custom SVG template (default: built-in progress bar).",
            metavar="PATH",
        ),
    ] = None,
    ip: Annotated[
        Optional[str],
        typer.Option("--ip", "-i", help="Bind address (default: 127.0.0.1)."),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", min=1, max=65535, help="The port to listen on (default: 5005)."),
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", min=1, help="Number of worker processes (default: 1)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Start the progress bar server."""
    settings = get_settings()
    template_file = template_file or settings.template_file
    ip = ip or settings.bind_host
    port = port or settings.bind_port
    workers = workers or settings.workers
    log_level = "DEBUG" if verbose else settings.log_level

    configure_logging(log_level)

    # Fail before binding if the template is unusable
    try:
        TemplateStore.load(template_file)
    except TemplateLoadError as exc:
        logger.error(f"Cannot start: {exc}")
        raise typer.Exit(code=1) from exc

    # Worker processes rebuild the app from these
    if template_file is not None:
        os.environ["PBAR_TEMPLATE_FILE"] = str(template_file.resolve())
    os.environ["PBAR_LOG_LEVEL"] = log_level

    logger.info(f"{workers} {_describe_workers(workers)} at {ip}:{port}.")

    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=ip,
        port=port,
        workers=workers,
        log_level=log_level.lower(),
        reload=False,
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
