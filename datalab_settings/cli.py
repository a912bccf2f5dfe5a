from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from .log import setup_logging
from .paths import join_content_dir
from .settings import ResolverConfig, SettingsResolver

logger = logging.getLogger("datalab_settings.cli")
app = typer.Typer(help="Inspect Datalab settings and prepare the content directory.")


def _resolver(ctx: typer.Context) -> SettingsResolver:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    settings_path: Optional[Path] = typer.Option(None, "--settings", "-s", help="Path to the settings file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    setup_logging(verbose)
    config = ResolverConfig(settings_path=settings_path) if settings_path else ResolverConfig()
    ctx.obj = SettingsResolver(config)


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the merged settings document."""

    settings = _resolver(ctx).load_app_settings()
    if settings is None:
        raise typer.Exit(code=1)
    typer.echo(json.dumps(settings, indent=2, sort_keys=True))


@app.command("content-dir")
def content_dir(
    ctx: typer.Context,
    create: bool = typer.Option(False, "--create", help="Create the directory and its ancestors."),
) -> None:
    """Print the content directory."""

    resolver = _resolver(ctx)
    settings = resolver.load_app_settings()
    if settings is None:
        logger.error("Cannot resolve the content directory without settings.")
        raise typer.Exit(code=1)
    path = join_content_dir(settings["datalabRoot"], settings["contentDir"])
    if create and not resolver.ensure_dir_exists(path):
        logger.error("Failed to create %s", path)
        raise typer.Exit(code=1)
    typer.echo(path)


@app.command("ensure-dir")
def ensure_dir(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Directory to create."),
) -> None:
    """Create a directory and any missing ancestors."""

    if not _resolver(ctx).ensure_dir_exists(path):
        raise typer.Exit(code=1)
    logger.info("Directory %s is ready.", path)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
