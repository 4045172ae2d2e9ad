"""Entry point for `python -m localmusic`."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

logger = logging.getLogger("localmusic.cli")


def _emit(payload: dict[str, Any]) -> None:
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log to stderr at debug level")
@click.pass_context
def main(ctx: Any, verbose: bool) -> None:
    """Find and manage playable audio files on local storage."""
    from localmusic.app import configure_logging
    from localmusic.config.settings import AppSettings

    settings = AppSettings()
    configure_logging(settings, verbose=verbose)
    ctx.obj = settings


@main.command()
@click.argument("root", required=False, type=click.Path(file_okay=False))
@click.option("--min-duration", type=click.IntRange(min=0), help="Drop tracks shorter than this many milliseconds")
@click.option("--max-depth", type=click.IntRange(min=0), help="Maximum directory depth below ROOT")
@click.pass_obj
def scan(settings: Any, root: str | None, min_duration: int | None, max_depth: int | None) -> None:
    """Scan ROOT for playable audio files and print the result as JSON.

    ROOT defaults to the last successfully scanned directory, then to the
    home directory.
    """
    from localmusic.app import run_scan

    root = root or settings.last_root or str(Path.home())
    resolved = str(Path(root).expanduser().resolve())
    options = settings.scan_options().with_overrides(
        min_duration_ms=min_duration,
        max_depth=max_depth,
    )
    logger.info("scan requested root=%s options=%s", resolved, options)

    payload = run_scan(resolved, options, _emit)
    if payload.get("success"):
        settings.last_root = resolved
        settings.sync()
    raise SystemExit(0 if payload.get("success") else 1)


@main.command()
@click.argument("path")
def url(path: str) -> None:
    """Print a file:// URL for the track at PATH."""
    from localmusic.core.library import get_local_file_url

    result = get_local_file_url(path)
    _emit(result.as_dict())
    raise SystemExit(0 if result.success else 1)


@main.command()
@click.argument("path")
def delete(path: str) -> None:
    """Delete the track at PATH from storage."""
    from localmusic.core.library import delete_local_track

    logger.info("delete requested path=%s", path)
    result = delete_local_track(path)
    _emit(result.as_dict())
    raise SystemExit(0 if result.success else 1)


if __name__ == "__main__":
    main()
