from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .collector import collect, collect_legacy
from .report import format_power_draw, format_report
from .sysfs import DiscoveryError

log = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console(emoji=False, highlight=False)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(level)


def _emit(text: str) -> None:
    console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


@app.command("report")
def report_command(
    sysfs_root: Optional[Path] = typer.Option(
        None, "--sysfs-root", help="Power-supply directory to scan"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Print voltage, current, power and status for every battery."""
    configure_logging(verbose)

    try:
        collection = collect(sysfs_root=sysfs_root)
    except DiscoveryError as exc:
        log.error("Cannot discover batteries: %s", exc)
        raise typer.Exit(code=1)

    if collection.all_failed:
        log.error("None of the %d batteries could be read", len(collection.skipped))
        raise typer.Exit(code=1)
    if collection.infos:
        _emit(format_report(collection.infos))


@app.command("draw")
def draw_command(
    sysfs_root: Optional[Path] = typer.Option(
        None, "--sysfs-root", help="Power-supply directory to read BAT1 from"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Print the current power draw of BAT1 on one line."""
    configure_logging(verbose)
    info = collect_legacy(sysfs_root)
    if info is None:
        raise typer.Exit(code=1)
    _emit(format_power_draw(info))


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()


def main_draw() -> None:  # pragma: no cover - thin Typer wrapper
    typer.run(draw_command)
