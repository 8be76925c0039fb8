"""
Main CLI application definition.

pmon: watch the clock run down on a focus session, a workday or a sprint.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from pmon import __version__
from pmon.cli import utils as cli_utils
from pmon.cli.commands import config as config_commands
from pmon.cli.terminal import KeyboardCancelSource, RichDisplaySink, SeededClock, system_clock
from pmon.config.defaults import MAX_INTERVAL_SECONDS, MIN_INTERVAL_SECONDS
from pmon.config.settings import Settings
from pmon.core.controller import RefreshController
from pmon.core.errors import TimeSpecError
from pmon.core.state import RefreshState
from pmon.core.timespec import parse_window
from pmon.render import StyleKind, available_styles
from pmon.utils.logging import configure_from_settings, get_logger

STYLE_DESCRIPTIONS: dict[StyleKind, str] = {
    StyleKind.DEFAULT: "Info line, single bar and remaining time",
    StyleKind.RETRO: "Boxed ASCII mission report with status messages",
    StyleKind.SYNTHWAVE: "Neon double-line frame with a tagline",
    StyleKind.HOURGLASS: "Sand timer draining from top to bottom",
}

EXIT_TIMESPEC_ERROR = 2

app = typer.Typer(
    name="pmon",
    help="""pmon: terminal progress monitor for a bounded time window

    \b
    COMMANDS:
      run      - Track a session until it ends or you press q
      styles   - List the available visual styles
      config   - Inspect the effective configuration
      version  - Show version information

    \b
    EXAMPLES:
      pmon run --duration 25m --title "Deep work"
      pmon run --start 09:00 --end 17:00 --style retro
      pmon run -s 2025-08-01 -e 2025-09-01 --style hourglass
    """,
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to an extra config YAML"
    ),
    color: bool | None = typer.Option(
        None, "--color/--no-color", help="Enable or disable colored output"
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Increase verbosity (stackable)"
    ),
    quiet: int = typer.Option(
        0, "--quiet", "-q", count=True, help="Decrease verbosity (stackable)"
    ),
) -> None:
    """Global options and configuration bootstrap."""
    cli_overrides: dict[str, Any] = {"general": {}}
    if color is not None:
        cli_overrides["general"]["color_enabled"] = color

    try:
        settings = cli_utils.load_settings_with_cli_overrides(
            config_path=config,
            verbose=verbose,
            quiet=quiet,
            cli_overrides=cli_overrides,
        )
    except ValueError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(1) from exc

    configure_from_settings(settings)
    ctx.obj = {"settings": settings}


@app.command()
def run(
    ctx: typer.Context,
    start: str | None = typer.Option(
        None, "--start", "-s", help="Start time (default: now). YYYY-MM-DD[ HH:MM[:SS]], ISO-8601 or HH:MM[:SS]"
    ),
    end: str | None = typer.Option(None, "--end", "-e", help="End time, same formats as --start"),
    duration: str | None = typer.Option(
        None, "--duration", "-d", help="Length instead of --end: <n>s, <n>m, <n>h or <n>d"
    ),
    title: str | None = typer.Option(None, "--title", "-t", help="Title shown above the progress"),
    style: StyleKind | None = typer.Option(
        None, "--style", case_sensitive=False, help="Visual style"
    ),
    interval: int | None = typer.Option(
        None,
        "--interval",
        "-i",
        min=MIN_INTERVAL_SECONDS,
        max=MAX_INTERVAL_SECONDS,
        help="Seconds between redraws",
    ),
) -> None:
    """Track progress through a time window until it ends or is cancelled.

    \b
    Press q or Esc (or Ctrl+C) to stop early.
    """
    settings: Settings = ctx.obj["settings"]
    log = get_logger("cli.run")

    now = system_clock()
    try:
        window = parse_window(start, end, duration, now=now)
    except TimeSpecError as exc:
        log.debug("timespec.rejected", **exc.to_dict())
        typer.echo(f"Error: {exc.message}", err=True)
        for suggestion in exc.suggestions:
            typer.echo(f"  hint: {suggestion}", err=True)
        raise typer.Exit(EXIT_TIMESPEC_ERROR) from exc

    style_kind = style or StyleKind.from_name(settings.display.style)
    sink = RichDisplaySink(style=style_kind, color=settings.general.color_enabled)

    with KeyboardCancelSource() as cancel_source:
        controller = RefreshController(
            window,
            clock=SeededClock(now),
            sink=sink,
            cancel_source=cancel_source,
            style=style_kind,
            title=title or settings.display.title,
            interval_seconds=interval or settings.refresh.interval_seconds,
        )
        outcome = controller.run()

    if outcome.state is RefreshState.CANCELLED:
        log.info("session.cancelled", frames=outcome.frames)


@app.command()
def styles() -> None:
    """List the available visual styles."""
    table = Table(title="Styles")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    for name in available_styles():
        table.add_row(name, STYLE_DESCRIPTIONS[StyleKind(name)])
    Console().print(table)


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"pmon version {__version__}")


app.add_typer(config_commands.app, name="config")


if __name__ == "__main__":
    app()
