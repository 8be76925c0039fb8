"""Config command implementation."""

from __future__ import annotations

import json

import typer
import yaml

from pmon.config.settings import Settings

app = typer.Typer(name="config", help="Inspect the effective configuration")


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


@app.command()
def show(
    ctx: typer.Context,
    format: str = typer.Option("yaml", "--format", "-f", help="Output format: yaml or json"),
) -> None:
    """Show the effective configuration after all layers are merged."""

    data = _settings(ctx).model_dump()

    if format.lower() == "json":
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(yaml.safe_dump(data, sort_keys=False))


@app.command()
def get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Dot path (e.g., refresh.interval_seconds)"),
) -> None:
    """Get a configuration value by key path."""

    current: object = _settings(ctx).model_dump()
    for part in [segment for segment in key.split(".") if segment]:
        if not isinstance(current, dict) or part not in current:
            typer.echo(f"Unknown configuration key: {key}", err=True)
            raise typer.Exit(code=1)
        current = current[part]
    typer.echo(current)
