"""Configuration display commands."""

from __future__ import annotations
import click
import json as _json

from .helpers import cli, _redact_spotify_config


@cli.command(name="config")
@click.option("--section", "-s", help="Only show a specific top-level section (e.g. providers, curation, playback).")
@click.option("--redact", is_flag=True, help="Redact sensitive values like client_id.")
@click.pass_context
def show_config(ctx: click.Context, section: str | None, redact: bool):
    """Show current configuration settings."""
    data = ctx.obj
    if section:
        section = section.lower()
        if section not in data:
            raise click.UsageError(f"Unknown section '{section}'. Available: {', '.join(sorted(data.keys()))}")
        data = {section: data[section]}
    if redact:
        data = _redact_spotify_config(data)
    click.echo(_json.dumps(data, indent=2, sort_keys=True))


__all__ = ["show_config"]
