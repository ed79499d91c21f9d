"""Authentication commands: login, logout, redirect-uri, token-info, providers."""

from __future__ import annotations
import json
import time
from pathlib import Path

import click
import requests

from .helpers import cli, build_auth, get_provider_config, require_client_id
from ..providers import available_provider_instances, get_provider_instance


@cli.command()
@click.option('--force', is_flag=True, help='Force full auth ignoring cache')
@click.pass_context
def login(ctx: click.Context, force: bool):
    """Authenticate with Spotify (OAuth PKCE) and cache the token."""
    cfg = ctx.obj
    require_client_id(cfg)
    try:
        auth = build_auth(cfg)
    except ValueError as e:
        raise click.UsageError(str(e))
    try:
        tok = auth.get_token(force=force)
    except (RuntimeError, TimeoutError, requests.RequestException) as e:
        raise click.ClickException(f"Authentication failed: {e}")
    exp = tok.get('expires_at') if isinstance(tok, dict) else None
    if exp:
        click.echo(f"Token acquired; expires at {time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(exp))}")
    else:
        click.echo('Token acquired.')


@cli.command()
@click.pass_context
def logout(ctx: click.Context):
    """Delete the cached OAuth token; the next command logs in again."""
    cfg = ctx.obj
    try:
        auth = build_auth(cfg)
    except ValueError as e:
        raise click.UsageError(str(e))
    path = Path(get_provider_config(cfg)["cache_file"]).resolve()
    existed = path.exists()
    auth.clear_cache()
    click.echo(f"Removed token cache: {path}" if existed else f"No token cache at {path}")


@cli.command(name="redirect-uri")
@click.pass_context
def redirect_uri(ctx: click.Context):
    """Show OAuth redirect URI for Spotify app configuration."""
    cfg = ctx.obj
    try:
        auth = build_auth(cfg)
    except ValueError as e:
        raise click.UsageError(str(e))
    uri = auth.build_redirect_uri()
    click.echo(uri)
    provider_cfg = get_provider_config(cfg)
    click.echo("\nValidation checklist:")
    for line in [
        f"1. Spotify Dashboard has EXACT entry: {uri}",
        f"2. Scheme matches (expected {provider_cfg.get('redirect_scheme')})",
        f"3. Port matches (expected {provider_cfg.get('redirect_port')})",
        f"4. Path matches (expected {provider_cfg.get('redirect_path')})",
        "5. Client ID corresponds to the app whose dashboard you edited",
    ]:
        click.echo(f" - {line}")


@cli.command(name="token-info")
@click.pass_context
def token_info(ctx: click.Context):
    """Show OAuth token cache status and expiration info."""
    provider_cfg = get_provider_config(ctx.obj)
    path = Path(provider_cfg["cache_file"]).resolve()
    if not path.exists():
        click.echo(f"Token cache not found: {path}")
        return
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise click.ClickException(f"Failed to parse token cache {path}: {e}")
    exp = data.get("expires_at") if isinstance(data, dict) else None
    if exp:
        remaining = int(exp - time.time())
        click.echo(
            f"Token cache: {path}\nExpires at: {time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(exp))} (in {remaining}s)"
        )
    else:
        click.echo(f"Token cache: {path}\n(No expires_at field)")


@cli.command(name="providers")
@click.pass_context
def providers_list(ctx: click.Context):
    """List registered providers and their redirect URI."""
    active = ctx.obj.get('provider', 'spotify')
    names = available_provider_instances()
    if not names:
        click.echo("No providers registered.")
        return
    width = max(len(n) for n in names)
    click.echo("Providers:")
    for name in names:
        defaults = get_provider_instance(name).get_default_config()
        uri = f"{defaults['redirect_scheme']}://{defaults['redirect_host']}:{defaults['redirect_port']}{defaults['redirect_path']}"
        marker = "*" if name == active else " "
        click.echo(f" {marker} {name.ljust(width)}  default redirect {uri}")


__all__ = ["login", "logout", "redirect_uri", "token_info", "providers_list"]
