"""Power-hour commands: list candidate playlists, curate and play."""

from __future__ import annotations
from typing import Sequence

import click
import requests

from .helpers import cli, require_client_id
from ..config_types import CurationConfig
from ..curation import CurationConfigError, CurationSettings, PaginationError
from ..providers import Playlist, get_provider_instance
from ..services import list_candidates, open_source, play_tracks, run_curation
from ..utils.logging_helpers import format_curation_summary, format_playlist_choice, format_track_line


def _settings_from(cfg: dict, target: int | None = None) -> CurationSettings:
    values = dict(cfg.get('curation', {}))
    if target is not None:
        values['target_count'] = target
    values.pop('market', None)
    try:
        return CurationConfig(**values).to_settings()
    except (CurationConfigError, TypeError) as e:
        raise click.UsageError(f"Invalid curation settings: {e}")


def _open(cfg: dict, force_auth: bool = False):
    provider_cfg = require_client_id(cfg)
    try:
        return open_source(cfg.get('provider', 'spotify'), provider_cfg, force_auth=force_auth)
    except ValueError as e:
        raise click.UsageError(str(e))
    except (RuntimeError, TimeoutError, requests.RequestException) as e:
        raise click.ClickException(f"Authentication failed: {e}")


def prompt_for_playlist(candidates: Sequence[Playlist]) -> Playlist:
    """Print numbered candidates and ask for a 1-based choice."""
    for index, playlist in enumerate(candidates, start=1):
        click.echo(format_playlist_choice(index, playlist))
    choice = click.prompt("Choose a playlist", type=click.IntRange(1, len(candidates)))
    return candidates[choice - 1]


@cli.command(name="playlists")
@click.option('--show-urls', is_flag=True, help='Show provider URLs for each playlist')
@click.pass_context
def playlists_list(ctx: click.Context, show_urls: bool):
    """List your playlists with enough tracks for a power hour."""
    cfg = ctx.obj
    settings = _settings_from(cfg)
    source = _open(cfg)
    try:
        candidates = list_candidates(source, settings)
    except (requests.RequestException, PaginationError) as e:
        raise click.ClickException(f"Failed to list playlists: {e}")
    if not candidates:
        click.echo(f"No playlists with at least {settings.min_playlist_length} tracks found.")
        return
    links = get_provider_instance(cfg.get('provider', 'spotify')).get_link_generator()
    click.echo(f"{'ID':<24} {'Name':<40} {'Tracks':>7}")
    click.echo("-" * 73)
    for pl in candidates:
        click.echo(f"{pl.playlist_id:<24} {pl.name[:40]:<40} {pl.track_total:>7}")
        if show_urls:
            click.echo(f"  → {links.playlist_url(pl.playlist_id)}")
    click.echo(f"\nTotal: {len(candidates)} playlists")


@cli.command(name="curate")
@click.argument('playlist_id', required=False)
@click.option('--market', default=None, help="Market (ISO country code) for availability; 'none' to disable")
@click.option('--target', type=int, default=None, help='Number of segments (overrides curation.target_count)')
@click.option('--play/--no-play', default=None, help='Start playback of the chosen tracks (default: playback.enabled)')
@click.option('--device', default=None, help='Spotify device ID for playback (default: active device)')
@click.option('--force-auth', is_flag=True, help='Force full auth flow ignoring cached token')
@click.option('--show-urls', is_flag=True, help='Show provider URLs for each chosen track')
@click.pass_context
def curate(ctx: click.Context, playlist_id: str | None, market: str | None, target: int | None,
           play: bool | None, device: str | None, force_auth: bool, show_urls: bool):
    """Choose a random power hour from a playlist and optionally play it.

    Without PLAYLIST_ID you are prompted to pick one of your playlists that
    declare at least curation.min_playlist_length tracks.
    """
    cfg = ctx.obj
    settings = _settings_from(cfg, target)
    if market is None:
        market = cfg.get('curation', {}).get('market')
    if not market or str(market).lower() == 'none':
        market = None
    playback_cfg = cfg.get('playback', {})
    if play is None:
        play = bool(playback_cfg.get('enabled', True))
    device = device or playback_cfg.get('device_id')

    source = _open(cfg, force_auth=force_auth)
    try:
        run = run_curation(source, settings, market=market, playlist_id=playlist_id, choose=prompt_for_playlist)
    except (requests.RequestException, PaginationError) as e:
        raise click.ClickException(f"Failed to fetch playlist: {e}")
    except ValueError as e:
        raise click.ClickException(str(e))

    result = run.curation
    links = get_provider_instance(cfg.get('provider', 'spotify')).get_link_generator()
    for index, track in enumerate(result.tracks, start=1):
        click.echo(format_track_line(track, index))
        if show_urls and track.track_id:
            click.echo(f"  → {links.track_url(track.track_id)}")
    click.echo(format_curation_summary(result, settings.target_count, run.duration_seconds))

    if not result.tracks:
        click.echo(click.style("No eligible tracks; nothing to play.", fg='yellow'))
        return
    if not play:
        return
    try:
        submitted = play_tracks(source, result, device_id=device)
    except requests.RequestException as e:
        raise click.ClickException(f"Playback failed: {e}")
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"Playing {submitted} tracks")


__all__ = ["playlists_list", "curate", "prompt_for_playlist"]
