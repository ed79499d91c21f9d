"""Curation service: authenticate, list candidates and curate a playlist.

Glues the provider layer (auth + API client) to the curation engine so the
CLI only deals with prompts and output.
"""

from __future__ import annotations
import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Sequence

from ..curation import CurationResult, CurationSettings, curate_playlist, select_candidate_playlists
from ..providers import Playlist, PlaylistSource, available_provider_instances, get_provider_instance

logger = logging.getLogger(__name__)


class CurationRunResult:
    """Results from a curation run."""

    def __init__(self):
        self.playlist: Playlist | None = None
        self.market: str | None = None
        self.curation: CurationResult | None = None
        self.duration_seconds = 0.0


def open_source(provider: str, provider_config: Dict[str, Any], force_auth: bool = False) -> PlaylistSource:
    """Authenticate with the provider and return a playlist source.

    Raises:
        NotImplementedError: If the provider is not registered
        ValueError: If provider configuration is invalid
        RuntimeError: If no access token could be obtained
    """
    try:
        provider_instance = get_provider_instance(provider)
    except KeyError:
        raise NotImplementedError(
            f"Provider '{provider}' not registered (available: {', '.join(available_provider_instances())})"
        )

    provider_instance.validate_config(provider_config)
    auth = provider_instance.create_auth(provider_config)
    tok_dict = auth.get_token(force=force_auth)
    if not isinstance(tok_dict, dict) or 'access_token' not in tok_dict:
        raise RuntimeError('Failed to obtain access token')

    expiry = tok_dict.get('expires_at')
    if expiry:
        remaining = int(expiry - time.time())
        logger.debug(f"Using access token (expires {datetime.fromtimestamp(expiry)}; +{remaining}s)")

    return provider_instance.create_client(tok_dict['access_token'], provider_config)


def list_candidates(source: PlaylistSource, settings: CurationSettings, user_id: str | None = None) -> List[Playlist]:
    """Return the user's playlists long enough to fill a session."""
    playlists = list(source.list_candidate_playlists(user_id))
    candidates = select_candidate_playlists(playlists, settings.min_playlist_length)
    logger.debug(f"{len(candidates)} of {len(playlists)} playlists have at least {settings.min_playlist_length} tracks")
    return candidates


def run_curation(
    source: PlaylistSource,
    settings: CurationSettings,
    market: str | None = None,
    playlist_id: str | None = None,
    choose: Callable[[Sequence[Playlist]], Playlist] | None = None,
) -> CurationRunResult:
    """Curate a power-hour track list.

    Either ``playlist_id`` names the playlist directly, or ``choose`` picks one
    of the candidate playlists (those meeting ``settings.min_playlist_length``).

    Args:
        source: Authenticated playlist source
        settings: Curation settings
        market: Market qualifier forwarded to page fetches
        playlist_id: Playlist to curate; skips candidate listing when given
        choose: Callback selecting a playlist from the candidates

    Returns:
        CurationRunResult with the curated tracks

    Raises:
        ValueError: If neither playlist_id nor choose is given, or no candidate exists
    """
    settings.validate()
    result = CurationRunResult()
    result.market = market
    start = time.time()

    if playlist_id is None:
        if choose is None:
            raise ValueError("Either playlist_id or a choose callback is required")
        candidates = list_candidates(source, settings)
        if not candidates:
            raise ValueError(f"No playlists with at least {settings.min_playlist_length} tracks found")
        result.playlist = choose(candidates)
        playlist_id = result.playlist.playlist_id
        logger.info(f"Using {result.playlist.name}")

    result.curation = curate_playlist(source, playlist_id, market=market, settings=settings)
    result.duration_seconds = time.time() - start
    return result


__all__ = ["CurationRunResult", "open_source", "list_candidates", "run_curation"]
