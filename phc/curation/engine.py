"""Curation orchestrator: fetch, filter and sample a playlist.

Each call runs a fresh pipeline against the playlist source; nothing is
cached between calls.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import click

from ..providers.base import Playlist, PlaylistSource, Track
from .eligibility import MIN_TRACK_DURATION_MS, exclusion_breakdown, filter_eligible
from .errors import CurationConfigError
from .paginator import DEFAULT_PAGE_SIZE, fetch_all_entries
from .sampler import DEFAULT_TARGET_COUNT, take_tracks

logger = logging.getLogger(__name__)

MIN_PLAYLIST_LENGTH = 60


@dataclass(frozen=True)
class CurationSettings:
    """Tunable parameters of a curation run."""
    page_size: int = DEFAULT_PAGE_SIZE
    min_track_duration_ms: int = MIN_TRACK_DURATION_MS
    target_count: int = DEFAULT_TARGET_COUNT
    min_playlist_length: int = MIN_PLAYLIST_LENGTH

    def validate(self) -> None:
        """Raise CurationConfigError on any non-positive parameter."""
        for name in ("page_size", "min_track_duration_ms", "target_count", "min_playlist_length"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise CurationConfigError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class CurationResult:
    """Tracks chosen for a session plus counts for reporting."""
    tracks: Tuple[Track, ...]
    fetched_count: int = 0
    eligible_count: int = 0

    def __len__(self) -> int:
        return len(self.tracks)

    @property
    def track_ids(self) -> List[str]:
        return [t.track_id for t in self.tracks if t.track_id]


def select_candidate_playlists(playlists: Iterable[Playlist], min_playlist_length: int = MIN_PLAYLIST_LENGTH) -> List[Playlist]:
    """Keep playlists whose declared track total can fill a session.

    Uses the declared total only; per-entry eligibility is checked later.
    """
    if min_playlist_length <= 0:
        raise CurationConfigError(f"min_playlist_length must be positive, got {min_playlist_length}")
    return [p for p in playlists if p.track_total >= min_playlist_length]


def curate_playlist(
    source: PlaylistSource,
    playlist_id: str,
    market: str | None = None,
    settings: CurationSettings | None = None,
    rng: random.Random | None = None,
) -> CurationResult:
    """Choose a power-hour subset of a playlist.

    Args:
        source: Playlist content source (authenticated)
        playlist_id: Provider playlist ID
        market: Optional market/region qualifier
        settings: Curation parameters (defaults if None)
        rng: Random generator for the shuffle

    Returns:
        CurationResult with at most ``settings.target_count`` tracks

    Raises:
        CurationConfigError: If settings are invalid (before any fetch)
        Exception: Any fetch failure from the source, unchanged
    """
    settings = settings or CurationSettings()
    settings.validate()

    entries = fetch_all_entries(source, playlist_id, market=market, page_size=settings.page_size, rng=rng)
    logger.info(
        f"Choosing {click.style(str(settings.target_count), fg='cyan')} segments "
        f"out of {click.style(str(len(entries)), fg='cyan')} entries in playlist"
    )

    eligible = filter_eligible(entries, settings.min_track_duration_ms)
    logger.info(f"{click.style(str(len(eligible)), fg='green')} eligible tracks")
    if logger.isEnabledFor(logging.DEBUG):
        for reason, count in exclusion_breakdown(entries, settings.min_track_duration_ms).items():
            logger.debug(f"  excluded {count} ({reason.value})")

    tracks = take_tracks(eligible, settings.target_count)
    if len(tracks) < settings.target_count:
        logger.warning(f"Only {len(tracks)} of {settings.target_count} segments could be filled")
    return CurationResult(tracks=tuple(tracks), fetched_count=len(entries), eligible_count=len(eligible))


__all__ = [
    "MIN_PLAYLIST_LENGTH",
    "CurationSettings",
    "CurationResult",
    "select_candidate_playlists",
    "curate_playlist",
]
