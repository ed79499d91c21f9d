"""Playlist curation engine.

Paginate a playlist, drop ineligible entries, and keep a random subset sized
for a power-hour session.
"""

from .errors import CurationConfigError, PaginationError
from .paginator import fetch_all_entries, DEFAULT_PAGE_SIZE
from .eligibility import (
    ExclusionReason,
    MIN_TRACK_DURATION_MS,
    explain_ineligibility,
    filter_eligible,
    is_eligible,
)
from .sampler import take_tracks, DEFAULT_TARGET_COUNT
from .engine import (
    MIN_PLAYLIST_LENGTH,
    CurationResult,
    CurationSettings,
    curate_playlist,
    select_candidate_playlists,
)

__all__ = [
    "CurationConfigError",
    "PaginationError",
    "fetch_all_entries",
    "DEFAULT_PAGE_SIZE",
    "ExclusionReason",
    "MIN_TRACK_DURATION_MS",
    "explain_ineligibility",
    "filter_eligible",
    "is_eligible",
    "take_tracks",
    "DEFAULT_TARGET_COUNT",
    "MIN_PLAYLIST_LENGTH",
    "CurationResult",
    "CurationSettings",
    "curate_playlist",
    "select_candidate_playlists",
]
