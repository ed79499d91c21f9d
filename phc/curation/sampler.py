"""Truncate eligible entries to the session length.

No randomization happens here; entries arrive already shuffled by the
paginator.
"""
from __future__ import annotations
import logging
from typing import List, Sequence

from ..providers.base import MediaKind, PlaylistEntry, Track
from .errors import CurationConfigError

logger = logging.getLogger(__name__)

DEFAULT_TARGET_COUNT = 60


def take_tracks(entries: Sequence[PlaylistEntry], target_count: int = DEFAULT_TARGET_COUNT) -> List[Track]:
    """Return the first ``target_count`` tracks among ``entries``.

    Fewer eligible entries than ``target_count`` yields a short session
    rather than an error.

    Raises:
        CurationConfigError: If target_count is not positive
    """
    if target_count <= 0:
        raise CurationConfigError(f"target_count must be positive, got {target_count}")
    tracks = [e.item for e in entries if e.item is not None and e.item.kind is MediaKind.TRACK]
    if len(tracks) < len(entries):
        logger.debug(f"Skipped {len(entries) - len(tracks)} non-track entries")
    return tracks[:target_count]


__all__ = ["take_tracks", "DEFAULT_TARGET_COUNT"]
