"""Playback service: hand a curated track list to the player."""

from __future__ import annotations
import logging

from ..curation import CurationResult
from ..providers import PlaylistSource

logger = logging.getLogger(__name__)


def play_tracks(source: PlaylistSource, result: CurationResult, device_id: str | None = None) -> int:
    """Start playback of the curated tracks.

    Tracks without a provider ID cannot be queued and are skipped.

    Returns:
        Number of tracks submitted

    Raises:
        ValueError: If the result holds no playable track IDs
    """
    track_ids = result.track_ids
    if not track_ids:
        raise ValueError("Nothing to play: curation produced no tracks with an ID")
    skipped = len(result.tracks) - len(track_ids)
    if skipped:
        logger.warning(f"Skipping {skipped} track(s) without an ID")
    source.submit_playback(track_ids, device_id=device_id)
    return len(track_ids)


__all__ = ["play_tracks"]
