"""Per-entry eligibility rules for power-hour tracks.

An entry is dropped if it is a local file, has no media item, carries an
episode, or carries a track that is shorter than the minimum segment length
or explicitly marked unplayable.

Playability policy: a track whose ``is_playable`` is None (the provider did
not report availability, e.g. no market was requested) is kept. This trades
precision for recall: a few unplayable tracks may slip through, but no
playable track is lost because availability was unknown.
"""
from __future__ import annotations
from collections import Counter
from enum import Enum
from typing import Dict, Iterable, List

from ..providers.base import MediaKind, PlaylistEntry

MIN_TRACK_DURATION_MS = 60_000


class ExclusionReason(str, Enum):
    LOCAL_FILE = "local file"
    MISSING_ITEM = "unavailable item"
    EPISODE = "episode"
    TOO_SHORT = "shorter than minimum"
    UNPLAYABLE = "not playable"


def explain_ineligibility(
    entry: PlaylistEntry, min_duration_ms: int = MIN_TRACK_DURATION_MS
) -> ExclusionReason | None:
    """Return the first rule that excludes ``entry``, or None if it is eligible."""
    if entry.is_local:
        return ExclusionReason.LOCAL_FILE
    item = entry.item
    if item is None:
        return ExclusionReason.MISSING_ITEM
    if item.kind is MediaKind.EPISODE:
        return ExclusionReason.EPISODE
    # Strictly shorter: a track of exactly the minimum still fills a segment
    if item.duration_ms < min_duration_ms:
        return ExclusionReason.TOO_SHORT
    if item.is_playable is False:
        return ExclusionReason.UNPLAYABLE
    return None


def is_eligible(entry: PlaylistEntry, min_duration_ms: int = MIN_TRACK_DURATION_MS) -> bool:
    return explain_ineligibility(entry, min_duration_ms) is None


def filter_eligible(
    entries: Iterable[PlaylistEntry], min_duration_ms: int = MIN_TRACK_DURATION_MS
) -> List[PlaylistEntry]:
    """Keep eligible entries, preserving input order."""
    return [e for e in entries if is_eligible(e, min_duration_ms)]


def exclusion_breakdown(
    entries: Iterable[PlaylistEntry], min_duration_ms: int = MIN_TRACK_DURATION_MS
) -> Dict[ExclusionReason, int]:
    """Count excluded entries per reason (eligible entries are not counted)."""
    counts: Counter = Counter()
    for entry in entries:
        reason = explain_ineligibility(entry, min_duration_ms)
        if reason is not None:
            counts[reason] += 1
    return dict(counts)


__all__ = [
    "MIN_TRACK_DURATION_MS",
    "ExclusionReason",
    "explain_ineligibility",
    "is_eligible",
    "filter_eligible",
    "exclusion_breakdown",
]
