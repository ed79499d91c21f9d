"""Spotify payload parsing.

Converts Web API JSON objects into provider-neutral domain models. Only the
fields the curation engine needs are extracted.
"""

from __future__ import annotations
from typing import Any, Dict, List, Sequence

from ..base import Episode, MediaItem, Playlist, PlaylistEntry, Track

PROVIDER_NAME = 'spotify'


def parse_media_item(obj: Dict[str, Any] | None) -> MediaItem | None:
    """Parse the ``track`` field of a playlist item.

    Spotify reuses the ``track`` key for episodes; the ``type`` field tells
    them apart. Returns None for a null item (deleted or unavailable).
    """
    if not obj:
        return None
    if obj.get('type') == 'episode':
        return Episode(name=obj.get('name') or '', episode_id=obj.get('id'))
    artists = tuple(a['name'] for a in obj.get('artists') or [] if a.get('name'))
    is_playable = obj.get('is_playable')
    return Track(
        name=obj.get('name') or '',
        track_id=obj.get('id'),
        artists=artists,
        duration_ms=int(obj.get('duration_ms') or 0),
        is_playable=bool(is_playable) if is_playable is not None else None,
    )


def parse_playlist_item(item: Dict[str, Any], position: int = 0) -> PlaylistEntry:
    """Parse one element of ``GET /playlists/{id}/tracks`` ``items``.

    Args:
        item: Playlist item dict with 'is_local' and 'track'
        position: Index of the item within the playlist
    """
    track = item.get('track')
    is_local = bool(item.get('is_local') or (track or {}).get('is_local'))
    return PlaylistEntry(item=parse_media_item(track), is_local=is_local, position=position)


def parse_playlist_page(items: Sequence[Dict[str, Any]], offset: int) -> List[PlaylistEntry]:
    return [parse_playlist_item(item, offset + idx) for idx, item in enumerate(items)]


def parse_playlist_summary(pl: Dict[str, Any]) -> Playlist:
    """Parse a simplified playlist object (as listed by ``/me/playlists``)."""
    tracks = pl.get('tracks')
    track_total = tracks.get('total', 0) if isinstance(tracks, dict) else 0
    owner = pl.get('owner') or {}
    return Playlist(
        playlist_id=pl['id'],
        name=pl.get('name') or '',
        track_total=int(track_total or 0),
        owner_id=owner.get('id'),
        owner_name=owner.get('display_name'),
        provider=PROVIDER_NAME,
    )


__all__ = [
    "parse_media_item",
    "parse_playlist_item",
    "parse_playlist_page",
    "parse_playlist_summary",
]
