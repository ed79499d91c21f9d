from __future__ import annotations
import itertools
from typing import List, Sequence

from phc.providers import Episode, Playlist, PlaylistEntry, Track

_ids = itertools.count(1)


def make_track(name: str | None = None, duration_ms: int = 180_000, is_playable: bool | None = None,
               track_id: str | None = "auto", artists: Sequence[str] = ("Artist",)) -> Track:
    n = next(_ids)
    return Track(
        name=name or f"Song {n}",
        track_id=f"track{n}" if track_id == "auto" else track_id,
        artists=tuple(artists),
        duration_ms=duration_ms,
        is_playable=is_playable,
    )


def make_entry(item=None, is_local: bool = False, position: int = 0) -> PlaylistEntry:
    return PlaylistEntry(item=item, is_local=is_local, position=position)


def track_entries(count: int, **track_kwargs) -> List[PlaylistEntry]:
    return [make_entry(make_track(**track_kwargs), position=i) for i in range(count)]


def episode_entry(position: int = 0) -> PlaylistEntry:
    return make_entry(Episode(name="Podcast", episode_id="ep1"), position=position)


class FakePlaylistSource:
    """In-memory PlaylistSource recording every call.

    Args:
        entries: Full playlist contents served by fetch_page
        playlists: Summaries returned by list_candidate_playlists
        fail_at_offset: Offset at which fetch_page raises ``error``
        error: Exception raised at ``fail_at_offset``
        page_cap: Serve at most this many entries per page (short pages)
        ignore_limit: Serve ``ignore_limit`` entries regardless of the requested limit
    """

    def __init__(self, entries: Sequence[PlaylistEntry] = (), playlists: Sequence[Playlist] = (),
                 fail_at_offset: int | None = None, error: Exception | None = None,
                 page_cap: int | None = None, ignore_limit: int | None = None):
        self.entries = list(entries)
        self.playlists = list(playlists)
        self.fail_at_offset = fail_at_offset
        self.error = error or ConnectionError("network down")
        self.page_cap = page_cap
        self.ignore_limit = ignore_limit
        self.calls: list[tuple] = []
        self.playlist_calls: list = []
        self.played: list[tuple] = []

    @property
    def offsets(self) -> List[int]:
        return [c[3] for c in self.calls]

    def fetch_page(self, playlist_id, market, limit, offset):
        self.calls.append((playlist_id, market, limit, offset))
        if self.fail_at_offset is not None and offset == self.fail_at_offset:
            raise self.error
        size = limit
        if self.page_cap is not None:
            size = min(size, self.page_cap)
        if self.ignore_limit is not None:
            size = self.ignore_limit
        return self.entries[offset:offset + size]

    def list_candidate_playlists(self, user_id=None):
        self.playlist_calls.append(user_id)
        return list(self.playlists)

    def submit_playback(self, track_ids, device_id=None):
        self.played.append((list(track_ids), device_id))
