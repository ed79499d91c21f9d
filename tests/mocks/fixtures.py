from __future__ import annotations
import pytest

from phc.providers import Playlist
from .fake_source import FakePlaylistSource, track_entries


@pytest.fixture
def sample_playlists():
    return [
        Playlist(playlist_id="pl_short", name="Short Mix", track_total=12, owner_id="me"),
        Playlist(playlist_id="pl_party", name="Party", track_total=80, owner_id="me"),
        Playlist(playlist_id="pl_exact", name="Exactly Sixty", track_total=60, owner_id="me"),
    ]


@pytest.fixture
def fake_source(sample_playlists):
    return FakePlaylistSource(entries=track_entries(100), playlists=sample_playlists)
