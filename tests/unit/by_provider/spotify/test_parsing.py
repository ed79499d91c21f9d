"""Unit tests for Spotify payload parsing."""

from phc.providers import Episode, MediaKind, Track
from phc.providers.spotify.parsing import (
    parse_media_item,
    parse_playlist_item,
    parse_playlist_page,
    parse_playlist_summary,
)


def _track_json(**overrides):
    data = {
        "type": "track",
        "id": "4uLU6hMCjMI75M1A2tKUQC",
        "name": "Never Gonna Give You Up",
        "artists": [{"name": "Rick Astley", "id": "a1"}],
        "duration_ms": 213573,
        "is_local": False,
    }
    data.update(overrides)
    return data


class TestParseMediaItem:
    def test_track_fields(self):
        item = parse_media_item(_track_json(is_playable=True))

        assert isinstance(item, Track)
        assert item.kind is MediaKind.TRACK
        assert item.track_id == "4uLU6hMCjMI75M1A2tKUQC"
        assert item.artists == ("Rick Astley",)
        assert item.duration_ms == 213573
        assert item.is_playable is True

    def test_missing_playability_stays_unknown(self):
        assert parse_media_item(_track_json()).is_playable is None

    def test_unplayable_track(self):
        assert parse_media_item(_track_json(is_playable=False)).is_playable is False

    def test_artist_order_preserved(self):
        item = parse_media_item(_track_json(artists=[{"name": "B"}, {"name": "A"}, {"name": ""}]))
        assert item.artists == ("B", "A")
        assert item.artist_line == "B, A"

    def test_episode(self):
        item = parse_media_item({"type": "episode", "id": "ep1", "name": "Daily", "duration_ms": 3600000})
        assert isinstance(item, Episode)
        assert item.kind is MediaKind.EPISODE

    def test_null_item(self):
        assert parse_media_item(None) is None
        assert parse_media_item({}) is None


class TestParsePlaylistItem:
    def test_local_flag_from_item(self):
        entry = parse_playlist_item({"is_local": True, "track": _track_json(id=None)}, position=3)
        assert entry.is_local is True
        assert entry.item.track_id is None
        assert entry.position == 3

    def test_local_flag_from_track(self):
        entry = parse_playlist_item({"track": _track_json(is_local=True)})
        assert entry.is_local is True

    def test_unavailable_track(self):
        entry = parse_playlist_item({"is_local": False, "track": None})
        assert entry.item is None
        assert entry.is_local is False

    def test_page_positions_continue_from_offset(self):
        entries = parse_playlist_page([{"track": _track_json()}, {"track": None}], offset=64)
        assert [e.position for e in entries] == [64, 65]


def test_parse_playlist_summary():
    pl = parse_playlist_summary({
        "id": "pl1",
        "name": "Party",
        "tracks": {"href": "...", "total": 75},
        "owner": {"id": "me", "display_name": "Me"},
    })

    assert pl.playlist_id == "pl1"
    assert pl.track_total == 75
    assert pl.owner_name == "Me"
    assert pl.provider == "spotify"


def test_parse_playlist_summary_without_tracks_object():
    pl = parse_playlist_summary({"id": "pl2", "name": "Odd", "tracks": None, "owner": None})
    assert pl.track_total == 0
    assert pl.owner_id is None
