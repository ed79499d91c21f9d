"""Unit tests for exhaustive playlist pagination."""

import math
import random

import pytest

from phc.curation import CurationConfigError, PaginationError, fetch_all_entries
from tests.mocks.fake_source import FakePlaylistSource, track_entries


class KeepOrder(random.Random):
    """Random generator whose shuffle is a no-op, exposing source order."""

    def shuffle(self, x):  # type: ignore[override]
        return None


@pytest.mark.unit
def test_seventy_entries_with_page_size_64():
    entries = track_entries(70)
    source = FakePlaylistSource(entries=entries)

    result = fetch_all_entries(source, "pl1", market="US", page_size=64)

    assert len(result) == 70
    assert source.offsets == [0, 64, 70]
    assert all(c[2] == 64 for c in source.calls)
    assert all(c[0] == "pl1" and c[1] == "US" for c in source.calls)
    assert sorted(e.position for e in result) == list(range(70))


@pytest.mark.unit
@pytest.mark.parametrize("total", [0, 1, 63, 64, 65, 128, 130, 300])
def test_returns_every_entry_regardless_of_page_alignment(total):
    page_size = 64
    source = FakePlaylistSource(entries=track_entries(total))

    result = fetch_all_entries(source, "pl1", page_size=page_size)

    assert len(result) == total
    # One extra request confirms exhaustion
    assert len(source.calls) == math.ceil(total / page_size) + 1


@pytest.mark.unit
def test_short_pages_do_not_end_pagination():
    """Offset advances by the entries actually returned, not the page size."""
    source = FakePlaylistSource(entries=track_entries(25), page_cap=10)

    result = fetch_all_entries(source, "pl1", page_size=64)

    assert len(result) == 25
    assert source.offsets == [0, 10, 20, 25]


@pytest.mark.unit
def test_source_order_preserved_before_shuffle():
    entries = track_entries(150)
    source = FakePlaylistSource(entries=entries)

    result = fetch_all_entries(source, "pl1", page_size=64, rng=KeepOrder())

    assert result == entries


@pytest.mark.unit
def test_shuffle_uses_given_generator():
    entries = track_entries(50)

    first = fetch_all_entries(FakePlaylistSource(entries=entries), "pl1", rng=random.Random(1234))
    second = fetch_all_entries(FakePlaylistSource(entries=entries), "pl1", rng=random.Random(1234))

    assert first == second
    assert first != entries
    assert sorted(first, key=lambda e: e.position) == entries


@pytest.mark.unit
def test_fetch_failure_propagates_unchanged():
    error = ConnectionError("boom")
    source = FakePlaylistSource(entries=track_entries(200), fail_at_offset=64, error=error)

    with pytest.raises(ConnectionError) as excinfo:
        fetch_all_entries(source, "pl1", page_size=64)

    assert excinfo.value is error
    assert source.offsets == [0, 64]  # no retry


@pytest.mark.unit
@pytest.mark.parametrize("page_size", [0, -5])
def test_non_positive_page_size_rejected_before_fetching(page_size):
    source = FakePlaylistSource(entries=track_entries(10))

    with pytest.raises(CurationConfigError):
        fetch_all_entries(source, "pl1", page_size=page_size)

    assert source.calls == []


@pytest.mark.unit
def test_oversized_page_is_a_contract_violation():
    source = FakePlaylistSource(entries=track_entries(100), ignore_limit=20)

    with pytest.raises(PaginationError):
        fetch_all_entries(source, "pl1", page_size=10)
