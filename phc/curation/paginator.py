"""Exhaustive playlist pagination.

Drains a :class:`~phc.providers.base.PlaylistSource` page by page and
shuffles the accumulated entries once, so that taking the first N entries
later yields a uniform random subset rather than the head of a playlist that
is often ordered by theme or date.
"""

from __future__ import annotations
import logging
import random
from typing import List

from ..providers.base import PlaylistEntry, PlaylistSource
from .errors import CurationConfigError, PaginationError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 64


def fetch_all_entries(
    source: PlaylistSource,
    playlist_id: str,
    market: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    rng: random.Random | None = None,
) -> List[PlaylistEntry]:
    """Fetch every entry of a playlist and return them in random order.

    Pages are requested sequentially starting at offset 0. The offset advances
    by the number of entries actually returned, and only an empty page ends
    the loop (a short page is followed by one more request).

    Args:
        source: Playlist content source
        playlist_id: Provider playlist ID
        market: Optional market/region qualifier forwarded to the source
        page_size: Entries requested per page
        rng: Random generator used for the shuffle (module ``random`` if None)

    Returns:
        All entries of the playlist, shuffled once

    Raises:
        CurationConfigError: If page_size is not positive
        PaginationError: If the source returns more entries than requested
    """
    if page_size <= 0:
        raise CurationConfigError(f"page_size must be positive, got {page_size}")

    entries: List[PlaylistEntry] = []
    offset = 0
    while True:
        page = source.fetch_page(playlist_id, market, page_size, offset)
        logger.debug(f"Playlist {playlist_id} page fetched {len(page)} entries (offset={offset})")
        if not page:
            break
        if len(page) > page_size:
            raise PaginationError(
                f"Source returned {len(page)} entries for a page of {page_size} (offset={offset})"
            )
        entries.extend(page)
        offset += len(page)

    (rng or random).shuffle(entries)
    return entries


__all__ = ["fetch_all_entries", "DEFAULT_PAGE_SIZE"]
