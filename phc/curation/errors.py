"""Exceptions raised by the curation engine.

Fetch failures are not wrapped: whatever the playlist source raises
reaches the caller unchanged.
"""


class CurationConfigError(ValueError):
    """Invalid curation parameter (non-positive page size, target count, ...)."""


class PaginationError(RuntimeError):
    """The playlist source broke the paging contract."""


__all__ = ["CurationConfigError", "PaginationError"]
