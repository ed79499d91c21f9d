"""Provider abstraction layer.

This module defines provider-neutral domain models and abstract interfaces
so the curation engine never touches provider payloads directly.

Key abstractions:
- Domain models: Track, Episode, PlaylistEntry, Playlist
- PlaylistSource: the paginated content source the curation engine reads
- AuthProvider: OAuth/authentication interface
- Provider: Complete provider factory
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Protocol, Dict, Any, Union

# ---------------- Domain Models -----------------


class MediaKind(str, Enum):
    """Tag carried by every media item; eligibility branches on it."""
    TRACK = "track"
    EPISODE = "episode"


@dataclass(frozen=True)
class Track:
    name: str
    track_id: str | None  # None for local-only files
    artists: tuple[str, ...]
    duration_ms: int
    is_playable: bool | None = None  # None when the provider did not say
    kind: MediaKind = field(default=MediaKind.TRACK, init=False)

    @property
    def artist_line(self) -> str:
        return ", ".join(self.artists)


@dataclass(frozen=True)
class Episode:
    name: str = ""
    episode_id: str | None = None
    kind: MediaKind = field(default=MediaKind.EPISODE, init=False)


MediaItem = Union[Track, Episode]


@dataclass(frozen=True)
class PlaylistEntry:
    """One slot in a playlist.

    ``item`` is None when the referenced media was removed from the catalog
    or is otherwise unavailable.
    """
    item: MediaItem | None
    is_local: bool = False
    position: int = 0


@dataclass(frozen=True)
class Playlist:
    playlist_id: str
    name: str
    track_total: int  # declared count, not verified against entries
    owner_id: str | None = None
    owner_name: str | None = None
    provider: str = "spotify"


# ---------------- Content source -----------------


class PlaylistSource(Protocol):
    """Remote source of playlist contents.

    ``fetch_page`` must support offset pagination with a caller-supplied page
    size and must return an empty sequence (not raise) once ``offset`` is past
    the end of the playlist. Any other failure is raised to the caller.
    """

    def fetch_page(
        self, playlist_id: str, market: str | None, limit: int, offset: int
    ) -> Sequence[PlaylistEntry]:
        ...  # pragma: no cover

    def list_candidate_playlists(self, user_id: str | None = None) -> Sequence[Playlist]:
        ...  # pragma: no cover

    def submit_playback(self, track_ids: Sequence[str], device_id: str | None = None) -> None:
        ...  # pragma: no cover


# ---------------- Link Generator (for web URLs) -----------------


class ProviderLinkGenerator(Protocol):
    """Protocol for generating web links to provider resources."""

    def track_url(self, track_id: str) -> str:
        """Generate URL for a track page."""
        ...  # pragma: no cover

    def playlist_url(self, playlist_id: str) -> str:
        """Generate URL for a playlist page."""
        ...  # pragma: no cover


# ---------------- Authentication Provider -----------------


class AuthProvider(ABC):
    """Abstract authentication provider interface.

    Handles OAuth flows, token acquisition, refresh, and caching.
    """

    @abstractmethod
    def get_token(self, force: bool = False) -> Dict[str, Any]:
        """Get valid access token, potentially triggering OAuth flow.

        Args:
            force: Force full re-authentication even if cached token exists

        Returns:
            Token dict with at least 'access_token' and 'expires_at' keys

        Raises:
            RuntimeError: If authentication fails
        """

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear cached credentials/tokens."""

    @abstractmethod
    def build_redirect_uri(self) -> str:
        """Build the OAuth redirect URI for this provider."""


# ---------------- Provider Factory (Complete Provider) -----------------


class Provider(ABC):
    """Complete provider abstraction with auth + client factory.

    Example:
        provider = get_provider_instance('spotify')
        provider.validate_config(config['providers']['spotify'])
        auth = provider.create_auth(config['providers']['spotify'])
        token = auth.get_token()
        source = provider.create_client(token['access_token'])
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'spotify')."""

    @abstractmethod
    def create_auth(self, config: Dict[str, Any]) -> AuthProvider:
        """Create authentication provider from configuration.

        Raises:
            ValueError: If config is invalid
        """

    @abstractmethod
    def create_client(self, access_token: str, config: Dict[str, Any] | None = None) -> PlaylistSource:
        """Create API client (a PlaylistSource) for an access token."""

    @abstractmethod
    def validate_config(self, config: Dict[str, Any]) -> None:
        """Validate provider-specific configuration.

        Raises:
            ValueError: If required config keys missing or invalid
        """

    @abstractmethod
    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values for this provider."""

    @abstractmethod
    def get_link_generator(self) -> ProviderLinkGenerator:
        """Get link generator for this provider."""


# ---------------- Provider instance registry -----------------

_provider_instances: dict[str, Provider] = {}


def register_provider(provider: Provider) -> None:
    """Register a provider instance."""
    _provider_instances[provider.name] = provider


def get_provider_instance(name: str) -> Provider:
    """Get registered provider instance by name.

    Raises:
        KeyError: If provider not registered
    """
    return _provider_instances[name]


def available_provider_instances() -> list[str]:
    """Get list of available provider instance names."""
    return sorted(_provider_instances.keys())


__all__ = [
    'MediaKind', 'Track', 'Episode', 'MediaItem', 'PlaylistEntry', 'Playlist',
    'PlaylistSource', 'ProviderLinkGenerator', 'AuthProvider', 'Provider',
    'register_provider', 'get_provider_instance', 'available_provider_instances',
]
