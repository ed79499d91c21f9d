"""Spotify provider package.

This package contains all Spotify-specific logic:
- auth.py: OAuth authentication
- client.py: API client (PlaylistSource implementation)
- parsing.py: Web API payloads to domain models
- provider.py: Complete Spotify provider implementation

Other parts of the codebase should use the Provider interface from
phc.providers.base instead of direct imports.
"""

from .auth import SpotifyAuthProvider
from .client import SpotifyAPIClient
from .parsing import parse_playlist_item, parse_playlist_summary
from .provider import SpotifyProvider, SpotifyLinkGenerator

__all__ = [
    "SpotifyAuthProvider",
    "SpotifyAPIClient",
    "SpotifyProvider",
    "SpotifyLinkGenerator",
    "parse_playlist_item",
    "parse_playlist_summary",
]
