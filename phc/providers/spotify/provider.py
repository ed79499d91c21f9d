"""Spotify provider implementation.

Complete Spotify provider that implements the Provider interface.
Handles authentication, client creation, configuration validation, and link generation.
"""

from __future__ import annotations
from typing import Dict, Any
from ..base import Provider, AuthProvider, PlaylistSource, ProviderLinkGenerator
from .auth import (
    SpotifyAuthProvider, DEFAULT_CACHE_FILE, DEFAULT_REDIRECT_PATH, DEFAULT_REDIRECT_PORT, DEFAULT_SCOPE,
)
from .client import SpotifyAPIClient


class SpotifyLinkGenerator:
    """Generates Spotify web URLs for tracks and playlists."""

    def track_url(self, track_id: str) -> str:
        return f"https://open.spotify.com/track/{track_id}"

    def playlist_url(self, playlist_id: str) -> str:
        return f"https://open.spotify.com/playlist/{playlist_id}"


class SpotifyProvider(Provider):
    """Spotify streaming provider implementation.

    Provides factory methods for creating Spotify auth and client instances,
    validates configuration, and provides default config values.
    """

    @property
    def name(self) -> str:
        return "spotify"

    def create_auth(self, config: Dict[str, Any]) -> AuthProvider:
        """Create Spotify authentication provider.

        Args:
            config: Spotify configuration dict; keys missing from it fall back
                to :meth:`get_default_config`:
                - client_id: Spotify application client ID (required)
                - redirect_scheme / redirect_host / redirect_port / redirect_path
                - cache_file: Token cache file path
                - scope: OAuth scope (playlist read + playback control)
                - cert_file / key_file: TLS files for an https redirect
                - timeout_seconds: OAuth timeout

        Raises:
            ValueError: If required config missing
        """
        if 'client_id' not in config:
            raise ValueError("Spotify config missing required field: client_id")

        settings = {**self.get_default_config(), **{k: v for k, v in config.items() if v is not None}}
        return SpotifyAuthProvider(
            client_id=config['client_id'],
            redirect_port=settings['redirect_port'],
            scope=settings['scope'],
            cache_file=settings['cache_file'],
            redirect_path=settings['redirect_path'],
            redirect_scheme=settings['redirect_scheme'],
            redirect_host=settings['redirect_host'],
            cert_file=config.get('cert_file'),
            key_file=config.get('key_file'),
            timeout_seconds=settings['timeout_seconds'],
        )

    def create_client(self, access_token: str, config: Dict[str, Any] | None = None) -> PlaylistSource:
        """Create Spotify API client.

        Args:
            access_token: Valid Spotify OAuth access token
            config: Optional Spotify config supplying request_timeout / max_attempts
        """
        config = config or {}
        return SpotifyAPIClient(
            access_token,
            request_timeout=config.get('request_timeout', 30),
            max_attempts=config.get('max_attempts', 1),
        )

    def validate_config(self, config: Dict[str, Any]) -> None:
        """Validate Spotify configuration.

        Raises:
            ValueError: If required fields missing or invalid
        """
        if 'client_id' not in config:
            raise ValueError("Spotify config missing required field: client_id")

        if 'redirect_port' in config:
            port = config['redirect_port']
            if not isinstance(port, int) or port < 1 or port > 65535:
                raise ValueError(f"Invalid redirect_port: {port}. Must be integer 1-65535")

        if 'redirect_scheme' in config:
            scheme = config['redirect_scheme']
            if scheme not in ('http', 'https'):
                raise ValueError(f"Invalid redirect_scheme: {scheme}. Must be 'http' or 'https'")

        if 'timeout_seconds' in config:
            timeout = config['timeout_seconds']
            if not isinstance(timeout, int) or timeout < 1:
                raise ValueError(f"Invalid timeout_seconds: {timeout}. Must be positive integer")

        if 'max_attempts' in config:
            attempts = config['max_attempts']
            if not isinstance(attempts, int) or isinstance(attempts, bool) or attempts < 1:
                raise ValueError(f"Invalid max_attempts: {attempts}. Must be positive integer")

    def get_default_config(self) -> Dict[str, Any]:
        """Get default Spotify configuration (client_id must be provided by user)."""
        return {
            'redirect_port': DEFAULT_REDIRECT_PORT,
            'redirect_scheme': 'http',
            'redirect_host': '127.0.0.1',
            'redirect_path': DEFAULT_REDIRECT_PATH,
            'cache_file': DEFAULT_CACHE_FILE,
            'scope': DEFAULT_SCOPE,
            'timeout_seconds': 300,
            'request_timeout': 30,
            'max_attempts': 1,
        }

    def get_link_generator(self) -> ProviderLinkGenerator:
        return SpotifyLinkGenerator()


__all__ = ["SpotifyProvider", "SpotifyLinkGenerator"]
