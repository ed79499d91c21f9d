"""Typed configuration dataclasses for power-hour-curator.

Provides strongly-typed configuration objects that can be used throughout
the application for better type safety and IDE support.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any

from .curation.engine import CurationSettings
from .providers.spotify.auth import DEFAULT_CACHE_FILE, DEFAULT_REDIRECT_PATH, DEFAULT_REDIRECT_PORT, DEFAULT_SCOPE


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys a dataclass does not declare (e.g. stray env overrides)."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


@dataclass
class SpotifyConfig:
    """Spotify OAuth and API configuration."""
    client_id: str | None = None
    redirect_scheme: str = "http"
    redirect_host: str = "127.0.0.1"
    redirect_port: int = DEFAULT_REDIRECT_PORT
    redirect_path: str = DEFAULT_REDIRECT_PATH
    scope: str = DEFAULT_SCOPE
    cache_file: str = DEFAULT_CACHE_FILE
    cert_file: str | None = None
    key_file: str | None = None
    timeout_seconds: int = 300
    request_timeout: float = 30
    max_attempts: int = 1  # 1 = no retries

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProvidersConfig:
    """Configuration for all providers."""
    spotify: SpotifyConfig = field(default_factory=SpotifyConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {"spotify": self.spotify.to_dict()}


@dataclass
class CurationConfig:
    """Power-hour curation parameters."""
    page_size: int = 64
    min_track_duration_ms: int = 60000
    target_count: int = 60
    min_playlist_length: int = 60
    market: str | None = "US"

    def to_settings(self) -> CurationSettings:
        """Build validated engine settings.

        Raises:
            CurationConfigError: If any count is not positive
        """
        settings = CurationSettings(
            page_size=self.page_size,
            min_track_duration_ms=self.min_track_duration_ms,
            target_count=self.target_count,
            min_playlist_length=self.min_playlist_length,
        )
        settings.validate()
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PlaybackConfig:
    """Playback submission settings."""
    enabled: bool = True
    device_id: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    provider: str = "spotify"
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    curation: CurationConfig = field(default_factory=CurationConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary matching the load_config() layout."""
        return {
            "log_level": self.log_level,
            "provider": self.provider,
            "providers": self.providers.to_dict(),
            "curation": self.curation.to_dict(),
            "playback": self.playback.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create AppConfig from nested dictionary.

        Args:
            data: Nested config dict (from load_config())
        """
        provider_name = data.get("provider", "spotify")
        providers_data = data.get("providers", {})
        provider_config = providers_data.get(provider_name, {})

        return cls(
            log_level=data.get("log_level", "INFO"),
            provider=provider_name,
            providers=ProvidersConfig(spotify=SpotifyConfig(**_known(SpotifyConfig, provider_config))),
            curation=CurationConfig(**_known(CurationConfig, data.get("curation", {}))),
            playback=PlaybackConfig(**_known(PlaybackConfig, data.get("playback", {}))),
        )


__all__ = [
    "AppConfig",
    "ProvidersConfig",
    "SpotifyConfig",
    "CurationConfig",
    "PlaybackConfig",
]
