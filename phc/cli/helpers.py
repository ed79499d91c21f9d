from __future__ import annotations
import copy
import click

from ..config import load_typed_config
from ..version import __version__
from ..providers import get_provider_instance


def get_provider_config(cfg: dict, provider_name: str | None = None) -> dict:
    """Get provider configuration from config dict.

    Args:
        cfg: Full configuration dict
        provider_name: Provider name (defaults to cfg['provider'])
    """
    if provider_name is None:
        provider_name = cfg.get('provider', 'spotify')

    providers = cfg.get('providers', {})
    return providers.get(provider_name, {})


def require_client_id(cfg: dict) -> dict:
    """Return the active provider config, failing if no client_id is set."""
    provider = cfg.get('provider', 'spotify')
    provider_cfg = get_provider_config(cfg, provider)
    if not provider_cfg.get('client_id'):
        raise click.UsageError(
            f'providers.{provider}.client_id not configured '
            f'(set PHC__PROVIDERS__{provider.upper()}__CLIENT_ID)'
        )
    return provider_cfg


def _redact_spotify_config(cfg: dict) -> dict:
    result = copy.deepcopy(cfg)
    providers = result.get('providers', {})
    if 'spotify' in providers and isinstance(providers['spotify'], dict):
        if providers['spotify'].get('client_id'):
            providers['spotify']['client_id'] = '*** redacted ***'
    return result


@click.group()
@click.version_option(version=__version__, prog_name="power-hour-curator")
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False), default=None, help='Override configured log level')
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """Pick a random power hour (60 one-minute segments) from a Spotify playlist.

    \b
    TYPICAL WORKFLOW:

    \b
    Initial Setup:
      phc login              # Authenticate with Spotify
      phc playlists          # Show playlists long enough for a session

    \b
    Power Hour:
      phc curate             # Choose a playlist interactively and play
      phc curate PLAYLIST_ID --no-play   # Only print the chosen tracks

    \b
    Configuration is read from PHC__* environment variables or a .env file,
    e.g. PHC__PROVIDERS__SPOTIFY__CLIENT_ID, PHC__CURATION__TARGET_COUNT.
    """
    if not isinstance(ctx.obj, dict):
        overrides = {'log_level': log_level.upper()} if log_level else None
        ctx.obj = load_typed_config(overrides).to_dict()


def build_auth(cfg):
    """Build authentication provider from config.

    Args:
        cfg: Full configuration dict with providers configuration

    Returns:
        AuthProvider instance
    """
    provider_config = get_provider_config(cfg)
    provider = get_provider_instance(cfg.get('provider', 'spotify'))
    provider.validate_config(provider_config)
    return provider.create_auth(provider_config)


__all__ = ["cli", "build_auth", "get_provider_config", "require_client_id", "_redact_spotify_config"]
