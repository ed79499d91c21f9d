"""CLI smoke tests driven through click's CliRunner with an in-memory source."""

import json
from pathlib import Path

import pytest
import requests
from click.testing import CliRunner

from phc.cli import cli
from phc.cli import curate_cmds
from phc.version import __version__
from tests.mocks.fake_source import FakePlaylistSource, make_entry, make_track, track_entries


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def patch_source(monkeypatch):
    """Replace provider authentication with a given fake source."""
    opened = []

    def install(source):
        def fake_open(provider, provider_config, force_auth=False):
            opened.append((provider, provider_config.get('client_id'), force_auth))
            return source
        monkeypatch.setattr(curate_cmds, "open_source", fake_open)
        return opened

    return install


def test_cli_version(runner):
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert 'power-hour-curator' in result.output.lower()
    assert __version__ in result.output


def test_help_lists_commands(runner):
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    for command in ["config", "curate", "login", "logout", "playlists", "providers", "redirect-uri", "token-info"]:
        assert command in result.output


def test_config_section(runner, test_config):
    result = runner.invoke(cli, ['config', '--section', 'curation'], obj=test_config)
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"curation": test_config["curation"]}


def test_config_redacts_client_id(runner, test_config):
    result = runner.invoke(cli, ['config', '--redact'], obj=test_config)
    assert result.exit_code == 0
    assert 'test-client' not in result.output
    assert '*** redacted ***' in result.output


def test_redirect_uri(runner, test_config):
    result = runner.invoke(cli, ['redirect-uri'], obj=test_config)
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "http://127.0.0.1:8888/callback"


def test_token_info_without_cache(runner, test_config):
    result = runner.invoke(cli, ['token-info'], obj=test_config)
    assert result.exit_code == 0
    assert "Token cache not found" in result.output


def test_curate_with_playlist_id_no_play(runner, test_config, patch_source):
    source = FakePlaylistSource(entries=track_entries(80, artists=("A", "B")))
    patch_source(source)

    result = runner.invoke(cli, ['curate', 'pl1', '--no-play'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert result.output.count(" - A, B") == 60
    assert "60/60 segments" in result.output
    assert source.played == []
    assert {c[1] for c in source.calls} == {"US"}


def test_curate_interactive_choice_and_play(runner, test_config, patch_source, sample_playlists):
    source = FakePlaylistSource(entries=track_entries(70), playlists=sample_playlists)
    opened = patch_source(source)

    result = runner.invoke(cli, ['curate', '--device', 'dev9'], obj=test_config, input="2\n")

    assert result.exit_code == 0, result.output
    assert "> 1. Party (80)" in result.output
    assert "> 2. Exactly Sixty (60)" in result.output
    assert "Short Mix" not in result.output
    assert opened == [("spotify", "test-client", False)]
    assert len(source.played) == 1
    track_ids, device = source.played[0]
    assert len(track_ids) == 60
    assert device == "dev9"
    assert "Playing 60 tracks" in result.output


def test_curate_target_and_market_overrides(runner, test_config, patch_source):
    source = FakePlaylistSource(entries=track_entries(30))
    patch_source(source)

    result = runner.invoke(cli, ['curate', 'pl1', '--target', '10', '--market', 'none', '--no-play'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert "10/10 segments" in result.output
    assert {c[1] for c in source.calls} == {None}


def test_curate_fetch_failure_aborts_playback(runner, test_config, patch_source):
    source = FakePlaylistSource(entries=track_entries(100), fail_at_offset=64,
                                error=requests.ConnectionError("connection reset"))
    patch_source(source)

    result = runner.invoke(cli, ['curate', 'pl1'], obj=test_config)

    assert result.exit_code == 1
    assert "Failed to fetch playlist" in result.output
    assert source.played == []


def test_curate_empty_result_skips_playback(runner, test_config, patch_source):
    source = FakePlaylistSource(entries=[make_entry(make_track(duration_ms=10_000)), make_entry(None)])
    patch_source(source)

    result = runner.invoke(cli, ['curate', 'pl1'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert "nothing to play" in result.output
    assert source.played == []


def test_curate_rejects_invalid_target(runner, test_config, patch_source):
    source = FakePlaylistSource(entries=track_entries(10))
    patch_source(source)

    result = runner.invoke(cli, ['curate', 'pl1', '--target', '0'], obj=test_config)

    assert result.exit_code == 2
    assert "target_count" in result.output
    assert source.calls == []


def test_curate_requires_client_id(runner, test_config):
    test_config['providers']['spotify']['client_id'] = None

    result = runner.invoke(cli, ['curate', 'pl1'], obj=test_config)

    assert result.exit_code == 2
    assert "client_id not configured" in result.output


def test_playlists_lists_candidates(runner, test_config, patch_source, sample_playlists):
    patch_source(FakePlaylistSource(playlists=sample_playlists))

    result = runner.invoke(cli, ['playlists', '--show-urls'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert "pl_party" in result.output
    assert "pl_short" not in result.output
    assert "https://open.spotify.com/playlist/pl_exact" in result.output
    assert "Total: 2 playlists" in result.output


def test_curate_oversized_page_reports_error(runner, test_config, patch_source):
    source = FakePlaylistSource(entries=track_entries(100), ignore_limit=80)
    patch_source(source)

    result = runner.invoke(cli, ['curate', 'pl1', '--no-play'], obj=test_config)

    assert result.exit_code == 1
    assert "Failed to fetch playlist" in result.output
    assert "80 entries for a page of 64" in result.output
    assert source.played == []


@pytest.mark.parametrize("error", [
    RuntimeError("Spotify authorization state mismatch"),
    TimeoutError("Authorization timeout expired."),
    requests.HTTPError("400 Error"),
])
def test_curate_reports_authentication_failure(runner, test_config, monkeypatch, error):
    def failing_open(provider, provider_config, force_auth=False):
        raise error

    monkeypatch.setattr(curate_cmds, "open_source", failing_open)

    result = runner.invoke(cli, ['curate', 'pl1'], obj=test_config)

    assert result.exit_code == 1
    assert "Authentication failed" in result.output
    assert str(error) in result.output


def test_curate_uses_configured_norwegian_market(runner, test_config, patch_source):
    test_config['curation']['market'] = 'NO'
    source = FakePlaylistSource(entries=track_entries(5))
    patch_source(source)

    result = runner.invoke(cli, ['curate', 'pl1', '--no-play'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert {c[1] for c in source.calls} == {"NO"}


def test_curate_show_urls(runner, test_config, patch_source):
    source = FakePlaylistSource(entries=[make_entry(make_track(track_id="abc"))])
    patch_source(source)

    result = runner.invoke(cli, ['curate', 'pl1', '--no-play', '--show-urls'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert "https://open.spotify.com/track/abc" in result.output


def test_logout_removes_token_cache(runner, test_config):
    cache = Path(test_config['providers']['spotify']['cache_file'])
    cache.write_text('{"access_token": "x"}', encoding='utf-8')

    result = runner.invoke(cli, ['logout'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert "Removed token cache" in result.output
    assert not cache.exists()


def test_logout_without_cache(runner, test_config):
    result = runner.invoke(cli, ['logout'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert "No token cache" in result.output


def test_providers_lists_registered(runner, test_config):
    result = runner.invoke(cli, ['providers'], obj=test_config)

    assert result.exit_code == 0, result.output
    assert "* spotify" in result.output
    assert "http://127.0.0.1:8888/callback" in result.output
