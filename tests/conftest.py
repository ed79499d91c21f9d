"""Pytest fixtures for test configuration.

Global test safety measures:
 - PHC__TEST__MODE=1 short-circuits real Spotify HTTP calls
 - webbrowser.open is replaced with a no-op to guard against accidental auth flows
"""
import os
import webbrowser
from pathlib import Path
from typing import Any, Dict

import pytest


def pytest_sessionstart(session):  # type: ignore[no-untyped-def]
    os.environ.setdefault('PHC__TEST__MODE', '1')
    webbrowser.open = lambda *a, **k: True  # type: ignore[assignment]


from .mocks.fixtures import *  # noqa: E402,F401,F403


@pytest.fixture
def test_config(tmp_path: Path) -> Dict[str, Any]:
    """Provide a complete test configuration as a dict.

    Tests pass it to the CLI via ``obj=`` rather than setting environment
    variables. Paths are isolated to tmp_path.
    """
    from phc.config_types import AppConfig

    cfg = AppConfig().to_dict()
    cfg['log_level'] = 'DEBUG'
    cfg['providers']['spotify']['client_id'] = 'test-client'
    cfg['providers']['spotify']['cache_file'] = str(tmp_path / 'tokens.json')
    return cfg
