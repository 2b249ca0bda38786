"""
Shared test fixtures for rift-relay tests.
"""

import copy
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from rift_relay.config import get_config
from rift_relay.lcu.models import LCUCredentials


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing"""
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LIVE_POLL_INTERVAL_MS", "250")
    monkeypatch.setenv("LIVE_REQUEST_TIMEOUT_MS", "2000")
    monkeypatch.setenv("LCU_POLL_INTERVAL_MS", "1500")
    monkeypatch.delenv("LIVE_CLIENT_URL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)


@pytest.fixture
def clean_env(monkeypatch):
    """Environment with none of the relay's variables set"""
    for key in (
        "APP_ENV", "DEBUG", "LOG_LEVEL", "LOG_FILE", "LIVE_CLIENT_URL",
        "LIVE_POLL_INTERVAL_MS", "LIVE_REQUEST_TIMEOUT_MS", "LCU_POLL_INTERVAL_MS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def clear_config_cache():
    """Every test sees configuration loaded from its own environment"""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def sample_game_data():
    """Return a fresh copy of a full /allgamedata snapshot"""
    from tests.fixtures.sample_live_data import ALL_GAME_DATA
    return copy.deepcopy(ALL_GAME_DATA)


@pytest.fixture
def sample_champ_select():
    """Return a fresh copy of a champion select session"""
    from tests.fixtures.sample_live_data import CHAMP_SELECT_SESSION
    return copy.deepcopy(CHAMP_SELECT_SESSION)


@pytest.fixture
def lcu_credentials():
    """Credentials for a fake League Client"""
    return LCUCredentials(port=54321, password="test-token-abc", pid=4242)


@pytest.fixture
def mock_live_api():
    """Live Client API double; set get_all_game_data.side_effect per test"""
    api = AsyncMock()
    api.get_all_game_data.return_value = None
    return api
