# tests/conftest.py
import pytest
from unittest.mock import MagicMock
from pathlib import Path

# Importing the Settings class does not trigger validation; only instantiating it does.
from boxfolders.config import Settings, get_settings
from boxfolders.folders import FoldersManager
from boxfolders.transport.base import HTTPClient


@pytest.fixture
def mock_settings():
    """
    Provides a mock of the client settings for testing.
    This avoids the need for environment variables during tests.
    """
    settings = MagicMock(spec=Settings)
    settings.BOX_API_BASE_URL = "https://api.box.com/2.0"
    settings.BOX_ACCESS_TOKEN = "test_token"
    settings.BOX_TOKEN_FILE = ".box.token"
    settings.BOX_REQUEST_TIMEOUT = 30.0
    settings.BOX_USER_AGENT = "boxfolders-tests"
    settings.LOG_LEVEL = "INFO"
    settings.BASE_DIR = Path("/tmp")
    settings.LOG_FILE = Path("/tmp/boxfolders.log")
    return settings


@pytest.fixture(autouse=True)
def patch_settings_class(monkeypatch, mock_settings):
    """
    This autouse fixture replaces the `Settings` class constructor.
    Any code that calls `Settings()` during a test run receives the
    `mock_settings` instance, so no real settings are ever loaded.
    """
    # get_settings may have cached a real instance during collection.
    get_settings.cache_clear()
    monkeypatch.setattr("boxfolders.config.Settings", lambda *args, **kwargs: mock_settings)
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_client():
    """
    Fixture for a mock HTTP client. The default handler is a pass-through,
    so each verb's return_value is what the manager operation returns.
    """
    client = MagicMock(spec=HTTPClient)
    client.wrap_with_default_handler.side_effect = lambda method: method
    return client


@pytest.fixture
def manager(mock_client):
    """Fixture for a FoldersManager backed by the mock HTTP client."""
    return FoldersManager(mock_client)
