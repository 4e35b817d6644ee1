"""Shared test fixtures."""

import sys
from pathlib import Path

import pytest
import respx

# Add src/ to path so tests can import climatecom
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from climatecom.core.config import ConfigStore, Settings  # noqa: E402

BASE_URL = "https://platform.climate.com"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real config file and CLIMATECOM_* variables."""
    for var in ("API_KEY", "CLIENT_ID", "CLIENT_SECRET", "ACCESS_TOKEN", "TOKEN_EXPIRY", "BASE_URL"):
        monkeypatch.delenv(f"CLIMATECOM_{var}", raising=False)
    config_dir = tmp_path / "config"
    monkeypatch.setenv("CLIMATECOM_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def mock_climate():
    """Mock Climate FieldView API responses."""
    with respx.mock(base_url=BASE_URL) as mock:
        yield mock


@pytest.fixture
def settings():
    """Settings with a test API key."""
    return Settings(api_key="test-key")


@pytest.fixture
def config_path(isolated_config):
    return isolated_config / "config.json"


@pytest.fixture
def store(config_path):
    """Config store with an API key set."""
    config = ConfigStore(config_path)
    config.set("api_key", "test-key")
    return config


@pytest.fixture
def empty_store(config_path):
    """Config store with nothing set."""
    return ConfigStore(config_path)


@pytest.fixture
def sample_fields_response():
    """Sample fields list response wrapped in a results envelope."""
    return {
        "results": [
            {
                "id": "b2a6e1c4-7f3d-4c1e-9a55-2f0d8e3b6a71",
                "name": "North Field",
                "acres": 120.5,
                "farmName": "Home Farm",
            },
            {
                "id": "c93f0d12-5e8b-4a67-b1d4-6e2a9c7f0b38",
                "name": "River Bottom",
                "acres": 64,
                "farmName": "Home Farm",
            },
        ]
    }


@pytest.fixture
def sample_harvest_response():
    """Sample harvest activity summary."""
    return {
        "id": "h-2025-001",
        "fieldName": "North Field",
        "crop": "CORN",
        "startTime": "2025-10-03T14:30:00Z",
        "area": 118.25,
    }
