"""Persistent CLI configuration.

Settings are declared once on a pydantic-settings model. Values set through
`climatecom config set` are written to a JSON file; environment variables
prefixed with CLIMATECOM_ fill in anything the file does not hold.
"""

import json
import os
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from climatecom.core.errors import ConfigurationError

DEFAULT_BASE_URL = "https://platform.climate.com"

# Tokens expiring within this window are treated as already expired
TOKEN_EXPIRY_MARGIN_MS = 60_000


def get_config_dir() -> Path:
    """Get the configuration directory.

    Uses CLIMATECOM_CONFIG_DIR when set, otherwise ~/.config/climatecom.
    """
    override = os.getenv("CLIMATECOM_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".config" / "climatecom"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CLIMATECOM_",
        extra="ignore",
    )

    # Climate FieldView API key / access token, sent as the bearer token
    api_key: str = ""

    # OAuth client credentials
    client_id: str = ""
    client_secret: str = ""

    # Cached OAuth token and its expiry (epoch milliseconds)
    access_token: str = ""
    token_expiry: int = 0

    base_url: str = DEFAULT_BASE_URL


class ConfigStore:
    """Key/value settings persisted to a JSON file."""

    def __init__(self, path: Path | None = None):
        self.path = path or get_config_dir() / "config.json"
        self._data = self._load()
        self._settings = self._build(self._data)

    @property
    def settings(self) -> Settings:
        return self._settings

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Could not read config file {self.path}: {e.strerror}") from e
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Config file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {self.path} must contain a JSON object")
        return {k: v for k, v in data.items() if k in Settings.model_fields}

    def _save(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            # File holds credentials
            self.path.chmod(0o600)
        except OSError as e:
            raise ConfigurationError(f"Could not write config file {self.path}: {e.strerror}") from e

    @staticmethod
    def _build(data: dict[str, Any]) -> Settings:
        try:
            return Settings(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _check_key(key: str) -> None:
        if key not in Settings.model_fields:
            raise KeyError(f"Unknown config key: {key}")

    def get(self, key: str) -> Any:
        """Get a setting's current value, or its default."""
        self._check_key(key)
        return getattr(self._settings, key)

    def set(self, key: str, value: Any) -> None:
        """Set a setting and persist it."""
        self._check_key(key)
        data = {**self._data, key: value}
        settings = self._build(data)
        # Store the coerced value, not the raw input
        data[key] = getattr(settings, key)
        self._save(data)
        self._data = data
        self._settings = settings

    def get_all(self) -> dict[str, Any]:
        return self._settings.model_dump()

    def clear(self) -> None:
        """Reset all settings to their defaults."""
        self._save({})
        self._data = {}
        self._settings = self._build(self._data)

    def is_configured(self) -> bool:
        return bool(self._settings.api_key)

    def has_valid_token(self, now_ms: int | None = None) -> bool:
        """Check for an access token that won't expire in the next minute."""
        if not self._settings.access_token:
            return False
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return self._settings.token_expiry > now_ms + TOKEN_EXPIRY_MARGIN_MS
