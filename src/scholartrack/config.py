"""Configuration loading for ScholarTrack.

Settings come from an optional YAML file and the process environment; the
environment wins. Remote store credentials are optional here: without them
the remote client is not constructed.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_BASE_URL = "https://api.apper.io/v1"
DEFAULT_DB_PATH = "scholartrack.db"
DEFAULT_PAGE_SIZE = 10
DEFAULT_TIMEOUT = 30.0

# Environment variable -> settings key
ENV_VARS = {
    "APPER_PROJECT_ID": "project_id",
    "APPER_PUBLIC_KEY": "public_key",
    "APPER_BASE_URL": "base_url",
    "SCHOLARTRACK_DB_PATH": "db_path",
    "SCHOLARTRACK_PAGE_SIZE": "page_size",
    "SCHOLARTRACK_REQUEST_TIMEOUT": "request_timeout",
}


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass
class RemoteSettings:
    """Connection settings for the hosted record store."""

    project_id: str | None = None
    public_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_TIMEOUT

    @property
    def has_credentials(self) -> bool:
        return bool(self.project_id) and bool(self.public_key)


@dataclass
class Settings:
    """ScholarTrack application settings."""

    remote: RemoteSettings = field(default_factory=RemoteSettings)
    db_path: str = DEFAULT_DB_PATH
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        """Create settings from a flat mapping.

        Args:
            data: Mapping using the settings keys from ENV_VARS.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If a numeric value cannot be parsed.
        """
        page_size = _parse_number(data, "page_size", int, DEFAULT_PAGE_SIZE)
        if page_size < 1:
            raise ConfigError(f"page_size must be at least 1, got {page_size}")

        remote = RemoteSettings(
            project_id=data.get("project_id") or None,
            public_key=data.get("public_key") or None,
            base_url=data.get("base_url") or DEFAULT_BASE_URL,
            request_timeout=_parse_number(data, "request_timeout", float, DEFAULT_TIMEOUT),
        )

        return cls(
            remote=remote,
            db_path=data.get("db_path") or DEFAULT_DB_PATH,
            page_size=page_size,
        )


def _parse_number(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None or value == "":
        return default
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from e


def load_settings(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from an optional YAML file, overridden by the environment.

    Args:
        config_path: Path to a YAML file with settings keys at the top level.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Parsed settings.

    Raises:
        ConfigError: If the file is missing or invalid, or a value is malformed.
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        try:
            with open(config_path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Configuration must be a YAML mapping, got {type(loaded).__name__}"
            )
        data.update(loaded)

    env = os.environ if environ is None else environ
    for var, key in ENV_VARS.items():
        if env.get(var):
            data[key] = env[var]

    return Settings.from_dict(data)
