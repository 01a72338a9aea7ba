"""Configuration management for wolf-inv.

Reads the ``apiBaseURL`` / ``apiToken`` JSON document, with .env file
support and environment variable overrides.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import platformdirs
from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "wolf-inv"
CONFIG_FILENAME = "config.json"

ENV_CONFIG_PATH = "WOLF_INV_CONFIG"
ENV_API_BASE_URL = "WOLF_INV_API_BASE_URL"
ENV_API_TOKEN = "WOLF_INV_API_TOKEN"


@dataclass(frozen=True)
class WolfConfig:
    """Inventory service configuration, immutable for the session."""

    api_base_url: str
    api_token: str = ""
    source: Optional[Path] = None

    @property
    def inventory_url(self) -> str:
        """Listing endpoint."""
        return f"{self.api_base_url}/inventory"

    @property
    def report_url(self) -> str:
        """Create-or-update endpoint."""
        return f"{self.api_base_url}/report"

    def validate(self) -> list[str]:
        """Validate required configuration fields.

        Returns:
            List of validation error messages, empty if valid.
        """
        errors = []
        if not self.api_base_url:
            errors.append("apiBaseURL is required")
        elif not self.api_base_url.startswith(("http://", "https://")):
            errors.append(f"apiBaseURL must be an http(s) URL, got {self.api_base_url!r}")
        return errors


def get_config_dir() -> Path:
    """Get the platform-specific config directory."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def find_config_path(explicit: Optional[Path] = None) -> Path:
    """Resolve which configuration file to read.

    Lookup order: explicit path, ``WOLF_INV_CONFIG``, ``./config.json``,
    then the user config directory. An explicit or environment-provided
    path is returned even if it does not exist, so the caller reports it.
    """
    if explicit is not None:
        return explicit

    from_env = os.environ.get(ENV_CONFIG_PATH)
    if from_env:
        return Path(from_env)

    local = Path.cwd() / CONFIG_FILENAME
    if local.exists():
        return local

    return get_config_dir() / CONFIG_FILENAME


def load_config(path: Optional[Path] = None, env_file: Optional[Path] = None) -> WolfConfig:
    """Load configuration from disk and environment.

    Args:
        path: Config file to read. Resolved with ``find_config_path`` if None.
        env_file: .env file to load first. Defaults to ``./.env``.

    Returns:
        Validated WolfConfig.

    Raises:
        ConfigError: If the file is missing, unparseable or invalid.
    """
    load_dotenv(env_file or Path.cwd() / ".env")

    config_path = find_config_path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"could not open {config_path}. Please create one") from None
    except OSError as e:
        raise ConfigError(f"could not read {config_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"could not parse {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"could not parse {config_path}: expected a JSON object")

    base_url = os.environ.get(ENV_API_BASE_URL) or data.get("apiBaseURL") or ""
    token = os.environ.get(ENV_API_TOKEN) or data.get("apiToken") or ""
    if not isinstance(base_url, str) or not isinstance(token, str):
        raise ConfigError(f"could not parse {config_path}: apiBaseURL and apiToken must be strings")

    config = WolfConfig(
        api_base_url=base_url.strip().rstrip("/"),
        api_token=token.strip(),
        source=config_path,
    )

    errors = config.validate()
    if errors:
        raise ConfigError(f"invalid configuration in {config_path}: {'; '.join(errors)}")

    logger.debug(f"Loaded config from {config_path}")
    return config
