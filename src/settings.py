"""Settings resolution for userdesk.

Precedence, highest first: command-line flags, environment variables,
the JSON settings file, built-in defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlparse

from constants import DEFAULT_API_URL, DEFAULT_TIMEOUT, ENV_API_URL, ENV_TIMEOUT
from errors import SettingsError

log = logging.getLogger(__name__)


def get_config_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the config directory using XDG Base Directory layout."""
    env = os.environ if env is None else env
    xdg_config = env.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config) / "userdesk"


def get_state_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the state directory (logs) using XDG Base Directory layout."""
    env = os.environ if env is None else env
    xdg_state = env.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    return Path(xdg_state) / "userdesk"


def _validate_url(value: Any) -> str:
    url = str(value).strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise SettingsError(f"Invalid API URL: {url!r} (expected http(s)://host[:port])")
    return url.rstrip("/")


def _validate_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"Invalid timeout: {value!r}") from e
    if timeout <= 0:
        raise SettingsError(f"Timeout must be positive, got {timeout}")
    return timeout


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Settings":
        """Create Settings from raw settings-file data, defaulting missing keys."""
        unknown = set(data) - {"api_url", "timeout"}
        if unknown:
            log.warning(f"Ignoring unknown settings: {', '.join(sorted(unknown))}")
        return Settings(
            api_url=_validate_url(data.get("api_url", DEFAULT_API_URL)),
            timeout=_validate_timeout(data.get("timeout", DEFAULT_TIMEOUT)),
        )


def load_settings_file(path: Path) -> dict[str, Any]:
    """Read the JSON settings file. A missing file yields no settings."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Could not read settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a JSON object")
    return data


def resolve_settings(
    api_url: str | None = None,
    timeout: float | None = None,
    env: Mapping[str, str] | None = None,
    settings_path: Path | None = None,
) -> Settings:
    """Merge flags, environment and settings file into a Settings.

    Args:
        api_url: --api-url flag value, if given
        timeout: --timeout flag value, if given
        env: Environment mapping (defaults to os.environ)
        settings_path: Settings file (defaults to <config dir>/settings.json)
    """
    env = os.environ if env is None else env
    path = settings_path or get_config_dir(env) / "settings.json"
    merged: dict[str, Any] = load_settings_file(path)

    if env.get(ENV_API_URL):
        merged["api_url"] = env[ENV_API_URL]
    if env.get(ENV_TIMEOUT):
        merged["timeout"] = env[ENV_TIMEOUT]
    if api_url is not None:
        merged["api_url"] = api_url
    if timeout is not None:
        merged["timeout"] = timeout

    settings = Settings.from_dict(merged)
    log.debug(f"Resolved settings: {settings}")
    return settings
