"""Configuration loading with XDG paths and precedence resolution.

This module turns defaults, config files, environment variables, and CLI
flags into one validated :class:`~ccstatus.models.Settings` object:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.ccstatus/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Config files** -- an optional user file (``<config_dir>/config.json``)
  and an optional project file (``./ccstatus.config.json`` or
  ``./.ccstatus.json``, first match wins). Both use the nested layout of
  :class:`~ccstatus.models.Settings`::

      {"api": {"timeout": 5}, "cache": {"ttl_seconds": 120}}

* **Environment variables** -- ``CCSTATUS_*`` overrides, see
  :data:`ENV_MAPPING`.
* **Validation** -- any invalid JSON, unknown key, or out-of-range value
  raises :class:`~ccstatus.exceptions.ConfigError` before a single request
  is made.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from ccstatus.exceptions import ConfigError
from ccstatus.models import Settings

_APP_NAME = "ccstatus"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAMES = ("ccstatus.config.json", ".ccstatus.json")

ENV_MAPPING: dict[str, tuple[str, str]] = {
    "CCSTATUS_API_BASE_URL": ("api", "base_url"),
    "CCSTATUS_API_TIMEOUT": ("api", "timeout"),
    "CCSTATUS_MAX_RETRIES": ("api", "max_retries"),
    "CCSTATUS_RETRY_DELAY": ("api", "retry_delay"),
    "CCSTATUS_CACHE_ENABLED": ("cache", "enabled"),
    "CCSTATUS_CACHE_TTL": ("cache", "ttl_seconds"),
    "CCSTATUS_CACHE_MAX_SIZE": ("cache", "max_size"),
    "CCSTATUS_LOG_LEVEL": ("log", "level"),
    "CCSTATUS_LOG_FILE": ("log", "file"),
    "CCSTATUS_MAX_INCIDENTS": ("limits", "max_incidents"),
    "CCSTATUS_MAX_COMPONENTS": ("limits", "max_components"),
    "CCSTATUS_OUTPUT": ("output", "format"),
}
"""Environment variable -> ``(section, field)`` in :class:`~ccstatus.models.Settings`."""

MILLISECOND_ENV_VARS = frozenset({"CCSTATUS_API_TIMEOUT", "CCSTATUS_RETRY_DELAY"})
"""Variables given in milliseconds; the matching settings fields are in seconds."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory (not created).

    On Linux/BSD: ``$XDG_CONFIG_HOME/ccstatus/`` (default ``~/.config/ccstatus/``).
    On macOS/Windows: ``~/.ccstatus/``.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    return _fallback_base_dir()


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/ccstatus/`` (default ``~/.local/share/ccstatus/``).
    On macOS/Windows: ``~/.ccstatus/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def user_config_path() -> Path:
    """Path to the user-wide config file."""
    return get_config_dir() / _CONFIG_FILENAME


def find_project_config() -> Optional[Path]:
    """Return the first project config file found in the working directory, if any."""
    for name in _PROJECT_CONFIG_FILENAMES:
        path = Path.cwd() / name
        if path.is_file():
            return path
    return None


# --- Layer loading ---


def _read_json_file(path: Path) -> dict[str, Any]:
    """Read a JSON object from *path*.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or its
            top level is not an object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config file at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file at {path}: top level must be an object")
    return data


def _env_overrides(environ: Optional[dict[str, str]] = None) -> dict[str, Any]:
    """Collect ``CCSTATUS_*`` variables into a nested override dict.

    Values are left as strings; Pydantic coerces them when the settings are
    validated. Empty values are ignored. Variables in
    :data:`MILLISECOND_ENV_VARS` are converted to seconds.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for var, (section, field) in ENV_MAPPING.items():
        value: Any = env.get(var)
        if not value:
            continue
        if var in MILLISECOND_ENV_VARS:
            value = _milliseconds_to_seconds(value)
        overrides.setdefault(section, {})[field] = value
    return overrides


def _milliseconds_to_seconds(value: str) -> Any:
    """Convert a millisecond string to seconds; non-numbers pass through for validation."""
    try:
        return float(value) / 1000
    except ValueError:
        return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *base* with *override* merged in, recursing into dicts."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# --- Precedence resolution ---


def load_settings(
    config_path: Optional[str | Path] = None,
    overrides: Optional[dict[str, Any]] = None,
    environ: Optional[dict[str, str]] = None,
) -> Settings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. *overrides* (CLI flags, nested like :class:`Settings`)
        2. Environment variables (:data:`ENV_MAPPING`)
        3. Config files: *config_path* if given, otherwise the project file
           layered over the user file
        4. Defaults

    Args:
        config_path: Explicit config file; replaces the file search and must
            exist.
        overrides: Highest-precedence values.
        environ: Environment to read instead of :data:`os.environ`.

    Returns:
        The validated settings.

    Raises:
        ConfigError: If any layer is unreadable or the merged result fails
            validation.
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        data = _read_json_file(path)
    else:
        user_path = user_config_path()
        if user_path.is_file():
            data = _read_json_file(user_path)
        project_path = find_project_config()
        if project_path is not None:
            data = _deep_merge(data, _read_json_file(project_path))

    data = _deep_merge(data, _env_overrides(environ))
    if overrides:
        data = _deep_merge(data, overrides)

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from exc
