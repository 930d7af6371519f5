"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for docs2skill:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.docs2skill/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~docs2skill.models.GlobalConfig`
  JSON file storing the service URL, gated mode, and request settings.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, and the global config into the effective
  configuration. It is called once at startup; the resulting ``gated``
  flag is injected into the orchestrator rather than re-read later.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from docs2skill.exceptions import ConfigError
from docs2skill.models import GlobalConfig

_APP_NAME = "docs2skill"
_CONFIG_FILENAME = "config.json"

ENV_SERVICE_URL = "DOCS2SKILL_SERVICE_URL"
ENV_GATED = "DOCS2SKILL_GATED"
ENV_APP_MODE = "DOCS2SKILL_APP_MODE"

_TRUTHY = ("1", "true", "yes", "on", "production")


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/BSD)."""
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
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/docs2skill/`` (default ``~/.config/docs2skill/``).
    On macOS/Windows: ``~/.docs2skill/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (credentials, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/docs2skill/`` (default ``~/.local/share/docs2skill/``).
    On macOS/Windows: ``~/.docs2skill/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str | bytes, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. When *mode* is
    given the permissions are applied before any content is written.

    Args:
        path: Destination file.
        data: Text (written as UTF-8) or raw bytes.
        mode: Optional permission bits, e.g. ``0o600`` for secrets.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = data.encode("utf-8") if isinstance(data, str) else data

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(payload)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~docs2skill.models.GlobalConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def _env_flag(name: str) -> Optional[bool]:
    """Parse a boolean environment variable; ``None`` when unset or empty."""
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    return value.lower() in _TRUTHY


def resolve_config(
    cli_service_url: Optional[str] = None,
    cli_gated: Optional[bool] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``--service-url``, ``--gated/--ungated``)
        2. Environment variables (``DOCS2SKILL_SERVICE_URL``,
           ``DOCS2SKILL_GATED``, ``DOCS2SKILL_APP_MODE=PRODUCTION``)
        3. User config (``~/.config/docs2skill/config.json``)
        4. Defaults

    Returns:
        The effective :class:`~docs2skill.models.GlobalConfig`. The
        on-disk config is not modified.
    """
    config = load_global_config()

    env_url = os.environ.get(ENV_SERVICE_URL)
    if env_url:
        config.service_url = env_url

    app_mode = os.environ.get(ENV_APP_MODE, "")
    if app_mode:
        config.gated = app_mode.strip().upper() == "PRODUCTION"
    env_gated = _env_flag(ENV_GATED)
    if env_gated is not None:
        config.gated = env_gated

    if cli_service_url is not None:
        config.service_url = cli_service_url
    if cli_gated is not None:
        config.gated = cli_gated

    return config
