"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for adocli:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.adocli/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~adocli.models.GlobalConfig`
  JSON file storing defaults (organization, project, catalog override,
  request and output settings).
* **Precedence resolution** -- :func:`resolve_defaults` and
  :func:`resolve_catalog_source` layer environment variables over the
  config file. Explicit ``organization=``/``project=`` parameters win over
  both; git auto-detection fills whatever is still missing.

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

from adocli.exceptions import ConfigError
from adocli.models import GlobalConfig

_APP_NAME = "adocli"
_CONFIG_FILENAME = "config.json"

ENV_ORGANIZATION = "ADOCLI_ORGANIZATION"
ENV_PROJECT = "ADOCLI_PROJECT"
ENV_CATALOG = "ADOCLI_CATALOG"


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
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/adocli/`` (default ``~/.config/adocli/``).
    On macOS/Windows: ``~/.adocli/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (credentials, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/adocli/`` (default ``~/.local/share/adocli/``).
    On macOS/Windows: ``~/.adocli/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up.

    Args:
        path: Destination file.
        data: Text to write.
        mode: Optional permission bits applied to the temp file before any
            content is written (``0o600`` for secrets).
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
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


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration.

    Returns:
        The deserialised :class:`~adocli.models.GlobalConfig`, or a default
        instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


# --- Precedence resolution ---


def resolve_defaults(config: GlobalConfig) -> tuple[Optional[str], Optional[str]]:
    """Return the default ``(organization, project)``.

    Precedence (high to low):
        1. ``ADOCLI_ORGANIZATION`` / ``ADOCLI_PROJECT``
        2. ``default_organization`` / ``default_project`` in the config file

    Either element may be ``None``.
    """
    organization = os.environ.get(ENV_ORGANIZATION) or config.default_organization
    project = os.environ.get(ENV_PROJECT) or config.default_project
    return organization, project


def resolve_catalog_source(config: GlobalConfig) -> Optional[str]:
    """Return the catalog path to load, or ``None`` for the bundled catalog.

    ``ADOCLI_CATALOG`` wins over the ``catalog`` config key.
    """
    return os.environ.get(ENV_CATALOG) or config.catalog
