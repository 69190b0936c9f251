"""
Configuration loader — reads nvim-bootstrap.yml into Settings.

The file is optional: with none present every field keeps its
default.  Environment variables override the file:

    NVB_BUNDLE_ROOT   where ``configs/`` and the tool archive live
    NVB_HOME          home directory to provision into
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from nvim_bootstrap.core.errors import ConfigError
from nvim_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "nvim-bootstrap.yml"

# Env var → Settings field
_ENV_OVERRIDES = {
    "NVB_BUNDLE_ROOT": "bundle_root",
    "NVB_HOME": "home",
}


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for nvim-bootstrap.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the settings file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load and validate run settings.

    Args:
        path: Explicit settings file.  If None, searches upward and
            falls back to defaults when nothing is found.
        env: Environment to read overrides from (default: ``os.environ``).

    Returns:
        Validated Settings model.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    env = os.environ if env is None else env
    data: dict = {}

    if path is not None and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    if path is None:
        path = find_settings_file()

    if path is not None:
        data = _read_yaml(path)
        # Relative paths in the file are relative to the file itself
        for key in ("bundle_root", "target_dir", "home"):
            value = data.get(key)
            if isinstance(value, str) and value:
                data[key] = (path.parent / Path(value).expanduser()).resolve()

    for var, field in _ENV_OVERRIDES.items():
        if env.get(var):
            data[field] = Path(env[var]).expanduser()

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    logger.debug("Bundle root: %s, home: %s", settings.bundle_root, settings.home)
    return settings


def _read_yaml(path: Path) -> dict:
    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data
