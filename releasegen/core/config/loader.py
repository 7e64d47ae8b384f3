"""
Configuration loader — reads release.yml into domain models.

Reads YAML, validates against Pydantic schemas, and returns a typed
ReleaseConfig. A repository without release.yml is fine: callers fall
back to the default policy and command-line distributions.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from releasegen.core.models.project import ReleaseConfig

logger = logging.getLogger(__name__)

# Default config filename
RELEASE_CONFIG_FILE = "release.yml"


class ConfigError(Exception):
    """Raised when release configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for release.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to release.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / RELEASE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path) -> ReleaseConfig:
    """Load and validate release configuration.

    Args:
        path: Path to release.yml.

    Returns:
        Validated ReleaseConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading release config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "release" key or be flat
    release_data = data["release"] if "release" in data else data
    if not isinstance(release_data, dict):
        raise ConfigError(f"Expected 'release' to be a mapping in {path}")

    try:
        config = ReleaseConfig.model_validate(release_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid release configuration: {e}") from e

    logger.info(
        "Loaded release config with %d distributions from %s",
        len(config.distributions),
        path,
    )
    return config


def config_root(config_path: Path) -> Path:
    """Get the repository root directory from a config file path."""
    return config_path.parent.resolve()
