"""
Configuration loader — reads site.yml into the SiteConfig model.

This is the primary entry point for loading site configuration.
It reads YAML, validates against Pydantic schemas, applies
environment overrides, and returns a typed SiteConfig.

A missing site.yml is not an error: the defaults describe the
Commerce Testing site as published on GitHub Pages.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from src.core.models.site import SiteConfig

logger = logging.getLogger(__name__)

# Default config filename
SITE_CONFIG_FILE = "site.yml"

# Environment overrides (applied after the file is read)
_ENV_OVERRIDES = {
    "SITE_BASE_PATH": "base_path",
    "SITE_ORIGIN": "origin",
}


class ConfigError(Exception):
    """Raised when site configuration is invalid or unreadable."""


def find_site_file(start_dir: Path | None = None) -> Path | None:
    """Search for site.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to site.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SITE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _read_yaml(path: Path) -> dict:
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

    # The YAML may wrap everything under a "site" key or be flat
    return data.get("site", data) if isinstance(data.get("site"), dict) else data


def load_site(path: Path | None = None, *, search: bool = True) -> SiteConfig:
    """Load and validate site configuration.

    Args:
        path: Explicit path to site.yml. If None and ``search`` is set,
            searches upward from the cwd.
        search: Whether to search for site.yml when no path is given.

    Returns:
        Validated SiteConfig (defaults when no file exists).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and search:
        path = find_site_file()

    data: dict = {}
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("Loading site config from %s", path)
        data = dict(_read_yaml(path))
    else:
        logger.debug("No %s found, using defaults", SITE_CONFIG_FILE)

    for env_key, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value is not None:
            logger.debug("Override %s from %s", field_name, env_key)
            data[field_name] = value

    try:
        site = SiteConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid site configuration: {e}") from e

    logger.info(
        "Loaded site '%s' (base=%s, %d prefixes)",
        site.name, site.base_path or "/", len(site.prefixes),
    )
    return site


def site_root(config_path: Path | None) -> Path:
    """Get the site project root from a config file path (cwd when None)."""
    return config_path.parent.resolve() if config_path else Path.cwd()
