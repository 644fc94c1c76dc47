"""
Bundled site data — navigation tables and script templates.

Loads the navigation YAML files shipped in ``src/core/data/navigation/``
once per registry instance and caches them.

Usage::

    from src.core.data import DataRegistry

    registry = DataRegistry()
    names = registry.section_names          # ["functional_testing", "guide"]
    raw = registry.navigation["guide"]      # dict as read from YAML
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent
NAVIGATION_DIR = DATA_DIR / "navigation"
TEMPLATES_DIR = DATA_DIR / "templates"


def _load_yaml(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


class DataRegistry:
    """Registry of the navigation tables bundled with the package."""

    @cached_property
    def navigation(self) -> dict[str, dict]:
        """Raw navigation sections keyed by section name."""
        sections: dict[str, dict] = {}
        for path in sorted(NAVIGATION_DIR.glob("*.yml")):
            data = _load_yaml(path)
            name = data.get("name") or path.stem
            sections[name] = {"name": name, "items": data.get("items") or []}
        logger.debug("Loaded %d bundled navigation sections", len(sections))
        return sections

    @property
    def section_names(self) -> list[str]:
        return list(self.navigation)

