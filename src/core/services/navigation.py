"""
Navigation tables — loading, lookup and validation of the side TOC data.

Each section is a nested list of ``{title, path, pages}`` entries, kept
as YAML.  The bundled sections (``guide``, ``functional_testing``)
ship in ``src/core/data/navigation/``; a site.yml may point at its own
files instead.

Paths are site-root paths (``/guide/integration/``).  Entries whose
path is a full URL link out of the site and are skipped by the checks
that only make sense for internal pages.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.core.data import DataRegistry
from src.core.models.navigation import NavItem, NavSection
from src.core.models.site import SiteConfig

logger = logging.getLogger(__name__)

PAGE_SUFFIXES = (".md", ".mdx")


class NavigationError(Exception):
    """Raised when a navigation file is missing or malformed."""


# ── Loading ─────────────────────────────────────────────────────────


def _section_from_data(data: object, name: str, origin: str) -> NavSection:
    if isinstance(data, list):
        data = {"items": data}
    if not isinstance(data, dict):
        raise NavigationError(f"Expected a mapping or list in {origin}, got {type(data).__name__}")
    payload = {"name": data.get("name") or name, "items": data.get("items") or []}
    try:
        return NavSection.model_validate(payload)
    except ValidationError as e:
        raise NavigationError(f"Invalid navigation in {origin}: {e}") from e


def load_section(path: Path) -> NavSection:
    """Load one navigation section from a YAML file.

    The file may be a mapping (``name:`` + ``items:``) or a bare list
    of entries; the section name defaults to the file stem.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise NavigationError(f"Cannot read {path}: {e}") from e
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise NavigationError(f"Invalid YAML in {path}: {e}") from e

    section = _section_from_data(data, path.stem, str(path))
    logger.debug("Loaded navigation '%s' (%d entries) from %s", section.name, section.count(), path)
    return section


def builtin_sections(registry: DataRegistry | None = None) -> list[NavSection]:
    """The navigation sections bundled with the package."""
    registry = registry or DataRegistry()
    return [
        _section_from_data(data, name, f"bundled section '{name}'")
        for name, data in registry.navigation.items()
    ]


def load_sections(site: SiteConfig, root: Path) -> list[NavSection]:
    """Sections configured in site.yml (relative to ``root``), or the bundled ones."""
    if not site.navigation:
        return builtin_sections()
    return [load_section(root / rel) for rel in site.navigation]


def get_section(sections: list[NavSection], name: str) -> NavSection | None:
    for section in sections:
        if section.name == name:
            return section
    return None


# ── Lookup ──────────────────────────────────────────────────────────


def is_external(path: str) -> bool:
    return path.startswith(("http://", "https://", "//", "mailto:"))


@dataclass
class NavEntry:
    """A flattened navigation entry."""

    section: str
    title: str
    path: str
    depth: int
    parent: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def flatten(section: NavSection) -> list[NavEntry]:
    """Depth-first list of every entry in ``section`` (depth 0 = top level)."""
    entries: list[NavEntry] = []

    def _walk(items: list[NavItem], depth: int, parent: str | None) -> None:
        for item in items:
            entries.append(NavEntry(section.name, item.title, item.path, depth, parent))
            _walk(item.pages, depth + 1, item.path)

    _walk(section.items, 0, None)
    return entries


def _same_path(a: str, b: str) -> bool:
    return a.rstrip("/") == b.rstrip("/")


def find_by_path(sections: list[NavSection], path: str) -> NavEntry | None:
    """First entry whose path equals ``path`` (trailing slash ignored)."""
    for section in sections:
        for entry in flatten(section):
            if _same_path(entry.path, path):
                return entry
    return None


def breadcrumbs(section: NavSection, path: str) -> list[NavItem]:
    """Chain of entries from the top level down to ``path`` (empty if absent)."""

    def _search(items: list[NavItem], trail: list[NavItem]) -> list[NavItem]:
        for item in items:
            here = trail + [item]
            if _same_path(item.path, path):
                return here
            found = _search(item.pages, here)
            if found:
                return found
        return []

    return _search(section.items, [])


# ── Validation ──────────────────────────────────────────────────────


@dataclass
class NavIssue:
    """A problem found in a navigation table."""

    section: str
    path: str
    level: str          # "error" | "warning"
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


def validate_section(section: NavSection) -> list[NavIssue]:
    """Check paths and titles of every entry in ``section``."""
    issues: list[NavIssue] = []
    seen: set[str] = set()

    def _issue(path: str, level: str, message: str) -> None:
        issues.append(NavIssue(section.name, path, level, message))

    for entry in flatten(section):
        if not entry.title.strip():
            _issue(entry.path, "error", "Empty title")

        if is_external(entry.path):
            continue

        if not entry.path.startswith("/"):
            _issue(entry.path, "error", "Path must start with '/'")
        elif not entry.path.endswith("/"):
            _issue(entry.path, "warning", "Path should end with '/'")

        key = entry.path.rstrip("/")
        if key in seen:
            _issue(entry.path, "error", "Duplicate path")
        seen.add(key)

        if entry.parent and not is_external(entry.parent):
            parent = entry.parent.rstrip("/") + "/"
            if not entry.path.startswith(parent):
                _issue(entry.path, "warning", f"Not nested under parent {entry.parent}")

    return issues


def _page_candidates(pages_dir: Path, path: str) -> list[Path]:
    rel = path.strip("/")
    base = pages_dir / rel if rel else pages_dir
    candidates = [base / f"index{suffix}" for suffix in PAGE_SUFFIXES]
    if rel:
        candidates += [pages_dir / f"{rel}{suffix}" for suffix in PAGE_SUFFIXES]
    return candidates


def check_pages(sections: list[NavSection], pages_dir: Path) -> list[NavIssue]:
    """Report internal nav paths with no markdown source under ``pages_dir``."""
    issues: list[NavIssue] = []
    for section in sections:
        for entry in flatten(section):
            if is_external(entry.path):
                continue
            if not any(p.is_file() for p in _page_candidates(pages_dir, entry.path)):
                issues.append(NavIssue(
                    section.name, entry.path, "error",
                    f"No page source for '{entry.title}'",
                ))
    return issues
