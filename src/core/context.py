"""
Site context — the directory holding site.yml for this process.

``sitectl`` registers it once, from the ``--config`` path or the
auto-detected site.yml.  Relative settings (``site_dir``, ``pages_dir``,
``navigation``) resolve against it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

_project_root: Optional[Path] = None


def set_project_root(root: Path) -> None:
    global _project_root
    _project_root = root


def resolve_project_root() -> Path:
    """Registered site root, or the cwd when nothing was registered."""
    return _project_root if _project_root is not None else Path.cwd()
