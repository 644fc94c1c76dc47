"""
Navigation models — nested title → path tables for the side TOC.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class NavItem(BaseModel):
    """One entry in a navigation table; ``pages`` nests child entries."""

    title: str
    path: str
    pages: list[NavItem] = Field(default_factory=list)


NavItem.model_rebuild()


class NavSection(BaseModel):
    """A named navigation table (one file under data/navigation/)."""

    name: str
    items: list[NavItem] = Field(default_factory=list)

    def count(self) -> int:
        """Total number of entries, nested ones included."""

        def _count(items: list[NavItem]) -> int:
            return sum(1 + _count(i.pages) for i in items)

        return _count(self.items)
