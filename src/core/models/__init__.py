"""
Domain models — Pydantic types for the site tools.

    from src.core.models import SiteConfig, NavItem, NavSection
"""

from src.core.models.navigation import NavItem, NavSection
from src.core.models.site import InterceptorSettings, SiteConfig

__all__ = [
    # navigation.py
    "NavItem",
    "NavSection",
    # site.py
    "InterceptorSettings",
    "SiteConfig",
]
