"""
Sub-path URL rewriting — the rule that lets a root-built site live under
a GitHub Pages project path.

The site is generated for the domain root (``/commerce/testing/...``)
but GitHub Pages serves it from ``/<repo-name>/``.  Any URL that points
into the site build must gain the base path; everything else is left
alone.

Two URL shapes are recognized:

    https://adobedocs.github.io/commerce/testing/config
        → https://adobedocs.github.io/commerce-testing/commerce/testing/config
    /hlx_statics/scripts/lib.js
        → /commerce-testing/hlx_statics/scripts/lib.js

The same rule is rendered into the client-side interceptor script, so
the static rewrite and the runtime rewrite always agree.
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit, urlunsplit

from src.core.models.site import DEFAULT_PREFIXES, SiteConfig, normalize_base_path

logger = logging.getLogger(__name__)


class PathRewriter:
    """Prefix-matching URL rewrite rule.

    Args:
        base_path: Sub-path the site is served from (e.g. ``/commerce-testing``).
        prefixes: Root-relative path prefixes that belong to the site build.
        origin: Scheme + host the site is served from.  When empty, only
            root-relative URLs are rewritten.
    """

    def __init__(
        self,
        base_path: str,
        prefixes: list[str] | tuple[str, ...] = tuple(DEFAULT_PREFIXES),
        origin: str = "",
    ) -> None:
        self.base_path = normalize_base_path(base_path)
        self.prefixes = tuple(prefixes)
        self.origin = (origin or "").rstrip("/")

    @classmethod
    def from_site(cls, site: SiteConfig) -> PathRewriter:
        return cls(site.base_path, site.prefixes, site.origin)

    def __repr__(self) -> str:
        return (
            f"PathRewriter(base_path={self.base_path!r}, "
            f"prefixes={list(self.prefixes)!r}, origin={self.origin!r})"
        )

    # ── Rule ────────────────────────────────────────────────────

    def _recognized(self, path: str) -> bool:
        return any(path.startswith(p) for p in self.prefixes)

    def fix(self, url: object) -> str | None:
        """Return the rewritten URL, or None when no rewrite applies."""
        if not url or not isinstance(url, str) or not self.base_path:
            return None

        base = self.base_path

        # Full URL on our own origin
        if self.origin and url.startswith(self.origin) and base not in url:
            path = url[len(self.origin):]
            if self._recognized(path):
                return self.origin + base + path

        # Root-relative path
        if url.startswith("/") and not url.startswith(base) and self._recognized(url):
            return base + url

        return None

    def rewrite(self, url: str) -> str:
        """Like :meth:`fix` but returns the input unchanged when no rewrite applies."""
        fixed = self.fix(url)
        return fixed if fixed is not None else url

    def strip_base(self, path: str) -> str:
        """Map a served path back to the site-root path it was built for."""
        base = self.base_path
        if not base:
            return path
        if path == base:
            return "/"
        if path.startswith(base + "/"):
            return path[len(base):]
        return path


def normalize_index_path(url: str) -> str | None:
    """Drop a trailing ``/index.html`` from a URL path, keeping query and fragment.

    Returns None when the path does not end with ``/index.html``.

        >>> normalize_index_path("/guide/index.html?x=1#top")
        '/guide/?x=1#top'
    """
    parts = urlsplit(url)
    if not parts.path.endswith("/index.html"):
        return None
    path = parts.path[: -len("index.html")]
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))
