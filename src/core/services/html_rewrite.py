"""
HTML attribute rewriting — applies the sub-path rule to a parsed document.

Every element carrying a ``src``, ``href`` or ``xlink:href`` attribute
gets that value passed through :meth:`PathRewriter.fix`.  Values that
don't point into the site build are left byte-for-byte alone.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from src.core.services.path_rewrite import PathRewriter

logger = logging.getLogger(__name__)

URL_ATTRIBUTES = ("src", "href", "xlink:href")

# Parser used everywhere a page is loaded; keeps the original markup shape
HTML_PARSER = "html.parser"


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def _url_elements(root: Tag) -> list[Tag]:
    elements = [root] if root.name != "[document]" else []
    elements.extend(root.find_all(True))
    return [el for el in elements if any(el.has_attr(a) for a in URL_ATTRIBUTES)]


def rewrite_attributes(root: Tag, rewriter: PathRewriter) -> int:
    """Rewrite URL attributes on ``root`` and all its descendants.

    Returns:
        Number of attribute values changed.
    """
    changed = 0
    for el in _url_elements(root):
        for attr in URL_ATTRIBUTES:
            fixed = rewriter.fix(el.get(attr))
            if fixed:
                logger.debug("<%s %s> %s → %s", el.name, attr, el[attr], fixed)
                el[attr] = fixed
                changed += 1
    return changed


def rewrite_html(html: str, rewriter: PathRewriter) -> tuple[str, int]:
    """Rewrite URL attributes in an HTML string.

    The input is returned untouched when nothing needed rewriting, so
    callers can compare strings to decide whether to write a file.
    """
    soup = parse_html(html)
    count = rewrite_attributes(soup, rewriter)
    if not count:
        return html, 0
    return str(soup), count
