"""
Page presentation fixes for the sub-path hosted site.

The page template assumes it runs at the domain root; served from a
project path a few things render wrong.  Each fix here is a small,
stateless operation on a parsed document that returns what it changed:

  - fix_side_nav              — documentation pages lose ``no-sidenav``
  - filter_toc                — side TOC shows only the current section
  - fix_superhero_background  — hero image falls back to its <img>
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

HIDDEN_CLASS = "hidden"
NO_SIDENAV_CLASS = "no-sidenav"
DEFAULT_HERO_COLOR = "rgb(29, 125, 238)"


# ── Class / style helpers ───────────────────────────────────────────


def _classes(tag: Tag) -> list[str]:
    value = tag.get("class") or []
    return value.split() if isinstance(value, str) else list(value)


def add_class(tag: Tag, name: str) -> bool:
    """Add a CSS class; returns False if it was already present."""
    classes = _classes(tag)
    if name in classes:
        return False
    tag["class"] = classes + [name]
    return True


def remove_class(tag: Tag, name: str) -> bool:
    """Remove a CSS class; returns False if it wasn't present."""
    classes = _classes(tag)
    if name not in classes:
        return False
    remaining = [c for c in classes if c != name]
    if remaining:
        tag["class"] = remaining
    else:
        del tag["class"]
    return True


def parse_style(style: str) -> list[tuple[str, str]]:
    """Split an inline style into ``(property, value)`` pairs.

    Semicolons inside parentheses (``url(data:...;base64,...)``) do not
    end a declaration.
    """
    declarations: list[tuple[str, str]] = []
    depth = 0
    current = ""
    for ch in style or "":
        if ch == "(":
            depth += 1
        elif ch == ")" and depth:
            depth -= 1
        if ch == ";" and not depth:
            declarations.append(current)
            current = ""
            continue
        current += ch
    declarations.append(current)

    result = []
    for decl in declarations:
        prop, sep, value = decl.partition(":")
        if sep and prop.strip():
            result.append((prop.strip().lower(), value.strip()))
    return result


def format_style(declarations: list[tuple[str, str]]) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in declarations)


def style_value(tag: Tag, prop: str) -> str:
    """Last inline value of ``prop`` on ``tag`` ("" when unset)."""
    value = ""
    for name, val in parse_style(tag.get("style", "")):
        if name == prop:
            value = val
    return value


def set_style(tag: Tag, prop: str, value: str, *, drop_prefix: str | None = None) -> None:
    """Set an inline style property, replacing earlier declarations of it.

    ``drop_prefix`` also removes longhands (e.g. ``background-``) that a
    shorthand resets.
    """
    kept = [
        (name, val)
        for name, val in parse_style(tag.get("style", ""))
        if name != prop and not (drop_prefix and name.startswith(drop_prefix))
    ]
    kept.append((prop, value))
    tag["style"] = format_style(kept)


# ── Side navigation ─────────────────────────────────────────────────


def fix_side_nav(soup: BeautifulSoup) -> bool:
    """Show the side navigation on documentation-template pages."""
    main = soup.find("main")
    template = soup.find("meta", attrs={"name": "template"})
    if main is None or template is None:
        return False
    if template.get("content") != "documentation":
        return False
    fixed = remove_class(main, NO_SIDENAV_CLASS)
    if fixed:
        logger.debug("Removed %s from <main>", NO_SIDENAV_CLASS)
    return fixed


# ── TOC filtering ───────────────────────────────────────────────────


def _link_path(href: str, page_url: str) -> str:
    return urlsplit(urljoin(page_url, href)).path


def _toc_link_path(link: Tag, page_url: str) -> str:
    # An <a> without href resolves to the site root, as in the browser
    href = link.get("href")
    return _link_path("/" if href is None else href, page_url)


def _best_section(nav: Tag, current: str, page_url: str) -> str | None:
    """Path of the top-level nav link the current page belongs to."""
    best: str | None = None
    best_length = 0

    for anchor in nav.find_all("a"):
        # html.parser lowercases attribute names
        if anchor.get("fullpath") or anchor.get("fullPath"):
            continue
        href = anchor.get("href")
        if not href:
            continue
        full = _link_path(href, page_url)
        path = full.rstrip("/")
        if current == path:
            best, best_length = full, float("inf")
        elif current.startswith(path + "/") and len(path) > best_length:
            best, best_length = full, len(path)

    return best


def filter_toc(soup: BeautifulSoup, page_path: str, origin: str = "") -> int:
    """Hide side-TOC items that don't belong to the current section.

    Args:
        soup: Parsed page.
        page_path: Path the page is served at (base path included).
        origin: Origin used to resolve relative links.

    Returns:
        Number of list items newly hidden.
    """
    nav = soup.select_one("#navigation-links")
    if nav is None:
        return 0

    page_url = (origin or "http://localhost") + page_path
    top_path = _best_section(nav, page_path.rstrip("/"), page_url)
    if top_path is None:
        return 0

    toc = soup.select_one(".side-nav-subpages-section")
    if toc is None:
        return 0

    hidden = 0
    for ul in toc.find_all("ul", recursive=False):
        for li in ul.find_all("li"):
            link = li.find("a", recursive=False)
            if link is None or not _toc_link_path(link, page_url).startswith(top_path):
                hidden += add_class(li, HIDDEN_CLASS)

    if hidden:
        logger.debug("TOC filtered to %s (%d items hidden)", top_path, hidden)
    return hidden


# ── Superhero background ────────────────────────────────────────────


def fix_superhero_background(
    soup: BeautifulSoup,
    fallback_color: str = DEFAULT_HERO_COLOR,
) -> bool:
    """Use the hero's <img> as its background when the image is ``undefined``."""
    hero = soup.select_one(".superhero")
    if hero is None:
        return False

    image = style_value(hero, "background-image") + style_value(hero, "background")
    if "undefined" not in image:
        return False

    img = hero.find("img")
    src = img.get("src") if img is not None else None
    if not src or style_value(img, "display") == "none":
        return False

    existing = style_value(hero, "background")
    background = f"url({src}) center center / cover no-repeat, {existing or fallback_color}"
    set_style(hero, "background", background, drop_prefix="background-")
    set_style(img, "display", "none")
    logger.debug("Superhero background set from %s", src)
    return True
