"""
Site patch — post-processes a generated site for sub-path hosting.

Walks every HTML file of the build output and, per document:

  1. rewrites src/href/xlink:href values into the base path
  2. shows the side navigation on documentation pages
  3. filters the side TOC to the current section
  4. repairs an ``undefined`` hero background
  5. injects the runtime interceptor <script> first in <head>

Files are only rewritten when something actually changed, so running
the patch twice is a no-op the second time.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from src.core.models.site import SiteConfig
from src.core.services.html_rewrite import parse_html, rewrite_attributes
from src.core.services.interceptor import render_interceptor
from src.core.services.page_fixes import (
    filter_toc,
    fix_side_nav,
    fix_superhero_background,
)
from src.core.services.path_rewrite import PathRewriter

logger = logging.getLogger(__name__)

INTERCEPTOR_MARKER = "data-gh-pages-interceptor"


class SitePatchError(Exception):
    """Raised when the site directory cannot be patched at all."""


# ── Results ─────────────────────────────────────────────────────────


@dataclass
class PatchedDocument:
    """Outcome of patching one HTML document."""

    html: str
    page_path: str
    attributes_rewritten: int = 0
    side_nav_fixed: bool = False
    toc_hidden: int = 0
    superhero_fixed: bool = False
    script_injected: bool = False

    @property
    def changed(self) -> bool:
        return bool(
            self.attributes_rewritten
            or self.side_nav_fixed
            or self.toc_hidden
            or self.superhero_fixed
            or self.script_injected
        )


@dataclass
class PatchReport:
    """Aggregated outcome of patching a whole site directory."""

    site_dir: str
    dry_run: bool = False
    files_scanned: int = 0
    files_changed: int = 0
    attributes_rewritten: int = 0
    toc_hidden: int = 0
    scripts_injected: int = 0
    script_path: str = ""
    changed_files: list[str] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, rel_path: str, doc: PatchedDocument) -> None:
        self.files_scanned += 1
        if not doc.changed:
            return
        self.files_changed += 1
        self.changed_files.append(rel_path)
        self.attributes_rewritten += doc.attributes_rewritten
        self.toc_hidden += doc.toc_hidden
        self.scripts_injected += int(doc.script_injected)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["ok"] = self.ok
        return data


# ── Paths ───────────────────────────────────────────────────────────


def page_path_for(file: Path, site_dir: Path) -> str:
    """Site-root URL path a built file is published at.

        guide/index.html → /guide/
        404.html         → /404.html
    """
    rel = file.relative_to(site_dir).as_posix()
    if rel == "index.html":
        return "/"
    if rel.endswith("/index.html"):
        return "/" + rel[: -len("index.html")]
    return "/" + rel


def script_url(site: SiteConfig) -> str:
    """Served URL of the standalone interceptor script."""
    return f"{site.base_path}/{site.interceptor.script_name.lstrip('/')}"


# ── Document patching ───────────────────────────────────────────────


def _inject_script(soup, site: SiteConfig, inline_script: str | None) -> bool:
    if soup.find("script", attrs={INTERCEPTOR_MARKER: True}) is not None:
        return False
    head = soup.head
    if head is None:
        return False

    tag = soup.new_tag("script")
    tag[INTERCEPTOR_MARKER] = ""
    if inline_script is not None:
        tag.string = inline_script
    else:
        tag["src"] = script_url(site)
    head.insert(0, tag)
    return True


def patch_document(
    html: str,
    page_path: str,
    site: SiteConfig,
    *,
    rewriter: PathRewriter | None = None,
    inline_script: str | None = None,
) -> PatchedDocument:
    """Apply every sub-path fix to one HTML document.

    Args:
        html: Document source.
        page_path: Site-root path the page is published at (``/guide/``).
        site: Site configuration.
        rewriter: Prebuilt rewrite rule (built from ``site`` when omitted).
        inline_script: Interceptor source to inline; when None the
            script is referenced by URL instead.

    Returns:
        PatchedDocument — ``html`` is the input unchanged when nothing applied.
    """
    rewriter = rewriter or PathRewriter.from_site(site)
    soup = parse_html(html)
    doc = PatchedDocument(html=html, page_path=page_path)

    doc.attributes_rewritten = rewrite_attributes(soup, rewriter)
    doc.side_nav_fixed = fix_side_nav(soup)
    doc.toc_hidden = filter_toc(soup, site.base_path + page_path, site.origin)
    doc.superhero_fixed = fix_superhero_background(soup)
    if site.interceptor.inject:
        doc.script_injected = _inject_script(soup, site, inline_script)

    if doc.changed:
        doc.html = str(soup)
    return doc


# ── Site patching ───────────────────────────────────────────────────


def patch_site(
    site_dir: Path,
    site: SiteConfig,
    *,
    dry_run: bool = False,
) -> PatchReport:
    """Patch every HTML file under ``site_dir`` in place.

    Per-file read/write failures are recorded in the report and the walk
    continues.

    Raises:
        SitePatchError: If ``site_dir`` is not a directory.
    """
    if not site_dir.is_dir():
        raise SitePatchError(f"Site directory not found: {site_dir}")

    report = PatchReport(site_dir=str(site_dir), dry_run=dry_run)
    rewriter = PathRewriter.from_site(site)

    inline_script: str | None = None
    if site.interceptor.inject:
        script = render_interceptor(site)
        if site.interceptor.write_script:
            target = site_dir / site.interceptor.script_name.lstrip("/")
            report.script_path = str(target)
            if not dry_run:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(script, encoding="utf-8")
                logger.info("Wrote interceptor script %s", target)
        else:
            inline_script = script

    for html_file in sorted(site_dir.rglob("*.html")):
        rel = html_file.relative_to(site_dir).as_posix()
        try:
            source = html_file.read_text(encoding="utf-8")
            doc = patch_document(
                source,
                page_path_for(html_file, site_dir),
                site,
                rewriter=rewriter,
                inline_script=inline_script,
            )
            if doc.changed and not dry_run:
                html_file.write_text(doc.html, encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.warning("Cannot patch %s: %s", rel, e)
            report.files_scanned += 1
            report.errors.append({"file": rel, "error": str(e)})
            continue

        report.add(rel, doc)
        if doc.changed:
            logger.debug(
                "%s %s (%d attrs, %d toc)",
                "Would patch" if dry_run else "Patched",
                rel, doc.attributes_rewritten, doc.toc_hidden,
            )

    logger.info(
        "Patched %d/%d HTML files under %s (%d attributes rewritten)",
        report.files_changed, report.files_scanned, site_dir, report.attributes_rewritten,
    )
    return report
