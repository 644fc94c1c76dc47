"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from src.core.models.site import SiteConfig
from src.core.services.path_rewrite import PathRewriter


@pytest.fixture(autouse=True)
def _clean_site_env(monkeypatch):
    """Keep developer environment overrides out of the tests."""
    for key in (
        "SITE_BASE_PATH", "SITE_ORIGIN",
        "SITE_LOG_LEVEL", "SITE_LOG_FILE", "SITE_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def site() -> SiteConfig:
    """Default site configuration (Commerce Testing on GitHub Pages)."""
    return SiteConfig()


@pytest.fixture
def rewriter(site: SiteConfig) -> PathRewriter:
    return PathRewriter.from_site(site)


@pytest.fixture
def site_project(tmp_path: Path) -> Path:
    """A site project: site.yml, a built public/ tree and markdown pages."""
    (tmp_path / "site.yml").write_text(textwrap.dedent("""\
        name: commerce-testing
        base_path: /commerce-testing
        origin: https://adobedocs.github.io
        prefixes:
          - /hlx_statics
          - /franklin_assets
          - /commerce
    """))

    public = tmp_path / "public"
    (public / "commerce" / "testing").mkdir(parents=True)
    (public / "index.html").write_text(textwrap.dedent("""\
        <!DOCTYPE html>
        <html>
        <head>
        <meta name="template" content="documentation">
        <link rel="stylesheet" href="/hlx_statics/styles/styles.css">
        </head>
        <body>
        <main class="no-sidenav"><a href="/commerce/testing/guide/">Guide</a></main>
        </body>
        </html>
    """))
    (public / "commerce" / "testing" / "index.html").write_text(textwrap.dedent("""\
        <html><head><title>Testing</title></head>
        <body><img src="/franklin_assets/hero.png"><a href="https://example.com/">x</a></body></html>
    """))
    (public / "robots.txt").write_text("User-agent: *\n")

    pages = tmp_path / "src" / "pages"
    (pages / "guide").mkdir(parents=True)
    (pages / "index.md").write_text("# Home\n")
    (pages / "guide" / "index.md").write_text("# Guide\n")
    return tmp_path
