"""
Tests for site patching — per-document fixes and whole-site walks.
"""

import textwrap
from pathlib import Path

import pytest

from src.core.models.site import InterceptorSettings, SiteConfig
from src.core.services.site_patch import (
    INTERCEPTOR_MARKER,
    SitePatchError,
    page_path_for,
    patch_document,
    patch_site,
    script_url,
)


_DOC = textwrap.dedent("""\
    <!DOCTYPE html>
    <html>
    <head>
    <meta name="template" content="documentation">
    <script src="/hlx_statics/scripts/aem.js"></script>
    </head>
    <body>
    <main class="no-sidenav">
    <nav id="navigation-links"><a href="/commerce/testing/guide/">Guide</a></nav>
    <div class="side-nav-subpages-section"><ul>
      <li><a href="/commerce/testing/guide/js/">JS</a></li>
      <li><a href="/commerce/testing/functional-testing-framework/">MFTF</a></li>
    </ul></div>
    </main>
    </body>
    </html>
""")


class TestPagePath:
    @pytest.mark.parametrize("rel,expected", [
        ("index.html", "/"),
        ("guide/index.html", "/guide/"),
        ("guide/js/index.html", "/guide/js/"),
        ("404.html", "/404.html"),
        ("guide/page.html", "/guide/page.html"),
    ])
    def test_mapping(self, tmp_path: Path, rel: str, expected: str):
        assert page_path_for(tmp_path / rel, tmp_path) == expected

    def test_script_url(self, site: SiteConfig):
        assert script_url(site) == "/commerce-testing/gh-pages-interceptor.js"


class TestPatchDocument:
    def test_all_fixes_applied(self, site: SiteConfig):
        doc = patch_document(_DOC, "/commerce/testing/guide/js/", site)
        assert doc.changed
        assert doc.attributes_rewritten == 4
        assert doc.side_nav_fixed is True
        assert doc.toc_hidden == 1
        assert doc.script_injected is True
        assert 'src="/commerce-testing/hlx_statics/scripts/aem.js"' in doc.html
        assert "no-sidenav" not in doc.html

    def test_script_first_in_head(self, site: SiteConfig):
        doc = patch_document(_DOC, "/", site)
        head = doc.html.split("<head>", 1)[1].lstrip()
        assert head.startswith("<script")
        assert INTERCEPTOR_MARKER in head.split(">", 1)[0]
        assert 'src="/commerce-testing/gh-pages-interceptor.js"' in head.split(">", 1)[0]

    def test_inline_script(self, site: SiteConfig):
        doc = patch_document(_DOC, "/", site, inline_script="var BASE = 1;")
        assert "var BASE = 1;</script>" in doc.html

    def test_idempotent(self, site: SiteConfig):
        first = patch_document(_DOC, "/commerce/testing/guide/js/", site)
        second = patch_document(first.html, "/commerce/testing/guide/js/", site)
        assert not second.changed
        assert second.html == first.html
        assert second.html.count(INTERCEPTOR_MARKER) == 1

    def test_untouched_document_returned_verbatim(self, site: SiteConfig):
        site = SiteConfig(interceptor=InterceptorSettings(inject=False))
        source = "<html><head></head><body><p>plain</p></body></html>"
        doc = patch_document(source, "/", site)
        assert not doc.changed
        assert doc.html is source

    def test_no_head_no_injection(self, site: SiteConfig):
        doc = patch_document("<p>fragment</p>", "/", site)
        assert doc.script_injected is False


class TestPatchSite:
    def test_patches_tree(self, site_project: Path, site: SiteConfig):
        public = site_project / "public"
        report = patch_site(public, site)

        assert report.ok
        assert report.files_scanned == 2
        assert report.files_changed == 2
        assert report.scripts_injected == 2
        assert report.attributes_rewritten == 3
        assert sorted(report.changed_files) == ["commerce/testing/index.html", "index.html"]

        script = public / "gh-pages-interceptor.js"
        assert script.is_file()
        assert 'var BASE = "/commerce-testing";' in script.read_text()

        index = (public / "index.html").read_text()
        assert 'href="/commerce-testing/hlx_statics/styles/styles.css"' in index
        assert 'href="/commerce-testing/commerce/testing/guide/"' in index
        assert (public / "robots.txt").read_text() == "User-agent: *\n"

    def test_second_run_changes_nothing(self, site_project: Path, site: SiteConfig):
        public = site_project / "public"
        patch_site(public, site)
        before = (public / "index.html").read_text()
        report = patch_site(public, site)
        assert report.files_changed == 0
        assert (public / "index.html").read_text() == before

    def test_dry_run_writes_nothing(self, site_project: Path, site: SiteConfig):
        public = site_project / "public"
        before = (public / "index.html").read_text()
        report = patch_site(public, site, dry_run=True)
        assert report.dry_run
        assert report.files_changed == 2
        assert (public / "index.html").read_text() == before
        assert not (public / "gh-pages-interceptor.js").exists()

    def test_inline_script_mode(self, site_project: Path):
        site = SiteConfig(interceptor=InterceptorSettings(write_script=False))
        public = site_project / "public"
        report = patch_site(public, site)
        assert report.script_path == ""
        assert not (public / "gh-pages-interceptor.js").exists()
        assert "var PREFIXES" in (public / "index.html").read_text()

    def test_unreadable_file_recorded(self, site_project: Path, site: SiteConfig):
        public = site_project / "public"
        (public / "broken.html").write_bytes(b"\xff\xfe\x00bad")
        report = patch_site(public, site)
        assert not report.ok
        assert report.errors[0]["file"] == "broken.html"
        assert report.files_changed == 2

    def test_missing_dir(self, tmp_path: Path, site: SiteConfig):
        with pytest.raises(SitePatchError):
            patch_site(tmp_path / "nope", site)

    def test_report_to_dict(self, site_project: Path, site: SiteConfig):
        data = patch_site(site_project / "public", site, dry_run=True).to_dict()
        assert data["ok"] is True
        assert data["files_scanned"] == 2
        assert "changed_files" in data
