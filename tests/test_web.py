"""
Tests for the preview server — base-path mounting and GitHub Pages routing.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from flask.testing import FlaskClient

from src.core.models.site import SiteConfig
from src.ui.web.server import create_app


@pytest.fixture()
def public_dir(site_project: Path) -> Path:
    public = site_project / "public"
    (public / "404.html").write_text("<html><body>Page not found</body></html>")
    return public


@pytest.fixture()
def client(public_dir: Path) -> FlaskClient:
    app = create_app(site_dir=public_dir, site=SiteConfig())
    app.config["TESTING"] = True
    return app.test_client()


class TestAppFactory:
    def test_config(self, public_dir: Path):
        app = create_app(site_dir=public_dir, site=SiteConfig(name="preview"))
        assert app.config["SITE_DIR"] == str(public_dir.resolve())

    def test_defaults_without_site(self, public_dir: Path):
        app = create_app(site_dir=public_dir)
        assert app.test_client().get("/commerce-testing/").status_code == 200


class TestBasePathRouting:
    def test_root_redirects_to_base(self, client: FlaskClient):
        resp = client.get("/")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/commerce-testing/")

    def test_site_index(self, client: FlaskClient):
        resp = client.get("/commerce-testing/")
        assert resp.status_code == 200
        assert b"/hlx_statics/styles/styles.css" in resp.data

    def test_nested_index(self, client: FlaskClient):
        resp = client.get("/commerce-testing/commerce/testing/")
        assert resp.status_code == 200
        assert b"<title>Testing</title>" in resp.data

    def test_directory_without_slash(self, client: FlaskClient):
        resp = client.get("/commerce-testing/commerce/testing")
        assert resp.status_code == 301
        assert resp.headers["Location"].endswith("/commerce-testing/commerce/testing/")

    def test_directory_redirect_keeps_query(self, client: FlaskClient):
        resp = client.get("/commerce-testing/commerce/testing?lang=en&x=1")
        assert resp.status_code == 301
        assert resp.headers["Location"].endswith("/commerce-testing/commerce/testing/?lang=en&x=1")

    def test_index_html_redirect(self, client: FlaskClient):
        resp = client.get("/commerce-testing/commerce/testing/index.html?x=1")
        assert resp.status_code == 301
        assert resp.headers["Location"].endswith("/commerce-testing/commerce/testing/?x=1")

    def test_static_file(self, client: FlaskClient):
        resp = client.get("/commerce-testing/robots.txt")
        assert resp.status_code == 200
        assert resp.mimetype == "text/plain"

    def test_unprefixed_path_not_served(self, client: FlaskClient):
        assert client.get("/robots.txt").status_code == 404

    def test_custom_404_page(self, client: FlaskClient):
        resp = client.get("/commerce-testing/missing/page/")
        assert resp.status_code == 404
        assert b"Page not found" in resp.data

    def test_plain_404(self, site_project: Path):
        app = create_app(site_dir=site_project / "public")
        resp = app.test_client().get("/commerce-testing/missing")
        assert resp.status_code == 404


class TestRootHosting:
    def test_empty_base_serves_at_root(self, public_dir: Path):
        app = create_app(site_dir=public_dir, site=SiteConfig(base_path=""))
        client = app.test_client()
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"no-sidenav" in resp.data
        assert client.get("/robots.txt").status_code == 200
