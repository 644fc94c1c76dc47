"""
Tests for the client-side interceptor script rendering.
"""

import json
from pathlib import Path

import pytest

from src.core.models.site import InterceptorSettings, SiteConfig
from src.core.services.interceptor import (
    FEATURES,
    InterceptorError,
    interceptor_features,
    process_template,
    render_interceptor,
    resolve_features,
)


class TestProcessTemplate:
    def test_enabled_block_kept(self):
        tmpl = "a\n  // __IF_FEATURE_x__\n  body();\n  // __ENDIF__\nb\n"
        assert process_template(tmpl, {"x": True}, {}) == "a\n  body();\nb\n"

    def test_disabled_block_removed(self):
        tmpl = "a\n  // __IF_FEATURE_x__\n  body();\n  // __ENDIF__\nb\n"
        assert process_template(tmpl, {"x": False}, {}) == "a\nb\n"

    def test_unknown_feature_is_disabled(self):
        tmpl = "// __IF_FEATURE_nope__\nx\n// __ENDIF__\n"
        assert process_template(tmpl, {}, {}) == ""

    def test_placeholders(self):
        assert process_template("var B = __B__;", {}, {"__B__": '"/x"'}) == 'var B = "/x";'


class TestFeatures:
    def test_all_default_on(self):
        assert all(resolve_features().values())
        assert set(resolve_features()) == set(FEATURES)

    def test_override(self):
        assert resolve_features({"toc_filter": False})["toc_filter"] is False

    def test_unknown_override(self):
        with pytest.raises(InterceptorError, match="Unknown interceptor feature"):
            resolve_features({"teleport": True})

    def test_feature_listing(self):
        keys = [f["key"] for f in interceptor_features()]
        assert keys == list(FEATURES)


class TestRenderInterceptor:
    def test_default_render(self, site: SiteConfig):
        script = render_interceptor(site)
        assert 'var BASE = "/commerce-testing";' in script
        assert f"var PREFIXES = {json.dumps(site.prefixes)};" in script
        assert "window.fetch = function" in script
        assert "XMLHttpRequest.prototype.open" in script
        assert "MutationObserver" in script
        assert "filterToc" in script
        assert "fixSuperheroBackground" in script
        assert "__IF_FEATURE" not in script
        assert "__ENDIF__" not in script

    def test_custom_site(self):
        site = SiteConfig(base_path="docs-site/", prefixes=["/assets", "/docs"])
        script = render_interceptor(site)
        assert 'var BASE = "/docs-site";' in script
        assert 'var PREFIXES = ["/assets", "/docs"];' in script

    def test_disable_features(self, site: SiteConfig):
        script = render_interceptor(site, features={"intercept_xhr": False, "superhero": False})
        assert "XMLHttpRequest" not in script
        assert "fixSuperheroBackground" not in script
        assert "window.fetch" in script

    def test_features_positional(self, site: SiteConfig):
        script = render_interceptor(site, {"superhero": False})
        assert "fixSuperheroBackground" not in script
        assert "filterToc" in script

    def test_site_level_feature_config(self):
        site = SiteConfig(interceptor=InterceptorSettings(features={"toc_filter": False}))
        assert "filterToc" not in render_interceptor(site)

    def test_leftover_placeholder(self, site: SiteConfig, tmp_path: Path):
        tmpl = tmp_path / "shim.js"
        tmpl.write_text("var X = __MYSTERY__;\n")
        with pytest.raises(InterceptorError, match="__MYSTERY__"):
            render_interceptor(site, template_path=tmpl)

    def test_missing_template(self, site: SiteConfig, tmp_path: Path):
        with pytest.raises(InterceptorError, match="Cannot read"):
            render_interceptor(site, template_path=tmp_path / "missing.js")
