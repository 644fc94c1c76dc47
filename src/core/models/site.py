"""
Site model — the identity and hosting layout of the documentation site.

Loaded from site.yml. Describes where the site is served from
(base path under the GitHub Pages origin), which root-relative
path prefixes belong to the site build, and where the generated
output and markdown sources live.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_PATH = "/commerce-testing"
DEFAULT_ORIGIN = "https://adobedocs.github.io"
DEFAULT_PREFIXES = ["/hlx_statics", "/franklin_assets", "/commerce"]


def normalize_base_path(value: str) -> str:
    """Return ``value`` with exactly one leading slash and no trailing slash.

    An empty or ``/`` base path normalizes to ``""`` (site hosted at root).
    """
    value = (value or "").strip().strip("/")
    return f"/{value}" if value else ""


class InterceptorSettings(BaseModel):
    """Client-side interceptor script options."""

    inject: bool = True
    script_name: str = "gh-pages-interceptor.js"
    write_script: bool = True
    features: dict[str, bool] = Field(default_factory=dict)


class SiteConfig(BaseModel):
    """Root site configuration — loaded from site.yml."""

    version: int = 1

    name: str = "commerce-testing"
    description: str = ""

    base_path: str = DEFAULT_BASE_PATH
    origin: str = DEFAULT_ORIGIN
    prefixes: list[str] = Field(default_factory=lambda: list(DEFAULT_PREFIXES))

    site_dir: str = "public"
    pages_dir: str = "src/pages"
    navigation: list[str] = Field(default_factory=list)

    interceptor: InterceptorSettings = Field(default_factory=InterceptorSettings)

    @field_validator("base_path")
    @classmethod
    def _normalize_base(cls, v: str) -> str:
        return normalize_base_path(v)

    @field_validator("origin")
    @classmethod
    def _strip_origin(cls, v: str) -> str:
        return (v or "").rstrip("/")

    @field_validator("prefixes")
    @classmethod
    def _check_prefixes(cls, v: list[str]) -> list[str]:
        for prefix in v:
            if not prefix.startswith("/"):
                raise ValueError(f"prefix must be root-relative: {prefix!r}")
        return v
