"""
Client-side interceptor — renders the GitHub Pages path shim.

The shim is a real JavaScript file (``data/templates/gh-pages-interceptor.js``)
that editors can syntax-check.  Rendering uses two mechanisms:

  1. Conditional blocks:  // __IF_FEATURE_xxx__ ... // __ENDIF__
  2. Placeholder substitution:  __BASE_PATH__, __PREFIXES__, ...

Values are JSON-encoded so they land in the script as JS literals.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from src.core.data import TEMPLATES_DIR
from src.core.models.site import SiteConfig
from src.core.services.page_fixes import DEFAULT_HERO_COLOR

logger = logging.getLogger(__name__)

TEMPLATE_PATH = TEMPLATES_DIR / "gh-pages-interceptor.js"


class InterceptorError(Exception):
    """Raised when the interceptor script cannot be rendered."""


# ── Feature registry ────────────────────────────────────────────────

FEATURES: dict[str, dict[str, Any]] = {
    "normalize_index": {
        "label": "Drop /index.html from the address bar",
        "default": True,
    },
    "intercept_fetch": {
        "label": "Rewrite fetch() request URLs",
        "default": True,
    },
    "intercept_xhr": {
        "label": "Rewrite XMLHttpRequest URLs",
        "default": True,
    },
    "observe_dom": {
        "label": "Rewrite src/href on elements added after load",
        "default": True,
    },
    "side_nav": {
        "label": "Show side navigation on documentation pages",
        "default": True,
    },
    "toc_filter": {
        "label": "Limit the side TOC to the current section",
        "default": True,
    },
    "superhero": {
        "label": "Hero background fallback to its <img>",
        "default": True,
    },
}


def interceptor_features() -> list[dict[str, Any]]:
    """Feature list for display: ``[{key, label, default}, ...]``."""
    return [{"key": key, **meta} for key, meta in FEATURES.items()]


def resolve_features(overrides: dict[str, bool] | None = None) -> dict[str, bool]:
    """Feature defaults with ``overrides`` applied.

    Raises:
        InterceptorError: If an override names an unknown feature.
    """
    features = {key: bool(meta["default"]) for key, meta in FEATURES.items()}
    for key, enabled in (overrides or {}).items():
        if key not in FEATURES:
            raise InterceptorError(
                f"Unknown interceptor feature '{key}' "
                f"(known: {', '.join(FEATURES)})"
            )
        features[key] = bool(enabled)
    return features


# ── Template processing ─────────────────────────────────────────────

_IF_RE = re.compile(
    r"^[ \t]*//\s*__IF_FEATURE_(\w+)__[ \t]*\n(.*?)^[ \t]*//\s*__ENDIF__[ \t]*\n",
    re.MULTILINE | re.DOTALL,
)
_LEFTOVER_RE = re.compile(r"__[A-Z][A-Z0-9_]*__")


def process_template(
    content: str,
    features: dict[str, bool],
    placeholders: dict[str, str],
) -> str:
    """Resolve feature blocks, then substitute placeholders.

    Blocks do not nest: each ``__IF_FEATURE_x__`` closes at the next
    ``__ENDIF__``.
    """
    content = _IF_RE.sub(
        lambda m: m.group(2) if features.get(m.group(1), False) else "",
        content,
    )

    for key, value in placeholders.items():
        content = content.replace(key, value)

    return re.sub(r"\n{3,}", "\n\n", content)


def render_interceptor(
    site: SiteConfig,
    features: dict[str, bool] | None = None,
    *,
    template_path: Path | None = None,
) -> str:
    """Render the interceptor script for ``site``.

    Args:
        site: Site configuration (base path, prefixes, feature overrides).
        features: Extra overrides applied on top of ``site.interceptor.features``.
        template_path: Alternative template (tests, forks of the shim).

    Raises:
        InterceptorError: Unknown feature, unreadable template, or a
            placeholder left unresolved.
    """
    path = template_path or TEMPLATE_PATH
    try:
        template = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InterceptorError(f"Cannot read interceptor template {path}: {e}") from e

    merged = {**site.interceptor.features, **(features or {})}
    enabled = resolve_features(merged)

    placeholders = {
        "__BASE_PATH_TEXT__": site.base_path or "/",
        "__BASE_PATH__": json.dumps(site.base_path),
        "__PREFIXES__": json.dumps(list(site.prefixes)),
        "__HERO_COLOR__": json.dumps(DEFAULT_HERO_COLOR),
    }
    script = process_template(template, enabled, placeholders)

    leftover = sorted(set(_LEFTOVER_RE.findall(script)))
    if leftover:
        raise InterceptorError(f"Unresolved placeholders in interceptor: {', '.join(leftover)}")

    logger.debug(
        "Rendered interceptor (%d bytes, features: %s)",
        len(script), ", ".join(k for k, v in enabled.items() if v) or "none",
    )
    return script
