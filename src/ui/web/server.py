"""
Preview server — Flask app factory.

Serves a built (and patched) site under its GitHub Pages base path so
the sub-path rewrite can be checked locally before deploying.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, redirect

from src.core.models.site import SiteConfig

logger = logging.getLogger(__name__)


def create_app(
    site_dir: Path,
    site: SiteConfig | None = None,
) -> Flask:
    """Create and configure the preview application.

    Args:
        site_dir: Directory holding the built site.
        site: Site configuration (defaults when omitted).

    Returns:
        Configured Flask application.
    """
    site = site or SiteConfig()
    app = Flask(__name__, static_folder=None)

    app.config["SITE_DIR"] = str(Path(site_dir).resolve())

    from src.ui.web.routes_pages import pages_bp

    app.register_blueprint(pages_bp, url_prefix=site.base_path or None)

    if site.base_path:
        # The project site lives below the base path; the root only redirects
        @app.route("/")
        def _root():  # type: ignore[no-untyped-def]
            return redirect(f"{site.base_path}/")

    logger.info("Preview app created (site=%s, base=%s)", app.config["SITE_DIR"], site.base_path or "/")
    return app


def run_server(
    app: Flask,
    host: str = "127.0.0.1",
    port: int = 8000,
    debug: bool = False,
) -> None:
    """Run the Flask development server."""
    logger.info("Starting site preview on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False)
