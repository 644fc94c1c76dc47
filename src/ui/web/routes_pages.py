"""
Site routes — serves the built site the way GitHub Pages does.

The blueprint is mounted at the site's base path, so a page built for
``/guide/`` is reachable at ``/commerce-testing/guide/``, exactly as it
will be after deployment.

Handles:
  - Direct file requests (CSS, JS, images, ...)
  - Directory requests → ``index.html`` (adding the trailing slash first)
  - ``.../index.html`` → redirect to ``.../``
  - Misses → the site's ``404.html`` with status 404 when present
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

from flask import Blueprint, abort, current_app, redirect, request, send_file
from werkzeug.utils import safe_join

from src.core.services.path_rewrite import normalize_index_path

pages_bp = Blueprint("pages", __name__)


def _site_dir() -> Path:
    return Path(current_app.config["SITE_DIR"])


def _send(path: Path, status: int = 200):  # type: ignore[no-untyped-def]
    mime = mimetypes.guess_type(str(path))[0] or "application/octet-stream"
    response = send_file(path, mimetype=mime)
    response.status_code = status
    return response


def _not_found(filepath: str):  # type: ignore[no-untyped-def]
    page_404 = _site_dir() / "404.html"
    if page_404.is_file():
        return _send(page_404, status=404)
    abort(404, description=f"File not found: {filepath}")


@pages_bp.route("/")
@pages_bp.route("/<path:filepath>")
def serve_site(filepath: str = ""):  # type: ignore[no-untyped-def]
    """Serve one path of the built site."""
    normalized = normalize_index_path(request.full_path.rstrip("?"))
    if normalized is not None:
        return redirect(normalized, code=301)

    joined = safe_join(str(_site_dir()), filepath) if filepath else str(_site_dir())
    if joined is None:
        return _not_found(filepath)
    requested = Path(joined)

    if requested.is_file():
        return _send(requested)

    if requested.is_dir():
        index = requested / "index.html"
        if index.is_file():
            if not request.path.endswith("/"):
                query = request.query_string.decode("utf-8", "replace")
                target = request.path + "/" + (f"?{query}" if query else "")
                return redirect(target, code=301)
            return _send(index)

    return _not_found(filepath)
