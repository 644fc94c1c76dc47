"""
CLI command for the local preview server.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click


@click.command("serve")
@click.argument("site_dir", required=False, type=click.Path(file_okay=False))
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", "-p", default=8000, show_default=True, type=int, help="Port number.")
@click.pass_context
def serve(ctx: click.Context, site_dir: str | None, host: str, port: int) -> None:
    """Preview the built site under its GitHub Pages base path."""
    from src.ui.cli.site import load_site_or_exit, resolve_site_dir
    from src.ui.web.server import create_app, run_server

    cfg = load_site_or_exit(ctx)
    root = resolve_site_dir(cfg, site_dir)
    if not root.is_dir():
        click.secho(f"❌ Site directory not found: {root}", fg="red")
        sys.exit(1)

    app = create_app(site_dir=Path(root), site=cfg)

    click.secho("\n⚡ Commerce Testing — site preview", bold=True)
    click.echo(f"   URL:  http://{host}:{port}{cfg.base_path}/")
    click.echo(f"   Site: {root}\n")

    run_server(app, host=host, port=port, debug=ctx.obj.get("debug", False))
