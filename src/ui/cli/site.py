"""
CLI commands for sub-path hosting of the built site.

Thin wrappers over ``src.core.services.site_patch`` and friends.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from src.core.models.site import SiteConfig


def load_site_or_exit(ctx: click.Context) -> SiteConfig:
    """Load site.yml (or defaults); print the error and exit 1 on failure."""
    from src.core.config.loader import ConfigError, load_site

    try:
        return load_site(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def resolve_site_dir(site: SiteConfig, site_dir: str | None) -> Path:
    from src.core.context import resolve_project_root

    if site_dir:
        return Path(site_dir)
    return resolve_project_root() / site.site_dir


@click.group("site")
def site() -> None:
    """Site — rewrite a root-built site for its GitHub Pages sub-path."""


@site.command("patch")
@click.argument("site_dir", required=False, type=click.Path(file_okay=False))
@click.option("--dry-run", is_flag=True, help="Report changes without writing files.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def patch(ctx: click.Context, site_dir: str | None, dry_run: bool, as_json: bool) -> None:
    """Patch every HTML file of the built site in place."""
    from src.core.services.interceptor import InterceptorError
    from src.core.services.site_patch import SitePatchError, patch_site

    cfg = load_site_or_exit(ctx)
    root = resolve_site_dir(cfg, site_dir)

    try:
        report = patch_site(root, cfg, dry_run=dry_run)
    except (SitePatchError, InterceptorError) as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(0 if report.ok else 1)

    label = "🔎 Dry run" if dry_run else "🔧 Patched"
    click.secho(f"{label}: {root}", fg="cyan", bold=True)
    click.echo(f"   Base path:   {cfg.base_path or '/'}")
    click.echo(f"   HTML files:  {report.files_changed}/{report.files_scanned} changed")
    click.echo(f"   Attributes:  {report.attributes_rewritten} rewritten")
    click.echo(f"   TOC items:   {report.toc_hidden} hidden")
    click.echo(f"   Scripts:     {report.scripts_injected} injected")
    if report.script_path:
        click.echo(f"   Interceptor: {report.script_path}")

    if ctx.obj.get("verbose"):
        for rel in report.changed_files:
            click.echo(f"     • {rel}")

    if report.errors:
        click.echo()
        click.secho(f"❌ {len(report.errors)} file(s) could not be patched:", fg="red", bold=True)
        for err in report.errors:
            click.echo(f"   • {err['file']}: {err['error']}")
        sys.exit(1)

    click.echo()


@site.command("fix-url")
@click.argument("urls", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def fix_url(ctx: click.Context, urls: tuple[str, ...], as_json: bool) -> None:
    """Show how URLs are rewritten for the sub-path."""
    from src.core.services.path_rewrite import PathRewriter

    rewriter = PathRewriter.from_site(load_site_or_exit(ctx))
    results = [{"url": u, "fixed": rewriter.fix(u)} for u in urls]

    if as_json:
        click.echo(json.dumps(results, indent=2))
        return

    for r in results:
        if r["fixed"]:
            click.secho(f"   ✓ {r['url']} → {r['fixed']}", fg="green")
        else:
            click.echo(f"   · {r['url']} (unchanged)")


@site.command("interceptor")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the script to a file (default: stdout).")
@click.option("--disable", "disabled", multiple=True, help="Disable a feature (repeatable).")
@click.option("--list-features", is_flag=True, help="List features and exit.")
@click.pass_context
def interceptor(
    ctx: click.Context,
    output: str | None,
    disabled: tuple[str, ...],
    list_features: bool,
) -> None:
    """Render the client-side GitHub Pages interceptor script."""
    from src.core.services.interceptor import (
        InterceptorError,
        interceptor_features,
        render_interceptor,
    )

    if list_features:
        for feat in interceptor_features():
            state = "on " if feat["default"] else "off"
            click.echo(f"   [{state}] {feat['key']:<16} {feat['label']}")
        return

    cfg = load_site_or_exit(ctx)
    try:
        script = render_interceptor(cfg, features={name: False for name in disabled})
    except InterceptorError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if output is None:
        click.echo(script, nl=False)
        return

    Path(output).write_text(script, encoding="utf-8")
    click.secho(f"✅ Written: {output}", fg="green", bold=True)
