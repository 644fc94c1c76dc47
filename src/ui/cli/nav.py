"""
CLI commands for the navigation tables.

Thin wrappers over ``src.core.services.navigation``.
"""

from __future__ import annotations

import json
import sys
from urllib.parse import urlsplit

import click

from src.core.models.navigation import NavItem


def _load_sections(ctx: click.Context):
    from src.core.context import resolve_project_root
    from src.core.services.navigation import NavigationError, load_sections
    from src.ui.cli.site import load_site_or_exit

    site = load_site_or_exit(ctx)
    try:
        return site, load_sections(site, resolve_project_root())
    except NavigationError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _echo_tree(items: list[NavItem], depth: int = 0) -> None:
    for item in items:
        indent = "   " + "  " * depth
        click.echo(f"{indent}• {item.title}  ", nl=False)
        click.secho(item.path, fg="bright_black")
        _echo_tree(item.pages, depth + 1)


@click.group("nav")
def nav() -> None:
    """Nav — inspect and validate the side navigation tables."""


@nav.command("show")
@click.argument("section_name", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, section_name: str | None, as_json: bool) -> None:
    """Print a navigation section (all sections when none named)."""
    from src.core.services.navigation import get_section

    _site, sections = _load_sections(ctx)

    if section_name:
        section = get_section(sections, section_name)
        if section is None:
            names = ", ".join(s.name for s in sections)
            click.secho(f"❌ Unknown section '{section_name}' (available: {names})", fg="red")
            sys.exit(1)
        sections = [section]

    if as_json:
        click.echo(json.dumps([s.model_dump() for s in sections], indent=2))
        return

    for section in sections:
        click.secho(f"\n📑 {section.name} ({section.count()} entries)", fg="cyan", bold=True)
        _echo_tree(section.items)
    click.echo()


@nav.command("find")
@click.argument("path")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def find(ctx: click.Context, path: str, as_json: bool) -> None:
    """Look up the navigation entry for a page path or served URL.

    Served URLs (/commerce-testing/guide/, or with the origin) map back
    to the site-root path the navigation uses.
    """
    from src.core.services.navigation import breadcrumbs, find_by_path, get_section
    from src.core.services.path_rewrite import PathRewriter

    site, sections = _load_sections(ctx)
    nav_path = PathRewriter.from_site(site).strip_base(urlsplit(path).path or "/")
    entry = find_by_path(sections, nav_path)

    if entry is None:
        if as_json:
            click.echo(json.dumps({"found": False, "path": path}, indent=2))
        else:
            click.secho(f"❌ No navigation entry for {path}", fg="red")
        sys.exit(1)

    section = get_section(sections, entry.section)
    trail = breadcrumbs(section, entry.path) if section else []

    if as_json:
        click.echo(json.dumps({
            "found": True,
            **entry.to_dict(),
            "breadcrumbs": [{"title": i.title, "path": i.path} for i in trail],
        }, indent=2))
        return

    click.secho(f"📍 {entry.title}", fg="green", bold=True)
    click.echo(f"   Section: {entry.section}")
    click.echo(f"   Path:    {entry.path}")
    click.echo(f"   Trail:   {' › '.join(i.title for i in trail)}")


@nav.command("check")
@click.option("--pages", "check_sources", is_flag=True,
              help="Also require a markdown source for every internal path.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, check_sources: bool, as_json: bool) -> None:
    """Validate navigation paths, titles and nesting."""
    from src.core.context import resolve_project_root
    from src.core.services.navigation import check_pages, validate_section

    site, sections = _load_sections(ctx)

    issues = [issue for s in sections for issue in validate_section(s)]
    if check_sources:
        issues += check_pages(sections, resolve_project_root() / site.pages_dir)

    errors = [i for i in issues if i.level == "error"]

    if as_json:
        click.echo(json.dumps({
            "ok": not errors,
            "sections": [s.name for s in sections],
            "issues": [i.to_dict() for i in issues],
        }, indent=2))
        sys.exit(1 if errors else 0)

    total = sum(s.count() for s in sections)
    if not issues:
        click.secho(
            f"✅ Navigation valid ({total} entries in {len(sections)} sections)",
            fg="green", bold=True,
        )
        return

    for issue in issues:
        icon, color = ("❌", "red") if issue.level == "error" else ("⚠️ ", "yellow")
        click.secho(f"   {icon} [{issue.section}] {issue.path}", fg=color)
        click.echo(f"      {issue.message}")

    click.echo()
    if errors:
        click.secho(f"❌ {len(errors)} error(s) in navigation", fg="red", bold=True)
        sys.exit(1)
    click.secho(f"⚠️  {len(issues)} warning(s) in navigation", fg="yellow")
