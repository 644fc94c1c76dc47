"""
CLI command for the project markdown lint rules.

Thin wrapper over ``src.core.services.md_lint``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.command("lint")
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def lint(ctx: click.Context, paths: tuple[str, ...], as_json: bool) -> None:
    """Check markdown for Kramdown link attributes like {:target="_blank"}.

    With no PATHS, lints the configured pages directory.
    """
    from src.core.context import resolve_project_root
    from src.core.services.md_lint import RULE_DESCRIPTION, lint_paths
    from src.ui.cli.site import load_site_or_exit

    root = resolve_project_root()
    if paths:
        targets = [Path(p) for p in paths]
    else:
        targets = [root / load_site_or_exit(ctx).pages_dir]
        if not targets[0].is_dir():
            click.secho(f"❌ Pages directory not found: {targets[0]}", fg="red")
            sys.exit(1)

    report = lint_paths(targets, relative_to=root)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(0 if report.ok else 1)

    if report.ok:
        click.secho(
            f"✅ No link attributes ({report.files_checked} markdown files)",
            fg="green", bold=True,
        )
        return

    for issue in report.issues:
        click.secho(f"   ❌ {issue.file}:{issue.line}:{issue.column}", fg="red")
        click.echo(f"      {issue.context}")

    for err in report.errors:
        click.secho(f"   ❌ {err['file']}: {err['error']}", fg="red")

    click.echo()
    click.secho(
        f"❌ {len(report.issues)} issue(s) in {report.files_checked} file(s) — {RULE_DESCRIPTION}",
        fg="red", bold=True,
    )
    sys.exit(1)
