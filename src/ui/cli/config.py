"""
CLI commands for site.yml.
"""

from __future__ import annotations

import json
import sys

import click


@click.group("config")
def config() -> None:
    """Config — inspect and validate site.yml."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate site.yml (defaults apply when there is none)."""
    from src.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    source = str(result.config_path) if result.config_path else "built-in defaults"
    if result.valid and result.site is not None:
        click.secho(f"✅ Configuration is valid ({source})", fg="green", bold=True)
        click.echo(f"   Site:      {result.site.name}")
        click.echo(f"   Serves at: {result.site.origin}{result.site.base_path}/")
        click.echo(f"   Base path: {result.site.base_path or '/'}")
        click.echo(f"   Prefixes:  {', '.join(result.site.prefixes) or '(none)'}")
    else:
        click.secho(f"❌ Configuration errors ({source}):", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    for warn in result.warnings:
        click.secho(f"   ⚠️  {warn}", fg="yellow")

    if not result.valid:
        sys.exit(1)
