"""
sitectl — tools for the Commerce Testing site on GitHub Pages.

The site is generated for the domain root and published under
``/commerce-testing/``.  These commands patch the build for that
sub-path, preview it, and keep navigation and markdown sources clean.

Usage:
    sitectl --help
    sitectl site patch public/
    sitectl nav check --pages
    sitectl serve
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from src import __version__
from src.core.observability.logging_config import level_from_flags, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="sitectl")
@click.option("--verbose", "-v", is_flag=True, help="Log progress (INFO).")
@click.option("--quiet", "-q", is_flag=True, help="Log errors only.")
@click.option("--debug", is_flag=True, help="Log everything, third-party libraries included.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="site.yml to use (default: nearest one upward from the cwd).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Commerce Testing site tools — sub-path hosting, navigation and lint."""
    from src.core.config.loader import find_site_file, site_root
    from src.core.context import set_project_root

    config_file = Path(config_path) if config_path else None
    ctx.obj = {
        "verbose": verbose,
        "debug": debug,
        "config_path": config_file,
    }

    set_project_root(site_root(config_file or find_site_file()))
    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("SITE_LOG_FILE"),
        log_file_level=os.environ.get("SITE_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


# ── Sub-commands live in src/ui/cli/ ──────────────────────────────

from src.ui.cli.config import config
from src.ui.cli.lint import lint
from src.ui.cli.nav import nav
from src.ui.cli.serve import serve
from src.ui.cli.site import site

for _command in (config, site, nav, lint, serve):
    cli.add_command(_command)


if __name__ == "__main__":
    cli()
