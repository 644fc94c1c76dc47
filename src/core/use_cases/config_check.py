"""
Config check use case — validate site.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.core.config.loader import ConfigError, find_site_file, load_site
from src.core.models.site import SiteConfig
from src.core.services.interceptor import InterceptorError, resolve_features
from src.core.services.navigation import NavigationError, load_sections


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    site: SiteConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "site_name": self.site.name if self.site else None,
            "base_path": self.site.base_path if self.site else None,
            "prefixes": list(self.site.prefixes) if self.site else [],
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate site configuration and report issues.

    Args:
        config_path: Optional explicit path to site.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_site_file()
    if config_path is None:
        result.warnings.append("No site.yml found — using built-in defaults.")
    result.config_path = config_path

    try:
        site = load_site(config_path, search=False)
        result.site = site
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    root = config_path.parent if config_path else Path.cwd()

    # Semantic checks
    if not site.base_path:
        result.warnings.append("base_path is empty — URLs will not be rewritten.")

    if not site.prefixes:
        result.warnings.append("No path prefixes configured — nothing will be rewritten.")

    dupes = {p for p in site.prefixes if site.prefixes.count(p) > 1}
    if dupes:
        result.warnings.append(f"Duplicate prefixes: {', '.join(sorted(dupes))}")

    if site.origin and not site.origin.startswith(("http://", "https://")):
        result.errors.append(f"origin must be an http(s) URL: {site.origin}")

    try:
        resolve_features(site.interceptor.features)
    except InterceptorError as e:
        result.errors.append(str(e))

    try:
        load_sections(site, root)
    except NavigationError as e:
        result.errors.append(str(e))

    if not (root / site.site_dir).is_dir():
        result.warnings.append(f"Site directory does not exist: {site.site_dir}")

    if not (root / site.pages_dir).is_dir():
        result.warnings.append(f"Pages directory does not exist: {site.pages_dir}")

    result.valid = len(result.errors) == 0
    return result
