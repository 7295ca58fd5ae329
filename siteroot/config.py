"""Configuration loading for siteroot.

Settings live in ``site.yaml`` at the project root and are merged over
DEFAULT_CONFIG. Relative paths in the file are resolved against the
directory holding it.

Key functions:
- load_config: Load settings from site.yaml with defaults applied.
- site_from_config: Build the Site descriptor described by the settings.
- projects_path: Locate the projects directory inside a site's root.
- http_port: Validated HTTP port from the settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .site import DEFAULT_ROOT, ConfigurationError, Site, resolve_content

CONFIG_FILENAME = "site.yaml"

DEFAULT_CONFIG = {
    "hosts": ["localhost", "127.0.0.1"],
    "root": None,
    "projects_dir": "projects",
    "projects_template": "projects.html.jinja",
    "port": 4000,
    "bind": "",
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from site.yaml.

    Args:
        project_root: Directory containing site.yaml.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigurationError: If site.yaml exists but is not valid YAML.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        if isinstance(loaded, dict):
            config.update(loaded)
    return config


def site_from_config(config: dict[str, Any], base_dir: Path) -> Site:
    """Construct the Site described by ``config``.

    Args:
        config: Settings as returned by load_config.
        base_dir: Directory that a relative ``root`` is resolved against.

    Returns:
        Validated Site descriptor.

    Raises:
        ConfigurationError: If the hosts or root are invalid.
    """
    hosts = config.get("hosts") or []
    if isinstance(hosts, str):
        hosts = [hosts]
    if not isinstance(hosts, (list, tuple, set)):
        raise ConfigurationError(
            f"hosts must be a list of host names, got {type(hosts).__name__}"
        )
    root = config.get("root")
    root_path = DEFAULT_ROOT if not root else base_dir / str(root)
    return Site([str(h) for h in hosts], root_path)


def http_port(config: dict[str, Any]) -> int:
    """Return the configured port as an int.

    Raises:
        ConfigurationError: If the port is not an integer in 0-65535.
    """
    value = config.get("port", DEFAULT_CONFIG["port"])
    if isinstance(value, bool):
        raise ConfigurationError(f"port must be an integer, got {value!r}")
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"port must be an integer, got {value!r}") from None
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"port out of range: {port}")
    return port


def projects_path(site: Site, config: dict[str, Any]) -> Path:
    """Return the projects directory for ``site``."""
    return resolve_content(site, str(config.get("projects_dir") or "projects"))
