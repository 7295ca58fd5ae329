"""Site descriptor for siteroot.

A Site is the identity of one served website: the host names it answers to
and the directory its content is served from. It is a plain frozen value;
the operations on it are free functions so a dispatcher can work with any
number of sites without a class hierarchy.

Key members:
- Site: Immutable descriptor, validated at construction.
- ConfigurationError: Raised when a descriptor (or its configuration) is invalid.
- matches_host: Exact host-name membership test.
- resolve_content: Join a relative path onto the site root.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

# Packaged content root, used when no root is configured.
DEFAULT_ROOT = Path(__file__).parent / "www"


class ConfigurationError(Exception):
    """Invalid site configuration.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Site:
    """One logical site: accepted host names and a content root.

    Attributes:
        host_names: Host names this site answers to.
        root: Absolute path of the content root.
    """

    host_names: frozenset[str]
    root: Path

    def __init__(self, host_names: Iterable[str], root: Path | str = DEFAULT_ROOT):
        if isinstance(host_names, str):
            host_names = [host_names]
        hosts = frozenset(host_names)
        if not hosts:
            raise ConfigurationError("A site needs at least one host name")
        resolved = Path(root).resolve()
        if not resolved.exists():
            raise ConfigurationError(f"Site root does not exist: {resolved}")
        if not resolved.is_dir():
            raise ConfigurationError(f"Site root is not a directory: {resolved}")
        if not os.access(resolved, os.R_OK | os.X_OK):
            raise ConfigurationError(f"Site root is not readable: {resolved}")
        object.__setattr__(self, "host_names", hosts)
        object.__setattr__(self, "root", resolved)


def matches_host(site: Site, host: str) -> bool:
    """Return True if ``host`` is one of the site's host names.

    Matching is exact and case-sensitive; port stripping and any wildcard
    policy belong to the dispatcher.
    """
    return host in site.host_names


def resolve_content(site: Site, relative: str | os.PathLike) -> Path:
    """Join ``relative`` onto the site root.

    No existence check and no traversal sanitization happen here; untrusted
    input must be sanitized before it reaches this function.
    """
    return site.root / relative
