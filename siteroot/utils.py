"""Utility functions for siteroot.

Key functions:
    slugify: Convert a project title to a file-name-safe slug.
    display_path: Show a path relative to a base directory when possible.
"""

from __future__ import annotations

import re
from pathlib import Path


def slugify(name: str) -> str:
    """Convert a title to a lowercase, hyphen-separated slug.

    Args:
        name: Free-form title.

    Returns:
        URL- and filename-friendly slug, ``"project"`` when nothing is left.

    Examples:
        >>> slugify("My Cool Project!")
        'my-cool-project'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", name)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "project"


def display_path(path: Path, base: Path) -> Path:
    """Return ``path`` relative to ``base``, or unchanged if it lies elsewhere."""
    try:
        return path.relative_to(base)
    except ValueError:
        return path
