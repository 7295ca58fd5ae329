"""Project loading for siteroot.

Each file in the projects directory holds one JSON document describing a
showcased project. This module reads them into a ProjectCollection for the
rendering layer.

Key members:
- load_projects: Read every regular file in a directory as a project record.
- ProjectCollection: Ordered, read-only sequence of project records.
- DirectoryNotFoundError: The projects directory is missing or unreadable.
- DecodeError: A project file is not valid JSON.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Any

ProjectRecord = dict[str, Any]


class DirectoryNotFoundError(FileNotFoundError):
    """The projects directory is missing, not a directory, or unreadable.

    Attributes:
        path: Directory that was requested.
    """

    def __init__(self, path: Path, reason: str = "not found"):
        self.path = path
        super().__init__(f"Projects directory {reason}: {path}")


class DecodeError(ValueError):
    """A project file could not be decoded.

    Attributes:
        source_path: Path to the offending file.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


class ProjectCollection(Sequence[ProjectRecord]):
    """Project records in load order, with the file each one came from."""

    def __init__(self, entries: Iterable[tuple[Path, ProjectRecord]] = ()):
        self._entries = list(entries)

    def __iter__(self) -> Iterator[ProjectRecord]:
        return (record for _, record in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return ProjectCollection(self._entries[item])
        return self._entries[item][1]

    @property
    def sources(self) -> list[Path]:
        return [path for path, _ in self._entries]

    def with_sources(self) -> list[tuple[Path, ProjectRecord]]:
        return list(self._entries)

    def sorted_by(self, key: str, reverse: bool = False) -> ProjectCollection:
        """Sort records by a field, keeping records without it at the end.

        Records whose value is missing (or not a mapping) keep their current
        relative order after the sorted ones. Values are compared as strings
        when they are of mixed types.
        """
        present, missing = [], []
        for entry in self._entries:
            record = entry[1]
            if isinstance(record, dict) and key in record:
                present.append(entry)
            else:
                missing.append(entry)
        try:
            ordered = sorted(present, key=lambda e: e[1][key], reverse=reverse)
        except TypeError:
            ordered = sorted(present, key=lambda e: str(e[1][key]), reverse=reverse)
        return ProjectCollection(ordered + missing)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"ProjectCollection({len(self._entries)} projects)"


def load_projects(directory: Path | str) -> ProjectCollection:
    """Load every regular file in ``directory`` as a JSON project record.

    The directory is not searched recursively. Records are returned sorted
    by file name. Keys are kept exactly as written in the source files.

    Args:
        directory: Directory containing one JSON document per file.

    Returns:
        ProjectCollection with one record per file.

    Raises:
        DirectoryNotFoundError: If the directory is missing or unreadable.
        DecodeError: If any file is not valid JSON. No partial result is
            returned in that case.
    """
    directory = Path(directory)
    if not directory.exists():
        raise DirectoryNotFoundError(directory)
    if not directory.is_dir():
        raise DirectoryNotFoundError(directory, "is not a directory")
    if not os.access(directory, os.R_OK | os.X_OK):
        raise DirectoryNotFoundError(directory, "is not readable")
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise DirectoryNotFoundError(directory, "is not readable") from exc

    loaded: list[tuple[Path, ProjectRecord]] = []
    for path in entries:
        try:
            is_regular = path.is_file()
        except OSError as exc:
            raise DirectoryNotFoundError(directory, "is not readable") from exc
        if not is_regular:
            continue
        loaded.append((path, _decode(path)))
    return ProjectCollection(loaded)


class _InvalidConstant(ValueError):
    def __init__(self, constant: str):
        self.constant = constant
        super().__init__(constant)


def _reject_constant(constant: str):
    # NaN, Infinity and -Infinity are not part of JSON.
    raise _InvalidConstant(constant)


def _decode(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8-sig") as f:
            return json.load(f, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            path, f"Invalid JSON on line {exc.lineno}: {exc.msg}", exc
        ) from exc
    except _InvalidConstant as exc:
        raise DecodeError(path, f"Invalid JSON constant {exc.constant}", exc) from exc
    except UnicodeDecodeError as exc:
        raise DecodeError(path, "File is not valid UTF-8", exc) from exc
    except OSError as exc:
        raise DecodeError(
            path, f"Could not read file: {exc.strerror or exc}", exc
        ) from exc
