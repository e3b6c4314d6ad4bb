"""Source file discovery over a directory tree."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path

DEFAULT_IGNORE = {
    ".git", "bin", "obj", "node_modules", "packages", ".vs", ".idea",
    "TestResults", "__pycache__", ".pytest_cache",
}

# Designer and source-generator output
GENERATED_SUFFIXES = (".designer.cs", ".g.cs", ".g.i.cs")


def _should_ignore(name: str, ignore_set: set[str]) -> bool:
    """Check if a directory name matches ignore patterns."""
    return name in ignore_set or name.startswith(".")


def is_generated_file(path: str | Path) -> bool:
    return Path(path).name.lower().endswith(GENERATED_SUFFIXES)


def find_source_files(
    root: str | Path,
    patterns: tuple[str, ...] | list[str] = ("*.cs",),
    recursive: bool = True,
    ignore: set[str] | None = None,
) -> list[str]:
    """List files under root whose names match any of the glob patterns.

    Matching is case-insensitive. Build output directories and
    designer-generated files are skipped. Results are sorted so repeated
    runs visit files in the same order.
    """
    ignore_set = DEFAULT_IGNORE if ignore is None else ignore
    lowered = [p.lower() for p in patterns]
    found: list[str] = []

    for dirpath, dirnames, filenames in os.walk(root):
        if recursive:
            dirnames[:] = [
                d for d in sorted(dirnames)
                if not _should_ignore(d, ignore_set)
            ]
        else:
            dirnames[:] = []

        for filename in sorted(filenames):
            if is_generated_file(filename):
                continue
            if any(fnmatch.fnmatchcase(filename.lower(), p) for p in lowered):
                found.append(os.path.join(dirpath, filename))

    return found


def read_source(path: str | Path) -> str:
    """Read a source file as text, dropping a UTF-8 byte order mark."""
    with open(path, "rb") as f:
        data = f.read()
    return data.decode("utf-8-sig", errors="replace")
