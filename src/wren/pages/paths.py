"""File path to route conventions.

``about.py`` serves ``/about``; ``index`` files serve their directory
(``blog/index.py`` -> ``/blog``).  Files whose stem starts with ``_`` or
``template-``, and TypeScript declaration files, are never pages.
"""

import fnmatch
from pathlib import PurePosixPath

from wren.collection.derive import normalize_route


def create_path(path: str) -> str:
    """Return the route for a plain (non-collection) page file."""
    pure = PurePosixPath(path.replace("\\", "/"))
    stem = "" if pure.stem == "index" else pure.stem
    parent = "" if str(pure.parent) == "." else str(pure.parent)
    return normalize_route(f"{parent}/{stem}")


def is_valid_path(path: str) -> bool:
    """Return True if *path* names a page component."""
    pure = PurePosixPath(path.replace("\\", "/"))
    if pure.name.endswith(".d.ts"):
        return False
    return not (pure.stem.startswith("_") or pure.stem.startswith("template-"))


def is_ignored(path: str, patterns: tuple[str, ...]) -> bool:
    """Return True if *path* matches any ``ignore`` pattern."""
    posix = path.replace("\\", "/")
    return any(fnmatch.fnmatchcase(posix, pattern) for pattern in patterns)
