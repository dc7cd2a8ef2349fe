"""Filesystem discovery for the pages root.

Walks the directory tree and lists page source files:

- every file whose suffix is one of the configured extensions
  (:func:`find_page_files`), and
- the subset whose path contains a ``{...}`` bracket span
  (:func:`find_collection_files`).

Paths are returned relative to the root, with ``/`` separators, sorted.
Hidden directories and ``node_modules`` are never entered.  The same rule
filters watch events (:func:`is_page_file`), so a file produces the same
pages whether it existed at startup or arrived later.
"""

from pathlib import Path

from wren.collection.template import is_collection_path

_SKIPPED_DIRS = frozenset({"node_modules", "__pycache__"})


def find_page_files(root: str | Path, extensions: tuple[str, ...]) -> list[str]:
    """Walk *root* and return every file with a page extension.

    Raises:
        FileNotFoundError: *root* is not a directory.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Pages directory not found: {root}")

    found: list[str] = []
    _walk_directory(root, root, frozenset(extensions), found)
    return sorted(found)


def find_collection_files(root: str | Path, extensions: tuple[str, ...]) -> list[str]:
    """Return the page files whose path contains a bracket span."""
    return [p for p in find_page_files(root, extensions) if is_collection_path(p)]


def _walk_directory(
    directory: Path,
    root: Path,
    extensions: frozenset[str],
    found: list[str],
) -> None:
    for item in sorted(directory.iterdir()):
        if item.is_dir():
            if is_skipped_dir(item.name):
                continue
            _walk_directory(item, root, extensions, found)
        elif item.is_file() and has_page_extension(item.name, extensions):
            found.append(item.relative_to(root).as_posix())


def has_page_extension(name: str, extensions: tuple[str, ...] | frozenset[str]) -> bool:
    """Return True if *name* ends with one of *extensions*."""
    return any(name.endswith(ext) for ext in extensions)


def is_skipped_dir(name: str) -> bool:
    """Return True for directory names the walk never enters."""
    return name.startswith(".") or name in _SKIPPED_DIRS


def is_page_file(relative_path: str, extensions: tuple[str, ...] | frozenset[str]) -> bool:
    """Return True if the walk would list *relative_path*.

    Checks the extension and that no parent directory is skipped.
    """
    if not has_page_extension(relative_path, extensions):
        return False
    *directories, _ = relative_path.split("/")
    return not any(is_skipped_dir(d) for d in directories)
