"""Shared fixtures for wren tests."""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def make_pages(tmp_path: Path) -> Callable[..., Path]:
    """Create a pages directory from ``{relative_path: content}``.

    Returns the directory.  Calling the factory again adds more files to
    the same directory.
    """
    root = tmp_path / "pages"
    root.mkdir()

    def factory(files: dict[str, str] | None = None) -> Path:
        for relative_path, content in (files or {}).items():
            target = root / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return factory
