"""Tests for wren.pages.paths and wren.pages.discovery."""

from pathlib import Path

import pytest

from wren.pages.discovery import find_collection_files, find_page_files, is_page_file
from wren.pages.paths import create_path, is_ignored, is_valid_path

EXTENSIONS = (".py", ".js")


class TestCreatePath:
    @pytest.mark.parametrize(
        ("path", "route"),
        [
            ("about.js", "/about"),
            ("index.js", "/"),
            ("blog/index.py", "/blog"),
            ("blog/first-post.py", "/blog/first-post"),
            ("docs/guides/setup.js", "/docs/guides/setup"),
        ],
    )
    def test_routes(self, path: str, route: str) -> None:
        assert create_path(path) == route

    def test_windows_separators(self) -> None:
        assert create_path("blog\\post.js") == "/blog/post"


class TestIsValidPath:
    def test_plain_file(self) -> None:
        assert is_valid_path("about.js")

    def test_underscore_prefix(self) -> None:
        assert not is_valid_path("_helpers.py")
        assert not is_valid_path("blog/_layout.js")

    def test_template_prefix(self) -> None:
        assert not is_valid_path("template-post.js")

    def test_type_declarations(self) -> None:
        assert not is_valid_path("types.d.ts")


class TestIsIgnored:
    def test_no_patterns(self) -> None:
        assert not is_ignored("about.js", ())

    def test_matches(self) -> None:
        assert is_ignored("drafts/wip.js", ("drafts/*",))
        assert is_ignored("blog/post.test.js", ("*.test.*",))

    def test_no_match(self) -> None:
        assert not is_ignored("blog/post.js", ("drafts/*",))


class TestDiscovery:
    def test_lists_page_files_sorted(self, make_pages) -> None:
        root = make_pages(
            {
                "index.js": "",
                "about.py": "",
                "blog/{Post.slug}.py": "",
                "notes.txt": "",
            }
        )
        assert find_page_files(root, EXTENSIONS) == ["about.py", "blog/{Post.slug}.py", "index.js"]

    def test_skips_hidden_and_node_modules(self, make_pages) -> None:
        root = make_pages(
            {
                "about.js": "",
                ".cache/page.js": "",
                "node_modules/pkg/index.js": "",
            }
        )
        assert find_page_files(root, EXTENSIONS) == ["about.js"]

    def test_collection_files(self, make_pages) -> None:
        root = make_pages({"about.js": "", "blog/{Post.slug}.py": ""})
        assert find_collection_files(root, EXTENSIONS) == ["blog/{Post.slug}.py"]

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            find_page_files(tmp_path / "missing", EXTENSIONS)

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("about.js", True),
            ("blog/post.py", True),
            ("notes.txt", False),
            (".cache/page.js", False),
            ("node_modules/pkg/index.js", False),
            ("blog/__pycache__/post.py", False),
            (".well-known.js", True),
        ],
    )
    def test_is_page_file(self, path: str, expected: bool) -> None:
        assert is_page_file(path, EXTENSIONS) is expected
