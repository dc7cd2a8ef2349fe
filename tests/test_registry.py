"""Tests for wren.collection.registry — collection discovery and lookup."""

from pathlib import Path

import pytest

from wren.collection.query import default_query
from wren.collection.registry import (
    CollectionRegistry,
    CollectionTemplate,
    load_collection_template,
    scan_collections,
)
from wren.collection.template import parse_template
from wren.diagnostics import Reporter
from wren.errors import (
    CollectionConflictError,
    ConfigurationError,
    QueryShapeError,
    TemplateSyntaxError,
)

EXTENSIONS = (".py", ".js")


def _entry(file_path: str) -> CollectionTemplate:
    template = parse_template(file_path)
    return CollectionTemplate(
        collection_name=template.collection_name,
        template=template,
        file_path=file_path,
        query_string=default_query(template),
    )


class TestCollectionRegistry:
    def test_register_and_lookup(self) -> None:
        registry = CollectionRegistry()
        entry = _entry("blog/{Post.slug}.py")
        registry.register(entry)
        assert registry.lookup("allPost") is entry
        assert "allPost" in registry
        assert len(registry) == 1
        assert list(registry) == [entry]

    def test_lookup_missing(self) -> None:
        assert CollectionRegistry().lookup("allPost") is None

    def test_first_registration_wins(self) -> None:
        registry = CollectionRegistry()
        first = _entry("blog/{Post.slug}.py")
        registry.register(first)
        with pytest.raises(CollectionConflictError) as exc_info:
            registry.register(_entry("{Post.title}.py"))
        assert exc_info.value.existing == "blog/{Post.slug}.py"
        assert exc_info.value.rejected == "{Post.title}.py"
        assert registry.lookup("allPost") is first

    def test_same_file_twice_is_noop(self) -> None:
        registry = CollectionRegistry()
        registry.register(_entry("blog/{Post.slug}.py"))
        registry.register(_entry("blog/{Post.slug}.py"))
        assert len(registry) == 1

    def test_frozen_rejects_register(self) -> None:
        registry = CollectionRegistry()
        registry.freeze()
        assert registry.frozen
        with pytest.raises(ConfigurationError):
            registry.register(_entry("blog/{Post.slug}.py"))


class TestLoadCollectionTemplate:
    async def test_default_query(self, make_pages) -> None:
        root = make_pages({"blog/{Post.slug}.py": "def get():\n    pass\n"})
        entry = await load_collection_template(root, "blog/{Post.slug}.py")
        assert entry.collection_name == "allPost"
        assert entry.query_string == default_query(entry.template)

    async def test_declared_query(self, make_pages) -> None:
        query = "{ allPost(limit: 3) { ...CollectionPagesQueryFragment } }"
        root = make_pages({"{Post.slug}.py": f'collection_query = "{query}"\n'})
        entry = await load_collection_template(root, "{Post.slug}.py")
        assert entry.query_string == query

    async def test_bad_query(self, make_pages) -> None:
        root = make_pages({"{Post.slug}.py": 'collection_query = "{ allPost { id } }"\n'})
        with pytest.raises(QueryShapeError):
            await load_collection_template(root, "{Post.slug}.py")


class TestScanCollections:
    async def test_registers_and_freezes(self, make_pages) -> None:
        root = make_pages(
            {
                "about.py": "",
                "blog/{Post.slug}.py": "",
                "tags/{Tag.name}.js": "",
            }
        )
        reporter = Reporter()
        registry = await scan_collections(root, CollectionRegistry(), reporter, EXTENSIONS)
        assert registry.frozen
        assert sorted(e.collection_name for e in registry) == ["allPost", "allTag"]
        assert reporter.history == []

    async def test_bad_files_reported_not_registered(self, make_pages) -> None:
        root = make_pages(
            {
                "blog/{Post.slug}.py": "",
                "post-{Tag.name}.py": "",
                "{Page.slug}.py": 'collection_query = "{ allPage { id } }"\n',
            }
        )
        reporter = Reporter()
        registry = await scan_collections(root, CollectionRegistry(), reporter, EXTENSIONS)
        assert [e.collection_name for e in registry] == ["allPost"]
        kinds = sorted(type(e).__name__ for e in reporter.history)
        assert kinds == [QueryShapeError.__name__, TemplateSyntaxError.__name__]

    async def test_conflict_is_deterministic(self, make_pages) -> None:
        root = make_pages({"blog/{Post.slug}.py": "", "{Post.title}.py": ""})
        reporter = Reporter()
        registry = await scan_collections(root, CollectionRegistry(), reporter, EXTENSIONS)
        entry = registry.lookup("allPost")
        assert entry is not None
        assert entry.file_path == "blog/{Post.slug}.py"
        (error,) = reporter.history
        assert isinstance(error, CollectionConflictError)

    async def test_missing_root(self, tmp_path: Path) -> None:
        registry = await scan_collections(
            tmp_path / "nope", CollectionRegistry(), Reporter(), EXTENSIONS
        )
        assert registry.frozen
        assert len(registry) == 0
