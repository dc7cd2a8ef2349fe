"""Wren — filesystem pages with collection routes.

Keeps a generated page set in sync with a directory of page files.  A
file named with ``{Model.field}`` segments becomes one page per data
record, at a route derived from the record.

Basic usage::

    import anyio
    from wren import PageCreatorConfig, PageCreatorSession, PageStore

    store = PageStore()
    session = PageCreatorSession(PageCreatorConfig(path="src/pages"), store)
    anyio.run(session.run)

Deriving a collection route directly::

    from wren import derive_path, parse_template

    template = parse_template("{Post.slug}/{Post.category}!.py")
    derive_path(template, {"slug": "hello", "category": "news"})  # "/hello/news"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CollectionRegistry",
    "ConfigurationError",
    "DirectoryWatcher",
    "FieldResolutionError",
    "GeneratedPage",
    "PageCreatorConfig",
    "PageCreatorError",
    "PageCreatorSession",
    "PageStore",
    "PageSyncEngine",
    "QueryResult",
    "QueryShapeError",
    "ReconciliationError",
    "Reporter",
    "TemplateSyntaxError",
    "WatchEvent",
    "WatchKind",
    "WrenError",
    "derive_path",
    "parse_template",
    "validate_query",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "PageCreatorConfig":
        from wren.config import PageCreatorConfig

        return PageCreatorConfig

    if name == "PageCreatorSession":
        from wren.session import PageCreatorSession

        return PageCreatorSession

    if name == "PageStore":
        from wren.pages.store import PageStore

        return PageStore

    if name == "PageSyncEngine":
        from wren.pages.sync import PageSyncEngine

        return PageSyncEngine

    if name in ("GeneratedPage", "QueryResult"):
        from wren.pages import types as _types

        return getattr(_types, name)

    if name == "CollectionRegistry":
        from wren.collection.registry import CollectionRegistry

        return CollectionRegistry

    if name == "derive_path":
        from wren.collection.derive import derive_path

        return derive_path

    if name == "parse_template":
        from wren.collection.template import parse_template

        return parse_template

    if name == "validate_query":
        from wren.collection.query import validate_query

        return validate_query

    if name in ("DirectoryWatcher", "WatchEvent", "WatchKind"):
        from wren import watch as _watch

        return getattr(_watch, name)

    if name == "Reporter":
        from wren.diagnostics import Reporter

        return Reporter

    if name in (
        "ConfigurationError",
        "FieldResolutionError",
        "PageCreatorError",
        "QueryShapeError",
        "ReconciliationError",
        "TemplateSyntaxError",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
