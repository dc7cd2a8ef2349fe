"""Wren exception hierarchy.

Shared across the page scanner, the collection registry, path derivation,
and the session so every module raises and catches the same types.

Every :class:`PageCreatorError` carries a stable ``code`` and a ``context``
mapping.  The :class:`~wren.diagnostics.Reporter` turns those into the
user-facing message; the exception itself never formats for display.
"""

from collections.abc import Mapping
from typing import Any


class WrenError(Exception):
    """Base for all wren-specific errors."""


class PageCreatorError(WrenError):
    """An error with a stable diagnostics code and structured context."""

    code = "1"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Mapping[str, Any] = {"sourceMessage": message, **context}


class ConfigurationError(PageCreatorError):
    """Raised when session configuration is invalid.

    Typically raised by ``PageCreatorSession.check_config()`` before any
    scanning starts, or when a frozen registry is written to.  Reported
    with the generic code and the message as ``sourceMessage``.
    """


class TemplateSyntaxError(PageCreatorError):
    """A bracketed path segment does not follow ``{Model.field}``."""

    code = "5"

    def __init__(self, part: str, reason: str = "") -> None:
        message = f"Invalid collection path segment {part!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, part=part)
        self.part = part


class QueryShapeError(PageCreatorError):
    """A collection query does not spread the collection fragment."""

    code = "2"

    def __init__(self, query_string: str, reason: str = "") -> None:
        message = reason or "Collection query must use the collection fragment"
        super().__init__(message, queryString=query_string)
        self.query_string = query_string


class CollectionQueryError(PageCreatorError):
    """A collection query failed or returned no data."""

    code = "3"

    def __init__(self, file_path: str, errors: tuple[str, ...] = ()) -> None:
        super().__init__(
            f"Collection query for {file_path!r} came back empty",
            filePath=file_path,
            errors=errors,
        )
        self.file_path = file_path
        self.errors = errors


class FieldResolutionError(PageCreatorError):
    """A required field reference could not be resolved on a record."""

    code = "4"

    def __init__(self, slug_part: str, key: str) -> None:
        super().__init__(
            f"Could not find value for {slug_part} (transformed to {key})",
            slugPart=slug_part,
            key=key,
        )
        self.slug_part = slug_part
        self.key = key


class PathArgumentError(PageCreatorError):
    """The ``file_path`` argument given to a path field is malformed."""

    code = "6"


class CollectionConflictError(PageCreatorError):
    """Two template files claim the same collection."""

    code = "5"

    def __init__(self, collection_name: str, existing: str, rejected: str) -> None:
        super().__init__(
            f"Collection {collection_name!r} is already driven by {existing!r}; "
            f"ignoring {rejected!r}",
            part=rejected,
            collection=collection_name,
        )
        self.collection_name = collection_name
        self.existing = existing
        self.rejected = rejected


class RouteConflictError(PageCreatorError):
    """A route is already owned by a different source file."""

    def __init__(self, route: str, owner: str, component: str) -> None:
        super().__init__(
            f"Route {route!r} from {component!r} is already created by {owner!r}",
            route=route,
            owner=owner,
            component=component,
        )
        self.route = route
        self.owner = owner
        self.component = component


class ReconciliationError(PageCreatorError):
    """Applying a watch event failed. Fatal to the session."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"{cause} (while processing {path!r})", filePath=path)
        self.path = path
        self.cause = cause
