"""Route derivation for collection pages.

Given a parsed :class:`~wren.collection.template.PathTemplate` and one
data record, substitute record values into the template::

    template  {Post.slug}/{Post.category}!
    record    {"slug": "hello", "category": "news"}
    route     /hello/news

Derivation is pure: the record is never mutated and nothing is cached,
so the same inputs always give the same route and any number of callers
may derive concurrently.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, TypeAlias

from wren.collection.template import PARENT_FIELD, FieldRef, Literal, PathTemplate
from wren.errors import FieldResolutionError

NodeResolver: TypeAlias = Callable[[str], Any]

MISSING = object()

_SEPARATORS_RE = re.compile(r"/{2,}")


@dataclass(frozen=True, slots=True)
class ParentRef:
    """A weak, identifier-based reference to a record's parent.

    Holds the id and the lookup capability, never the parent itself.
    """

    node_id: str
    resolver: NodeResolver

    def resolve(self) -> Any:
        return self.resolver(self.node_id)


def get_field(record: Any, name: str) -> Any:
    """Look up *name* on a mapping or attribute-bearing record.

    Returns a sentinel (never raises) when the field is absent.
    """
    if record is None:
        return MISSING
    if isinstance(record, Mapping):
        return record.get(name, MISSING)
    return getattr(record, name, MISSING)


def parent_of(record: Any, resolve_parent: NodeResolver | None) -> Any:
    """Return the realized parent of *record*, or the missing sentinel.

    A :class:`ParentRef` is dereferenced; a string parent is followed
    through *resolve_parent* (one hop); a parent that is already a record
    is used as-is.
    """
    parent = get_field(record, PARENT_FIELD)
    if isinstance(parent, ParentRef):
        resolved = parent.resolve()
        return MISSING if resolved is None else resolved
    if isinstance(parent, str):
        if resolve_parent is None:
            return MISSING
        resolved = ParentRef(parent, resolve_parent).resolve()
        return MISSING if resolved is None else resolved
    if parent is None:
        return MISSING
    return parent


def to_route_text(value: Any) -> str:
    """Canonical string form of a resolved field value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def resolve_field(ref: FieldRef, record: Any, resolve_parent: NodeResolver | None) -> str | None:
    """Resolve one field reference, returning None on a miss."""
    names = ref.field_path
    current = record
    if ref.through_parent:
        current = parent_of(record, resolve_parent)
        names = names[1:]
    for name in names:
        if current is MISSING:
            break
        current = get_field(current, name)
    if current is MISSING or current is None:
        return None
    text = to_route_text(current)
    return text or None


def derive_path(
    template: PathTemplate,
    record: Any,
    resolve_parent: NodeResolver | None = None,
) -> str:
    """Build the route for *record* from *template*.

    Raises:
        FieldResolutionError: A required field reference is missing,
            ``None``, or empty on the record.
    """
    pieces: list[str] = []
    for segment in template.segments:
        if isinstance(segment, Literal):
            pieces.append(segment.text)
            continue
        value = resolve_field(segment, record, resolve_parent)
        if value is None:
            if not segment.optional:
                raise FieldResolutionError(segment.source, segment.key)
            value = ""
        pieces.append(value)
    return normalize_route("".join(pieces))


def normalize_route(path: str) -> str:
    """Leading ``/``, single separators, no trailing ``/`` except root."""
    route = _SEPARATORS_RE.sub("/", "/" + path)
    if route != "/":
        route = route.rstrip("/")
    return route
