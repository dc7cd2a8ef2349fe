"""Collection path templates.

A file path such as ``blog/{Post.slug}/{Post.category}!.js`` is parsed
into a :class:`PathTemplate`: an ordered tuple of literal text and field
references.  Each templated segment must be *exactly* one bracket
expression, optionally followed by ``!`` to mark the field as required::

    {Post.slug}          optional, renders empty when missing
    {Post.slug}!         required
    {Post.slug!}         required (marker inside the brackets)
    {Post.parent__name}  nested field, same as {Post.parent.name}

The first bracket component is the model name; the rest is the field
path.  A field path starting with ``parent`` is traversed through the
record's parent reference.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TypeAlias

from wren.errors import TemplateSyntaxError

PARENT_FIELD = "parent"
REQUIRED_MARKER = "!"

# A templated segment: {Model.field...} with an optional trailing marker
_FIELD_SEGMENT_RE = re.compile(r"^\{([^{}]+)\}(!?)$")

# Any bracket span, used to detect collection files
_BRACKET_RE = re.compile(r"\{[^{}/]*\}")

# Model names and field components are identifiers
_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]+$")


@dataclass(frozen=True, slots=True)
class Literal:
    """Verbatim route text (a directory name, a file stem, or ``/``)."""

    text: str


@dataclass(frozen=True, slots=True)
class FieldRef:
    """A ``{Model.field}`` reference.

    Attributes:
        model: The model name (first bracket component).
        field_path: Field names to traverse from the record root.
        optional: Render an empty segment instead of failing on a miss.
        through_parent: ``field_path[0]`` is the parent reference.
        source: The segment text as written, for diagnostics.
    """

    model: str
    field_path: tuple[str, ...]
    optional: bool = True
    through_parent: bool = False
    source: str = ""

    @property
    def key(self) -> str:
        """Dotted field path, as reported in resolution errors."""
        return ".".join(self.field_path)


Segment: TypeAlias = Literal | FieldRef


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """A parsed collection path. Immutable."""

    segments: tuple[Segment, ...]
    model: str

    @property
    def fields(self) -> tuple[FieldRef, ...]:
        return tuple(s for s in self.segments if isinstance(s, FieldRef))

    @property
    def collection_name(self) -> str:
        """Plural query name of the model (``Post`` -> ``allPost``)."""
        return f"all{self.model}"


def is_collection_path(path: str) -> bool:
    """Return True if *path* contains a ``{...}`` bracket span."""
    return _BRACKET_RE.search(path) is not None


def strip_extension(path: str) -> str:
    """Drop the file extension from the last path component.

    ``{Post.slug}`` has no extension even though it contains a dot.
    """
    pure = PurePosixPath(path)
    if not _EXTENSION_RE.match(pure.suffix):
        return path
    return str(pure.with_suffix(""))


def parse_template(path: str) -> PathTemplate:
    """Parse a relative file path into a :class:`PathTemplate`.

    Raises:
        TemplateSyntaxError: A segment is not exactly one bracket
            expression, names no field, or the path mixes models.
    """
    parts = [p for p in strip_extension(path.replace("\\", "/")).split("/") if p]
    # index files map to their directory route
    if parts and parts[-1] == "index":
        parts = parts[:-1]

    segments: list[Segment] = []
    model: str | None = None
    for part in parts:
        if segments:
            segments.append(Literal("/"))
        if "{" not in part and "}" not in part:
            segments.append(Literal(part))
            continue

        ref = _parse_field_segment(part)
        if model is None:
            model = ref.model
        elif ref.model != model:
            raise TemplateSyntaxError(part, f"expected model {model!r}, got {ref.model!r}")
        segments.append(ref)

    if model is None:
        raise TemplateSyntaxError(path, "no {Model.field} segment found")
    return PathTemplate(segments=tuple(segments), model=model)


def _parse_field_segment(part: str) -> FieldRef:
    match = _FIELD_SEGMENT_RE.match(part)
    if match is None:
        raise TemplateSyntaxError(part, "a segment must be exactly one {Model.field} expression")

    body, marker = match.group(1), match.group(2)
    required = bool(marker)
    if body.endswith(REQUIRED_MARKER):
        body = body[: -len(REQUIRED_MARKER)]
        required = True

    components = body.replace("__", ".").split(".")
    if len(components) < 2:
        raise TemplateSyntaxError(part, "missing field name after the model")
    for component in components:
        if not _NAME_RE.match(component):
            raise TemplateSyntaxError(part, f"invalid name {component!r}")

    model, *field_path = components
    if field_path == [PARENT_FIELD]:
        raise TemplateSyntaxError(part, "name a field of the parent, e.g. {Model.parent.name}")
    return FieldRef(
        model=model,
        field_path=tuple(field_path),
        optional=not required,
        through_parent=field_path[0] == PARENT_FIELD,
        source=part,
    )
