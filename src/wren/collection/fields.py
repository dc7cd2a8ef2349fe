"""The ``path`` field attached to record types with a registered collection.

When the query engine builds a record type ``Post`` and ``allPost`` is in
the collection registry, it asks :func:`path_field` for a resolver and
exposes it as a field taking an optional ``file_path`` argument::

    field = path_field(registry, "Post", get_node, extensions)
    field.resolve(record, "/blog/{Post.slug}")   # -> "/blog/hello"

The registry is frozen by the time resolvers exist, so resolution only
reads shared state.
"""

from dataclasses import dataclass

from wren.collection.derive import NodeResolver, derive_path
from wren.collection.registry import CollectionRegistry, CollectionTemplate
from wren.collection.template import parse_template, strip_extension
from wren.errors import PathArgumentError


def validate_path_argument(file_path: str, extensions: tuple[str, ...]) -> None:
    """Check the ``file_path`` argument of a path field.

    It must be absolute (start with ``/``), omit the file extension, and
    omit a trailing ``/index``.

    Raises:
        PathArgumentError: Describing how to fix the argument.
    """
    if not file_path.startswith("/"):
        msg = (
            'To query node "path" the "file_path" argument must be an absolute '
            f'path, starting with a /. Please change this to: "/{file_path}".'
        )
        raise PathArgumentError(msg, filePath=file_path)

    for ext in extensions:
        if file_path.endswith(ext):
            msg = (
                f'The "file_path" argument must omit the file extension. Please '
                f'change {file_path} to "{file_path[: -len(ext)]}"'
            )
            raise PathArgumentError(msg, filePath=file_path)

    if file_path.endswith("/index"):
        msg = (
            'The "file_path" argument must omit the trailing "/index". Please '
            f'change {file_path} to "{file_path[: -len("/index")]}"'
        )
        raise PathArgumentError(msg, filePath=file_path)


@dataclass(frozen=True, slots=True)
class PathField:
    """Resolver for one record type's ``path`` field."""

    collection: CollectionTemplate
    get_node: NodeResolver | None
    extensions: tuple[str, ...]

    @property
    def default_file_path(self) -> str:
        """The template file as a ``file_path`` argument."""
        path = "/" + strip_extension(self.collection.file_path)
        if path.endswith("/index"):
            path = path[: -len("/index")]
        return path

    def resolve(self, record: object, file_path: str | None = None) -> str:
        """Derive the route of *record* under *file_path*.

        Raises:
            PathArgumentError: *file_path* is malformed.
            TemplateSyntaxError: *file_path* is not a valid template.
            FieldResolutionError: A required field is missing.
        """
        if file_path is None:
            file_path = self.default_file_path
        validate_path_argument(file_path, self.extensions)
        template = parse_template(file_path)
        return derive_path(template, record, self.get_node)


def path_field(
    registry: CollectionRegistry,
    type_name: str,
    get_node: NodeResolver | None,
    extensions: tuple[str, ...],
) -> PathField | None:
    """Return a :class:`PathField` if *type_name* has a collection, else None."""
    collection = registry.lookup(f"all{type_name}")
    if collection is None:
        return None
    return PathField(collection=collection, get_node=get_node, extensions=extensions)
