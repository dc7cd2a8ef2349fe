"""Collection query extraction and shape validation.

A collection file pulls its records with a query whose collection field
spreads the fixed ``CollectionPagesQueryFragment``::

    {
      allPost(filter: {draft: {eq: false}}) {
        ...CollectionPagesQueryFragment
      }
    }

The validator inspects the parsed document only; it never executes the
query.  Before execution the spread is expanded into a ``nodes`` selection
covering every field the path template references.
"""

import ast
import re

from graphql import FieldNode, FragmentSpreadNode, GraphQLSyntaxError, OperationDefinitionNode, parse

from wren.collection.template import PathTemplate
from wren.errors import QueryShapeError

COLLECTION_FRAGMENT = "CollectionPagesQueryFragment"

# Module-level variable holding the query in Python page files
PYTHON_QUERY_NAME = "collection_query"

# export const collectionGraphQL = graphql`...`
_JS_QUERY_RE = re.compile(
    r"export\s+const\s+collectionGraphQL\s*=\s*graphql\s*`(?P<query>[^`]*)`",
)

_SPREAD_RE = re.compile(r"\.\.\.\s*" + COLLECTION_FRAGMENT + r"\b")


def extract_query_string(source: str, suffix: str) -> str | None:
    """Return the collection query declared in a page file, if any.

    Python files declare ``collection_query = "..."`` at module level; the
    file is read with :mod:`ast` and never imported.  JS-family files
    export a ``collectionGraphQL`` tagged template.
    """
    if suffix == ".py":
        return _extract_python_query(source)
    match = _JS_QUERY_RE.search(source)
    if match is None:
        return None
    return match.group("query").strip()


def _extract_python_query(source: str) -> str | None:
    tree = ast.parse(source)
    for node in tree.body:
        if isinstance(node, ast.Assign):
            targets = node.targets
        elif isinstance(node, ast.AnnAssign) and node.value is not None:
            targets = [node.target]
        else:
            continue
        for target in targets:
            if isinstance(target, ast.Name) and target.id == PYTHON_QUERY_NAME:
                value = node.value
                if isinstance(value, ast.Constant) and isinstance(value.value, str):
                    return value.value.strip()
    return None


def default_query(template: PathTemplate) -> str:
    """The query used when a collection file declares none."""
    return f"{{ {template.collection_name} {{ ...{COLLECTION_FRAGMENT} }} }}"


def validate_query(query_string: str, template: PathTemplate) -> None:
    """Check *query_string* has the collection shape for *template*.

    Raises:
        QueryShapeError: The query does not parse, its outermost selection
            is not the template's collection field, or that field does not
            spread the collection fragment.
    """
    try:
        document = parse(query_string)
    except GraphQLSyntaxError as exc:
        raise QueryShapeError(query_string, exc.message) from exc

    definition = document.definitions[0] if document.definitions else None
    if not isinstance(definition, OperationDefinitionNode):
        raise QueryShapeError(query_string, "Query must start with an operation")

    selections = definition.selection_set.selections
    collection = selections[0] if selections else None
    if not isinstance(collection, FieldNode):
        raise QueryShapeError(query_string, "Outermost selection must be a collection field")

    name = collection.name.value
    if name != template.collection_name:
        raise QueryShapeError(
            query_string,
            f"Query selects {name!r} but the file path uses {template.collection_name!r}",
        )

    inner = collection.selection_set.selections if collection.selection_set else ()
    if not any(
        isinstance(s, FragmentSpreadNode) and s.name.value == COLLECTION_FRAGMENT for s in inner
    ):
        raise QueryShapeError(query_string)


def expand_query(query_string: str, template: PathTemplate) -> str:
    """Replace the collection fragment spread with the template's fields.

    ``{Post.slug}/{Post.parent.name}`` selects ``nodes { id slug parent { name } }``.
    """
    tree: dict[str, dict] = {}
    for ref in template.fields:
        level = tree
        for name in ref.field_path:
            level = level.setdefault(name, {})
    selection = f"nodes {{ id {_render_selection(tree)} }}".replace("  ", " ")
    return _SPREAD_RE.sub(selection, query_string, count=1)


def _render_selection(tree: dict[str, dict]) -> str:
    parts = []
    for name, children in tree.items():
        if name == "id" and not children:
            continue
        if children:
            parts.append(f"{name} {{ {_render_selection(children)} }}")
        else:
            parts.append(name)
    return " ".join(parts)
