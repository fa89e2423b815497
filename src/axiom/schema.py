"""
Axiom dataset schema flattening

Converts the flat list of dotted field names returned by the dataset info
endpoint into a nested tree, then renders that tree as a compact type-like
description that is easy for an LLM to read.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Union

from pydantic import BaseModel, Field, StrictBool, StrictStr, TypeAdapter, ValidationError

from src.logging import get_logger

logger = get_logger('SCHEMA')


class FieldDescriptor(BaseModel):
    """A single dataset field as described by the Axiom API"""
    name: StrictStr = Field(..., min_length=1, description="Dot-delimited field path")
    type: StrictStr = Field("any", description="Declared field type")
    unit: StrictStr = Field("", description="Unit of the field value")
    hidden: StrictBool = Field(False, description="Whether the field is hidden in the UI")
    description: StrictStr = Field("", description="Free-form field description")


_fields_adapter = TypeAdapter(List[FieldDescriptor])


class SchemaValidationError(ValueError):
    """Raised when a batch of field descriptors fails validation."""

    def __init__(self, message: str, errors: List[Dict[str, Any]]):
        super().__init__(message)
        self.errors = errors


@dataclass
class SchemaLeaf:
    type: str


@dataclass
class SchemaBranch:
    children: Dict[str, Union["SchemaBranch", SchemaLeaf]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return the tree as nested plain dicts with type strings at the leaves."""
        result = {}
        stack = [(self, result)]
        while stack:
            branch, target = stack.pop()
            for key, node in branch.children.items():
                if isinstance(node, SchemaLeaf):
                    target[key] = node.type
                else:
                    target[key] = {}
                    stack.append((node, target[key]))
        return result


SchemaNode = Union[SchemaBranch, SchemaLeaf]


def validate_fields(fields: Sequence[Any]) -> List[FieldDescriptor]:
    """
    Validate and default a batch of raw field descriptors.

    Args:
        fields: Raw field objects, typically the ``fields`` array of a dataset info response

    Returns:
        Fully defaulted FieldDescriptor list in input order

    Raises:
        SchemaValidationError: If any descriptor is malformed. Nothing is returned for
            the valid ones.
    """
    try:
        return _fields_adapter.validate_python(fields)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors
        )
        logger.warning(f"field validation failed | errors:{len(errors)}")
        raise SchemaValidationError(f"Invalid field descriptors: {problems}", errors) from e


def insert_field(tree: SchemaBranch, descriptor: FieldDescriptor) -> None:
    """
    Insert one descriptor into the tree along its dotted path.

    The final segment always becomes a leaf, replacing whatever was there. An
    intermediate segment that already holds a leaf ends the walk and the rest
    of the path is dropped.
    """
    field_type = descriptor.type or "any"
    path = descriptor.name.split(".")
    current = tree

    for key in path[:-1]:
        child = current.children.get(key)
        if child is None:
            child = SchemaBranch()
            current.children[key] = child
        elif isinstance(child, SchemaLeaf):
            logger.debug(f"path blocked by scalar field | name:{descriptor.name} | at:{key}")
            return
        current = child

    current.children[path[-1]] = SchemaLeaf(field_type)


def build_schema_tree(fields: Sequence[FieldDescriptor]) -> SchemaBranch:
    """Build a fresh SchemaTree from validated descriptors, in input order."""
    tree = SchemaBranch()
    for descriptor in fields:
        insert_field(tree, descriptor)
    return tree


def render_schema(tree: SchemaBranch, indent: int = 2) -> str:
    """
    Render a SchemaTree as a brace-delimited type description.

    Nesting is walked with an explicit stack, so path depth is not limited
    by the interpreter's recursion limit.

    Args:
        tree: Tree or sub-tree to render
        indent: Indentation of this block's entries

    Returns:
        Text such as ``{\\n  status: int;\\n}``
    """
    parts = ["{\n"]
    # each frame: [remaining entries, entry indent, whether an entry was written]
    stack = [[iter(tree.children.items()), indent, False]]

    while stack:
        frame = stack[-1]
        entries, level, started = frame
        entry = next(entries, None)

        if entry is None:
            stack.pop()
            parts.append("\n" + " " * (level - 2) + "}")
            if stack:
                parts.append(";")
            continue

        if started:
            parts.append("\n")
        frame[2] = True

        key, node = entry
        parts.append(f"{' ' * level}{key}: ")
        if isinstance(node, SchemaLeaf):
            parts.append(f"{node.type};")
        else:
            parts.append("{\n")
            stack.append([iter(node.children.items()), level + 2, False])

    return "".join(parts)


def convert_fields_to_schema(fields: Sequence[Any], indent: int = 2) -> str:
    """
    Validate raw field descriptors and render them as a type description.

    Args:
        fields: Raw field objects
        indent: Base indentation width

    Returns:
        Rendered schema text

    Raises:
        SchemaValidationError: If any descriptor is malformed
    """
    validated = validate_fields(fields)
    tree = build_schema_tree(validated)
    logger.debug(f"schema flattened | fields:{len(validated)} | top_level:{len(tree.children)}")
    return render_schema(tree, indent)
