"""Graph nodes and the projection of their field rows."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace

from jnode._jsonpath import PathSegment
from jnode._primitive import Scalar, coerce_primitive, scalar_to_text, scalar_type

CONTAINER_TYPES = ("object", "array")


@dataclass(frozen=True)
class FieldRow:
    """One displayed attribute of a node.

    ``key`` is None for a node that is itself a bare scalar. Container rows
    only summarize a child (``value`` is its length) and are never edited.
    """

    key: str | None
    value: Scalar
    type: str

    @property
    def editable(self) -> bool:
        return self.type not in CONTAINER_TYPES


@dataclass(frozen=True)
class NodeSnapshot:
    rows: tuple[FieldRow, ...]
    path: tuple[PathSegment, ...] = ()


# -- Graph building ------------------------------------------------------


def snapshot_for(value: object, path: tuple[PathSegment, ...] = ()) -> NodeSnapshot:
    """Build the node shown for *value* located at *path*."""
    if isinstance(value, dict):
        rows = []
        for key, child in value.items():
            kind = scalar_type(child)
            if kind in CONTAINER_TYPES:
                rows.append(FieldRow(key, len(child), kind))
            else:
                rows.append(FieldRow(key, child, kind))
        return NodeSnapshot(tuple(rows), tuple(path))
    if isinstance(value, list):
        raise ValueError("arrays are not nodes, their elements are")
    return NodeSnapshot((FieldRow(None, value, scalar_type(value)),), tuple(path))


def build_nodes(root: object) -> list[NodeSnapshot]:
    """Flatten a document into graph nodes, depth first.

    Every dict and every scalar inside a list is a node; lists themselves
    are not, their elements are.
    """
    return list(_walk(root, ()))


def _walk(value: object, path: tuple[PathSegment, ...]) -> Iterator[NodeSnapshot]:
    if isinstance(value, dict):
        yield snapshot_for(value, path)
        for key, child in value.items():
            if isinstance(child, (dict, list)):
                yield from _walk(child, path + (key,))
    elif isinstance(value, list):
        for i, child in enumerate(value):
            yield from _walk(child, path + (i,))
    else:
        yield snapshot_for(value, path)


# -- Projection ----------------------------------------------------------


def is_bare_value(rows: tuple[FieldRow, ...] | list[FieldRow]) -> bool:
    return len(rows) == 1 and rows[0].key is None


def to_display_value(rows: tuple[FieldRow, ...] | list[FieldRow]) -> str:
    """Text shown for a node: the bare value, or its scalar fields as JSON."""
    if not rows:
        return "{}"
    if is_bare_value(rows):
        return scalar_to_text(rows[0].value)

    obj = {
        row.key: row.value
        for row in rows
        if row.editable and row.key is not None
    }
    return json.dumps(obj, indent=2, ensure_ascii=False)


def build_form(node: NodeSnapshot) -> dict[str, str]:
    """Initial edit form: one text entry per editable field."""
    if is_bare_value(node.rows):
        return {"": scalar_to_text(node.rows[0].value)}
    return {
        row.key: scalar_to_text(row.value)
        for row in node.rows
        if row.editable and row.key is not None
    }


def to_replacement_value(node: NodeSnapshot, form: Mapping[str, str]) -> object:
    """Value to install at the node's path.

    A bare node yields a single scalar. Otherwise a flat dict of the form
    entries; container rows are left out, they are edited as their own nodes.
    """
    if is_bare_value(node.rows):
        text = form.get("", scalar_to_text(node.rows[0].value))
        return coerce_primitive(text)
    return {key: coerce_primitive(text) for key, text in form.items()}


def apply_form(node: NodeSnapshot, form: Mapping[str, str]) -> NodeSnapshot:
    """Copy of *node* with its editable rows carrying the edited values."""
    rows = []
    for row in node.rows:
        if row.editable and row.key is not None and row.key in form:
            value = coerce_primitive(form[row.key])
            row = replace(row, value=value, type=scalar_type(value))
        elif "" in form and is_bare_value(node.rows):
            value = coerce_primitive(form[""])
            row = replace(row, value=value, type=scalar_type(value))
        rows.append(row)
    return replace(node, rows=tuple(rows))
