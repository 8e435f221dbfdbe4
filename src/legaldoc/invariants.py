"""Structural checks for document trees."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from legaldoc.exceptions import InvariantError
from legaldoc.numbering import numbering_errors
from legaldoc.schemas import SECTION_CHILD_KINDS, DocumentNode, NodeKind
from legaldoc.tree_ops import iter_nodes


def structure_errors(nodes: Iterable[DocumentNode]) -> list[str]:
    """List every invariant violation found in ``nodes``."""
    nodes = list(nodes)
    errors: list[str] = []

    counts = Counter(node.id for node in iter_nodes(nodes))
    for node_id, count in sorted(counts.items()):
        if count > 1:
            errors.append(f"id {node_id!r} used {count} times")

    for node in iter_nodes(nodes):
        if node.children and node.kind is not NodeKind.SECTION:
            errors.append(f"node {node.id!r}: only sections may own children")
        if node.kind is NodeKind.SECTION:
            for child in node.children or []:
                if child.kind not in SECTION_CHILD_KINDS:
                    errors.append(f"node {child.id!r}: {child.kind.value} cannot be a section child")
        if node.kind is NodeKind.BULLET_LIST and not node.items:
            errors.append(f"node {node.id!r}: bullet list has no items")

    errors.extend(numbering_errors(nodes))
    return errors


def validate_structure(nodes: Iterable[DocumentNode]) -> None:
    """Raise ``InvariantError`` if ``nodes`` violates any tree invariant."""
    errors = structure_errors(nodes)
    if errors:
        raise InvariantError("; ".join(errors))
