"""Section and subsection numbering."""

from __future__ import annotations

from typing import Iterable

from legaldoc.schemas import DocumentNode, NodeKind


def renumber(nodes: Iterable[DocumentNode]) -> list[DocumentNode]:
    """Recompute every section and subsection label from scratch.

    Sections are labeled ``1, 2, ...`` in document order; subsections of a
    section are labeled ``<section>.1, <section>.2, ...``. Other nodes are
    passed through unchanged. The input is never modified.
    """
    result: list[DocumentNode] = []
    section_counter = 1
    for node in nodes:
        if node.kind is not NodeKind.SECTION:
            result.append(node)
            continue

        label = str(section_counter)
        section_counter += 1
        update: dict[str, object] = {"label": label}
        if node.children is not None:
            update["children"] = _renumber_children(node.children, label)
        result.append(node.model_copy(update=update))
    return result


def _renumber_children(children: list[DocumentNode], section_label: str) -> list[DocumentNode]:
    numbered: list[DocumentNode] = []
    counter = 1
    for child in children:
        if child.kind is NodeKind.SUBSECTION:
            numbered.append(child.model_copy(update={"label": f"{section_label}.{counter}"}))
            counter += 1
        else:
            numbered.append(child)
    return numbered


def numbering_errors(nodes: Iterable[DocumentNode]) -> list[str]:
    """Describe every label that differs from what ``renumber`` would assign."""
    nodes = list(nodes)
    errors: list[str] = []
    for original, expected in zip(nodes, renumber(nodes)):
        if original.label != expected.label:
            errors.append(f"node {original.id!r}: label {original.label!r} != {expected.label!r}")
        for child, expected_child in zip(original.children or [], expected.children or []):
            if child.label != expected_child.label:
                errors.append(f"node {child.id!r}: label {child.label!r} != {expected_child.label!r}")
    return errors
