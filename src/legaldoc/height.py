"""Heuristic height estimates for document nodes.

Estimates are in millimetres of printed A4 content and are only compared
against page capacities; they are not a layout computation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from legaldoc.schemas import DocumentNode, NodeKind


@dataclass(frozen=True)
class HeightProfile:
    """Tunable constants of the height heuristic.

    Attributes:
        section_height: Fixed height of a section banner.
        subsection_base: Subsection height before its text lines.
        subsection_line_chars: Characters per wrapped subsection line.
        subsection_line_height: Height added per subsection line.
        paragraph_base: Base paragraph height.
        paragraph_line_chars: Characters per wrapped paragraph line.
        paragraph_line_height: Height added per paragraph line.
        bullet_list_base: Base bullet list height.
        bullet_item_height: Height added per bullet item.
        fallback_height: Height used for anything unrecognised.
    """

    section_height: float = 15
    subsection_base: float = 8
    subsection_line_chars: int = 80
    subsection_line_height: float = 5
    paragraph_base: float = 5
    paragraph_line_chars: int = 100
    paragraph_line_height: float = 5
    bullet_list_base: float = 5
    bullet_item_height: float = 6
    fallback_height: float = 10


DEFAULT_PROFILE = HeightProfile()


def estimate_height(node: DocumentNode, profile: HeightProfile = DEFAULT_PROFILE) -> float:
    """Estimate the rendered height of ``node`` alone, ignoring its children."""
    kind = node.kind
    if kind is NodeKind.SECTION:
        return profile.section_height
    if kind is NodeKind.SUBSECTION:
        lines = math.ceil(len(node.content) / profile.subsection_line_chars)
        return profile.subsection_base + lines * profile.subsection_line_height
    if kind is NodeKind.PARAGRAPH:
        lines = math.ceil(len(node.content) / profile.paragraph_line_chars)
        return profile.paragraph_base + lines * profile.paragraph_line_height
    if kind is NodeKind.BULLET_LIST:
        return profile.bullet_list_base + len(node.items or []) * profile.bullet_item_height
    return profile.fallback_height


def estimate_section_subtree_height(node: DocumentNode, profile: HeightProfile = DEFAULT_PROFILE) -> float:
    """Height of ``node`` plus each of its direct children."""
    total = estimate_height(node, profile)
    for child in node.children or []:
        total += estimate_height(child, profile)
    return total
