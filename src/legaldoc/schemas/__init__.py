"""Shared schemas for legaldoc."""

from legaldoc.schemas.nodes import (
    SECTION_CHILD_KINDS,
    DocumentNode,
    DocumentStructure,
    NodeKind,
    Page,
)

__all__ = ["SECTION_CHILD_KINDS", "DocumentNode", "DocumentStructure", "NodeKind", "Page"]
