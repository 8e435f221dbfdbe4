"""legaldoc: structure, number and paginate legal agreements."""

from legaldoc.exceptions import HydrationError, InvariantError, LegalDocError
from legaldoc.height import DEFAULT_PROFILE, HeightProfile, estimate_height, estimate_section_subtree_height
from legaldoc.hydration import agreement_title, default_nodes, dump_structure, hydrate, load_structure, to_persisted
from legaldoc.invariants import validate_structure
from legaldoc.numbering import renumber
from legaldoc.paginator import PageLayout, paginate
from legaldoc.projections import editable_view, print_view
from legaldoc.schemas import DocumentNode, DocumentStructure, NodeKind, Page
from legaldoc.serializer import to_markup
from legaldoc.session import EditingSession
from legaldoc.tree_ops import (
    add_bullet_item,
    insert_node,
    remove_bullet_item,
    remove_node,
    update_bullet_item,
    update_content,
)

__all__ = [
    "DEFAULT_PROFILE",
    "DocumentNode",
    "DocumentStructure",
    "EditingSession",
    "HeightProfile",
    "HydrationError",
    "InvariantError",
    "LegalDocError",
    "NodeKind",
    "Page",
    "PageLayout",
    "add_bullet_item",
    "agreement_title",
    "default_nodes",
    "dump_structure",
    "editable_view",
    "estimate_height",
    "estimate_section_subtree_height",
    "hydrate",
    "insert_node",
    "load_structure",
    "paginate",
    "print_view",
    "remove_bullet_item",
    "remove_node",
    "renumber",
    "to_markup",
    "to_persisted",
    "update_bullet_item",
    "update_content",
    "validate_structure",
]
