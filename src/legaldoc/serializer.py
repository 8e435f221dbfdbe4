"""Flatten a document structure into HTML markup."""

from __future__ import annotations

import datetime as dt
from html import escape
from typing import Iterable

from legaldoc.schemas import DocumentNode, DocumentStructure, NodeKind


def to_markup(structure: DocumentStructure) -> str:
    """Render the title block and a depth-first walk of the node tree.

    Node content is inline markup and is emitted verbatim; title and
    location are plain text and are escaped.
    """
    blocks = [
        f"<h1>{escape(structure.title)}</h1>",
        f"<p>Date: {format_date(structure.date)}</p>",
        f"<p>City: {escape(structure.location)}</p>",
    ]
    for node in structure.nodes:
        blocks.extend(_render_node(node))
    return "".join(blocks)


def nodes_to_markup(nodes: Iterable[DocumentNode]) -> str:
    """Render nodes without the title block."""
    blocks: list[str] = []
    for node in nodes:
        blocks.extend(_render_node(node))
    return "".join(blocks)


def format_date(date: dt.date) -> str:
    """Format a date as ``March 5, 2025``."""
    return f"{date:%B} {date.day}, {date.year}"


def _render_node(node: DocumentNode) -> list[str]:
    blocks: list[str] = []
    if node.kind is NodeKind.SECTION:
        blocks.append(f"<h2>{node.content}</h2>")
    elif node.kind is NodeKind.SUBSECTION:
        blocks.append(f"<h3>{node.label}. {node.content}</h3>")
    elif node.kind is NodeKind.PARAGRAPH:
        blocks.append(f"<p>{node.content}</p>")
    elif node.kind is NodeKind.BULLET_LIST and node.items:
        blocks.append("<ul>" + "".join(f"<li>{item}</li>" for item in node.items) + "</ul>")

    for child in node.children or []:
        blocks.extend(_render_node(child))
    return blocks
