"""Greedy pagination of the top-level node list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from legaldoc.config import LEGALDOC_FIRST_PAGE_CAPACITY, LEGALDOC_PAGE_CAPACITY
from legaldoc.height import (
    DEFAULT_PROFILE,
    HeightProfile,
    estimate_height,
    estimate_section_subtree_height,
)
from legaldoc.schemas import DocumentNode, NodeKind, Page


@dataclass(frozen=True)
class PageLayout:
    """Page capacities in height-estimator units.

    The first page is smaller because it also carries the title block.
    """

    first_page_capacity: float = LEGALDOC_FIRST_PAGE_CAPACITY
    page_capacity: float = LEGALDOC_PAGE_CAPACITY

    def capacity_for(self, page_number: int) -> float:
        return self.first_page_capacity if page_number == 1 else self.page_capacity


class _PageBuilder:
    def __init__(self, layout: PageLayout) -> None:
        self.layout = layout
        self.pages: list[Page] = []
        self.current = Page(page_number=1)
        self.height = 0.0

    @property
    def capacity(self) -> float:
        return self.layout.capacity_for(self.current.page_number)

    def overflows(self, extra: float) -> bool:
        return self.height + extra > self.capacity

    def flush(self) -> None:
        self.pages.append(self.current)
        self.current = Page(page_number=len(self.pages) + 1)
        self.height = 0.0

    def place(self, node: DocumentNode, height: float) -> None:
        self.current.nodes.append(node)
        self.height += height

    def place_item(self, node: DocumentNode, height: float) -> None:
        """Place ``node``, first starting a new page if it would overflow."""
        if self.overflows(height) and self.current.nodes:
            self.flush()
        self.place(node, height)


def paginate(
    nodes: Iterable[DocumentNode],
    *,
    profile: HeightProfile | None = None,
    layout: PageLayout | None = None,
) -> list[Page]:
    """Partition the top-level nodes into pages in a single greedy pass.

    A section with children is moved to a fresh page when it does not fit
    on the current, non-empty page; it is then emitted as a header (with
    ``children=[]``) followed by each child as its own page item. Each child
    goes through the same overflow check as any other item, so a section
    taller than a page spills onto the following pages.
    Every other node starts a new page when it would overflow the current,
    non-empty page, so no page is ever emitted empty.
    """
    profile = profile or DEFAULT_PROFILE
    builder = _PageBuilder(layout or PageLayout())

    for node in nodes:
        if node.kind is NodeKind.SECTION and node.children:
            subtree_height = estimate_section_subtree_height(node, profile)
            if builder.overflows(subtree_height) and builder.current.nodes:
                builder.flush()
            header = node.header_only()
            builder.place(header, estimate_height(header, profile))
            for child in node.children:
                builder.place_item(child, estimate_height(child, profile))
            continue

        builder.place_item(node, estimate_height(node, profile))

    if builder.current.nodes:
        builder.pages.append(builder.current)
    return builder.pages


def count_total_pages(pages: list[Page], *, has_signatures: bool = False) -> int:
    """Pages in the printed document, including the trailing signature page."""
    return len(pages) + (1 if has_signatures else 0)


def flatten_pages(pages: Iterable[Page]) -> list[DocumentNode]:
    """Rebuild the top-level node sequence from paginated output.

    Every non-section item that follows a section header is taken to be
    one of its children, so top-level non-section nodes placed right after
    a section cannot be told apart from its body.
    """
    result: list[DocumentNode] = []
    section: DocumentNode | None = None
    body: list[DocumentNode] = []

    def close_section() -> None:
        if section is None:
            return
        if body:
            result.append(section.model_copy(update={"children": list(body)}))
        else:
            result.append(section)

    for page in pages:
        for node in page.nodes:
            if section is not None and node.kind is not NodeKind.SECTION:
                body.append(node)
                continue
            close_section()
            section, body = None, []
            if node.kind is NodeKind.SECTION:
                section = node
            else:
                result.append(node)
    close_section()
    return result
