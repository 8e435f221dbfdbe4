"""Read-only views of a document structure.

The editable view and the print view are both computed from the same
``DocumentStructure`` on every call; neither keeps its own copy of the
content.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Sequence

from pydantic import BaseModel, Field, field_validator

from legaldoc.height import HeightProfile
from legaldoc.paginator import PageLayout, count_total_pages, paginate
from legaldoc.schemas import DocumentNode, DocumentStructure, NodeKind, Page
from legaldoc.serializer import format_date

ROLE_TITLES: dict[str, str] = {
    "tenant": "Tenant",
    "lessor": "Lessor",
    "landlord": "Landlord",
    "representative": "Representative",
    "principal": "Principal",
    "agent": "Agent",
    "buyer": "Buyer",
    "seller": "Seller",
    "witness": "Witness",
    "company": "Company",
}
UNSIGNED_DATE_PLACEHOLDER = "«____» __________ 20__"
UNSIGNED_SIGNATURE_PLACEHOLDER = "___________"

_CHILD_INSERT_KINDS = (NodeKind.PARAGRAPH, NodeKind.BULLET_LIST)


class EditableBlock(BaseModel):
    """One node as shown by the editor, with its edit affordances.

    Attributes:
        node_id: Id of the underlying node.
        kind: Node kind.
        depth: Nesting level used for indentation.
        label: Section or subsection number, if any.
        content: Inline markup content.
        items: Bullet texts for bullet lists.
        insertable_kinds: Kinds the "add" menu offers for this node.
        removable_item_indices: Bullet items that offer a remove button.
    """

    node_id: str
    kind: NodeKind
    depth: int
    label: str | None = None
    content: str = ""
    items: list[str] = Field(default_factory=list)
    insertable_kinds: list[NodeKind] = Field(default_factory=list)
    removable_item_indices: list[int] = Field(default_factory=list)

    @property
    def can_add_subsection(self) -> bool:
        return NodeKind.SUBSECTION in self.insertable_kinds


class Signature(BaseModel):
    """Signer record supplied by the e-signature workflow."""

    signer_name: str
    signer_role: str | None = None
    is_signed: bool = False
    signature_data: str | None = None
    signed_at: dt.datetime | None = None

    @field_validator("signed_at", mode="before")
    @classmethod
    def blank_as_unsigned(cls, v: Any) -> Any:
        return None if v == "" else v


class SignatureRow(BaseModel):
    name: str
    role: str
    signed: bool
    signature: str
    date: str


class PrintPage(BaseModel):
    """A printable page with its header and footer data."""

    page_number: int
    total_pages: int
    nodes: list[DocumentNode] = Field(default_factory=list)
    has_title_block: bool = False
    footer: str
    agreement_number: str = ""
    verify_link: str = ""
    signatures: list[SignatureRow] = Field(default_factory=list)

    @property
    def is_signature_page(self) -> bool:
        return bool(self.signatures)


class PrintDocument(BaseModel):
    title: str
    location: str
    date: str
    pages: list[PrintPage]

    @property
    def total_pages(self) -> int:
        return len(self.pages)


def format_role(role: str | None) -> str:
    """Human-readable signer role."""
    if not role:
        return "Unknown"
    return ROLE_TITLES.get(role.lower(), role[:1].upper() + role[1:].lower())


def editable_view(structure: DocumentStructure) -> list[EditableBlock]:
    """Depth-first list of blocks the editor renders."""
    return list(_editable_blocks(structure.nodes, depth=0))


def _editable_blocks(nodes: Iterable[DocumentNode], *, depth: int) -> Iterable[EditableBlock]:
    for node in nodes:
        items = list(node.items or []) if node.kind is NodeKind.BULLET_LIST else []
        insertable = list(_CHILD_INSERT_KINDS)
        if node.kind is NodeKind.SECTION:
            insertable.insert(0, NodeKind.SUBSECTION)
        yield EditableBlock(
            node_id=node.id,
            kind=node.kind,
            depth=depth,
            label=node.label,
            content=node.content,
            items=items,
            insertable_kinds=insertable,
            removable_item_indices=list(range(len(items))) if len(items) > 1 else [],
        )
        if node.children:
            yield from _editable_blocks(node.children, depth=depth + 1)


def print_view(
    structure: DocumentStructure,
    *,
    signatures: Sequence[Signature] = (),
    agreement_number: str = "",
    verify_link: str = "",
    pages: list[Page] | None = None,
    profile: HeightProfile | None = None,
    layout: PageLayout | None = None,
) -> PrintDocument:
    """Paginated print projection with footers and the signature page.

    ``pages`` may be passed when the caller already holds the pagination of
    this exact structure.
    """
    if pages is None:
        pages = paginate(structure.nodes, profile=profile, layout=layout)
    total = count_total_pages(pages, has_signatures=bool(signatures))

    print_pages = [
        PrintPage(
            page_number=page.page_number,
            total_pages=total,
            nodes=page.nodes,
            has_title_block=page.page_number == 1,
            footer=f"Page {page.page_number} of {total}",
            agreement_number=agreement_number,
            verify_link=verify_link,
        )
        for page in pages
    ]
    if signatures:
        page_number = len(pages) + 1
        print_pages.append(
            PrintPage(
                page_number=page_number,
                total_pages=total,
                has_title_block=page_number == 1,
                footer=f"Page {page_number} of {total}",
                agreement_number=agreement_number,
                verify_link=verify_link,
                signatures=[_signature_row(signature) for signature in signatures],
            )
        )

    return PrintDocument(
        title=structure.title,
        location=structure.location,
        date=format_date(structure.date),
        pages=print_pages,
    )


def _signature_row(signature: Signature) -> SignatureRow:
    signed = signature.is_signed and bool(signature.signature_data)
    return SignatureRow(
        name=signature.signer_name,
        role=format_role(signature.signer_role),
        signed=signed,
        signature=signature.signature_data if signed else UNSIGNED_SIGNATURE_PLACEHOLDER,
        date=format_date(signature.signed_at.date()) if signature.signed_at else UNSIGNED_DATE_PLACEHOLDER,
    )
