"""Tests for the editable and print projections."""

from __future__ import annotations

import datetime as dt

import pytest

from conftest import make_section
from legaldoc.numbering import renumber
from legaldoc.paginator import PageLayout
from legaldoc.projections import (
    UNSIGNED_DATE_PLACEHOLDER,
    UNSIGNED_SIGNATURE_PLACEHOLDER,
    Signature,
    editable_view,
    format_role,
    print_view,
)
from legaldoc.schemas import DocumentNode, DocumentStructure, NodeKind


def _structure(nodes: list[DocumentNode]) -> DocumentStructure:
    return DocumentStructure(title="LEASE AGREEMENT", location="Phuket", date=dt.date(2025, 3, 5), nodes=nodes)


class TestFormatRole:
    """Tests for format_role function."""

    @pytest.mark.parametrize(
        ("role", "expected"),
        [
            ("tenant", "Tenant"),
            ("LANDLORD", "Landlord"),
            ("witness", "Witness"),
            ("guarantor", "Guarantor"),
            ("co-owner", "Co-owner"),
            (None, "Unknown"),
            ("", "Unknown"),
        ],
    )
    def test_roles(self, role: str | None, expected: str) -> None:
        assert format_role(role) == expected


class TestEditableView:
    """Tests for editable_view function."""

    def test_depth_first_order(self, three_sections: list[DocumentNode]) -> None:
        blocks = editable_view(_structure(three_sections))

        assert [block.node_id for block in blocks] == ["s1", "s1-1", "s2", "s2-1", "s2-p", "s2-2", "s3", "s3-b"]
        assert [block.depth for block in blocks] == [0, 1, 0, 1, 1, 1, 0, 1]
        assert blocks[3].label == "2.1"

    def test_add_menu_per_kind(self, three_sections: list[DocumentNode]) -> None:
        blocks = {block.node_id: block for block in editable_view(_structure(three_sections))}

        assert blocks["s1"].insertable_kinds == [NodeKind.SUBSECTION, NodeKind.PARAGRAPH, NodeKind.BULLET_LIST]
        assert blocks["s1"].can_add_subsection
        assert blocks["s2-p"].insertable_kinds == [NodeKind.PARAGRAPH, NodeKind.BULLET_LIST]
        assert not blocks["s2-1"].can_add_subsection

    def test_bullet_items_and_remove_buttons(self, three_sections: list[DocumentNode]) -> None:
        [block] = [b for b in editable_view(_structure(three_sections)) if b.kind is NodeKind.BULLET_LIST]
        assert block.items == ["a", "b"]
        assert block.removable_item_indices == [0, 1]

    def test_single_item_cannot_be_removed(self) -> None:
        section = make_section(
            "a", children=[DocumentNode(id="b", kind=NodeKind.BULLET_LIST, items=["only"], depth=1)]
        )
        block = editable_view(_structure(renumber([section])))[1]
        assert block.removable_item_indices == []

    def test_reflects_current_structure(self, three_sections: list[DocumentNode]) -> None:
        structure = _structure(three_sections)
        before = editable_view(structure)
        after = editable_view(structure.model_copy(update={"nodes": three_sections[:1]}))
        assert len(before) == 8
        assert len(after) == 2


class TestPrintView:
    """Tests for print_view function."""

    def test_single_page_without_signatures(self, three_sections: list[DocumentNode]) -> None:
        document = print_view(_structure(three_sections))

        assert document.total_pages == 1
        [page] = document.pages
        assert page.has_title_block
        assert page.footer == "Page 1 of 1"
        assert not page.is_signature_page
        assert document.date == "March 5, 2025"

    def test_signature_page_is_appended(self, three_sections: list[DocumentNode]) -> None:
        signatures = [
            Signature(
                signer_name="Anna Tenant",
                signer_role="tenant",
                is_signed=True,
                signature_data="data:image/png;base64,AAAA",
                signed_at=dt.datetime(2025, 3, 6, 9, 30),
            ),
            Signature(signer_name="Lee Landlord", signer_role="landlord", signed_at=""),
        ]
        document = print_view(_structure(three_sections), signatures=signatures, agreement_number="AG-7")

        assert [page.footer for page in document.pages] == ["Page 1 of 2", "Page 2 of 2"]
        last = document.pages[-1]
        assert last.is_signature_page
        assert not last.has_title_block
        assert last.nodes == []
        assert last.agreement_number == "AG-7"

        signed, unsigned = last.signatures
        assert (signed.name, signed.role, signed.signed, signed.date) == ("Anna Tenant", "Tenant", True, "March 6, 2025")
        assert signed.signature == "data:image/png;base64,AAAA"
        assert (unsigned.role, unsigned.signed) == ("Landlord", False)
        assert unsigned.signature == UNSIGNED_SIGNATURE_PLACEHOLDER
        assert unsigned.date == UNSIGNED_DATE_PLACEHOLDER

    def test_signed_without_image_prints_placeholder(self) -> None:
        document = print_view(
            _structure(renumber([make_section("a")])),
            signatures=[Signature(signer_name="X", is_signed=True)],
        )
        [row] = document.pages[-1].signatures
        assert not row.signed
        assert row.signature == UNSIGNED_SIGNATURE_PLACEHOLDER
        assert row.role == "Unknown"

    def test_footers_count_every_page(self) -> None:
        nodes = renumber([make_section(f"s{i}") for i in range(31)])
        document = print_view(_structure(nodes), signatures=[Signature(signer_name="A")])

        assert document.total_pages == 4
        assert [page.page_number for page in document.pages] == [1, 2, 3, 4]
        assert all(page.total_pages == 4 for page in document.pages)
        assert [page.has_title_block for page in document.pages] == [True, False, False, False]

    def test_empty_document_with_signatures(self) -> None:
        document = print_view(_structure([]), signatures=[Signature(signer_name="A")])
        [page] = document.pages
        assert page.is_signature_page
        assert page.has_title_block
        assert page.footer == "Page 1 of 1"

    def test_custom_layout(self, three_sections: list[DocumentNode]) -> None:
        layout = PageLayout(first_page_capacity=40, page_capacity=40)
        document = print_view(_structure(three_sections), layout=layout)
        assert document.total_pages > 1
        assert document.pages[-1].footer == f"Page {document.total_pages} of {document.total_pages}"
