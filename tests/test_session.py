"""Tests for EditingSession."""

from __future__ import annotations

import datetime as dt
import json
from typing import Callable

import pytest

from legaldoc.hydration import default_nodes, load_structure
from legaldoc.projections import Signature
from legaldoc.schemas import DocumentNode, DocumentStructure, NodeKind
from legaldoc.session import EditingSession


@pytest.fixture
def structure(three_sections: list[DocumentNode]) -> DocumentStructure:
    return DocumentStructure(title="LEASE AGREEMENT", location="Phuket", date=dt.date(2025, 3, 5), nodes=three_sections)


@pytest.fixture
def changes() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def session(
    structure: DocumentStructure,
    changes: list[tuple[str, str]],
    id_factory: Callable[[], str],
) -> EditingSession:
    return EditingSession(
        structure,
        on_change=lambda markup, data: changes.append((markup, data)),
        id_factory=id_factory,
    )


class TestEditingSession:
    """Tests for edits applied through a session."""

    def test_initial_state(self, session: EditingSession, changes: list[tuple[str, str]]) -> None:
        assert session.is_editing
        assert session.markup.startswith("<h1>LEASE AGREEMENT</h1>")
        assert session.pages == []
        assert changes == []

    def test_add_section_notifies(self, session: EditingSession, changes: list[tuple[str, str]]) -> None:
        assert session.add_node(None, NodeKind.SECTION)

        assert [node.label for node in session.nodes] == ["1", "2", "3", "4"]
        [(markup, data)] = changes
        assert markup == session.markup
        assert markup.endswith("<h2>NEW SECTION</h2>")
        assert json.loads(data)["nodes"][-1]["number"] == "4"

    def test_noop_edit_does_not_notify(self, session: EditingSession, changes: list[tuple[str, str]]) -> None:
        assert not session.remove_node("missing")
        assert not session.add_node("s2-p", NodeKind.SUBSECTION)
        assert not session.remove_bullet_item("s3-b", 5)
        assert changes == []

    def test_update_node_sanitizes(self, session: EditingSession) -> None:
        assert session.update_node("s2-p", '<span>Late</span> <strong class="x">fees</strong>')
        assert "<p>Late <strong>fees</strong></p>" in session.markup

    def test_same_content_is_not_a_change(self, session: EditingSession, changes: list[tuple[str, str]]) -> None:
        assert not session.update_node("s2-p", "Late payments accrue interest.")
        assert changes == []

    def test_bullet_items(self, session: EditingSession) -> None:
        assert session.add_bullet_item("s3-b", 1)
        assert session.update_bullet_item("s3-b", 2, "<em>c</em>")
        assert session.remove_bullet_item("s3-b", 0)
        assert "<ul><li>b</li><li><em>c</em></li></ul>" in session.markup

    def test_toggle_bold(self, session: EditingSession) -> None:
        assert session.toggle_bold("s2-1", "monthly")
        assert "<h3>2.1. Rent is due <strong>monthly</strong>.</h3>" in session.markup
        assert session.toggle_bold("s2-1", "monthly")
        assert "<h3>2.1. Rent is due monthly.</h3>" in session.markup

    def test_toggle_bold_unknown_node(self, session: EditingSession) -> None:
        assert not session.toggle_bold("missing", "x")

    def test_header_fields(self, session: EditingSession, changes: list[tuple[str, str]]) -> None:
        assert session.set_title("SALE AGREEMENT")
        assert session.set_location("Bangkok")
        assert not session.set_location("Bangkok")

        assert "<h1>SALE AGREEMENT</h1>" in session.markup
        assert "<p>City: Bangkok</p>" in session.markup
        assert len(changes) == 2

    def test_to_json_round_trips(self, session: EditingSession) -> None:
        session.add_node("s1", NodeKind.SUBSECTION)
        assert load_structure(session.to_json()) == session.structure


class TestEditMode:
    """Tests for switching between edit and print mode."""

    def test_pages_computed_outside_edit_mode(self, session: EditingSession) -> None:
        session.set_editing(False)
        assert [page.page_number for page in session.pages] == [1]

        session.remove_node("s3")
        assert "s3" not in [node.id for node in session.pages[0].nodes]

    def test_no_notifications_outside_edit_mode(
        self, session: EditingSession, changes: list[tuple[str, str]]
    ) -> None:
        session.set_editing(False)
        session.add_node(None, NodeKind.SECTION)
        assert changes == []

    def test_returning_to_edit_mode_clears_pages(self, session: EditingSession) -> None:
        session.set_editing(False)
        session.set_editing(True)
        assert session.pages == []

    def test_print_view_reuses_pages(self, session: EditingSession) -> None:
        session.set_editing(False)
        document = session.print_view(signatures=[Signature(signer_name="A")], verify_link="https://v/1")

        assert document.total_pages == 2
        assert document.pages[0].nodes == session.pages[0].nodes
        assert document.pages[1].verify_link == "https://v/1"


class TestSessionScenarios:
    """End-to-end editing sequences."""

    def test_new_agreement(self, id_factory: Callable[[], str]) -> None:
        session = EditingSession.from_record({"type": "rent"}, id_factory=id_factory)
        assert session.structure.title == "LEASE AGREEMENT"
        assert session.nodes == default_nodes()

        session.add_node(None, NodeKind.SECTION)
        session.add_node("n1", NodeKind.SUBSECTION)
        session.add_node("n2", NodeKind.BULLET_LIST)
        session.remove_node("1")

        [section] = session.nodes
        assert section.label == "1"
        assert [child.label for child in section.children] == ["1.1", None]
        assert session.markup.endswith("<h2>NEW SECTION</h2><h3>1.1. New content</h3><ul><li>New item</li></ul>")

    def test_stale_ids_after_delete(self, session: EditingSession) -> None:
        """Edits aimed at a removed subtree are ignored."""
        session.remove_node("s2")
        before = session.structure

        assert not session.update_node("s2-1", "x")
        assert not session.add_node("s2-p", NodeKind.PARAGRAPH)
        assert not session.remove_node("s2-2")
        assert session.structure == before
        assert [node.label for node in session.nodes] == ["1", "2"]
