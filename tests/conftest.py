"""Test setup for legaldoc."""

from __future__ import annotations

import itertools
import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from legaldoc.numbering import renumber  # noqa: E402
from legaldoc.schemas import DocumentNode, NodeKind  # noqa: E402


def make_section(node_id: str, content: str = "SECTION", children: list[DocumentNode] | None = None) -> DocumentNode:
    return DocumentNode(id=node_id, kind=NodeKind.SECTION, content=content, children=children or [])


def make_child(node_id: str, kind: NodeKind, content: str = "", items: list[str] | None = None) -> DocumentNode:
    return DocumentNode(id=node_id, kind=kind, content=content, items=items, depth=1)


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic identity source producing ``n1, n2, ...``."""
    counter = itertools.count(1)
    return lambda: f"n{next(counter)}"


@pytest.fixture
def three_sections() -> list[DocumentNode]:
    """Three numbered sections; the second has two subsections and a paragraph."""
    return renumber(
        [
            make_section("s1", "GENERAL PROVISIONS", [make_child("s1-1", NodeKind.SUBSECTION, "Scope.")]),
            make_section(
                "s2",
                "PAYMENT",
                [
                    make_child("s2-1", NodeKind.SUBSECTION, "Rent is due monthly."),
                    make_child("s2-p", NodeKind.PARAGRAPH, "Late payments accrue interest."),
                    make_child("s2-2", NodeKind.SUBSECTION, "Deposit."),
                ],
            ),
            make_section("s3", "TERMINATION", [make_child("s3-b", NodeKind.BULLET_LIST, items=["a", "b"])]),
        ]
    )
