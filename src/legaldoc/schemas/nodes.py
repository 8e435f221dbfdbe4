"""Document tree models."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeKind(str, Enum):
    """Closed set of content node kinds.

    Values match the ``type`` field of persisted structures.
    """

    SECTION = "section"
    SUBSECTION = "subsection"
    PARAGRAPH = "paragraph"
    BULLET_LIST = "bulletList"


# Kinds allowed as direct children of a section.
SECTION_CHILD_KINDS = frozenset({NodeKind.SUBSECTION, NodeKind.PARAGRAPH, NodeKind.BULLET_LIST})


class DocumentNode(BaseModel):
    """One content unit of an agreement.

    Attributes:
        id: Opaque identifier, unique across the tree and never reused.
        kind: Node kind (persisted as ``type``).
        content: Inline markup text.
        label: Derived numbering such as ``"2.3"`` (persisted as ``number``).
            Only sections and subsections carry one.
        children: Ordered child nodes. Only sections own children.
        items: Bullet texts. Only bullet lists carry items.
        depth: Indentation level for rendering (persisted as ``level``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    kind: NodeKind = Field(..., alias="type")
    content: str = ""
    label: str | None = Field(default=None, alias="number")
    children: list["DocumentNode"] | None = None
    items: list[str] | None = None
    depth: int = Field(default=0, alias="level", ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept numeric ids written by older clients."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def is_section(self) -> bool:
        return self.kind is NodeKind.SECTION

    def header_only(self) -> "DocumentNode":
        """Return a copy of this node with an empty children list."""
        return self.model_copy(update={"children": []})


class DocumentStructure(BaseModel):
    """Aggregate root of one agreement being edited.

    Attributes:
        title: Document title shown in the header block.
        location: City the agreement is made in (persisted as ``city``).
        date: Agreement date.
        nodes: Ordered top-level nodes.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    location: str = Field(default="", alias="city")
    date: dt.date = Field(default_factory=dt.date.today)
    nodes: list[DocumentNode] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def truncate_timestamp(cls, v: Any) -> Any:
        """Accept full ISO timestamps such as ``2025-03-05T10:00:00.000Z``."""
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


class Page(BaseModel):
    """One printable page produced by the paginator."""

    nodes: list[DocumentNode] = Field(default_factory=list)
    page_number: int = Field(..., ge=1)
