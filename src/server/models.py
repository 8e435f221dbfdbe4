"""Pydantic models for the preview API."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from legaldoc.projections import PrintDocument, Signature
from legaldoc.schemas import NodeKind, Page


class EditOperation(str, Enum):
    """Tree operations exposed by ``/api/edit``."""

    ADD_NODE = "add_node"
    REMOVE_NODE = "remove_node"
    UPDATE_NODE = "update_node"
    ADD_ITEM = "add_item"
    UPDATE_ITEM = "update_item"
    REMOVE_ITEM = "remove_item"
    TOGGLE_BOLD = "toggle_bold"


class PreviewRequest(BaseModel):
    """Request model for the /api/preview endpoint.

    Attributes
    ----------
    structure : str | dict | None
        Persisted structure, either as a JSON string or an object.
    type : str | None
        Agreement type tag used to pick the document title.
    city : str | None
        City printed in the header block.
    signatures : list[Signature]
        Signers to print on the trailing signature page.
    agreement_number : str
        Agreement number printed in every page footer.
    verify_link : str
        Verification link printed in every page footer.

    """

    model_config = ConfigDict(extra="ignore")

    structure: Union[str, dict[str, Any], None] = Field(default=None, description="Persisted structure")
    type: str | None = Field(default=None, description="Agreement type tag")
    city: str | None = Field(default=None, description="City of the agreement")
    signatures: list[Signature] = Field(default_factory=list, description="Signers for the signature page")
    agreement_number: str = Field(default="", description="Agreement number for page footers")
    verify_link: str = Field(default="", description="Verification link for page footers")

    def as_record(self) -> dict[str, Any]:
        """Record shape accepted by ``legaldoc.hydrate``."""
        return {"structure": self.structure, "type": self.type, "city": self.city}


class EditRequest(PreviewRequest):
    """Request model for the /api/edit endpoint.

    Attributes
    ----------
    operation : EditOperation
        Tree operation to apply.
    node_id : str | None
        Target node; for ``add_node`` the node to insert after (``None``
        appends a top-level section).
    kind : NodeKind | None
        Kind of node to insert for ``add_node``.
    index : int | None
        Bullet item index; required by the item operations.
    text : str
        New content, item text, or the selection for ``toggle_bold``.

    """

    operation: EditOperation
    node_id: str | None = Field(default=None, description="Target node id")
    kind: NodeKind | None = Field(default=None, description="Kind of node to insert")
    index: int | None = Field(default=None, description="Bullet item index")
    text: str = Field(default="", description="Content, item text or selected text")

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip surrounding whitespace from ``text``."""
        return v.strip()


class PreviewResponse(BaseModel):
    """Success response model for the preview and edit endpoints.

    Attributes
    ----------
    title : str
        Document title.
    markup : str
        Flat HTML markup of the whole document.
    structure : dict
        Normalized persisted structure.
    pages : list[Page]
        Content pages produced by the paginator.
    document : PrintDocument
        Print projection with footers and the signature page.
    total_pages : int
        Printed page count including the signature page.
    changed : bool
        Whether an edit changed the structure (always ``False`` for previews).

    """

    title: str = Field(..., description="Document title")
    markup: str = Field(..., description="Flat HTML markup")
    structure: dict[str, Any] = Field(..., description="Normalized persisted structure")
    pages: list[Page] = Field(..., description="Paginated content")
    document: PrintDocument = Field(..., description="Print projection")
    total_pages: int = Field(..., description="Printed page count")
    changed: bool = Field(default=False, description="Whether an edit was applied")


class ErrorResponse(BaseModel):
    """Error response model.

    Attributes
    ----------
    error : str
        Error message describing what went wrong.

    """

    error: str = Field(..., description="Error message")
