"""Load and persist document structures.

Persisted structures use the JSON shape written by the agreement editor:
``{"title", "city", "date", "nodes": [{"id", "type", "content", "number",
"children", "items", "level"}]}``. Optional node fields may be missing.
"""

from __future__ import annotations

import datetime as dt
import json
from typing import Any, Mapping

from pydantic import TypeAdapter, ValidationError

from legaldoc.config import LEGALDOC_DEFAULT_CITY
from legaldoc.exceptions import HydrationError
from legaldoc.inline_markup import sanitize_inline
from legaldoc.invariants import structure_errors
from legaldoc.numbering import renumber
from legaldoc.schemas import DocumentNode, DocumentStructure, NodeKind
from legaldoc.utils.logging_config import get_logger

logger = get_logger(__name__)

AGREEMENT_TITLES: dict[str, str] = {
    "rent": "LEASE AGREEMENT",
    "sale": "SALE AGREEMENT",
    "bilateral": "LEASE AGREEMENT",
    "trilateral": "LEASE AGREEMENT",
    "agency": "AGENCY AGREEMENT",
    "transfer_act": "TRANSFER ACT",
}
DEFAULT_TITLE = "AGREEMENT"

_NODE_LIST = TypeAdapter(list[DocumentNode])


def agreement_title(kind: str | None) -> str:
    """Default document title for an agreement type tag."""
    return AGREEMENT_TITLES.get(kind or "", DEFAULT_TITLE)


def default_nodes() -> list[DocumentNode]:
    """Skeleton used for new documents and unreadable persisted ones."""
    return renumber(
        [
            DocumentNode(
                id="1",
                kind=NodeKind.SECTION,
                content="GENERAL PROVISIONS",
                children=[
                    DocumentNode(
                        id="1-1",
                        kind=NodeKind.SUBSECTION,
                        content="This agreement outlines the terms and conditions...",
                        depth=1,
                    )
                ],
            )
        ]
    )


def hydrate(record: Mapping[str, Any] | None, *, today: dt.date | None = None) -> DocumentStructure:
    """Build the editing structure for an agreement or template record.

    Args:
        record: Mapping with optional ``structure`` (JSON string or mapping),
            ``type`` (agreement type tag) and ``city``.
        today: Date used when the persisted structure carries none.

    Returns:
        A renumbered structure. Undecodable or empty persisted structures
        fall back to the default skeleton; the failure is logged, never raised.
    """
    record = record or {}
    persisted: dict[str, Any] = {}
    nodes: list[DocumentNode] = []

    raw = record.get("structure")
    if raw:
        try:
            persisted = _decode(raw)
            nodes = _validate_nodes(persisted.get("nodes") or [])
        except HydrationError as exc:
            logger.warning(
                "Falling back to default structure",
                extra={"record_id": record.get("id"), "error": str(exc)},
            )
            persisted, nodes = {}, []

    nodes = renumber(_repair(nodes))
    if not nodes:
        nodes = default_nodes()

    errors = structure_errors(nodes)
    if errors:
        logger.warning("Hydrated structure has invariant violations", extra={"errors": errors})

    agreement_type = _text_field(record, "type")
    return DocumentStructure(
        title=agreement_title(agreement_type) if agreement_type else _text_field(persisted, "title") or DEFAULT_TITLE,
        location=_text_field(record, "city") or _text_field(persisted, "city") or LEGALDOC_DEFAULT_CITY,
        date=_persisted_date(persisted) or today or dt.date.today(),
        nodes=nodes,
    )


def load_structure(raw: str | bytes | Mapping[str, Any]) -> DocumentStructure:
    """Strictly decode a persisted structure.

    Raises:
        HydrationError: If ``raw`` is not a valid persisted structure.
    """
    data = _decode(raw)
    try:
        structure = DocumentStructure.model_validate(data)
    except ValidationError as exc:
        raise HydrationError(f"Invalid persisted structure: {exc.error_count()} error(s)") from exc
    return structure.model_copy(update={"nodes": renumber(structure.nodes)})


def to_persisted(structure: DocumentStructure) -> dict[str, Any]:
    """JSON-ready form of ``structure`` in the persisted field names."""
    return structure.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_structure(structure: DocumentStructure) -> str:
    return structure.model_dump_json(by_alias=True, exclude_none=True)


def _decode(raw: str | bytes | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise HydrationError(f"Persisted structure is not valid JSON: {exc.msg}") from exc
    else:
        data = raw
    if not isinstance(data, Mapping):
        raise HydrationError("Persisted structure must be a JSON object")
    return dict(data)


def _validate_nodes(raw_nodes: Any) -> list[DocumentNode]:
    try:
        return _NODE_LIST.validate_python(raw_nodes)
    except ValidationError as exc:
        raise HydrationError(f"Invalid persisted nodes: {exc.error_count()} error(s)") from exc


def _repair(nodes: list[DocumentNode]) -> list[DocumentNode]:
    """Sanitize content and drop bullet lists without items."""
    repaired: list[DocumentNode] = []
    for node in nodes:
        if node.kind is NodeKind.BULLET_LIST and not node.items:
            logger.debug("Dropping empty bullet list", extra={"node_id": node.id})
            continue
        update: dict[str, Any] = {"content": sanitize_inline(node.content)}
        if node.items is not None:
            update["items"] = [sanitize_inline(item) for item in node.items]
        if node.children is not None:
            update["children"] = _repair(node.children)
        repaired.append(node.model_copy(update=update))
    return repaired


def _text_field(data: Mapping[str, Any], key: str) -> str | None:
    """Return ``data[key]`` when it is a non-empty string; anything else is ignored."""
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    if value is not None:
        logger.debug("Ignoring non-text field", extra={"field": key, "value_type": type(value).__name__})
    return None


def _persisted_date(persisted: Mapping[str, Any]) -> dt.date | None:
    if not persisted.get("date"):
        return None
    try:
        return DocumentStructure.model_validate({"date": persisted["date"]}).date
    except ValidationError:
        return None
