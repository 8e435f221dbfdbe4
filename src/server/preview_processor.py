"""Build previews and apply edits for API requests."""

from __future__ import annotations

from legaldoc.exceptions import LegalDocError
from legaldoc.hydration import to_persisted
from legaldoc.paginator import count_total_pages
from legaldoc.session import EditingSession
from legaldoc.tree_ops import iter_nodes
from legaldoc.utils.logging_config import get_logger
from server.models import EditOperation, EditRequest, PreviewRequest, PreviewResponse
from server.server_config import MAX_STRUCTURE_NODES

logger = get_logger(__name__)


class RequestTooLargeError(LegalDocError):
    """Structure has more nodes than the server accepts."""


def process_preview(request: PreviewRequest) -> PreviewResponse:
    """Hydrate the request's structure and return its print projection."""
    session = _open_session(request)
    return _build_response(session, request, changed=False)


def process_edit(request: EditRequest) -> PreviewResponse:
    """Apply one tree operation and return the updated projection.

    Operations whose target cannot be resolved leave the structure
    unchanged and report ``changed=False``.
    """
    session = _open_session(request)
    changed = _apply(session, request)
    logger.info(
        "Edit processed",
        extra={"operation": request.operation.value, "node_id": request.node_id, "changed": changed},
    )
    return _build_response(session, request, changed=changed)


def _open_session(request: PreviewRequest) -> EditingSession:
    session = EditingSession.from_record(request.as_record(), is_editing=False)
    node_count = sum(1 for _ in iter_nodes(session.nodes))
    if node_count > MAX_STRUCTURE_NODES:
        logger.warning("Rejecting oversized structure", extra={"node_count": node_count})
        raise RequestTooLargeError(f"Structure has {node_count} nodes, limit is {MAX_STRUCTURE_NODES}")
    return session


def _apply(session: EditingSession, request: EditRequest) -> bool:
    operation = request.operation
    node_id = request.node_id
    index = request.index

    if operation is EditOperation.ADD_NODE:
        if request.kind is None:
            raise LegalDocError("add_node requires 'kind'")
        return session.add_node(node_id, request.kind)
    if node_id is None:
        raise LegalDocError(f"{operation.value} requires 'node_id'")
    if operation is EditOperation.REMOVE_NODE:
        return session.remove_node(node_id)
    if operation is EditOperation.UPDATE_NODE:
        return session.update_node(node_id, request.text)
    if operation is EditOperation.TOGGLE_BOLD:
        return session.toggle_bold(node_id, request.text)
    if index is None:
        raise LegalDocError(f"{operation.value} requires 'index'")
    if operation is EditOperation.ADD_ITEM:
        return session.add_bullet_item(node_id, index)
    if operation is EditOperation.UPDATE_ITEM:
        return session.update_bullet_item(node_id, index, request.text)
    if operation is EditOperation.REMOVE_ITEM:
        return session.remove_bullet_item(node_id, index)
    raise LegalDocError(f"Unsupported operation: {operation.value}")


def _build_response(session: EditingSession, request: PreviewRequest, *, changed: bool) -> PreviewResponse:
    document = session.print_view(
        signatures=request.signatures,
        agreement_number=request.agreement_number,
        verify_link=request.verify_link,
    )
    return PreviewResponse(
        title=session.structure.title,
        markup=session.markup,
        structure=to_persisted(session.structure),
        pages=session.pages,
        document=document,
        total_pages=count_total_pages(session.pages, has_signatures=bool(request.signatures)),
        changed=changed,
    )
