"""Id-addressed mutations of the document tree.

Every operation takes the current top-level node list and returns a new,
renumbered list. Nodes are never modified in place. Operations that cannot
resolve their target id (or bullet index) return the tree unchanged and log
the reason at debug level.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator
from uuid import uuid4

from legaldoc.exceptions import InvariantError
from legaldoc.numbering import renumber
from legaldoc.schemas import DocumentNode, NodeKind
from legaldoc.utils.logging_config import get_logger

logger = get_logger(__name__)

IdFactory = Callable[[], str]

DEFAULT_CONTENT: dict[NodeKind, str] = {
    NodeKind.SECTION: "NEW SECTION",
    NodeKind.SUBSECTION: "New content",
    NodeKind.PARAGRAPH: "New paragraph",
    NodeKind.BULLET_LIST: "",
}
DEFAULT_BULLET_ITEM = "New item"


def new_node_id() -> str:
    """Default identity source for created nodes."""
    return uuid4().hex


def iter_nodes(nodes: Iterable[DocumentNode]) -> Iterator[DocumentNode]:
    """Yield every node of the tree in depth-first document order."""
    for node in nodes:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def collect_ids(nodes: Iterable[DocumentNode]) -> set[str]:
    return {node.id for node in iter_nodes(nodes)}


def find_node(nodes: Iterable[DocumentNode], node_id: str) -> DocumentNode | None:
    for node in iter_nodes(nodes):
        if node.id == node_id:
            return node
    return None


def find_parent(nodes: Iterable[DocumentNode], child_id: str) -> DocumentNode | None:
    """Return the node whose direct children contain ``child_id``."""
    for node in nodes:
        if not node.children:
            continue
        if any(child.id == child_id for child in node.children):
            return node
        found = find_parent(node.children, child_id)
        if found is not None:
            return found
    return None


def create_node(kind: NodeKind, node_id: str, *, depth: int = 0) -> DocumentNode:
    """Build a fresh node of ``kind`` with placeholder content."""
    return DocumentNode(
        id=node_id,
        kind=kind,
        content=DEFAULT_CONTENT[kind],
        items=[DEFAULT_BULLET_ITEM] if kind is NodeKind.BULLET_LIST else None,
        children=[] if kind is NodeKind.SECTION else None,
        depth=depth,
    )


def insert_node(
    nodes: Iterable[DocumentNode],
    after_id: str | None,
    kind: NodeKind | str,
    *,
    id_factory: IdFactory | None = None,
) -> list[DocumentNode]:
    """Insert a new node relative to ``after_id``.

    - ``after_id=None`` with a section appends a top-level section.
    - A subsection is appended to the children of section ``after_id``.
    - A paragraph or bullet list is placed right after ``after_id`` inside
      the section that owns it.

    Any other combination, or an id that does not resolve, is a no-op.

    Raises:
        InvariantError: If ``id_factory`` returns an id already in the tree.
    """
    kind = NodeKind(kind)
    nodes = list(nodes)

    if after_id is None:
        if kind is not NodeKind.SECTION:
            return _noop(nodes, "insert", after_id, reason="top-level nodes must be sections", kind=kind.value)
        section = create_node(kind, _next_id(nodes, id_factory))
        return renumber([*nodes, section])

    if kind is NodeKind.SECTION:
        return _noop(nodes, "insert", after_id, reason="sections are only appended at the top level")

    if kind is NodeKind.SUBSECTION:
        target = find_node(nodes, after_id)
        if target is None or not target.is_section:
            return _noop(nodes, "insert", after_id, reason="target is not a section", kind=kind.value)
        subsection = create_node(kind, _next_id(nodes, id_factory), depth=target.depth + 1)

        def append_child(section: DocumentNode) -> DocumentNode:
            return section.model_copy(update={"children": [*(section.children or []), subsection]})

        return renumber(_replace_node(nodes, after_id, append_child))

    parent = find_parent(nodes, after_id)
    if parent is None or not parent.is_section:
        return _noop(nodes, "insert", after_id, reason="no owning section", kind=kind.value)
    sibling = create_node(kind, _next_id(nodes, id_factory), depth=parent.depth + 1)

    def splice_after(section: DocumentNode) -> DocumentNode:
        children = list(section.children or [])
        index = next(i for i, child in enumerate(children) if child.id == after_id)
        children.insert(index + 1, sibling)
        return section.model_copy(update={"children": children})

    return renumber(_replace_node(nodes, parent.id, splice_after))


def remove_node(nodes: Iterable[DocumentNode], node_id: str) -> list[DocumentNode]:
    """Delete ``node_id`` and its whole subtree from wherever it occurs."""
    nodes = list(nodes)
    if find_node(nodes, node_id) is None:
        return _noop(nodes, "remove", node_id, reason="unknown id")
    return renumber(_filter_out(nodes, node_id))


def update_content(nodes: Iterable[DocumentNode], node_id: str, content: str) -> list[DocumentNode]:
    """Replace the content of ``node_id``; everything else is kept."""
    nodes = list(nodes)
    if find_node(nodes, node_id) is None:
        return _noop(nodes, "update", node_id, reason="unknown id")
    return renumber(_replace_node(nodes, node_id, lambda node: node.model_copy(update={"content": content})))


def add_bullet_item(
    nodes: Iterable[DocumentNode],
    node_id: str,
    after_index: int,
    text: str = DEFAULT_BULLET_ITEM,
) -> list[DocumentNode]:
    """Insert ``text`` right after ``after_index`` (clamped to the list bounds)."""
    nodes = list(nodes)
    target = _find_bullet_list(nodes, node_id)
    if target is None:
        return _noop(nodes, "add_item", node_id, reason="not a bullet list")

    items = list(target.items or [])
    position = min(max(after_index + 1, 0), len(items))
    items.insert(position, text)
    return _set_items(nodes, node_id, items)


def update_bullet_item(nodes: Iterable[DocumentNode], node_id: str, index: int, text: str) -> list[DocumentNode]:
    """Replace the text of item ``index``. Out-of-range indices are ignored."""
    nodes = list(nodes)
    target = _find_bullet_list(nodes, node_id)
    if target is None:
        return _noop(nodes, "update_item", node_id, reason="not a bullet list")

    items = list(target.items or [])
    if not 0 <= index < len(items):
        return _noop(nodes, "update_item", node_id, reason="index out of range", index=index)
    items[index] = text
    return _set_items(nodes, node_id, items)


def remove_bullet_item(nodes: Iterable[DocumentNode], node_id: str, index: int) -> list[DocumentNode]:
    """Delete item ``index``.

    Removing the last remaining item deletes the bullet list node itself,
    so an empty list never survives in the tree.
    """
    nodes = list(nodes)
    target = _find_bullet_list(nodes, node_id)
    if target is None:
        return _noop(nodes, "remove_item", node_id, reason="not a bullet list")

    items = list(target.items or [])
    if not 0 <= index < len(items):
        return _noop(nodes, "remove_item", node_id, reason="index out of range", index=index)
    del items[index]
    if not items:
        logger.debug("Bullet list emptied, removing node", extra={"node_id": node_id})
        return remove_node(nodes, node_id)
    return _set_items(nodes, node_id, items)


def _next_id(nodes: list[DocumentNode], id_factory: IdFactory | None) -> str:
    node_id = (id_factory or new_node_id)()
    if node_id in collect_ids(nodes):
        raise InvariantError(f"Identity source returned an id already in use: {node_id!r}")
    return node_id


def _replace_node(
    nodes: list[DocumentNode],
    node_id: str,
    transform: Callable[[DocumentNode], DocumentNode],
) -> list[DocumentNode]:
    result: list[DocumentNode] = []
    for node in nodes:
        if node.id == node_id:
            result.append(transform(node))
        elif node.children:
            result.append(node.model_copy(update={"children": _replace_node(node.children, node_id, transform)}))
        else:
            result.append(node)
    return result


def _filter_out(nodes: list[DocumentNode], node_id: str) -> list[DocumentNode]:
    result: list[DocumentNode] = []
    for node in nodes:
        if node.id == node_id:
            continue
        if node.children:
            node = node.model_copy(update={"children": _filter_out(node.children, node_id)})
        result.append(node)
    return result


def _find_bullet_list(nodes: list[DocumentNode], node_id: str) -> DocumentNode | None:
    node = find_node(nodes, node_id)
    if node is None or node.kind is not NodeKind.BULLET_LIST:
        return None
    return node


def _set_items(nodes: list[DocumentNode], node_id: str, items: list[str]) -> list[DocumentNode]:
    return renumber(_replace_node(nodes, node_id, lambda node: node.model_copy(update={"items": items})))


def _noop(nodes: list[DocumentNode], operation: str, node_id: str | None, *, reason: str, **extra: object) -> list[DocumentNode]:
    logger.debug(
        "Ignoring tree operation",
        extra={"operation": operation, "node_id": node_id, "reason": reason, **extra},
    )
    return nodes
