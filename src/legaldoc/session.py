"""Single-editor session that owns one document structure."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence

from legaldoc import tree_ops
from legaldoc.height import HeightProfile
from legaldoc.hydration import dump_structure, hydrate
from legaldoc.inline_markup import sanitize_inline, toggle_bold
from legaldoc.paginator import PageLayout, paginate
from legaldoc.projections import EditableBlock, PrintDocument, Signature, editable_view, print_view
from legaldoc.schemas import DocumentNode, DocumentStructure, NodeKind, Page
from legaldoc.serializer import to_markup
from legaldoc.utils.logging_config import get_logger

logger = get_logger(__name__)

ChangeCallback = Callable[[str, str], None]


class EditingSession:
    """Apply edits to a structure and keep its derived views current.

    After every accepted change the markup is recomputed, the pages are
    recomputed when the session is not in edit mode, and ``on_change`` is
    called with ``(markup, structure_json)`` while in edit mode.
    """

    def __init__(
        self,
        structure: DocumentStructure,
        *,
        is_editing: bool = True,
        on_change: ChangeCallback | None = None,
        id_factory: tree_ops.IdFactory | None = None,
        profile: HeightProfile | None = None,
        layout: PageLayout | None = None,
    ) -> None:
        self._structure = structure
        self._is_editing = is_editing
        self._on_change = on_change
        self._id_factory = id_factory
        self._profile = profile
        self._layout = layout
        self._markup = ""
        self._pages: list[Page] = []
        self._rederive(notify=False)

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None, **kwargs: Any) -> "EditingSession":
        return cls(hydrate(record), **kwargs)

    @property
    def structure(self) -> DocumentStructure:
        return self._structure

    @property
    def nodes(self) -> list[DocumentNode]:
        return self._structure.nodes

    @property
    def is_editing(self) -> bool:
        return self._is_editing

    @property
    def markup(self) -> str:
        return self._markup

    @property
    def pages(self) -> list[Page]:
        """Current pagination; empty while in edit mode."""
        return self._pages

    def set_editing(self, is_editing: bool) -> None:
        if is_editing == self._is_editing:
            return
        self._is_editing = is_editing
        self._rederive(notify=is_editing)

    def add_node(self, after_id: str | None, kind: NodeKind | str) -> bool:
        return self._commit(tree_ops.insert_node(self.nodes, after_id, kind, id_factory=self._id_factory))

    def remove_node(self, node_id: str) -> bool:
        return self._commit(tree_ops.remove_node(self.nodes, node_id))

    def update_node(self, node_id: str, content: str) -> bool:
        return self._commit(tree_ops.update_content(self.nodes, node_id, sanitize_inline(content)))

    def add_bullet_item(self, node_id: str, after_index: int) -> bool:
        return self._commit(tree_ops.add_bullet_item(self.nodes, node_id, after_index))

    def update_bullet_item(self, node_id: str, index: int, text: str) -> bool:
        return self._commit(tree_ops.update_bullet_item(self.nodes, node_id, index, sanitize_inline(text)))

    def remove_bullet_item(self, node_id: str, index: int) -> bool:
        return self._commit(tree_ops.remove_bullet_item(self.nodes, node_id, index))

    def toggle_bold(self, node_id: str, selected_text: str) -> bool:
        node = tree_ops.find_node(self.nodes, node_id)
        if node is None:
            return False
        return self.update_node(node_id, toggle_bold(node.content, selected_text))

    def set_title(self, title: str) -> bool:
        return self._commit_fields(title=title)

    def set_location(self, location: str) -> bool:
        return self._commit_fields(location=location)

    def editable_view(self) -> list[EditableBlock]:
        return editable_view(self._structure)

    def print_view(
        self,
        *,
        signatures: Sequence[Signature] = (),
        agreement_number: str = "",
        verify_link: str = "",
    ) -> PrintDocument:
        pages = None if self._is_editing else self._pages
        return print_view(
            self._structure,
            signatures=signatures,
            agreement_number=agreement_number,
            verify_link=verify_link,
            pages=pages,
            profile=self._profile,
            layout=self._layout,
        )

    def to_json(self) -> str:
        return dump_structure(self._structure)

    def _commit(self, nodes: Iterable[DocumentNode]) -> bool:
        nodes = list(nodes)
        if nodes == self._structure.nodes:
            return False
        return self._commit_fields(nodes=nodes)

    def _commit_fields(self, **fields: Any) -> bool:
        updated = self._structure.model_copy(update=fields)
        if updated == self._structure:
            return False
        self._structure = updated
        self._rederive(notify=True)
        return True

    def _rederive(self, *, notify: bool) -> None:
        self._markup = to_markup(self._structure)
        self._pages = [] if self._is_editing else paginate(self.nodes, profile=self._profile, layout=self._layout)
        if notify and self._is_editing and self._on_change is not None:
            self._on_change(self._markup, self.to_json())
        logger.debug(
            "Structure re-derived",
            extra={"nodes": len(self.nodes), "pages": len(self._pages), "editing": self._is_editing},
        )
