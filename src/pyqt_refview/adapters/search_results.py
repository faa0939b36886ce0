"""Adapter presenting a ``SearchResultsModel`` as files with match children."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, List, Optional
from urllib.parse import unquote, urlsplit

from pyqt_refview.config import DEFAULT_CONFIG, RefViewConfig
from pyqt_refview.events import ChangeEmitter
from pyqt_refview.models import SearchResultsModel
from pyqt_refview.nodes import FileGroupNode, MatchNode, NodeKind
from pyqt_refview.presentation import (
    CollapsibleState,
    Command,
    TreeDataAdapterABC,
    TreeItem,
    TreeItemLabel,
)
from pyqt_refview.preview import get_preview_chunks

logger = logging.getLogger(__name__)


def _uri_path(uri: str) -> PurePosixPath:
    """Path part of ``uri``; plain paths pass through unchanged."""
    parts = urlsplit(uri)
    # Single-letter schemes are Windows drive letters, not URI schemes.
    if len(parts.scheme) > 1:
        return PurePosixPath(unquote(parts.path))
    return PurePosixPath(uri)


class SearchResultsAdapter(TreeDataAdapterABC):
    """Files at the root, matches one level below."""

    def __init__(self, model: SearchResultsModel, config: RefViewConfig = DEFAULT_CONFIG) -> None:
        self._model = model
        self._config = config
        self._changes = ChangeEmitter()
        self._model_subscription = model.changes.subscribe(self._on_model_changed)
        self._renderers = {
            NodeKind.FILE_GROUP: self._file_item,
            NodeKind.MATCH: self._match_item,
        }

    @property
    def changes(self) -> ChangeEmitter:
        return self._changes

    def dispose(self) -> None:
        self._model_subscription.dispose()
        self._changes.dispose()

    def _on_model_changed(self, payload: Any) -> None:
        # Only whole files are tracked; anything finer becomes a full refresh.
        narrow = payload is not None and getattr(payload, "kind", None) is NodeKind.FILE_GROUP
        self._changes.fire(payload if narrow else None)

    async def get_tree_item(self, node: Any) -> Optional[TreeItem]:
        renderer = self._renderers.get(getattr(node, "kind", None))
        if renderer is None:
            return None
        return await renderer(node)

    async def _file_item(self, node: FileGroupNode) -> TreeItem:
        path = _uri_path(node.uri)
        return TreeItem(
            label=TreeItemLabel(path.name or node.uri),
            description=str(path.parent) if str(path.parent) != "." else None,
            icon_id=self._config.file_icon_id,
            collapsible_state=CollapsibleState.COLLAPSED,
            context_value=self._config.file_context,
            resource_uri=node.uri,
            tooltip=node.uri,
        )

    async def _match_item(self, node: MatchNode) -> TreeItem:
        try:
            document = await node.parent.get_document()
            chunks = get_preview_chunks(
                document,
                node.range,
                before_chars=self._config.preview_before_chars,
                after_chars=self._config.preview_after_chars,
                trim=self._config.trim_preview,
            )
            label = TreeItemLabel(chunks.text, (chunks.highlight,))
        except Exception as error:
            logger.warning("No preview for %r: %s", node, error)
            start = node.range.start
            label = TreeItemLabel(f"{start.line + 1}:{start.character + 1}")

        return TreeItem(
            label=label,
            collapsible_state=CollapsibleState.NONE,
            context_value=self._config.match_context,
            command=Command(self._config.show_command, self._config.match_command_title, (node,)),
        )

    async def get_children(self, node: Any = None) -> List[Any]:
        if node is None:
            return self._model.items
        if getattr(node, "kind", None) is NodeKind.FILE_GROUP:
            return node.children()
        return []

    def get_parent(self, node: Any) -> Optional[FileGroupNode]:
        if getattr(node, "kind", None) is NodeKind.MATCH:
            return node.parent
        return None
