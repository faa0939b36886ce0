"""Adapter presenting a ``CallHierarchyModel`` with lazy expansion."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pyqt_refview.config import DEFAULT_CONFIG, RefViewConfig
from pyqt_refview.events import ChangeEmitter
from pyqt_refview.models import CallHierarchyModel
from pyqt_refview.nodes import CallNode, NodeKind
from pyqt_refview.presentation import (
    CollapsibleState,
    Command,
    TreeDataAdapterABC,
    TreeItem,
    TreeItemLabel,
)
from pyqt_refview.symbol_icons import icon_id_for_kind

logger = logging.getLogger(__name__)


class CallHierarchyAdapter(TreeDataAdapterABC):
    """Every call node is collapsed; children are resolved only on request."""

    def __init__(self, model: CallHierarchyModel, config: RefViewConfig = DEFAULT_CONFIG) -> None:
        self._model = model
        self._config = config

    @property
    def changes(self) -> ChangeEmitter:
        return self._model.changes

    async def get_tree_item(self, node: Any) -> Optional[TreeItem]:
        if getattr(node, "kind", None) is not NodeKind.CALL:
            return None
        return TreeItem(
            label=TreeItemLabel(node.name),
            description=node.detail,
            icon_id=icon_id_for_kind(node.symbol_kind),
            collapsible_state=CollapsibleState.COLLAPSED,
            context_value=self._config.call_context,
            command=Command(self._config.show_command, self._config.call_command_title, (node,)),
        )

    async def get_children(self, node: Any = None) -> List[CallNode]:
        if node is None:
            return self._model.roots
        if getattr(node, "kind", None) is not NodeKind.CALL:
            return []
        try:
            return await self._model.resolve_calls(node)
        except Exception as error:
            logger.warning("Resolving calls of %r failed: %s", node, error)
            return []

    def get_parent(self, node: Any) -> Optional[CallNode]:
        if getattr(node, "kind", None) is not NodeKind.CALL:
            return None
        return node.parent
