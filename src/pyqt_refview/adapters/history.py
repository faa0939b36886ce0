"""Adapter presenting navigation history as a flat list."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Tuple

from pyqt_refview.config import DEFAULT_CONFIG, RefViewConfig
from pyqt_refview.events import ChangeEmitter, Subscription
from pyqt_refview.nodes import HistoryNode, NodeKind
from pyqt_refview.presentation import (
    CollapsibleState,
    Command,
    TreeDataAdapterABC,
    TreeItem,
    TreeItemLabel,
)

logger = logging.getLogger(__name__)


class HistoryAdapter(TreeDataAdapterABC):
    """Flat list; fires a full refresh whenever the history changes."""

    def __init__(self, history: Iterable[HistoryNode], config: RefViewConfig = DEFAULT_CONFIG) -> None:
        self._history = history
        self._config = config
        self._changes = ChangeEmitter()
        self._last_snapshot: Tuple[HistoryNode, ...] = ()
        source: Optional[ChangeEmitter] = getattr(history, "changes", None)
        self._history_subscription: Optional[Subscription] = (
            source.subscribe(self._on_history_changed) if source is not None else None
        )

    @property
    def changes(self) -> ChangeEmitter:
        return self._changes

    def dispose(self) -> None:
        if self._history_subscription is not None:
            self._history_subscription.dispose()
            self._history_subscription = None
        self._changes.dispose()

    def _on_history_changed(self, _payload: Any) -> None:
        self._changes.fire(None)

    def refresh(self) -> bool:
        """Fire a full refresh if the history differs from what was last shown."""
        current = tuple(self._history)
        if current == self._last_snapshot:
            return False
        logger.debug("History changed: %d -> %d records", len(self._last_snapshot), len(current))
        self._last_snapshot = current
        self._changes.fire(None)
        return True

    async def get_tree_item(self, node: Any) -> Optional[TreeItem]:
        if getattr(node, "kind", None) is not NodeKind.HISTORY:
            return None
        return TreeItem(
            label=TreeItemLabel(node.label),
            description=node.description,
            collapsible_state=CollapsibleState.NONE,
            context_value=self._config.history_context,
            command=Command(self._config.show_command, self._config.history_command_title, (node,)),
        )

    async def get_children(self, node: Any = None) -> List[HistoryNode]:
        if node is not None:
            return []
        self._last_snapshot = tuple(self._history)
        return list(self._last_snapshot)

    def get_parent(self, node: Any) -> None:
        return None
