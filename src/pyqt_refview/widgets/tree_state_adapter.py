"""Tree expansion/selection state keyed by the node each item shows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QTreeWidget, QTreeWidgetItem

from pyqt_refview.nodes import NodeKind


class TreeItemKeyBuilderABC(ABC):
    """Build stable keys for tree items."""

    @abstractmethod
    def item_segment_key(self, item: QTreeWidgetItem) -> str:
        """Return one path segment for an item."""


class NodeKeyBuilder(TreeItemKeyBuilderABC):
    """Key items by their node's identity in the domain, not the Python object.

    Nodes are rebuilt on every refresh, so keys use uri/position/name data that
    survives a rebuild.
    """

    def item_segment_key(self, item: QTreeWidgetItem) -> str:
        key = self.node_key(item.data(0, Qt.ItemDataRole.UserRole))
        return key if key is not None else f"text:{item.text(0)}"

    def node_key(self, node: Any) -> Optional[str]:
        key_fn = _NODE_KEYS.get(getattr(node, "kind", None))
        return key_fn(node) if key_fn is not None else None


def _location_key(node: Any) -> str:
    start = node.location.range.start
    return f"{node.location.uri}:{start.line}:{start.character}"


_NODE_KEYS = {
    NodeKind.FILE_GROUP: lambda node: f"file:{node.uri}",
    NodeKind.MATCH: lambda node: f"match:{_location_key(node)}",
    NodeKind.CALL: lambda node: f"call:{node.name}@{_location_key(node)}",
    NodeKind.HISTORY: lambda node: f"history:{node.key}",
}


class TreeStateAdapter:
    """Capture/restore tree expansion and selection state by item keys."""

    def __init__(
        self, key_builder: TreeItemKeyBuilderABC | None = None
    ) -> None:
        self._key_builder = (
            key_builder
            if key_builder is not None
            else NodeKeyBuilder()
        )

    def item_tree_key(self, item: QTreeWidgetItem) -> str:
        segments = [self._key_builder.item_segment_key(item)]
        parent = item.parent()
        while parent is not None:
            segments.append(self._key_builder.item_segment_key(parent))
            parent = parent.parent()
        segments.reverse()
        return "/".join(segments)

    def capture_expansion_state(self, tree: QTreeWidget) -> Dict[str, bool]:
        state: Dict[str, bool] = {}

        def walk(item: QTreeWidgetItem) -> None:
            state[self.item_tree_key(item)] = item.isExpanded()
            for idx in range(item.childCount()):
                walk(item.child(idx))

        for idx in range(tree.topLevelItemCount()):
            walk(tree.topLevelItem(idx))
        return state

    def restore_expansion_state(self, tree: QTreeWidget, state: Dict[str, bool]) -> None:
        """Re-expand top-level items; deeper levels follow as they are populated."""
        if not state:
            return
        for idx in range(tree.topLevelItemCount()):
            self.restore_item_expansion(tree.topLevelItem(idx), state)

    def restore_item_expansion(self, item: QTreeWidgetItem, state: Dict[str, bool]) -> None:
        key = self.item_tree_key(item)
        if key in state:
            item.setExpanded(state[key])

    def capture_selected_keys(self, tree: QTreeWidget) -> Set[str]:
        return {self.item_tree_key(item) for item in tree.selectedItems()}

    def restore_selected_keys(self, tree: QTreeWidget, selected_keys: Set[str]) -> None:
        if not selected_keys:
            return

        def walk(item: QTreeWidgetItem) -> None:
            item.setSelected(self.item_tree_key(item) in selected_keys)
            for idx in range(item.childCount()):
                walk(item.child(idx))

        for idx in range(tree.topLevelItemCount()):
            walk(tree.topLevelItem(idx))
