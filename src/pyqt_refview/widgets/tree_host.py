"""Bind a ``QTreeWidget`` to a ``TreeDataFacade``.

The host subscribes to the façade's change stream once. Top-level items are
rebuilt on a full refresh; an item's children are fetched when it is
expanded and thrown away whenever that item is reported stale.

Fetches are coroutines handed to ``scheduler`` (``asyncio.ensure_future`` by
default, which needs a running loop such as a Qt-integrated one). A fetch
that completes after the tree was rebuilt is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, Iterator, List, Optional

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QTreeWidget, QTreeWidgetItem

from pyqt_refview.facade import TreeDataFacade
from pyqt_refview.presentation import CollapsibleState, TreeItem

from .tree_rebuild_coordinator import TreeRebuildCoordinator
from .tree_state_adapter import NodeKeyBuilder, TreeStateAdapter

logger = logging.getLogger(__name__)

NODE_ROLE = Qt.ItemDataRole.UserRole
LABEL_ROLE = Qt.ItemDataRole.UserRole.value + 1
COMMAND_ROLE = Qt.ItemDataRole.UserRole.value + 2

Scheduler = Callable[[Coroutine[Any, Any, Any]], Any]


class TreeDataHost(QObject):
    """Keeps a ``QTreeWidget`` in sync with whatever model the façade presents."""

    command_requested = pyqtSignal(str, object)

    def __init__(
        self,
        tree: QTreeWidget,
        facade: TreeDataFacade,
        scheduler: Scheduler | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._tree = tree
        self._facade = facade
        self._scheduler = scheduler if scheduler is not None else asyncio.ensure_future
        self._key_builder = NodeKeyBuilder()
        self._coordinator = TreeRebuildCoordinator(TreeStateAdapter(self._key_builder))
        self._rebuild_generation = 0

        self._tree.setColumnCount(2)
        self._tree.setHeaderHidden(True)
        self._subscription = facade.changes.subscribe(self._on_tree_changed)
        self._tree.itemExpanded.connect(self._on_item_expanded)
        self._tree.itemActivated.connect(self._on_item_activated)

    def dispose(self) -> None:
        self._subscription.dispose()
        self._tree.itemExpanded.disconnect(self._on_item_expanded)
        self._tree.itemActivated.disconnect(self._on_item_activated)

    # ---- change handling ----

    def _on_tree_changed(self, payload: Any) -> None:
        if payload is None:
            self._scheduler(self.reload_roots())
            return
        item = self.find_item(payload)
        if item is None:
            logger.debug("Change for %r which is not rendered", payload)
            return
        self._scheduler(self.reset_item(item))

    def _on_item_expanded(self, item: QTreeWidgetItem) -> None:
        self._scheduler(self.populate(item))

    def _on_item_activated(self, item: QTreeWidgetItem, _column: int) -> None:
        command = item.data(0, COMMAND_ROLE)
        if command is None:
            return
        self.command_requested.emit(command.command_id, command.arguments)

    # ---- population ----

    async def reload_roots(self) -> bool:
        """Replace all top-level items with the façade's current roots."""
        self._rebuild_generation += 1
        generation = self._rebuild_generation

        async def rebuild() -> bool:
            roots = await self._facade.get_children(None)
            items = await self._create_items(roots, generation)
            if items is None:
                return False
            self._tree.addTopLevelItems(items)
            self._expand_requested(items)
            return True

        rebuilt = await self._coordinator.rebuild(self._tree, rebuild)
        if not rebuilt:
            logger.debug("Root reload %d superseded", generation)
        return rebuilt

    def populate(self, item: QTreeWidgetItem) -> Coroutine[Any, Any, bool]:
        """Return a coroutine that fetches and attaches the children of ``item``.

        The item is read right away; by the time the coroutine runs a rebuild
        may already have deleted it.
        """
        return self._populate(item, item.data(0, NODE_ROLE), self._rebuild_generation)

    async def _populate(self, item: QTreeWidgetItem, node: Any, generation: int) -> bool:
        children = await self._facade.get_children(node)
        items = await self._create_items(children, generation)
        if items is None or not self._is_attached(item):
            logger.debug("Dropping children of %r", node)
            return False
        item.takeChildren()
        item.addChildren(items)
        pending = self._coordinator.pending_expansion
        for child in items:
            self._coordinator.state_adapter.restore_item_expansion(child, pending)
        self._expand_requested(items)
        return True

    def reset_item(self, item: QTreeWidgetItem) -> Coroutine[Any, Any, bool]:
        """Return a coroutine that re-renders ``item`` and drops its children."""
        return self._reset_item(item, item.data(0, NODE_ROLE), self._rebuild_generation)

    async def _reset_item(self, item: QTreeWidgetItem, node: Any, generation: int) -> bool:
        tree_item = await self._facade.get_tree_item(node)
        if generation != self._rebuild_generation or not self._is_attached(item):
            return False
        if tree_item is not None:
            self._apply(item, tree_item)
        item.takeChildren()
        if item.isExpanded():
            return await self.populate(item)
        return True

    async def _create_items(
        self, nodes: List[Any], generation: int
    ) -> Optional[List[QTreeWidgetItem]]:
        items: List[QTreeWidgetItem] = []
        for node in nodes:
            tree_item = await self._facade.get_tree_item(node)
            if generation != self._rebuild_generation:
                return None
            if tree_item is None:
                continue
            item = QTreeWidgetItem()
            item.setData(0, NODE_ROLE, node)
            self._apply(item, tree_item)
            items.append(item)
        if generation != self._rebuild_generation:
            return None
        return items

    def _apply(self, item: QTreeWidgetItem, tree_item: TreeItem) -> None:
        item.setText(0, tree_item.label.text)
        item.setText(1, tree_item.description or "")
        item.setData(0, LABEL_ROLE, tree_item.label)
        item.setData(0, COMMAND_ROLE, tree_item.command)
        item.setToolTip(0, tree_item.tooltip or "")
        item.setIcon(0, QIcon.fromTheme(tree_item.icon_id) if tree_item.icon_id else QIcon())
        if tree_item.collapsible_state is CollapsibleState.NONE:
            item.setChildIndicatorPolicy(QTreeWidgetItem.ChildIndicatorPolicy.DontShowIndicator)
        else:
            item.setChildIndicatorPolicy(QTreeWidgetItem.ChildIndicatorPolicy.ShowIndicator)
        item.setData(1, NODE_ROLE, tree_item.collapsible_state)

    def _expand_requested(self, items: List[QTreeWidgetItem]) -> None:
        for item in items:
            if item.data(1, NODE_ROLE) is CollapsibleState.EXPANDED:
                item.setExpanded(True)

    # ---- lookup ----

    def iter_items(self) -> Iterator[QTreeWidgetItem]:
        def walk(item: QTreeWidgetItem) -> Iterator[QTreeWidgetItem]:
            yield item
            for idx in range(item.childCount()):
                yield from walk(item.child(idx))

        for idx in range(self._tree.topLevelItemCount()):
            yield from walk(self._tree.topLevelItem(idx))

    def find_item(self, node: Any) -> Optional[QTreeWidgetItem]:
        return next(
            (item for item in self.iter_items() if item.data(0, NODE_ROLE) is node),
            None,
        )

    def _is_attached(self, item: QTreeWidgetItem) -> bool:
        top = item
        while top.parent() is not None:
            top = top.parent()
        return self._tree.indexOfTopLevelItem(top) >= 0

    async def reveal(self, node: Any) -> Optional[QTreeWidgetItem]:
        """Expand the path from the root down to ``node`` and select it."""
        chain = [node]
        parent = self._facade.get_parent(node)
        while parent is not None:
            chain.insert(0, parent)
            parent = self._facade.get_parent(parent)

        current: Optional[QTreeWidgetItem] = None
        for target in chain:
            if current is not None and current.childCount() == 0:
                if not await self.populate(current):
                    return None
            found = self._find_child(current, target)
            if found is None:
                return None
            if current is not None:
                current.setExpanded(True)
            current = found

        if current is not None:
            self._tree.setCurrentItem(current)
        return current

    def _find_child(self, parent: Optional[QTreeWidgetItem], node: Any) -> Optional[QTreeWidgetItem]:
        if parent is None:
            candidates = [self._tree.topLevelItem(i) for i in range(self._tree.topLevelItemCount())]
        else:
            candidates = [parent.child(i) for i in range(parent.childCount())]
        for candidate in candidates:
            if candidate.data(0, NODE_ROLE) is node:
                return candidate
        wanted = self._key_builder.node_key(node)
        for candidate in candidates:
            if self._key_builder.item_segment_key(candidate) == wanted:
                return candidate
        return None
