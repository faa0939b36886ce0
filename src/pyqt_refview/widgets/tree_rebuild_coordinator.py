"""Coordinate safe tree rebuilds while preserving UI state."""

from __future__ import annotations

from typing import Awaitable, Callable, Dict

from PyQt6.QtWidgets import QTreeWidget

from .tree_state_adapter import TreeStateAdapter


class TreeRebuildCoordinator:
    """Rebuild tree contents while preserving expansion and selection."""

    def __init__(self, state_adapter: TreeStateAdapter | None = None) -> None:
        self._state_adapter = state_adapter if state_adapter is not None else TreeStateAdapter()
        self._pending_expansion: Dict[str, bool] = {}

    @property
    def state_adapter(self) -> TreeStateAdapter:
        return self._state_adapter

    @property
    def pending_expansion(self) -> Dict[str, bool]:
        """Expansion captured before the last rebuild, for lazily filled levels."""
        return self._pending_expansion

    async def rebuild(self, tree: QTreeWidget, rebuild_fn: Callable[[], Awaitable[bool]]) -> bool:
        """Clear ``tree`` and await ``rebuild_fn``; state is restored only if it returns True."""
        expansion_state = self._state_adapter.capture_expansion_state(tree)
        expansion_state.update(
            (key, expanded)
            for key, expanded in self._pending_expansion.items()
            if key not in expansion_state
        )
        selected_keys = self._state_adapter.capture_selected_keys(tree)
        tree.clear()
        if not await rebuild_fn():
            return False
        self._pending_expansion = expansion_state
        self._state_adapter.restore_expansion_state(tree, expansion_state)
        self._state_adapter.restore_selected_keys(tree, selected_keys)
        return True
