"""The single tree-data object a host widget binds to.

The façade owns one outward ``ChangeEmitter`` for its whole lifetime. Binding
a new model swaps only the upstream adapter: the old adapter is unsubscribed
and disposed, a full refresh is fired, and only then is the new adapter's
stream forwarded. The host therefore sees the refresh before any event of
the new model and never holds two live upstreams.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pyqt_refview.adapters import CallHierarchyAdapter, HistoryAdapter, SearchResultsAdapter
from pyqt_refview.config import DEFAULT_CONFIG, RefViewConfig
from pyqt_refview.events import ChangeEmitter, Subscription
from pyqt_refview.models import CallHierarchyModel, SearchResultsModel
from pyqt_refview.presentation import TreeDataAdapterABC, TreeItem

logger = logging.getLogger(__name__)


class ModelKind(Enum):
    SEARCH = "search"
    CALLS = "calls"
    HISTORY = "history"


@dataclass(frozen=True)
class ModelBinding:
    """Tagged model handed to ``TreeDataFacade.bind``."""

    kind: ModelKind
    model: Any

    @classmethod
    def search(cls, model: SearchResultsModel) -> "ModelBinding":
        return cls(ModelKind.SEARCH, model)

    @classmethod
    def calls(cls, model: CallHierarchyModel) -> "ModelBinding":
        return cls(ModelKind.CALLS, model)

    @classmethod
    def history(cls, history) -> "ModelBinding":
        return cls(ModelKind.HISTORY, history)


AdapterFactory = Callable[[Any, RefViewConfig], TreeDataAdapterABC]

_ADAPTER_FACTORIES: Dict[ModelKind, AdapterFactory] = {
    ModelKind.SEARCH: SearchResultsAdapter,
    ModelKind.CALLS: CallHierarchyAdapter,
    ModelKind.HISTORY: HistoryAdapter,
}


class TreeDataFacade:
    """Polymorphic tree data provider with a hot-swappable model."""

    def __init__(self, config: RefViewConfig = DEFAULT_CONFIG) -> None:
        self._config = config
        self._changes = ChangeEmitter()
        self._adapter: Optional[TreeDataAdapterABC] = None
        self._adapter_subscription: Optional[Subscription] = None
        self._generation = 0

    @property
    def changes(self) -> ChangeEmitter:
        return self._changes

    @property
    def adapter(self) -> Optional[TreeDataAdapterABC]:
        return self._adapter

    @property
    def generation(self) -> int:
        """Incremented on every bind/unbind; results from older ones are stale."""
        return self._generation

    def bind(self, binding: ModelBinding) -> TreeDataAdapterABC:
        factory = _ADAPTER_FACTORIES.get(binding.kind)
        if factory is None:
            raise ValueError(f"Unknown model kind '{binding.kind}'")

        self._release_adapter()
        try:
            self._adapter = factory(binding.model, self._config)
        except Exception:
            # The old adapter is gone either way; the host must drop its nodes.
            self._generation += 1
            logger.debug("Bind failed, left unbound (generation %d)", self._generation)
            self._changes.fire(None)
            raise
        self._generation += 1
        logger.debug(
            "Bound %s (generation %d)", type(self._adapter).__name__, self._generation
        )

        # Refresh must reach the host before anything from the new upstream.
        self._changes.fire(None)
        self._adapter_subscription = self._adapter.changes.subscribe(self._forward)
        return self._adapter

    def unbind(self) -> None:
        if self._adapter is None:
            return
        self._release_adapter()
        self._generation += 1
        logger.debug("Unbound (generation %d)", self._generation)
        self._changes.fire(None)

    def dispose(self) -> None:
        self._release_adapter()
        self._generation += 1
        self._changes.dispose()

    def _release_adapter(self) -> None:
        if self._adapter_subscription is not None:
            self._adapter_subscription.dispose()
            self._adapter_subscription = None
        if self._adapter is not None:
            self._adapter.dispose()
            self._adapter = None

    def _forward(self, payload: Any) -> None:
        self._changes.fire(payload)

    async def get_tree_item(self, node: Any) -> Optional[TreeItem]:
        adapter, generation = self._adapter, self._generation
        if adapter is None:
            return None
        item = await adapter.get_tree_item(node)
        if generation != self._generation:
            logger.debug("Discarding tree item for %r from generation %d", node, generation)
            return None
        return item

    async def get_children(self, node: Any = None) -> List[Any]:
        adapter, generation = self._adapter, self._generation
        if adapter is None:
            return []
        children = await adapter.get_children(node)
        if generation != self._generation:
            logger.debug("Discarding children of %r from generation %d", node, generation)
            return []
        return list(children)

    def get_parent(self, node: Any) -> Any:
        if self._adapter is None:
            return None
        return self._adapter.get_parent(node)
