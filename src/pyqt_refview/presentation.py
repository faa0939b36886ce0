"""Renderable tree items and the adapter contract the façade delegates to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from pyqt_refview.events import ChangeEmitter


class CollapsibleState(Enum):
    NONE = "none"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


@dataclass(frozen=True)
class TreeItemLabel:
    """Label text plus ``(start, end)`` offsets to highlight."""

    text: str
    highlights: Tuple[Tuple[int, int], ...] = ()


@dataclass(frozen=True)
class Command:
    command_id: str
    title: str
    arguments: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class TreeItem:
    """What the host widget renders for one node."""

    label: TreeItemLabel
    description: Optional[str] = None
    icon_id: Optional[str] = None
    collapsible_state: CollapsibleState = CollapsibleState.NONE
    context_value: Optional[str] = None
    command: Optional[Command] = None
    resource_uri: Optional[str] = None
    tooltip: Optional[str] = field(default=None, compare=False)


class TreeDataAdapterABC(ABC):
    """Presents one domain model as a tree."""

    @property
    @abstractmethod
    def changes(self) -> ChangeEmitter:
        """Stream of ``node | None`` invalidations."""

    @abstractmethod
    async def get_tree_item(self, node: Any) -> Optional[TreeItem]:
        """Render ``node``; None for a node this adapter does not present."""

    @abstractmethod
    async def get_children(self, node: Any = None) -> List[Any]:
        """Roots when ``node`` is None, otherwise the children of ``node``."""

    @abstractmethod
    def get_parent(self, node: Any) -> Any:
        """Parent of ``node`` or None."""

    def dispose(self) -> None:
        pass
