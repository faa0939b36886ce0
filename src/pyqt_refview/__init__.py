"""
Tree presentation of search results, call hierarchies and navigation history
for PyQt6 tree widgets.
"""

from .config import DEFAULT_CONFIG, RefViewConfig
from .events import ChangeEmitter, Subscription
from .facade import ModelBinding, ModelKind, TreeDataFacade
from .models import (
    CallDirection,
    CallHierarchyModel,
    CallTarget,
    NavigationHistory,
    SearchResultsModel,
)
from .nodes import (
    CallNode,
    FileGroupNode,
    HistoryNode,
    Location,
    MatchNode,
    NodeKind,
    Position,
    TextDocument,
    TextRange,
)
from .presentation import (
    CollapsibleState,
    Command,
    TreeDataAdapterABC,
    TreeItem,
    TreeItemLabel,
)
from .preview import PreviewChunks, get_preview_chunks
from .symbol_icons import SYMBOL_ICON_IDS, SymbolKind, icon_id_for_kind

__all__ = [
    "DEFAULT_CONFIG",
    "RefViewConfig",
    "ChangeEmitter",
    "Subscription",
    "ModelBinding",
    "ModelKind",
    "TreeDataFacade",
    "CallDirection",
    "CallHierarchyModel",
    "CallTarget",
    "NavigationHistory",
    "SearchResultsModel",
    "CallNode",
    "FileGroupNode",
    "HistoryNode",
    "Location",
    "MatchNode",
    "NodeKind",
    "Position",
    "TextDocument",
    "TextRange",
    "CollapsibleState",
    "Command",
    "TreeDataAdapterABC",
    "TreeItem",
    "TreeItemLabel",
    "PreviewChunks",
    "get_preview_chunks",
    "SYMBOL_ICON_IDS",
    "SymbolKind",
    "icon_id_for_kind",
]
