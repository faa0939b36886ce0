"""Qt host side of the tree data contract."""

from .tree_state_adapter import (
    TreeItemKeyBuilderABC,
    NodeKeyBuilder,
    TreeStateAdapter,
)
from .tree_rebuild_coordinator import TreeRebuildCoordinator
from .tree_host import COMMAND_ROLE, LABEL_ROLE, NODE_ROLE, TreeDataHost

__all__ = [
    "TreeItemKeyBuilderABC",
    "NodeKeyBuilder",
    "TreeStateAdapter",
    "TreeRebuildCoordinator",
    "TreeDataHost",
    "NODE_ROLE",
    "LABEL_ROLE",
    "COMMAND_ROLE",
]
