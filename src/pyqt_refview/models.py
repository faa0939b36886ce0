"""In-memory domain models observed by the adapters.

Adapters only read these models and subscribe to their ``changes`` streams;
every mutation below is driven by the owning application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from pyqt_refview.events import ChangeEmitter
from pyqt_refview.nodes import (
    CallNode,
    DocumentLoader,
    FileGroupNode,
    HistoryNode,
    Location,
    MatchNode,
    NodeKind,
    load_text_document,
)
from pyqt_refview.symbol_icons import SymbolKind

logger = logging.getLogger(__name__)


class SearchResultsModel:
    """Matches grouped by file."""

    def __init__(self, files: Iterable[FileGroupNode] = (), title: str = "") -> None:
        self.title = title
        self._files: List[FileGroupNode] = list(files)
        self.changes = ChangeEmitter()

    @classmethod
    def from_locations(
        cls,
        locations: Iterable[Location],
        loader: DocumentLoader = load_text_document,
        title: str = "",
    ) -> "SearchResultsModel":
        grouped: Dict[str, List[Location]] = {}
        for location in locations:
            grouped.setdefault(location.uri, []).append(location)
        files = [FileGroupNode(uri, locs, loader) for uri, locs in grouped.items()]
        return cls(files, title)

    @property
    def items(self) -> List[FileGroupNode]:
        return list(self._files)

    @property
    def match_count(self) -> int:
        return sum(len(f.locations) for f in self._files)

    def summary(self) -> str:
        matches = self.match_count
        files = len(self._files)
        if matches == 0:
            return "No results."
        return (
            f"{matches} result{'s' if matches != 1 else ''} "
            f"in {files} file{'s' if files != 1 else ''}"
        )

    def notify_file_changed(self, file: FileGroupNode) -> None:
        file.invalidate()
        self.changes.fire(file)

    def remove(self, node) -> None:
        if node.kind is NodeKind.FILE_GROUP:
            if node in self._files:
                self._files.remove(node)
                self.changes.fire(None)
            return
        if node.kind is not NodeKind.MATCH:
            return
        file = node.parent
        if file not in self._files or not file.remove_location(node.location):
            return
        if file.locations:
            self.changes.fire(file)
        else:
            self._files.remove(file)
            self.changes.fire(None)

    def _ordered_matches(self) -> List[MatchNode]:
        return [match for file in self._files for match in file.children()]

    def _neighbour(self, node, step: int) -> Optional[MatchNode]:
        matches = self._ordered_matches()
        if not matches:
            return None
        if node.kind is NodeKind.FILE_GROUP:
            owned = [i for i, m in enumerate(matches) if m.parent is node]
            if not owned:
                return matches[0] if step > 0 else matches[-1]
            # From a file, "next" is its first match and "previous" the match before it.
            index = owned[0] - 1 if step > 0 else owned[0]
        else:
            index = next((i for i, m in enumerate(matches) if m is node), None)
            if index is None:
                index = next(
                    (i for i, m in enumerate(matches)
                     if m.parent is node.parent and m.location == node.location),
                    None,
                )
            if index is None:
                return matches[0] if step > 0 else matches[-1]
        return matches[(index + step) % len(matches)]

    def next(self, node) -> Optional[MatchNode]:
        return self._neighbour(node, 1)

    def previous(self, node) -> Optional[MatchNode]:
        return self._neighbour(node, -1)


class CallDirection(Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"


@dataclass(frozen=True)
class CallTarget:
    """Resolver output: one symbol reached by a call edge."""

    name: str
    detail: str
    kind: SymbolKind
    location: Location


CallResolver = Callable[[CallNode, CallDirection], Awaitable[Sequence[CallTarget]]]


class CallHierarchyModel:
    """Call-hierarchy entry points plus a lazy edge resolver."""

    def __init__(
        self,
        roots: Iterable[CallNode],
        resolver: CallResolver,
        direction: CallDirection = CallDirection.OUTGOING,
    ) -> None:
        self._roots = list(roots)
        self._resolver = resolver
        self._direction = direction
        self.changes = ChangeEmitter()

    @property
    def roots(self) -> List[CallNode]:
        return list(self._roots)

    @property
    def direction(self) -> CallDirection:
        return self._direction

    def set_direction(self, direction: CallDirection) -> None:
        if direction is self._direction:
            return
        logger.debug("Call hierarchy direction %s -> %s", self._direction.value, direction.value)
        self._direction = direction
        self.changes.fire(None)

    async def resolve_calls(self, node: CallNode) -> List[CallNode]:
        """Ask the resolver for ``node``'s calls in the current direction."""
        targets = await self._resolver(node, self._direction)
        return [
            CallNode(t.name, t.detail, t.kind, t.location, parent=node)
            for t in targets
        ]


class NavigationHistory:
    """Navigation records, most recent first."""

    def __init__(self, max_size: Optional[int] = None) -> None:
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be >= 1")
        self._max_size = max_size
        self._items: List[HistoryNode] = []
        self.changes = ChangeEmitter()

    def __iter__(self) -> Iterator[HistoryNode]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def add(self, node: HistoryNode) -> None:
        self._items = [item for item in self._items if item.key != node.key]
        self._items.insert(0, node)
        if self._max_size is not None:
            del self._items[self._max_size:]
        self.changes.fire(None)

    def remove(self, node: HistoryNode) -> None:
        if node in self._items:
            self._items.remove(node)
            self.changes.fire(None)

    def clear(self) -> None:
        if self._items:
            self._items.clear()
            self.changes.fire(None)
