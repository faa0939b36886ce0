"""Node types shared by every adapter and the façade.

The node union is closed: every node class carries a ``kind`` class
attribute and callers dispatch on it through lookup tables. Nodes compare by
identity, so two matches with equal ranges in different files stay distinct.

Children never own their parent. A ``FileGroupNode`` owns its cached
``MatchNode`` list; each match only points back at the file it came from.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from pyqt_refview.symbol_icons import SymbolKind


class NodeKind(Enum):
    FILE_GROUP = "file_group"
    MATCH = "match"
    CALL = "call"
    HISTORY = "history"


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line/character position."""

    line: int
    character: int


@dataclass(frozen=True)
class TextRange:
    """Half-open range ``[start, end)``."""

    start: Position
    end: Position

    @classmethod
    def on_line(cls, line: int, start_char: int, end_char: int) -> "TextRange":
        return cls(Position(line, start_char), Position(line, end_char))


@dataclass(frozen=True)
class Location:
    uri: str
    range: TextRange


@dataclass(frozen=True)
class TextDocument:
    """Immutable snapshot of a document's text."""

    uri: str
    text: str
    _lines: List[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lines", self.text.split("\n"))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> str:
        if line < 0 or line >= len(self._lines):
            raise IndexError(f"Line {line} out of range for {self.uri}")
        return self._lines[line]

    def get_text(self, text_range: TextRange) -> str:
        start, end = text_range.start, text_range.end
        if start.line == end.line:
            return self.line_at(start.line)[start.character:end.character]
        parts = [self.line_at(start.line)[start.character:]]
        parts.extend(self.line_at(n) for n in range(start.line + 1, end.line))
        parts.append(self.line_at(end.line)[:end.character])
        return "\n".join(parts)


DocumentLoader = Callable[[str], Awaitable[TextDocument]]


async def load_text_document(uri: str) -> TextDocument:
    """Default loader: read ``uri`` as a local UTF-8 file off the UI thread."""
    text = await asyncio.to_thread(Path(uri).read_text, encoding="utf-8")
    return TextDocument(uri, text)


class FileGroupNode:
    """Root-level node grouping the matches found in one file."""

    kind = NodeKind.FILE_GROUP
    parent = None

    def __init__(
        self,
        uri: str,
        locations: List[Location],
        loader: DocumentLoader = load_text_document,
    ) -> None:
        self.uri = uri
        self._locations = list(locations)
        self._loader = loader
        self._children: Optional[List[MatchNode]] = None
        self._document: Optional[TextDocument] = None

    def __repr__(self) -> str:
        return f"FileGroupNode({self.uri!r}, matches={len(self._locations)})"

    @property
    def locations(self) -> List[Location]:
        return list(self._locations)

    def children(self) -> List["MatchNode"]:
        """Matches of this file in source order, built once per invalidation."""
        if self._children is None:
            ordered = sorted(self._locations, key=lambda loc: (loc.range.start, loc.range.end))
            self._children = [MatchNode(self, location) for location in ordered]
        return list(self._children)

    async def get_document(self) -> TextDocument:
        if self._document is None:
            self._document = await self._loader(self.uri)
        return self._document

    def invalidate(self) -> None:
        self._children = None
        self._document = None

    def remove_location(self, location: Location) -> bool:
        if location not in self._locations:
            return False
        self._locations.remove(location)
        self.invalidate()
        return True


class MatchNode:
    """One match inside a file. Terminal."""

    kind = NodeKind.MATCH

    def __init__(self, parent: FileGroupNode, location: Location) -> None:
        self._parent = parent
        self.location = location

    def __repr__(self) -> str:
        start = self.location.range.start
        return f"MatchNode({self.location.uri!r}, {start.line}:{start.character})"

    @property
    def parent(self) -> FileGroupNode:
        return self._parent

    @property
    def range(self) -> TextRange:
        return self.location.range


class CallNode:
    """One entry of a call-hierarchy traversal."""

    kind = NodeKind.CALL

    def __init__(
        self,
        name: str,
        detail: str,
        symbol_kind: SymbolKind,
        location: Location,
        parent: Optional["CallNode"] = None,
    ) -> None:
        self.name = name
        self.detail = detail
        self.symbol_kind = symbol_kind
        self.location = location
        self._parent = parent

    def __repr__(self) -> str:
        return f"CallNode({self.name!r})"

    @property
    def parent(self) -> Optional["CallNode"]:
        return self._parent

    def path(self) -> List["CallNode"]:
        """Nodes from the root down to this one."""
        chain: List[CallNode] = []
        node: Optional[CallNode] = self
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain


class HistoryNode:
    """A prior navigation. Terminal, never has a parent."""

    kind = NodeKind.HISTORY
    parent = None

    def __init__(
        self,
        label: str,
        description: str,
        location: Location,
        key: Optional[str] = None,
    ) -> None:
        self.label = label
        self.description = description
        self.location = location
        self.key = key if key is not None else f"{location.uri}:{location.range.start.line}"

    def __repr__(self) -> str:
        return f"HistoryNode({self.label!r})"
