"""Tests for the node types."""

import asyncio

import pytest

from pyqt_refview import FileGroupNode, HistoryNode, NodeKind, Position, TextDocument, TextRange

from support import match_at


def test_document_text_access():
    doc = TextDocument("x", "one\ntwo\nthree")
    assert doc.line_count == 3
    assert doc.line_at(1) == "two"
    assert doc.get_text(TextRange(Position(0, 1), Position(2, 2))) == "ne\ntwo\nth"
    with pytest.raises(IndexError):
        doc.line_at(3)


def test_file_children_sorted_and_cached():
    file = FileGroupNode("f", [match_at("f", 7, 0, 1), match_at("f", 3, 0, 1)])

    first = file.children()
    assert [m.range.start.line for m in first] == [3, 7]
    assert all(m.parent is file for m in first)
    assert file.children()[0] is first[0]

    file.invalidate()
    assert file.children()[0] is not first[0]


def test_file_document_fetched_once():
    calls = []

    async def loader(uri):
        calls.append(uri)
        return TextDocument(uri, "text")

    file = FileGroupNode("f", [], loader)

    async def fetch_twice():
        await file.get_document()
        return await file.get_document()

    doc = asyncio.run(fetch_twice())
    assert doc.text == "text"
    assert calls == ["f"]


def test_remove_location_invalidates():
    keep, drop = match_at("f", 1, 0, 1), match_at("f", 2, 0, 1)
    file = FileGroupNode("f", [keep, drop])
    before = file.children()

    assert file.remove_location(drop)
    assert not file.remove_location(drop)
    assert [m.location for m in file.children()] == [keep]
    assert file.children()[0] is not before[0]


def test_history_node_default_key():
    node = HistoryNode("run", "a.txt:4", match_at("src/a.txt", 3, 0, 1))
    assert node.kind is NodeKind.HISTORY
    assert node.key == "src/a.txt:3"
    assert node.parent is None
