"""Tests for the history adapter."""

import asyncio

from pyqt_refview import CollapsibleState, HistoryNode, NavigationHistory
from pyqt_refview.adapters import HistoryAdapter

from support import match_at


def _node(label, line):
    return HistoryNode(label, f"a.txt:{line + 1}", match_at("src/a.txt", line, 0, 3))


def test_flat_list(qapp):
    h1, h2 = _node("H1", 1), _node("H2", 2)
    adapter = HistoryAdapter([h1, h2])

    assert asyncio.run(adapter.get_children()) == [h1, h2]
    assert asyncio.run(adapter.get_children(h1)) == []
    assert adapter.get_parent(h1) is None


def test_tree_item(qapp):
    h1 = _node("H1", 1)
    item = asyncio.run(HistoryAdapter([h1]).get_tree_item(h1))

    assert item.label.text == "H1"
    assert item.description == "a.txt:2"
    assert item.collapsible_state is CollapsibleState.NONE
    assert item.context_value == "history-item"
    assert item.command.title == "Show"
    assert item.command.arguments == (h1,)


def test_history_changes_fire_full_refresh(qapp):
    history = NavigationHistory()
    adapter = HistoryAdapter(history)
    seen = []
    adapter.changes.subscribe(seen.append)

    history.add(_node("H1", 1))

    assert seen == [None]
    assert [n.label for n in asyncio.run(adapter.get_children())] == ["H1"]


def test_refresh_detects_changes_of_plain_iterables(qapp):
    records = [_node("H1", 1)]
    adapter = HistoryAdapter(records)
    seen = []
    adapter.changes.subscribe(seen.append)
    asyncio.run(adapter.get_children())

    assert adapter.refresh() is False
    records.append(_node("H2", 2))
    assert adapter.refresh() is True
    assert seen == [None]


def test_dispose_releases_history(qapp):
    history = NavigationHistory()
    adapter = HistoryAdapter(history)

    adapter.dispose()

    assert history.changes.subscriber_count == 0
