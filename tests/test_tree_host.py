"""Tests for binding a QTreeWidget to the façade."""

import asyncio

import pytest
from PyQt6.QtWidgets import QTreeWidget

from pyqt_refview import CollapsibleState, HistoryNode, ModelBinding, TreeDataFacade
from pyqt_refview.widgets import COMMAND_ROLE, LABEL_ROLE, NODE_ROLE, TreeDataHost

from support import match_at


@pytest.fixture
def host_setup(qapp, scheduled):
    tree = QTreeWidget()
    facade = TreeDataFacade()
    host = TreeDataHost(tree, facade, scheduler=scheduled.append)
    yield tree, facade, host
    host.dispose()


def _run_all(scheduled):
    while scheduled:
        asyncio.run(scheduled.pop(0))


def test_host_subscribes_once(host_setup):
    _tree, facade, _host = host_setup
    assert facade.changes.subscriber_count == 1


def test_bind_rebuilds_roots(host_setup, scheduled, search_model):
    tree, facade, _host = host_setup

    facade.bind(ModelBinding.search(search_model))
    assert len(scheduled) == 1
    _run_all(scheduled)

    assert tree.topLevelItemCount() == 2
    first = tree.topLevelItem(0)
    assert first.text(0) == "a.txt"
    assert first.text(1) == "src"
    assert first.data(0, NODE_ROLE) is search_model.items[0]
    assert first.data(1, NODE_ROLE) is CollapsibleState.COLLAPSED


def test_populate_renders_matches(host_setup, scheduled, search_model):
    tree, facade, host = host_setup
    facade.bind(ModelBinding.search(search_model))
    _run_all(scheduled)
    file_item = tree.topLevelItem(0)

    assert asyncio.run(host.populate(file_item)) is True

    assert file_item.childCount() == 2
    match_item = file_item.child(0)
    assert match_item.text(0) == "result = compute(value)"
    assert match_item.data(0, LABEL_ROLE).highlights == ((9, 16),)
    assert match_item.data(0, NODE_ROLE).parent is search_model.items[0]


def test_expansion_signal_schedules_population(host_setup, scheduled, search_model):
    tree, facade, _host = host_setup
    facade.bind(ModelBinding.search(search_model))
    _run_all(scheduled)

    tree.itemExpanded.emit(tree.topLevelItem(1))
    _run_all(scheduled)

    assert tree.topLevelItem(1).childCount() == 2


def test_file_change_drops_only_that_file(host_setup, scheduled, search_model):
    tree, facade, host = host_setup
    facade.bind(ModelBinding.search(search_model))
    _run_all(scheduled)
    a_item, b_item = tree.topLevelItem(0), tree.topLevelItem(1)
    asyncio.run(host.populate(a_item))
    asyncio.run(host.populate(b_item))

    search_model.notify_file_changed(search_model.items[0])
    _run_all(scheduled)

    assert tree.topLevelItem(0) is a_item
    assert a_item.childCount() == 0
    assert b_item.childCount() == 2


def test_stale_population_is_dropped(host_setup, scheduled, search_model):
    tree, facade, host = host_setup
    facade.bind(ModelBinding.search(search_model))
    _run_all(scheduled)
    pending = host.populate(tree.topLevelItem(0))

    facade.bind(ModelBinding.history([HistoryNode("H1", "", match_at("src/a.txt", 1, 0, 1))]))
    _run_all(scheduled)

    assert asyncio.run(pending) is False
    assert tree.topLevelItemCount() == 1
    assert tree.topLevelItem(0).text(0) == "H1"


def test_activation_requests_command(host_setup, scheduled, call_model):
    tree, facade, _host = host_setup
    facade.bind(ModelBinding.calls(call_model))
    _run_all(scheduled)
    requested = []
    _host.command_requested.connect(lambda command_id, args: requested.append((command_id, args)))

    item = tree.topLevelItem(0)
    tree.itemActivated.emit(item, 0)

    assert item.data(0, COMMAND_ROLE).title == "Open Call"
    assert requested == [("references-view.show", (call_model.roots[0],))]


def test_reveal_expands_path_to_match(host_setup, scheduled, search_model):
    tree, facade, host = host_setup
    facade.bind(ModelBinding.search(search_model))
    _run_all(scheduled)
    target = search_model.items[1].children()[1]

    item = asyncio.run(host.reveal(target))

    assert item is not None
    assert item.data(0, NODE_ROLE) is target
    assert item.parent() is tree.topLevelItem(1)
    assert tree.currentItem() is item


def test_reveal_call_by_key(host_setup, scheduled, call_model):
    tree, facade, host = host_setup
    facade.bind(ModelBinding.calls(call_model))
    _run_all(scheduled)
    (bar,) = asyncio.run(facade.get_children(call_model.roots[0]))

    item = asyncio.run(host.reveal(bar))

    assert item is not None
    assert item.text(0) == "bar"
    assert item.parent() is tree.topLevelItem(0)
