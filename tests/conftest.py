"""Shared fixtures for pyqt-refview tests."""

import os

import pytest

from pyqt_refview import CallHierarchyModel, CallNode, CallTarget, SearchResultsModel, SymbolKind

from support import call_location, match_at, memory_loader

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def search_model(qapp):
    """a.txt with matches on lines 3 and 7 (given out of order), b.txt with two."""
    return SearchResultsModel.from_locations(
        [
            match_at("src/a.txt", 7, 6, 13),
            match_at("src/a.txt", 3, 13, 20),
            match_at("src/b.txt", 0, 0, 7),
            match_at("src/b.txt", 1, 0, 7),
        ],
        loader=memory_loader,
        title="compute",
    )


@pytest.fixture
def call_model(qapp):
    """foo calls bar; bar calls nothing."""
    resolved = []

    async def resolver(node, direction):
        resolved.append((node.name, direction))
        if node.name == "foo":
            return [CallTarget("bar", "module.bar", SymbolKind.FUNCTION, call_location(10))]
        return []

    root = CallNode("foo", "module.foo", SymbolKind.FUNCTION, call_location(1))
    model = CallHierarchyModel([root], resolver)
    model.resolved = resolved
    return model


@pytest.fixture
def scheduled():
    """Collects coroutines a host schedules; closes whatever the test left."""
    pending = []
    yield pending
    for coro in pending:
        coro.close()
