"""Adapters turning each domain model into tree data."""

from .search_results import SearchResultsAdapter
from .call_hierarchy import CallHierarchyAdapter
from .history import HistoryAdapter

__all__ = [
    "SearchResultsAdapter",
    "CallHierarchyAdapter",
    "HistoryAdapter",
]
