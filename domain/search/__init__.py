"""
Search over the taxon tree.

Provides:
- search: classified (primary / synonym) matching by id or name
- SearchSession: stateful navigation over the current matches
- focus_ids / filter_records_by_ids: record subset for the focus view
"""

from domain.search.engine import SearchResult, highlighted_path_ids, search
from domain.search.focus import filter_records_by_ids, focus_ids
from domain.search.session import FocusEvent, SearchSession

__all__ = [
    "search",
    "SearchResult",
    "highlighted_path_ids",
    "SearchSession",
    "FocusEvent",
    "focus_ids",
    "filter_records_by_ids",
]
