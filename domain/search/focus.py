"""Record filtering for the focus view (only the records that contain the current matches)."""

from collections.abc import Iterable, Sequence

from domain.schemas import PathRecord
from domain.search.engine import SearchResult


def focus_ids(result: SearchResult | None, selected_id: int | None = None) -> set[int]:
    """Ids the focus view should keep: all matches if any, else the selected node."""
    if result is not None and result.matches:
        return result.match_ids
    if selected_id is not None:
        return {selected_id}
    return set()


def filter_records_by_ids(records: Sequence[PathRecord], ids: Iterable[int]) -> list[PathRecord]:
    """Records whose id path contains at least one of ``ids``, in input order."""
    wanted = set(ids)
    if not wanted:
        return []
    return [r for r in records if wanted.intersection(r.ids_root_to_leaf)]
