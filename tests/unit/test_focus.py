from domain.schemas import Match, MatchKind, TreeNode
from domain.search.engine import SearchResult
from domain.search.focus import filter_records_by_ids, focus_ids
from domain.taxonomy.loader import parse_path_records

RECORDS = parse_path_records(
    [
        {"ids_root_to_leaf": [6171, 100, 1], "names_root_to_leaf": ["Mammalia", "Carnivora", "Felis catus"]},
        {"ids_root_to_leaf": [6171, 101, 3], "names_root_to_leaf": ["Mammalia", "Rodentia", "Mus musculus"]},
        {"ids_root_to_leaf": [6171, 100, 2], "names_root_to_leaf": ["Mammalia", "Carnivora", "Canis lupus"]},
    ]
)


def _result(*ids: int) -> SearchResult:
    matches = [Match(node=TreeNode(id=i, name=str(i)), kind=MatchKind.PRIMARY) for i in ids]
    return SearchResult(query="q", matches=matches)


def test_focus_ids_prefers_matches_over_selection() -> None:
    assert focus_ids(_result(1, 2), selected_id=3) == {1, 2}
    assert focus_ids(_result(), selected_id=3) == {3}
    assert focus_ids(None, selected_id=3) == {3}
    assert focus_ids(None) == set()


def test_filter_keeps_records_containing_any_id_in_order() -> None:
    assert [r.ids_root_to_leaf[-1] for r in filter_records_by_ids(RECORDS, {2, 1})] == [1, 2]
    assert [r.ids_root_to_leaf[-1] for r in filter_records_by_ids(RECORDS, [100])] == [1, 2]
    assert len(filter_records_by_ids(RECORDS, {6171})) == 3


def test_filter_with_no_ids_or_unknown_ids_is_empty() -> None:
    assert filter_records_by_ids(RECORDS, []) == []
    assert filter_records_by_ids(RECORDS, {999}) == []
