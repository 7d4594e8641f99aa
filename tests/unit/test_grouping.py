import pytest

from domain.synonyms.index import SynonymIndex
from domain.taxonomy.loader import parse_path_records
from domain.tree.builder import attach_paths, build_tree
from domain.tree.grafting import graft_synonyms
from domain.tree.grouping import annotate_group_keys, compute_leaf_order, group_key, reorder_for_grouping

# Insertion order deliberately interleaves groups: rodents first, Panthera before Felis.
ROWS = [
    ([6171, 101, 202, 303, 3], ["Mammalia", "Rodentia", "Muridae", "Mus", "Mus musculus"]),
    ([6171, 100, 200, 301, 4], ["Mammalia", "Carnivora", "Felidae", "Panthera", "Panthera leo"]),
    ([6171, 100, 200, 300, 1], ["Mammalia", "Carnivora", "Felidae", "Felis", "Felis catus"]),
    ([6171, 100, 201, 302, 5], ["Mammalia", "Carnivora", "Canidae", "Canis", "Canis lupus"]),
]


def _tree():
    records = parse_path_records({"ids_root_to_leaf": i, "names_root_to_leaf": n} for i, n in ROWS)
    return attach_paths(build_tree(records, 6171, "Mammalia"), records)


@pytest.mark.parametrize(
    ("names", "depth", "expected"),
    [
        (["Mammalia", "Carnivora", "Felidae", "Felis", "Felis catus"], 1, "Felidae"),
        (["Mammalia", "Carnivora", "FELIDAE"], 0, "FELIDAE"),
        (["Mammalia", "Carnivora", "Caniformia", "Canis"], 2, "Caniformia"),
        (["Mammalia", "Carnivora", "Canis"], 3, "Carnivora"),
        (["Mammalia"], 3, "Mammalia"),
        ([], 3, "Unknown"),
        (None, 3, "Unknown"),
    ],
)
def test_group_key_priorities(names, depth, expected) -> None:
    assert group_key(names, depth) == expected


def test_deepest_family_name_wins() -> None:
    assert group_key(["Mammalia", "Hominidae", "Homininae", "Pongidae", "Pongo"], 1) == "Pongidae"


def test_leaf_order_sorts_by_group_then_name() -> None:
    order = compute_leaf_order(_tree(), 3)

    assert [(g.group_key, g.leaf.name) for g in order] == [
        ("Canidae", "Canis lupus"),
        ("Felidae", "Felis catus"),
        ("Felidae", "Panthera leo"),
        ("Muridae", "Mus musculus"),
    ]


def test_reorder_places_nodes_at_leaf_centroids() -> None:
    tree = _tree()

    reorder_for_grouping(tree, 3)

    assert [c.name for c in tree.root.children] == ["Carnivora", "Rodentia"]
    assert [c.name for c in tree.by_id[100].children] == ["Canidae", "Felidae"]
    assert [c.name for c in tree.by_id[200].children] == ["Felis", "Panthera"]
    assert [leaf.name for leaf in tree.leaves()] == ["Canis lupus", "Felis catus", "Panthera leo", "Mus musculus"]


def test_reorder_keeps_node_shape() -> None:
    tree = _tree()
    before = {n.id for n in tree.iter_nodes()}

    reorder_for_grouping(tree, 3)

    assert {n.id for n in tree.iter_nodes()} == before
    assert set(tree.by_id[100].model_dump()) == set(tree.root.model_dump())


def test_annotate_marks_mixed_internal_nodes_with_none() -> None:
    tree = _tree()

    annotate_group_keys(tree, 3)

    assert tree.by_id[1].group_key == "Felidae"
    assert tree.by_id[200].group_key == "Felidae"
    assert tree.by_id[101].group_key == "Muridae"
    assert tree.by_id[100].group_key is None
    assert tree.by_id[100].has_group_key
    assert tree.root.group_key is None
    assert tree.root.has_group_key


def test_group_key_not_computed_until_annotated() -> None:
    tree = _tree()

    assert not tree.root.has_group_key


def test_grafted_leaf_without_path_groups_by_ancestor_at_depth() -> None:
    tree = _tree()
    index = SynonymIndex.from_entries(
        [{"valid_id": 1, "valid_name": "Felis catus", "synonyms": [{"invalid_id": 2, "invalid_name": "Felis domesticus"}]}]
    )
    graft_synonyms(tree, index, [{"taxonid": 2, "taxonname": "Felis domesticus"}])

    groups = {g.leaf.id: g.group_key for g in compute_leaf_order(tree, 3)}

    assert tree.by_id[2].path_names is None
    assert groups[2] == "Felis"
    assert groups[1] == "Felidae"
