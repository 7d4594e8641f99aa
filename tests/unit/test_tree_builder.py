from domain.taxonomy.loader import parse_path_records
from domain.tree.builder import attach_paths, build_tree
from domain.tree.grouping import group_key


def _records(*paths):
    return parse_path_records({"ids_root_to_leaf": ids, "names_root_to_leaf": names} for ids, names in paths)


def test_single_record_builds_chain_to_leaf() -> None:
    records = _records(([6171, 100, 200], ["Mammalia", "Carnivora", "Felidae"]))

    tree = build_tree(records, 6171, "Mammalia")

    assert len(tree) == 3
    leaf = tree.get(200)
    assert leaf is not None
    assert leaf.name == "Felidae"
    assert leaf.is_leaf
    assert leaf.children is None
    for depth in range(6):
        assert group_key(["Mammalia", "Carnivora", "Felidae"], depth) == "Felidae"


def test_shared_prefixes_merge_and_first_name_wins() -> None:
    records = _records(
        ([6171, 100, 200, 1], ["Mammalia", "Carnivora", "Felidae", "Felis catus"]),
        ([6171, 100, 200, 3], ["Mammalia", "Carnivores", "Felidae", "Panthera leo"]),
    )

    tree = build_tree(records, 6171, "Mammalia")

    assert len(tree) == 5
    assert tree.by_id[100].name == "Carnivora"
    assert [c.id for c in tree.by_id[200].children] == [1, 3]
    assert [c.id for c in tree.root.children] == [100]


def test_missing_names_fall_back_to_other_records_then_id() -> None:
    records = _records(
        ([6171, 100, 300], ["Mammalia"]),
        ([6171, 100, 200], ["Mammalia", "Carnivora", "Felidae"]),
    )

    tree = build_tree(records, 6171, "Mammalia")

    assert tree.by_id[100].name == "Carnivora"
    assert tree.by_id[300].name == "300"


def test_unrooted_and_empty_records_are_skipped() -> None:
    records = _records(
        ([9999, 100], ["Aves", "Passeriformes"]),
        ("garbage", "garbage"),
        ([6171, 100], ["Mammalia", "Carnivora"]),
    )

    tree = build_tree(records, 6171, "Mammalia")

    assert set(tree.by_id) == {6171, 100}
    assert tree.root.name == "Mammalia"


def test_empty_input_gives_root_only() -> None:
    tree = build_tree([], 6171, "Mammalia")

    assert len(tree) == 1
    assert tree.root.children is None


def test_ids_are_unique_and_every_node_reachable() -> None:
    records = _records(
        ([6171, 100, 200, 1], ["Mammalia", "Carnivora", "Felidae", "Felis catus"]),
        ([6171, 100, 201, 2], ["Mammalia", "Carnivora", "Canidae", "Canis lupus"]),
        ([6171, 101, 202, 3], ["Mammalia", "Rodentia", "Muridae", "Mus musculus"]),
    )

    tree = build_tree(records, 6171, "Mammalia")
    ids = [n.id for n in tree.iter_nodes()]

    assert len(ids) == len(set(ids))
    assert set(ids) == set(tree.by_id)
    assert {leaf.id for leaf in tree.leaves()} == {1, 2, 3}


def test_parent_and_path_lookups() -> None:
    records = _records(([6171, 100, 200, 1], ["Mammalia", "Carnivora", "Felidae", "Felis catus"]))
    tree = build_tree(records, 6171, "Mammalia")

    assert tree.find_parent(1).id == 200
    assert tree.find_parent(6171) is None
    assert tree.find_parent(42) is None
    assert [n.id for n in tree.path_to(1)] == [6171, 100, 200, 1]
    assert tree.path_to(42) == []


def test_attach_paths_uses_first_record_containing_id() -> None:
    records = _records(
        ([6171, 100, 200, 1], ["Mammalia", "Carnivora", "Felidae", "Felis catus"]),
        ([6171, 100, 200, 3], ["Mammalia", "Carnivora", "Felidae", "Panthera leo"]),
    )
    tree = attach_paths(build_tree(records, 6171, "Mammalia"), records)

    assert tree.by_id[200].path_ids == [6171, 100, 200]
    assert tree.by_id[200].path_names == ["Mammalia", "Carnivora", "Felidae"]
    assert tree.by_id[3].path_ids == [6171, 100, 200, 3]
    assert tree.root.path_ids == [6171]


def test_missing_id_attaches_children_to_last_resolved_ancestor() -> None:
    records = _records(
        ([6171, None, 200], ["Mammalia", None, "Felidae"]),
        ("[6171, null, 201]", '["Mammalia", null, "Canidae"]'),
    )

    tree = build_tree(records, 6171, "Mammalia")

    assert [r.ids_root_to_leaf for r in records] == [[6171, None, 200], [6171, None, 201]]
    assert [c.id for c in tree.root.children] == [200, 201]
    assert tree.find_parent(201).id == 6171
    assert set(tree.by_id) == {6171, 200, 201}


def test_missing_name_uses_name_from_another_record() -> None:
    records = _records(
        ([6171, 100, 200], ["Mammalia", None, "Felidae"]),
        ([6171, 100], ["Mammalia", "Carnivora"]),
    )

    tree = attach_paths(build_tree(records, 6171, "Mammalia"), records)

    assert tree.by_id[100].name == "Carnivora"
    assert tree.by_id[200].path_names == ["Mammalia", "Carnivora", "Felidae"]


def test_attach_paths_leaves_out_missing_ids() -> None:
    records = _records(([6171, None, 200], ["Mammalia", None, "Felidae"]))

    tree = attach_paths(build_tree(records, 6171, "Mammalia"), records)

    assert tree.by_id[200].path_ids == [6171, 200]
    assert tree.by_id[200].path_names == ["Mammalia", "Felidae"]


def test_id_index_matches_tree_nodes_for_mixed_inputs() -> None:
    records = _records(
        ([6171, 100, 200, 1], ["Mammalia", "Carnivora", "Felidae", "Felis catus"]),
        ([6171, 100, 200, 1], ["Mammalia", "Carnivores", "Felidae", "Felis catus"]),
        ("{6171,100,201}", "{Mammalia,Carnivora,Canidae}"),
        ("[6171, null, 202]", '["Mammalia", null, "Muridae"]'),
        ([9999, 100, 203], ["Aves", "Passeriformes", "Corvidae"]),
        ([6171], ["Mammalia"]),
    )

    tree = build_tree(records, 6171, "Mammalia")
    ids = [n.id for n in tree.iter_nodes()]

    assert len(ids) == len(set(ids))
    assert set(ids) == set(tree.by_id)
    for node_id, node in tree.by_id.items():
        assert node.id == node_id
