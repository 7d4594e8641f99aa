from domain.synonyms.index import SynonymIndex
from domain.taxonomy.loader import parse_path_records
from domain.tree.builder import build_tree
from domain.tree.grafting import build_known_taxa, graft_synonyms

ROWS = [
    {
        "taxonid": 1,
        "taxonname": "Felis catus",
        "ids_root_to_leaf": [6171, 100, 200, 300, 1],
        "names_root_to_leaf": ["Mammalia", "Carnivora", "Felidae", "Felis", "Felis catus"],
    },
]

POOL = [
    {"taxonid": 1, "taxonname": "Felis catus"},
    {"taxonid": 2.0, "taxonname": "Felis domesticus", "taxagroupid": "MAM"},
    {"taxonid": None, "taxonname": "no id"},
    {"taxonid": 5, "taxonname": None},
]

SYNONYMS = [
    {
        "valid_id": 1,
        "valid_name": "Felis catus",
        "synonyms": [
            {"invalid_id": 2, "invalid_name": "Felis domesticus"},
            {"invalid_id": 4, "invalid_name": "Felis sylvestris catus"},
        ],
    },
]


def _tree():
    return build_tree(parse_path_records(ROWS), 6171, "Mammalia")


def test_known_taxa_skip_rows_without_id_or_name() -> None:
    pool = build_known_taxa(POOL)

    assert set(pool) == {1, 2}
    assert pool[2].name == "Felis domesticus"
    assert pool[2].taxagroupid == "MAM"


def test_known_taxa_read_extra_fields_of_path_records() -> None:
    pool = build_known_taxa(parse_path_records(ROWS))

    assert pool[1].name == "Felis catus"


def test_missing_synonym_is_grafted_as_sibling() -> None:
    tree = _tree()

    added = graft_synonyms(tree, SynonymIndex.from_entries(SYNONYMS), POOL)

    assert [n.id for n in added] == [2]
    node = tree.by_id[2]
    assert node.name == "Felis domesticus"
    assert node.is_synonym is True
    assert node.valid_id == 1
    assert node.is_leaf
    assert tree.find_parent(2).id == 300
    assert [c.id for c in tree.by_id[300].children] == [1, 2]


def test_synonym_absent_from_pool_is_not_grafted() -> None:
    tree = _tree()

    graft_synonyms(tree, SynonymIndex.from_entries(SYNONYMS), POOL)

    assert 4 not in tree


def test_grafting_is_idempotent() -> None:
    tree = _tree()
    index = SynonymIndex.from_entries(SYNONYMS)

    graft_synonyms(tree, index, POOL)
    again = graft_synonyms(tree, index, POOL)

    assert again == []
    assert [c.id for c in tree.by_id[300].children] == [1, 2]


def test_synonym_already_in_tree_is_left_alone() -> None:
    rows = ROWS + [
        {
            "ids_root_to_leaf": [6171, 100, 200, 300, 2],
            "names_root_to_leaf": ["Mammalia", "Carnivora", "Felidae", "Felis", "Felis domesticus"],
        }
    ]
    tree = build_tree(parse_path_records(rows), 6171, "Mammalia")

    added = graft_synonyms(tree, SynonymIndex.from_entries(SYNONYMS), POOL)

    assert added == []
    assert tree.by_id[2].is_synonym is None


def test_not_ready_index_skips_grafting() -> None:
    tree = _tree()

    assert graft_synonyms(tree, SynonymIndex(), POOL) == []
    assert len(tree) == 5


def test_id_index_matches_tree_nodes_after_grafting() -> None:
    tree = _tree()
    index = SynonymIndex.from_entries(SYNONYMS)

    graft_synonyms(tree, index, POOL)
    graft_synonyms(tree, index, POOL)
    ids = [n.id for n in tree.iter_nodes()]

    assert len(ids) == len(set(ids))
    assert set(ids) == set(tree.by_id)
    for node_id, node in tree.by_id.items():
        assert node.id == node_id
