import json

import pytest

from infrastructure.io.datasets import read_json, read_records
from infrastructure.io.fs import ensure_exists, write_json


def test_read_records_from_csv_keeps_raw_paths_and_nulls(tmp_path) -> None:
    path = tmp_path / "paths.csv"
    path.write_text(
        'taxonid,taxonname,ids_root_to_leaf,names_root_to_leaf\n'
        '65010,Felis catus,"{6171,62000,65010}","{Mammalia,Carnivora,""Felis catus""}"\n'
        '65020,,"{6171,62000,65020}",\n',
        encoding="utf-8",
    )

    rows = read_records(path)

    assert len(rows) == 2
    assert rows[0]["ids_root_to_leaf"] == "{6171,62000,65010}"
    assert rows[0]["names_root_to_leaf"] == '{Mammalia,Carnivora,"Felis catus"}'
    assert rows[1]["taxonname"] is None
    assert rows[1]["names_root_to_leaf"] is None


def test_read_records_from_json_keeps_lists(tmp_path) -> None:
    path = tmp_path / "paths.json"
    path.write_text(
        json.dumps([{"taxonid": 1, "ids_root_to_leaf": [6171, 1], "names_root_to_leaf": ["Mammalia", "X"]}]),
        encoding="utf-8",
    )

    rows = read_records(path)

    assert list(rows[0]["ids_root_to_leaf"]) == [6171, 1]


def test_read_records_rejects_unknown_format(tmp_path) -> None:
    path = tmp_path / "paths.txt"
    path.write_text("x", encoding="utf-8")

    with pytest.raises(ValueError, match="Unsupported file format"):
        read_records(path)


def test_missing_files_raise(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        read_records(tmp_path / "missing.csv")
    with pytest.raises(FileNotFoundError):
        read_json(tmp_path / "missing.json")
    with pytest.raises(FileNotFoundError, match="tree.yaml"):
        ensure_exists(tmp_path / "missing.yaml", "tree.yaml")


def test_write_json_round_trips(tmp_path) -> None:
    path = write_json(tmp_path / "nested" / "out.json", {"name": "Felis catus", "ids": [1, 2]})

    assert read_json(path) == {"name": "Felis catus", "ids": [1, 2]}
