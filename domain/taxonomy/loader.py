"""Parse pre-loaded rows and JSON payloads into taxonomy models."""

from collections.abc import Iterable, Mapping
from typing import Any

from domain.schemas import PathRecord, SynonymEntry


def parse_path_records(rows: Iterable[Mapping[str, Any] | PathRecord]) -> list[PathRecord]:
    """
    Normalize raw path rows into PathRecord objects.

    This is a pure function - it does NOT perform file I/O.
    Row loading happens in infrastructure.io.datasets.

    Args:
        rows: Mappings with ``ids_root_to_leaf`` / ``names_root_to_leaf`` in any
            supported encoding, plus arbitrary extra fields

    Returns:
        One PathRecord per row; unparseable paths become empty lists
    """
    records: list[PathRecord] = []
    for row in rows:
        if isinstance(row, PathRecord):
            records.append(row)
            continue
        if not isinstance(row, Mapping):
            raise ValueError(f"Path rows must be mappings, got {type(row).__name__}")
        data = {str(k): v for k, v in row.items()}
        data.setdefault("ids_root_to_leaf", None)
        data.setdefault("names_root_to_leaf", None)
        records.append(PathRecord.model_validate(data))
    return records


def parse_synonym_entries(data: Any) -> list[SynonymEntry]:
    """
    Parse the decoded synonym payload (a JSON array of valid taxa).

    Raises:
        ValueError: If the payload is not a list of mappings
        pydantic.ValidationError: If an entry is missing required keys
    """
    if not isinstance(data, list):
        raise ValueError(f"Synonym payload must be a list, got {type(data).__name__}")

    entries: list[SynonymEntry] = []
    for i, raw in enumerate(data):
        if isinstance(raw, SynonymEntry):
            entries.append(raw)
            continue
        if not isinstance(raw, Mapping):
            raise ValueError(f"Synonym entry #{i} must be a mapping, got {type(raw).__name__}")
        entries.append(SynonymEntry.model_validate(raw))
    return entries
