"""Bidirectional mapping between valid and invalid (synonym) taxon identities."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from domain.schemas import SynonymEntry
from domain.taxonomy.loader import parse_synonym_entries
from domain.taxonomy.normalizer import name_key

logger = logging.getLogger(__name__)


class SynonymIndex:
    """
    Read-only synonym lookups, built once from a static list of entries.

    Until ``load`` succeeds the index is "not ready" and every query returns its
    not-found value (None, an empty set, or False) instead of raising.
    """

    def __init__(self) -> None:
        self.id_to_valid_id: dict[int, int] = {}
        self.valid_id_to_all_ids: dict[int, frozenset[int]] = {}
        self.name_to_valid_id: dict[str, int] = {}
        self.valid_id_to_all_names: dict[int, frozenset[str]] = {}
        self.valid_id_to_info: dict[int, SynonymEntry] = {}
        self._ready = False

    @classmethod
    def from_entries(cls, entries: Iterable[SynonymEntry | Mapping[str, Any]]) -> "SynonymIndex":
        index = cls()
        index.load(entries)
        return index

    def load(self, entries: Iterable[SynonymEntry | Mapping[str, Any]]) -> bool:
        """
        Build every mapping from ``entries``.

        Loading is one-shot: once ready, further calls are ignored. Invalid input
        is logged and leaves the index not ready.

        Returns:
            True if the index is ready afterwards
        """
        if self._ready:
            return True

        try:
            parsed = parse_synonym_entries(list(entries))
        except (ValidationError, ValueError, TypeError) as e:
            logger.error("Failed to load synonym data: %s", e)
            return False

        id_to_valid: dict[int, int] = {}
        all_ids: dict[int, frozenset[int]] = {}
        name_to_valid: dict[str, int] = {}
        all_names: dict[int, frozenset[str]] = {}
        info: dict[int, SynonymEntry] = {}

        for entry in parsed:
            valid_id = entry.valid_id
            owner = id_to_valid.get(valid_id)
            if owner is not None and owner != valid_id:
                # already inside another closure; first entry wins
                logger.warning(
                    "Valid id %s (%s) is already a synonym of %s; skipping its entry",
                    valid_id,
                    entry.valid_name,
                    owner,
                )
                continue

            # a repeated valid id extends its existing closure
            ids = set(all_ids.get(valid_id, ())) | {valid_id}
            names = set(all_names.get(valid_id, ())) | {entry.valid_name}

            id_to_valid[valid_id] = valid_id
            name_to_valid[name_key(entry.valid_name)] = valid_id

            prev = info.get(valid_id)
            links = list(prev.synonyms) if prev is not None else []
            for syn in entry.synonyms:
                owner = id_to_valid.get(syn.invalid_id)
                if owner is not None and owner != valid_id:
                    # an id belongs to exactly one closure; first entry wins
                    logger.warning(
                        "Synonym id %s already maps to %s; ignoring mapping to %s",
                        syn.invalid_id,
                        owner,
                        valid_id,
                    )
                    continue
                if syn.invalid_id not in ids:
                    links.append(syn)
                id_to_valid[syn.invalid_id] = valid_id
                name_to_valid[name_key(syn.invalid_name)] = valid_id
                ids.add(syn.invalid_id)
                names.add(syn.invalid_name)

            all_ids[valid_id] = frozenset(ids)
            all_names[valid_id] = frozenset(names)
            info[valid_id] = (prev or entry).model_copy(update={"synonyms": links})

        self.id_to_valid_id = id_to_valid
        self.valid_id_to_all_ids = all_ids
        self.name_to_valid_id = name_to_valid
        self.valid_id_to_all_names = all_names
        self.valid_id_to_info = info
        self._ready = True

        logger.info(
            "Loaded %d synonym entries (%d id mappings, %d name mappings)",
            len(parsed),
            len(id_to_valid),
            len(name_to_valid),
        )
        return True

    def is_ready(self) -> bool:
        return self._ready

    def resolve_valid_id(self, taxon_id: int) -> int | None:
        """Valid id for any (valid or invalid) id, or None if unknown."""
        return self.id_to_valid_id.get(taxon_id)

    def resolve_valid_id_by_name(self, name: str) -> int | None:
        """Valid id for any (valid or invalid) name, case-insensitive."""
        key = name_key(name)
        if not key:
            return None
        return self.name_to_valid_id.get(key)

    def all_ids(self, taxon_id: int) -> set[int]:
        """Every id related to ``taxon_id`` (valid id included), or an empty set."""
        valid_id = self.resolve_valid_id(taxon_id)
        if valid_id is None:
            return set()
        return set(self.valid_id_to_all_ids.get(valid_id, ()))

    def all_names(self, taxon_id: int) -> set[str]:
        """Every name related to ``taxon_id`` (valid name included), or an empty set."""
        valid_id = self.resolve_valid_id(taxon_id)
        if valid_id is None:
            return set()
        return set(self.valid_id_to_all_names.get(valid_id, ()))

    def is_invalid(self, taxon_id: int) -> bool:
        valid_id = self.resolve_valid_id(taxon_id)
        return valid_id is not None and valid_id != taxon_id

    def is_invalid_name(self, name: str) -> bool:
        valid_id = self.resolve_valid_id_by_name(name)
        if valid_id is None:
            return False
        entry = self.valid_id_to_info.get(valid_id)
        return entry is not None and name_key(entry.valid_name) != name_key(name)

    def info(self, taxon_id: int) -> SynonymEntry | None:
        valid_id = self.resolve_valid_id(taxon_id)
        if valid_id is None:
            return None
        return self.valid_id_to_info.get(valid_id)

    def valid_name(self, taxon_id: int) -> str | None:
        entry = self.info(taxon_id)
        return entry.valid_name if entry is not None else None

    def stats(self) -> dict[str, int]:
        return {
            "entries": len(self.valid_id_to_info),
            "id_mappings": len(self.id_to_valid_id),
            "name_mappings": len(self.name_to_valid_id),
        }
