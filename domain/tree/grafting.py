"""Graft synonym taxa that are missing from the tree next to their valid counterpart."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from domain.schemas import PathRecord, TreeNode
from domain.synonyms.index import SynonymIndex
from domain.tree.builder import TaxonTree

logger = logging.getLogger(__name__)

TAXON_ID_KEY = "taxonid"
TAXON_NAME_KEY = "taxonname"
TAXA_GROUP_KEY = "taxagroupid"


@dataclass(frozen=True)
class KnownTaxon:
    """A taxon available in the broader record pool."""

    id: int
    name: str
    taxagroupid: Any = None


def _row_fields(row: Mapping[str, Any] | PathRecord) -> Mapping[str, Any]:
    if isinstance(row, PathRecord):
        return row.extras
    return row


def _coerce_taxon_id(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        return None
    if as_float != as_float or not as_float.is_integer():  # NaN or fractional
        return None
    return int(as_float)


def build_known_taxa(rows: Iterable[Mapping[str, Any] | PathRecord]) -> dict[int, KnownTaxon]:
    """Index the record pool by ``taxonid``; rows without an id or name are ignored."""
    pool: dict[int, KnownTaxon] = {}
    for row in rows:
        fields = _row_fields(row)
        taxon_id = _coerce_taxon_id(fields.get(TAXON_ID_KEY))
        name = fields.get(TAXON_NAME_KEY)
        if taxon_id is None or not isinstance(name, str) or not name:
            continue
        pool[taxon_id] = KnownTaxon(id=taxon_id, name=name, taxagroupid=fields.get(TAXA_GROUP_KEY))
    return pool


def graft_synonyms(
    tree: TaxonTree,
    synonyms: SynonymIndex,
    all_known_records: Iterable[Mapping[str, Any] | PathRecord],
) -> list[TreeNode]:
    """
    Add synonym leaves for synonym ids absent from the tree but present in the record pool.

    Each grafted node becomes a sibling of the node it is a synonym of. Nodes are
    only ever added; ids already in the tree are left alone, so re-running is safe.

    Args:
        tree: Built tree (mutated in place)
        synonyms: Loaded synonym index; nothing happens if it is not ready
        all_known_records: Superset pool of rows carrying ``taxonid``/``taxonname``

    Returns:
        The grafted nodes, in insertion order
    """
    if not synonyms.is_ready():
        logger.info("Synonym index not ready, skipping synonym grafting")
        return []

    pool = build_known_taxa(all_known_records)
    added: list[TreeNode] = []

    for node_id in list(tree.by_id):
        entry = synonyms.info(node_id)
        if entry is None or not entry.synonyms:
            continue
        current = tree.by_id.get(node_id)
        if current is None:
            continue

        for syn in entry.synonyms:
            syn_id = syn.invalid_id
            if syn_id in tree.by_id or syn_id not in pool:
                continue

            parent = tree.find_parent(node_id)
            if parent is None:
                logger.debug("No parent for %s (%s); synonym %s not grafted", current.name, node_id, syn_id)
                continue

            syn_node = TreeNode(
                id=syn_id,
                name=pool[syn_id].name,
                is_synonym=True,
                valid_id=entry.valid_id,
            )
            if parent.children is None:
                parent.children = []
            parent.children.append(syn_node)
            tree.by_id[syn_id] = syn_node
            added.append(syn_node)

            logger.debug(
                "Added synonym %s (%s) as sibling of %s (%s)",
                syn_node.name,
                syn_id,
                current.name,
                node_id,
            )

    if added:
        logger.info("Added %d missing synonym nodes to the tree", len(added))
    return added
