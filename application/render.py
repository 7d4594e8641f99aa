"""Render workflow: raw path rows to an ordered, grouped taxon tree."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from domain.schemas import PathRecord
from domain.search.engine import SearchResult
from domain.search.focus import filter_records_by_ids, focus_ids
from domain.synonyms.index import SynonymIndex
from domain.taxonomy.loader import parse_path_records
from domain.tree.builder import TaxonTree, attach_paths, build_tree
from domain.tree.grafting import graft_synonyms
from domain.tree.grouping import DEFAULT_GROUP_DEPTH, annotate_group_keys, reorder_for_grouping

logger = logging.getLogger(__name__)

RawRows = Iterable[Mapping[str, Any] | PathRecord]


def render_tree(
    rows: RawRows,
    *,
    root_id: int,
    root_name: str,
    synonyms: SynonymIndex,
    all_known_records: RawRows | None = None,
    group_depth: int = DEFAULT_GROUP_DEPTH,
) -> TaxonTree:
    """
    Build the tree for one render request.

    Steps: normalize paths, merge into a tree, graft missing synonyms, attach
    stored paths, reorder siblings by group, and label nodes with their group.

    Args:
        rows: Raw or normalized path rows to render
        root_id: Id of the fixed root taxon
        root_name: Display name of the root
        synonyms: Synonym index (grafting is skipped if it is not ready)
        all_known_records: Superset pool for grafting; defaults to ``rows``
        group_depth: Fallback grouping depth (0 = root)

    Returns:
        A freshly built TaxonTree
    """
    records = parse_path_records(rows)
    if not records:
        logger.warning("render_tree: no path records; the tree has only the root")

    tree = build_tree(records, root_id, root_name)

    pool = records if all_known_records is None else all_known_records
    graft_synonyms(tree, synonyms, pool)

    attach_paths(tree, records)
    reorder_for_grouping(tree, group_depth)
    annotate_group_keys(tree, group_depth)
    return tree


def render_focus_view(
    records: Sequence[PathRecord],
    result: SearchResult | None,
    *,
    root_id: int,
    root_name: str,
    synonyms: SynonymIndex,
    all_known_records: RawRows | None = None,
    selected_id: int | None = None,
    group_depth: int = DEFAULT_GROUP_DEPTH,
) -> TaxonTree | None:
    """
    Rebuild the tree from only the records that contain the current matches.

    Falls back to the selected node when there are no matches.

    Returns:
        The focused tree, or None if nothing is selected or no record matches
    """
    ids = focus_ids(result, selected_id)
    if not ids:
        logger.warning("Focus view unavailable: search for a taxon or select a node first")
        return None

    subset = filter_records_by_ids(records, ids)
    logger.info("Focus view: %d of %d records contain %d focused ids", len(subset), len(records), len(ids))
    if not subset:
        logger.warning("No records found for focus view")
        return None

    return render_tree(
        subset,
        root_id=root_id,
        root_name=root_name,
        synonyms=synonyms,
        all_known_records=records if all_known_records is None else all_known_records,
        group_depth=group_depth,
    )
