"""Tree and search-result serialization utilities."""

import logging
from pathlib import Path
from typing import Any

from application.constants import (
    MATCH_KIND_KEY,
    MATCH_PATH_KEY,
    NODE_CHILDREN_KEY,
    NODE_ID_KEY,
    NODE_NAME_KEY,
)
from domain.schemas import Match, TreeNode
from domain.search.engine import SearchResult
from domain.tree.builder import TaxonTree
from infrastructure.io import write_json

logger = logging.getLogger(__name__)


def tree_to_dict(node: TreeNode) -> dict[str, Any]:
    """
    Convert a node and its subtree into plain JSON-ready dicts.

    Leaves carry no ``children`` key. Optional attributes are only written when set,
    and ``group_key`` is written (possibly as null, meaning a mixed group) only
    once grouping assigned it.
    """
    out: dict[str, Any] = {NODE_ID_KEY: node.id, NODE_NAME_KEY: node.name}

    if node.path_ids is not None:
        out["path_ids"] = list(node.path_ids)
    if node.path_names is not None:
        out["path_names"] = list(node.path_names)
    if node.is_synonym:
        out["is_synonym"] = True
        out["valid_id"] = node.valid_id
    if node.has_group_key:
        out["group_key"] = node.group_key

    if node.children:
        out[NODE_CHILDREN_KEY] = [tree_to_dict(child) for child in node.children]
    return out


def match_to_dict(match: Match, tree: TaxonTree) -> dict[str, Any]:
    chain = tree.path_to(match.id)
    return {
        NODE_ID_KEY: match.id,
        NODE_NAME_KEY: match.node.name,
        MATCH_KIND_KEY: match.kind.value,
        MATCH_PATH_KEY: [n.id for n in chain],
    }


def search_result_to_dict(result: SearchResult, tree: TaxonTree) -> dict[str, Any]:
    """Serialize matches in order plus the sorted id sets used for highlighting."""
    return {
        "query": result.query,
        "matches": [match_to_dict(m, tree) for m in result.matches],
        "primary_match_ids": sorted(result.primary_match_ids),
        "synonym_match_ids": sorted(result.synonym_match_ids),
        "highlighted_ids": sorted(result.highlighted_ids),
    }


def save_tree(tree: TaxonTree, path: Path) -> Path:
    write_json(path, tree_to_dict(tree.root))
    logger.info("Saved tree JSON (%d nodes): %s", len(tree), path)
    return path


def save_search_result(result: SearchResult, tree: TaxonTree, path: Path) -> Path:
    write_json(path, search_result_to_dict(result, tree))
    logger.info("Saved search results (%d matches): %s", len(result.matches), path)
    return path
