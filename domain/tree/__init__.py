"""
Tree construction and shaping.

Provides:
- build_tree / attach_paths: merge path records into one rooted tree
- graft_synonyms: add missing synonym taxa as sibling leaves
- group_key / compute_leaf_order / reorder_for_grouping / annotate_group_keys:
  family grouping and crossing-minimizing sibling order
"""

from domain.tree.builder import (
    TaxonTree,
    attach_paths,
    build_tree,
    find_parent,
    iter_nodes,
    leaves,
    path_to,
)
from domain.tree.grafting import KnownTaxon, build_known_taxa, graft_synonyms
from domain.tree.grouping import (
    DEFAULT_GROUP_DEPTH,
    LeafGroup,
    annotate_group_keys,
    compute_leaf_order,
    group_key,
    reorder_for_grouping,
)

__all__ = [
    # Construction
    "TaxonTree",
    "build_tree",
    "attach_paths",
    # Traversal
    "iter_nodes",
    "leaves",
    "find_parent",
    "path_to",
    # Synonym grafting
    "KnownTaxon",
    "build_known_taxa",
    "graft_synonyms",
    # Grouping
    "DEFAULT_GROUP_DEPTH",
    "LeafGroup",
    "group_key",
    "compute_leaf_order",
    "reorder_for_grouping",
    "annotate_group_keys",
]
