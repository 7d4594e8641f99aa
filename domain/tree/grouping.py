"""
Family-level grouping of leaves and crossing-minimizing sibling order.

Leaves are sorted globally by (group key, name); every internal node's children
are then ordered by the mean global position of their subtree leaves, which
clusters groups together and places each internal node at the centroid of its
descendants.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from domain.schemas import TreeNode
from domain.tree.builder import TaxonTree

logger = logging.getLogger(__name__)

FAMILY_SUFFIX = "idae"
UNKNOWN_GROUP = "Unknown"
DEFAULT_GROUP_DEPTH = 3


@dataclass(frozen=True)
class LeafGroup:
    """A leaf and the group it was assigned to."""

    leaf: TreeNode
    group_key: str


def group_key(path_names: Sequence[str] | None, group_depth: int = DEFAULT_GROUP_DEPTH) -> str:
    """
    Derive the grouping label for a root-to-leaf name path.

    Priority: the deepest name ending in "idae" (family suffix), then the name at
    ``group_depth`` (root = 0), then the second-to-last name, then the first name.

    Examples:
        >>> group_key(["Mammalia", "Carnivora", "Felidae", "Felis"], 1)
        'Felidae'
        >>> group_key(["Mammalia", "Carnivora", "Caniformia", "Canis"], 2)
        'Caniformia'
        >>> group_key([], 3)
        'Unknown'
    """
    if not path_names:
        return UNKNOWN_GROUP

    for name in reversed(path_names):
        if name and name.lower().endswith(FAMILY_SUFFIX):
            return name

    if len(path_names) > group_depth and path_names[group_depth]:
        return path_names[group_depth]

    if len(path_names) >= 2:
        return path_names[-2]

    return path_names[0] or UNKNOWN_GROUP


def _ancestor_group_key(chain: Sequence[TreeNode], group_depth: int) -> str:
    # chain is root..leaf; used when the leaf carries no stored path
    if 0 <= group_depth < len(chain) and chain[group_depth].name:
        return chain[group_depth].name
    return chain[-1].name or UNKNOWN_GROUP


def _leaves_with_chains(root: TreeNode) -> list[tuple[TreeNode, list[TreeNode]]]:
    out: list[tuple[TreeNode, list[TreeNode]]] = []
    stack: list[tuple[TreeNode, list[TreeNode]]] = [(root, [root])]
    while stack:
        node, chain = stack.pop()
        if node.is_leaf:
            out.append((node, chain))
            continue
        for child in reversed(node.children or ()):
            stack.append((child, chain + [child]))
    return out


def _as_root(tree: TaxonTree | TreeNode) -> TreeNode:
    return tree.root if isinstance(tree, TaxonTree) else tree


def compute_leaf_order(tree: TaxonTree | TreeNode, group_depth: int = DEFAULT_GROUP_DEPTH) -> list[LeafGroup]:
    """
    Sort all leaves by (group key, name).

    Ties keep pre-order input order. Leaves without a stored ``path_names`` use
    their tree ancestors instead.

    Returns:
        LeafGroup list; a leaf's position in it is its global leaf index
    """
    groups: list[LeafGroup] = []
    for leaf, chain in _leaves_with_chains(_as_root(tree)):
        if leaf.path_names:
            key = group_key(leaf.path_names, group_depth)
        else:
            key = _ancestor_group_key(chain, group_depth)
        groups.append(LeafGroup(leaf=leaf, group_key=key))

    return sorted(groups, key=lambda g: (g.group_key or "", g.leaf.name or ""))


def reorder_for_grouping(tree: TaxonTree | TreeNode, group_depth: int = DEFAULT_GROUP_DEPTH) -> list[LeafGroup]:
    """
    Reorder every node's children in place by the mean leaf index of their subtree.

    Children are ordered bottom-up with a stable ascending sort. Sort keys are kept
    in a local mapping and never written to the nodes.

    Returns:
        The global leaf order used for the pass
    """
    root = _as_root(tree)
    order = compute_leaf_order(root, group_depth)
    leaf_index = {g.leaf.id: i for i, g in enumerate(order)}

    def subtree_positions(node: TreeNode) -> list[int]:
        if node.is_leaf:
            return [leaf_index.get(node.id, 0)]

        sort_keys: dict[int, float] = {}
        positions: list[int] = []
        for child in node.children or ():
            child_positions = subtree_positions(child)
            sort_keys[child.id] = float(np.mean(child_positions)) if child_positions else 0.0
            positions.extend(child_positions)

        node.children = sorted(node.children or (), key=lambda c: sort_keys[c.id])
        return positions

    subtree_positions(root)
    logger.debug("Reordered tree for grouping: %d leaves, group_depth=%d", len(order), group_depth)
    return order


def annotate_group_keys(tree: TaxonTree | TreeNode, group_depth: int = DEFAULT_GROUP_DEPTH) -> list[LeafGroup]:
    """
    Store ``group_key`` on every node.

    Leaves get their own group; internal nodes get the single group shared by all
    their leaves, or None when their leaves span several groups.
    """
    root = _as_root(tree)
    order = compute_leaf_order(root, group_depth)
    by_leaf = {g.leaf.id: g.group_key for g in order}

    def collect(node: TreeNode) -> set[str]:
        if node.is_leaf:
            key = by_leaf.get(node.id)
            node.group_key = key
            return {key} if key else set()

        keys: set[str] = set()
        for child in node.children or ():
            keys |= collect(child)
        node.group_key = next(iter(keys)) if len(keys) == 1 else None
        return keys

    collect(root)
    n_groups = len({g.group_key for g in order})
    logger.info("Assigned %d leaves to %d groups (group_depth=%d)", len(order), n_groups, group_depth)
    return order
