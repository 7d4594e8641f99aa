"""Merge root-to-leaf path records into a single deduplicated tree."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from domain.schemas import PathRecord, TreeNode

logger = logging.getLogger(__name__)


@dataclass
class TaxonTree:
    """A built tree plus its id index. ``by_id`` maps every node id to its node."""

    root: TreeNode
    by_id: dict[int, TreeNode] = field(default_factory=dict)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.by_id

    def __len__(self) -> int:
        return len(self.by_id)

    def get(self, node_id: int) -> TreeNode | None:
        return self.by_id.get(node_id)

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Pre-order traversal, root first."""
        return iter_nodes(self.root)

    def leaves(self) -> list[TreeNode]:
        return leaves(self.root)

    def find_parent(self, node_id: int) -> TreeNode | None:
        return find_parent(self.root, node_id)

    def path_to(self, node_id: int) -> list[TreeNode]:
        return path_to(self.root, node_id)


def iter_nodes(root: TreeNode) -> Iterator[TreeNode]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if node.children:
            stack.extend(reversed(node.children))


def leaves(root: TreeNode) -> list[TreeNode]:
    """Leaves in pre-order."""
    return [n for n in iter_nodes(root) if n.is_leaf]


def find_parent(root: TreeNode, node_id: int) -> TreeNode | None:
    """Return the parent of ``node_id`` (first match from the root), or None for the root / unknown ids."""
    for node in iter_nodes(root):
        for child in node.children or ():
            if child.id == node_id:
                return node
    return None


def path_to(root: TreeNode, node_id: int) -> list[TreeNode]:
    """Root-to-node chain of nodes, or an empty list if the id is not in the tree."""
    stack: list[tuple[TreeNode, list[TreeNode]]] = [(root, [root])]
    while stack:
        node, chain = stack.pop()
        if node.id == node_id:
            return chain
        for child in reversed(node.children or ()):
            stack.append((child, chain + [child]))
    return []


def _build_name_dictionary(records: Sequence[PathRecord]) -> dict[int, str]:
    names: dict[int, str] = {}
    for r in records:
        for i, node_id in enumerate(r.ids_root_to_leaf):
            nm = r.names_root_to_leaf[i] if i < len(r.names_root_to_leaf) else None
            if node_id is not None and nm and node_id not in names:
                names[node_id] = nm
    return names


def _collapse_empty_children(root: TreeNode) -> None:
    for node in iter_nodes(root):
        if node.children is not None and not node.children:
            node.children = None


def build_tree(records: Sequence[PathRecord], root_id: int, root_name: str) -> TaxonTree:
    """
    Build the taxon tree from normalized path records.

    Records whose first id is not ``root_id`` are skipped. A node's name is fixed
    by the first record that reaches it; missing names fall back to any name seen
    for that id in other records, then to the id itself.

    Args:
        records: Normalized path records
        root_id: Id of the fixed root taxon
        root_name: Display name of the root

    Returns:
        TaxonTree with the root node and the id index
    """
    root = TreeNode(id=root_id, name=root_name, children=[])
    by_id: dict[int, TreeNode] = {root.id: root}
    name_dict = _build_name_dictionary(records)

    skipped = 0
    for r in records:
        ids = r.ids_root_to_leaf
        names = r.names_root_to_leaf
        if not ids or ids[0] != root_id:
            skipped += 1
            logger.debug("Skipping record not rooted at %s: %s", root_id, ids[:3])
            continue

        parent = root
        for i in range(1, len(ids)):
            node_id = ids[i]
            if node_id is None:
                continue

            child = by_id.get(node_id)
            if child is None:
                nm = names[i] if i < len(names) and names[i] else None
                child = TreeNode(id=node_id, name=nm or name_dict.get(node_id) or str(node_id), children=[])
                by_id[node_id] = child
                if parent.children is None:
                    parent.children = []
                parent.children.append(child)
            parent = child

    _collapse_empty_children(root)

    logger.info(
        "Built tree rooted at %s (%s): %d nodes from %d records (%d skipped)",
        root_id,
        root_name,
        len(by_id),
        len(records),
        skipped,
    )
    return TaxonTree(root=root, by_id=by_id)


def attach_paths(tree: TaxonTree, records: Sequence[PathRecord]) -> TaxonTree:
    """
    Store on each node the root-to-node path of the first record containing its id.

    Missing ids are left out of the stored path, matching the tree's ancestry; a
    missing name falls back to the node's display name. Nodes never reached by a
    record (e.g. grafted synonyms) keep no path.
    """
    seen: set[int] = set()
    for r in records:
        names = r.names_root_to_leaf
        path_ids: list[int] = []
        path_names: list[str] = []
        for i, node_id in enumerate(r.ids_root_to_leaf):
            if node_id is None:
                continue
            node = tree.by_id.get(node_id)
            nm = names[i] if i < len(names) else None
            path_ids.append(node_id)
            path_names.append(nm or (node.name if node is not None else str(node_id)))
            if node_id in seen:
                continue
            seen.add(node_id)
            if node is not None:
                node.path_ids = list(path_ids)
                node.path_names = list(path_names)
    return tree
