"""Synonym-aware search over the taxon tree."""

import logging
from dataclasses import dataclass, field

from domain.schemas import Match, MatchKind, TreeNode
from domain.synonyms.index import SynonymIndex
from domain.taxonomy.normalizer import contains_query, name_key
from domain.tree.builder import TaxonTree

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Ordered matches for one query plus the id sets consumed by rendering."""

    query: str
    matches: list[Match] = field(default_factory=list)
    highlighted_ids: set[int] = field(default_factory=set)

    @property
    def is_empty_query(self) -> bool:
        return not self.query

    @property
    def no_results(self) -> bool:
        return bool(self.query) and not self.matches

    @property
    def primary_match_ids(self) -> set[int]:
        return {m.id for m in self.matches if m.kind is MatchKind.PRIMARY}

    @property
    def synonym_match_ids(self) -> set[int]:
        return {m.id for m in self.matches if m.kind is MatchKind.SYNONYM}

    @property
    def match_ids(self) -> set[int]:
        return {m.id for m in self.matches}


class _MatchCollector:
    """Ordered, id-deduplicated matches; primary wins over synonym."""

    def __init__(self) -> None:
        self._by_id: dict[int, Match] = {}

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._by_id

    def add(self, node: TreeNode, kind: MatchKind) -> None:
        existing = self._by_id.get(node.id)
        if existing is None:
            self._by_id[node.id] = Match(node=node, kind=kind)
        elif kind is MatchKind.PRIMARY and existing.kind is not MatchKind.PRIMARY:
            self._by_id[node.id] = Match(node=node, kind=MatchKind.PRIMARY)

    def primaries(self) -> list[Match]:
        return [m for m in self._by_id.values() if m.kind is MatchKind.PRIMARY]

    def matches(self) -> list[Match]:
        return list(self._by_id.values())


def _parse_id_query(query: str) -> int | None:
    # plain ASCII digits only; int() also accepts "+2", "2_0" and non-ASCII digits
    if not (query.isascii() and query.isdigit()):
        return None
    return int(query)


def _search_by_id(node_id: int, tree: TaxonTree, synonyms: SynonymIndex) -> list[Match]:
    collector = _MatchCollector()
    collector.add(tree.by_id[node_id], MatchKind.PRIMARY)

    if synonyms.is_ready():
        for related_id in sorted(synonyms.all_ids(node_id)):
            node = tree.by_id.get(related_id)
            if node is not None:
                collector.add(node, MatchKind.SYNONYM)

    return collector.matches()


def _search_by_name(query: str, tree: TaxonTree, synonyms: SynonymIndex) -> list[Match]:
    key = name_key(query)
    collector = _MatchCollector()

    for node in tree.iter_nodes():
        if contains_query(node.name, key):
            collector.add(node, MatchKind.PRIMARY)

    if not synonyms.is_ready():
        return collector.matches()

    # nodes reachable only through one of their synonym names
    for node in tree.iter_nodes():
        if node.id in collector:
            continue
        own = name_key(node.name)
        if any(contains_query(nm, key) for nm in synonyms.all_names(node.id) if name_key(nm) != own):
            collector.add(node, MatchKind.SYNONYM)

    # synonym-id closure of every primary match
    for match in collector.primaries():
        for related_id in sorted(synonyms.all_ids(match.id)):
            node = tree.by_id.get(related_id)
            if node is None or related_id in collector:
                continue
            kind = MatchKind.PRIMARY if contains_query(node.name, key) else MatchKind.SYNONYM
            collector.add(node, kind)

    return collector.matches()


def highlighted_path_ids(tree: TaxonTree, matches: list[Match]) -> set[int]:
    """Ids on the root-to-node paths of all matches."""
    ids: set[int] = set()
    for m in matches:
        ids.update(n.id for n in tree.path_to(m.id))
    return ids


def search(query: str | None, tree: TaxonTree, synonyms: SynonymIndex) -> SearchResult:
    """
    Resolve a query against node names/ids and their synonym closures.

    A query of plain ASCII digits that exists as a node id is an exact-id
    search; anything else is a case-insensitive substring search over names.

    Args:
        query: Raw user input; surrounding whitespace is ignored
        tree: Built taxon tree
        synonyms: Synonym index (may be not ready; synonym expansion is then skipped)

    Returns:
        SearchResult with ordered, classified matches
    """
    q = (query or "").strip()
    if not q:
        return SearchResult(query="")

    node_id = _parse_id_query(q)
    if node_id is not None and node_id in tree.by_id:
        matches = _search_by_id(node_id, tree, synonyms)
    else:
        matches = _search_by_name(q, tree, synonyms)

    result = SearchResult(query=q, matches=matches, highlighted_ids=highlighted_path_ids(tree, matches))
    logger.info(
        "Search %r: %d matches (%d primary, %d synonym)",
        q,
        len(matches),
        len(result.primary_match_ids),
        len(result.synonym_match_ids),
    )
    return result
