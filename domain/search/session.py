"""Stateful keyboard-style navigation over the current search results."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from domain.schemas import Match
from domain.search.engine import SearchResult, search
from domain.synonyms.index import SynonymIndex
from domain.tree.builder import TaxonTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FocusEvent:
    """A single node brought into focus, with its root-to-node id path."""

    match: Match
    index: int
    path_ids: list[int]


FocusHandler = Callable[[FocusEvent], None]


class SearchSession:
    """
    Holds the current matches and the selected position within them.

    ``current_match_index`` is -1 while nothing is selected. Stepping clamps to
    the ends of the list and never wraps; on an empty list it does nothing.
    """

    def __init__(
        self,
        tree: TaxonTree,
        synonyms: SynonymIndex,
        on_focus: FocusHandler | None = None,
    ) -> None:
        self.tree = tree
        self.synonyms = synonyms
        self.on_focus = on_focus
        self.result: SearchResult = SearchResult(query="")
        self.current_matches: list[Match] = []
        self.current_match_index: int = -1

    @property
    def current_match(self) -> Match | None:
        if 0 <= self.current_match_index < len(self.current_matches):
            return self.current_matches[self.current_match_index]
        return None

    def clear(self) -> None:
        self.result = SearchResult(query="")
        self.current_matches = []
        self.current_match_index = -1

    def run(self, query: str | None) -> SearchResult:
        """Run a new search, replacing the previous state. A single match is focused right away."""
        self.clear()
        result = search(query, self.tree, self.synonyms)
        if result.is_empty_query:
            return result

        self.result = result
        self.current_matches = list(result.matches)
        if result.no_results:
            logger.info("No matches found for %r", result.query)
        elif len(self.current_matches) == 1:
            self._focus(0)
        return result

    def select(self, index: int) -> FocusEvent | None:
        """Focus the result at ``index`` (clamped)."""
        if not self.current_matches:
            return None
        return self._focus(min(max(index, 0), len(self.current_matches) - 1))

    def step_forward(self) -> FocusEvent | None:
        if not self.current_matches:
            return None
        if self.current_match_index < 0:
            return self._focus(0)
        return self._focus(min(self.current_match_index + 1, len(self.current_matches) - 1))

    def step_backward(self) -> FocusEvent | None:
        if not self.current_matches:
            return None
        if self.current_match_index < 0:
            return self._focus(len(self.current_matches) - 1)
        return self._focus(max(self.current_match_index - 1, 0))

    def _focus(self, index: int) -> FocusEvent:
        self.current_match_index = index
        match = self.current_matches[index]
        event = FocusEvent(
            match=match,
            index=index,
            path_ids=[n.id for n in self.tree.path_to(match.id)],
        )
        if self.on_focus is not None:
            self.on_focus(event)
        return event
