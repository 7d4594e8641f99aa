"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- schemas: Pydantic models for path records, tree nodes, synonyms and matches
- taxonomy: path parsing and name normalization
- tree: tree construction, synonym grafting and grouping
- synonyms: the synonym index
- search: synonym-aware search and navigation
"""

from domain.schemas import (
    Match,
    MatchKind,
    PathRecord,
    SynonymEntry,
    SynonymLink,
    TreeNode,
)

__all__ = [
    "PathRecord",
    "TreeNode",
    "SynonymLink",
    "SynonymEntry",
    "MatchKind",
    "Match",
]
