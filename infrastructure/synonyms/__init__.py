"""Synonym payload fetching (local file or HTTP) and one-time index loading."""

from infrastructure.synonyms.source import SynonymLoader, SynonymSource, load_synonym_index

__all__ = [
    "SynonymSource",
    "SynonymLoader",
    "load_synonym_index",
]
