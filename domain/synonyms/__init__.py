"""Synonym resolution between valid and invalid taxon identities."""

from domain.synonyms.index import SynonymIndex

__all__ = [
    "SynonymIndex",
]
