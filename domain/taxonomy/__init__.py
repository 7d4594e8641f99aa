"""
Taxonomy inputs: path parsing and name normalization.

All functions in this package are pure (no file I/O). Row and payload parsing
into models lives in domain.taxonomy.loader.
"""

from domain.taxonomy.normalizer import contains_query, name_key
from domain.taxonomy.paths import parse_id_path, parse_name_path, reassemble_ids

__all__ = [
    "parse_id_path",
    "parse_name_path",
    "reassemble_ids",
    "name_key",
    "contains_query",
]
