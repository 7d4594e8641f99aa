"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Configuration loading (YAML, environment)
- Path record files (CSV, Excel, JSON, JSONL)
- Synonym payload fetching (local file, HTTP)
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import TreeConfig, load_tree_config
from infrastructure.synonyms import SynonymLoader, SynonymSource

__all__ = [
    # Configuration
    "load_tree_config",
    "TreeConfig",
    # Synonyms
    "SynonymSource",
    "SynonymLoader",
]
