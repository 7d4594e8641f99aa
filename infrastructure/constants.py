from pathlib import Path

# Repo-root conventional directories/files (overrideable via tree.yaml)
CONFIG_DIR = Path("configs")
TREE_CONFIG_FILE = CONFIG_DIR / "tree.yaml"

DATA_DIR = Path("dataset")
SYNONYMS_RESOURCE = "all_synonyms.json"

# Environment overrides
SYNONYMS_SOURCE_ENV = "TAXON_TREE_SYNONYMS_SOURCE"
