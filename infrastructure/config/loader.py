"""Configuration loading from YAML files."""

import os
from pathlib import Path
from typing import Any

import yaml

from infrastructure.config.models import TreeConfig
from infrastructure.constants import DATA_DIR, SYNONYMS_RESOURCE, SYNONYMS_SOURCE_ENV


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _resolve(data_dir: Path, value: Any) -> Path:
    p = Path(str(value))
    return p if p.is_absolute() else data_dir / p


def load_tree_config(config_path: Path) -> TreeConfig:
    """
    Load tree.yaml and construct a fully-resolved TreeConfig.

    Conventions:
    - records_file, all_records_file and a non-URL synonyms_source are relative to data_dir
    - the TAXON_TREE_SYNONYMS_SOURCE environment variable overrides synonyms_source
    """
    cfg = _load_yaml(config_path)

    if "records_file" not in cfg or not cfg.get("records_file"):
        raise ValueError("tree.yaml missing required key: records_file")

    data_dir = Path(cfg.get("data_dir", str(DATA_DIR)))
    records_file = _resolve(data_dir, cfg["records_file"])
    all_records_file = _resolve(data_dir, cfg["all_records_file"]) if cfg.get("all_records_file") else None

    synonyms_source = os.environ.get(SYNONYMS_SOURCE_ENV) or str(cfg.get("synonyms_source") or SYNONYMS_RESOURCE)
    if not _is_url(synonyms_source):
        synonyms_source = str(_resolve(data_dir, synonyms_source))

    kwargs: dict[str, Any] = {}
    for key in ("root_id", "root_name", "group_depth", "synonyms_timeout_s", "output_root"):
        if cfg.get(key) is not None:
            kwargs[key] = cfg[key]

    try:
        return TreeConfig(
            data_dir=data_dir,
            records_file=records_file,
            all_records_file=all_records_file,
            synonyms_source=synonyms_source,
            **kwargs,
        )
    except ValueError as e:
        raise ValueError(f"Invalid tree config in {config_path}: {e}") from e
