"""Configuration models (Pydantic classes)."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from domain.tree.grouping import DEFAULT_GROUP_DEPTH
from infrastructure.constants import DATA_DIR, SYNONYMS_RESOURCE


class TreeConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from tree.yaml
    - Validated and resolved by the configuration loader
    - Consumed by the render workflow and the CLI
    """

    root_id: int = Field(default=6171, description="Id of the fixed root taxon (6171 = Mammalia).")
    root_name: str = Field(default="Mammalia", description="Display name of the root taxon.")
    group_depth: int = Field(
        default=DEFAULT_GROUP_DEPTH,
        description="Path depth used for grouping when no family name is found (0 = root).",
    )

    data_dir: Path = Field(default_factory=lambda: DATA_DIR)
    records_file: Path = Field(..., description="Path records rendered as the tree (CSV, Excel, JSON or JSONL).")
    all_records_file: Path | None = Field(
        default=None,
        description="Optional superset pool used to graft missing synonyms. Defaults to records_file.",
    )

    synonyms_source: str = Field(
        default_factory=lambda: str(DATA_DIR / SYNONYMS_RESOURCE),
        description="Local path or http(s) URL of the synonym JSON array.",
    )
    synonyms_timeout_s: float = Field(default=30.0, description="Timeout for fetching synonyms over HTTP.")

    output_root: Path = Field(default_factory=lambda: Path("outputs"))

    @property
    def synonyms_pool_file(self) -> Path:
        return self.all_records_file or self.records_file

    @model_validator(mode="after")
    def _validate(self) -> "TreeConfig":
        if self.group_depth < 0:
            raise ValueError("group_depth must be >= 0")

        self.root_name = self.root_name.strip()
        if not self.root_name:
            raise ValueError("root_name must not be blank")

        self.synonyms_source = self.synonyms_source.strip()
        if not self.synonyms_source:
            raise ValueError("synonyms_source must not be blank")

        if self.synonyms_timeout_s <= 0:
            raise ValueError("synonyms_timeout_s must be positive")

        return self
