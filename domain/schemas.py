"""Pydantic models for path records, tree nodes, synonyms and search matches."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.taxonomy.paths import parse_id_path, parse_name_path


class PathRecord(BaseModel):
    """One exported taxon row: the full ancestor chain from the root down to the taxon."""

    model_config = ConfigDict(extra="allow")

    ids_root_to_leaf: list[int | None] = Field(
        default_factory=list,
        description="Ancestor ids, root first; None marks a missing id. Raw encodings are normalized on validation.",
    )
    names_root_to_leaf: list[str | None] = Field(
        default_factory=list,
        description="Ancestor names, index-aligned with ids_root_to_leaf.",
    )

    @field_validator("ids_root_to_leaf", mode="before")
    @classmethod
    def _parse_ids(cls, value: Any) -> list[int | None]:
        return parse_id_path(value)

    @field_validator("names_root_to_leaf", mode="before")
    @classmethod
    def _parse_names(cls, value: Any) -> list[str | None]:
        return parse_name_path(value)

    @property
    def extras(self) -> dict[str, Any]:
        """Pass-through fields that are not part of the path itself."""
        return dict(self.model_extra or {})


class TreeNode(BaseModel):
    """
    Node of the taxon tree.

    A node whose ``children`` is None is a leaf. ``group_key`` is only meaningful
    after grouping ran; an explicitly assigned None means "mixed group".
    """

    id: int
    name: str
    children: list["TreeNode"] | None = None
    path_ids: list[int] | None = None
    path_names: list[str] | None = None
    is_synonym: bool | None = None
    valid_id: int | None = None
    group_key: str | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def has_group_key(self) -> bool:
        return "group_key" in self.model_fields_set


class SynonymLink(BaseModel):
    """An invalid (synonym) identity pointing at a valid taxon."""

    invalid_id: int
    invalid_name: str
    synonym_type: str | None = None
    record_modified_date: str | None = None


class SynonymEntry(BaseModel):
    """A valid taxon together with every synonym that maps to it."""

    valid_id: int
    valid_name: str
    taxagroupid: str | None = None
    synonyms: list[SynonymLink] = Field(default_factory=list)

    @field_validator("synonyms", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class MatchKind(str, Enum):
    """How a search result was reached."""

    PRIMARY = "primary"
    SYNONYM = "synonym"


@dataclass(frozen=True)
class Match:
    """A tree node returned by search, with its classification."""

    node: TreeNode
    kind: MatchKind

    @property
    def id(self) -> int:
        return self.node.id
