"""Pydantic models for the JSON catalog document."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modcatalog.domain.model import (
    CURRENT_STRUCTURE_VERSION,
    DLC,
    UNKNOWN_GAME_VERSION,
    CompatibilityStatus,
    ExclusionState,
    Source,
    Stability,
    Status,
    is_group_id,
)


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="after")
    @classmethod
    def _assume_utc(cls, value: object) -> object:
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class ModDocument(CatalogBaseModel):
    steam_id: int = Field(gt=0)
    name: str = ""
    published: datetime | None = None
    updated: datetime | None = None
    author_id: int = Field(default=0, ge=0)
    author_url: str = ""
    archive_url: str = ""
    source_url: str = ""
    compatible_game_version: str = UNKNOWN_GAME_VERSION

    required_dlc: list[DLC] = Field(default_factory=list[DLC])
    required_mods: list[int] = Field(default_factory=list[int])
    successors: list[int] = Field(default_factory=list[int])
    alternatives: list[int] = Field(default_factory=list[int])
    recommendations: list[int] = Field(default_factory=list[int])

    stability: Stability = Stability.NOT_REVIEWED
    stability_note: str = ""
    statuses: list[Status] = Field(default_factory=list[Status])
    generic_note: str = ""

    exclusion_for_source_url: bool = False
    exclusion_for_game_version: bool = False
    exclusion_for_no_description: ExclusionState = ExclusionState.NONE
    exclusion_for_required_dlc: list[DLC] = Field(default_factory=list[DLC])
    exclusion_for_required_mods: list[int] = Field(default_factory=list[int])

    # Absent in catalogs written before provenance was tracked
    required_dlc_sources: dict[DLC, Source] | None = None
    required_mod_sources: dict[int, Source] | None = None

    review_date: datetime | None = None
    auto_review_date: datetime | None = None
    change_notes: list[str] = Field(default_factory=list[str])

    @field_validator("exclusion_for_no_description", mode="before")
    @classmethod
    def _legacy_flag(cls, value: object) -> object:
        if isinstance(value, bool):
            return ExclusionState.MANUAL if value else ExclusionState.NONE
        return value


class AuthorDocument(CatalogBaseModel):
    steam_id: int = Field(default=0, ge=0)
    custom_url: str = ""
    name: str = ""
    last_seen: datetime | None = None
    retired: bool = False
    exclusion_for_retired: bool = False
    change_notes: list[str] = Field(default_factory=list[str])

    @model_validator(mode="after")
    def _has_identity(self) -> AuthorDocument:
        if not self.steam_id and not self.custom_url:
            raise ValueError("author needs a profile ID or a custom URL")
        return self


class GroupDocument(CatalogBaseModel):
    group_id: int
    name: str = ""
    members: list[int] = Field(default_factory=list[int])

    @field_validator("group_id")
    @classmethod
    def _in_group_range(cls, value: int) -> int:
        if not is_group_id(value):
            raise ValueError(f"group ID {value} is outside the group range")
        return value


class CompatibilityDocument(CatalogBaseModel):
    first_mod_id: int = Field(gt=0)
    second_mod_id: int = Field(gt=0)
    status: CompatibilityStatus
    note: str = ""


class CatalogDocument(CatalogBaseModel):
    version: int = Field(default=0, ge=0)
    structure_version: int = CURRENT_STRUCTURE_VERSION
    update_date: datetime | None = None
    compatible_game_version: str = UNKNOWN_GAME_VERSION
    note: str = ""
    report_header_text: str = ""
    report_footer_text: str = ""

    mods: list[ModDocument] = Field(default_factory=list["ModDocument"])
    compatibilities: list[CompatibilityDocument] = Field(
        default_factory=list["CompatibilityDocument"]
    )
    groups: list[GroupDocument] = Field(default_factory=list["GroupDocument"])
    authors: list[AuthorDocument] = Field(default_factory=list["AuthorDocument"])
    required_assets: list[int] = Field(default_factory=list[int])
