"""Pydantic models describing published asset payloads."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

CORE_FLAGS = 3
UNOFFICIAL_FLAGS = 5


def _blank_to_empty(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return value


class PublishedBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AssetPayload(PublishedBaseModel):
    """One asset as serialized by the remote authority.

    Kind-specific fields are optional so a single model covers achievements,
    leaderboards and rich presence.
    """

    id: int = Field(default=0, alias="ID")
    title: str = Field(default="", alias="Title")
    description: str = Field(default="", alias="Description")
    points: int = Field(default=0, alias="Points")
    badge_name: str = Field(default="", alias="BadgeName")
    mem_addr: str = Field(default="", alias="MemAddr")
    flags: int | None = Field(default=None, alias="Flags")
    display_order: int = Field(default=0, alias="DisplayOrder")
    source_line: int = Field(default=0, alias="SourceLine")

    mem: str = Field(default="", alias="Mem")
    format: str = Field(default="VALUE", alias="Format")
    lower_is_better: bool = Field(default=False, alias="LowerIsBetter")

    script: str = Field(default="", alias="Script")

    @field_validator("id", "points", "display_order", "source_line", mode="before")
    @classmethod
    def _parse_int(cls, value: int | str | None) -> int:
        if value is None or value == "":
            return 0
        return int(value)

    _normalize_text = field_validator(
        "title", "description", "badge_name", "mem_addr", "mem", mode="before"
    )(_blank_to_empty)

    @property
    def is_unofficial(self) -> bool:
        return self.flags == UNOFFICIAL_FLAGS


class GameExtendedResponse(PublishedBaseModel):
    id: int = Field(alias="ID")
    title: str = Field(alias="Title")
    achievements: dict[str, AssetPayload] = Field(default_factory=dict, alias="Achievements")

    @field_validator("achievements", mode="before")
    @classmethod
    def _empty_list_to_mapping(cls, value: object) -> object:
        # the API serializes an empty achievement set as ``[]``
        if isinstance(value, list) and not value:
            return {}
        return value


class ErrorResponse(PublishedBaseModel):
    error: str = Field(alias="Error")


AssetPayloadInput = AssetPayload | Mapping[str, object]
