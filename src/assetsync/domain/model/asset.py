"""Gamification asset values.

Assets are immutable. Code that needs a different id or badge builds a new
value with :func:`dataclasses.replace` and hands it to a slot wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .enums import AssetKind, ValueFormat
from .trigger import Trigger

FIRST_LOCAL_ID = 111000001
"""Ids at or above this value are temporary ids handed out by the local store."""


@dataclass(frozen=True, slots=True, kw_only=True)
class Asset:
    id: int = 0
    title: str = ""
    description: str = ""
    points: int = 0
    badge_name: str = ""
    source_line: int = 0
    triggers: tuple[Trigger, ...] = field(default_factory=tuple)
    is_unofficial: bool = False

    # class-level discriminator; subclasses must override
    KIND: ClassVar[AssetKind]

    @property
    def kind(self) -> AssetKind:
        return self.KIND

    @property
    def has_local_id(self) -> bool:
        return self.id >= FIRST_LOCAL_ID


@dataclass(frozen=True, slots=True, kw_only=True)
class Achievement(Asset):
    KIND: ClassVar[AssetKind] = AssetKind.ACHIEVEMENT


@dataclass(frozen=True, slots=True, kw_only=True)
class Leaderboard(Asset):
    KIND: ClassVar[AssetKind] = AssetKind.LEADERBOARD

    start: Trigger | None = None
    cancel: Trigger | None = None
    submit: Trigger | None = None
    value: Trigger | None = None
    format: ValueFormat = ValueFormat.VALUE
    lower_is_better: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class RichPresence(Asset):
    KIND: ClassVar[AssetKind] = AssetKind.RICH_PRESENCE

    script: str = ""
