"""Shared reconciliation contract components.

This module intentionally holds only value types passed between the
reconciliation stages:
- the rendering context handed to trigger comparisons
- the append-only diagnostics sink used by commits
- the result record produced by every comparison run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from assetsync.domain.model import CompareState, NumberFormat

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from assetsync.domain.model import SourceRole, Trigger

    from .diff import TriggerComparison


type DisplayTrigger = Trigger | TriggerComparison


class ModifiedField(StrEnum):
    """Asset properties that can be flagged as differing from the generated copy."""

    TITLE = "title"
    DESCRIPTION = "description"
    POINTS = "points"
    FORMAT = "format"
    LOWER_IS_BETTER = "lower_is_better"
    SCRIPT = "script"


@dataclass(frozen=True, slots=True)
class ComparisonContext:
    """Cosmetic settings used when rendering requirement comparisons.

    Nothing in here influences whether two requirements are considered equal.
    """

    number_format: NumberFormat = NumberFormat.DECIMAL
    notes: Mapping[int, str] = field(default_factory=dict["int", "str"])

    def note_for(self, address: int | None) -> str | None:
        if address is None:
            return None
        return self.notes.get(address)


@dataclass(slots=True)
class Diagnostics:
    """Append-only buffer of human-readable warnings."""

    _warnings: list[str] = field(default_factory=list["str"], repr=False)

    def warn(self, message: str) -> None:
        self._warnings.append(message)

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(self._warnings)

    def __len__(self) -> int:
        return len(self._warnings)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._warnings))

    def render(self) -> str:
        return "\n".join(f"* {warning}" for warning in self._warnings)


@dataclass(frozen=True, slots=True, kw_only=True)
class ComparisonResult:
    """Display state computed from the generated/local/published triple."""

    state: CompareState = CompareState.NONE
    can_update: bool = False
    modification_message: str | None = None
    trigger_source: str = ""
    other: SourceRole | None = None
    modified_fields: frozenset[ModifiedField] = frozenset()
    triggers: tuple[DisplayTrigger, ...] = ()

    @property
    def is_title_modified(self) -> bool:
        return ModifiedField.TITLE in self.modified_fields

    @property
    def is_description_modified(self) -> bool:
        return ModifiedField.DESCRIPTION in self.modified_fields

    @property
    def is_points_modified(self) -> bool:
        return ModifiedField.POINTS in self.modified_fields

    @property
    def is_diffed(self) -> bool:
        return self.other is not None
