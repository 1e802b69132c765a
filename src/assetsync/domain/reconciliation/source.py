"""Typed slot holding one representation of an asset."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assetsync.domain.model import Asset, SourceRole, Trigger


type TriggerBuilder = Callable[[AssetSource], tuple[Trigger, ...]]


def _asset_triggers(source: AssetSource) -> tuple[Trigger, ...]:
    return source.asset.triggers if source.asset is not None else ()


@dataclass(slots=True, eq=False)
class AssetSource:
    """One of the generated, local or published slots of an asset.

    The held asset is only ever replaced through :meth:`set_asset`, which
    drops the cached trigger list and any display badge override.
    """

    role: SourceRole
    label: str = ""
    build_triggers: TriggerBuilder = field(default=_asset_triggers, repr=False)
    _asset: Asset | None = field(default=None, repr=False)
    _triggers: tuple[Trigger, ...] | None = field(default=None, repr=False)
    _display_badge_name: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.label:
            self.label = str(self.role)

    @property
    def asset(self) -> Asset | None:
        return self._asset

    def set_asset(self, asset: Asset | None) -> None:
        self._asset = asset
        self._triggers = None
        self._display_badge_name = None

    def clear(self) -> None:
        self.set_asset(None)

    @property
    def triggers(self) -> tuple[Trigger, ...]:
        if self._triggers is None:
            self._triggers = tuple(self.build_triggers(self))
        return self._triggers

    @property
    def id(self) -> int:
        return self._asset.id if self._asset is not None else 0

    @property
    def title(self) -> str:
        return self._asset.title if self._asset is not None else ""

    @property
    def description(self) -> str:
        return self._asset.description if self._asset is not None else ""

    @property
    def points(self) -> int:
        return self._asset.points if self._asset is not None else 0

    @property
    def badge_name(self) -> str:
        if self._display_badge_name is not None:
            return self._display_badge_name
        return self._asset.badge_name if self._asset is not None else ""

    @property
    def held_badge_name(self) -> str:
        return self._asset.badge_name if self._asset is not None else ""

    def show_badge(self, badge_name: str | None) -> None:
        """Display ``badge_name`` for this slot without touching the held asset.

        ``None`` drops the override.
        """

        self._display_badge_name = badge_name
