"""Per-kind capabilities consumed by the comparison engine and the appliers.

Each asset kind contributes three behaviours:
- ``build_triggers`` materializes the trigger list shown for a slot
- ``modified_properties`` reports kind-specific fields that differ
- ``merge_local`` validates an asset about to replace the local copy

The base class provides the no-op defaults; kinds override what they need.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from assetsync.domain.model import AssetKind, Leaderboard, RichPresence, Trigger

from .contracts import ModifiedField

if TYPE_CHECKING:
    from assetsync.domain.model import Asset

    from .contracts import Diagnostics
    from .source import AssetSource

log = getLogger(__name__)

VALID_ACHIEVEMENT_POINTS = (0, 1, 2, 3, 4, 5, 10, 25, 50, 100)
MAX_TEXT_LENGTH = 255
MAX_RICH_PRESENCE_LENGTH = 65535


class KindHooks(Protocol):
    """Capability interface implemented once per asset kind."""

    def build_triggers(self, source: AssetSource) -> tuple[Trigger, ...]: ...

    def modified_properties(
        self,
        source: AssetSource,
        generated: AssetSource,
    ) -> frozenset[ModifiedField]: ...

    def merge_local(
        self,
        asset: Asset | None,
        local_asset: Asset | None,
        diagnostics: Diagnostics | None,
        *,
        validate_all: bool = False,
    ) -> None: ...


class BaseKindHooks:
    def build_triggers(self, source: AssetSource) -> tuple[Trigger, ...]:
        return source.asset.triggers if source.asset is not None else ()

    def modified_properties(
        self,
        source: AssetSource,  # noqa: ARG002
        generated: AssetSource,  # noqa: ARG002
    ) -> frozenset[ModifiedField]:
        return frozenset()

    def merge_local(
        self,
        asset: Asset | None,
        local_asset: Asset | None,
        diagnostics: Diagnostics | None,
        *,
        validate_all: bool = False,
    ) -> None:
        if asset is None:
            if local_asset is not None:
                log.debug("Removing local %s %s", local_asset.kind.display_name, local_asset.id)
            return
        if diagnostics is not None:
            for warning in self.validate(asset, validate_all=validate_all):
                diagnostics.warn(warning)

    def validate(self, asset: Asset, *, validate_all: bool) -> list[str]:  # noqa: ARG002
        return []


class AchievementHooks(BaseKindHooks):
    def modified_properties(
        self,
        source: AssetSource,
        generated: AssetSource,
    ) -> frozenset[ModifiedField]:
        if source.points != generated.points:
            return frozenset({ModifiedField.POINTS})
        return frozenset()

    def validate(self, asset: Asset, *, validate_all: bool) -> list[str]:
        warnings: list[str] = []
        name = asset.title or f"Achievement {asset.id}"
        if not asset.title.strip():
            warnings.append(f"{name}: title is empty")
        if not asset.description.strip():
            warnings.append(f"{name}: description is empty")
        if asset.points not in VALID_ACHIEVEMENT_POINTS:
            allowed = ", ".join(str(points) for points in VALID_ACHIEVEMENT_POINTS)
            warnings.append(f"{name}: {asset.points} points is not one of {allowed}")
        warnings.extend(
            f"{name}: trigger '{trigger.label}' has no requirements"
            for trigger in asset.triggers
            if trigger.is_empty
        )
        if validate_all:
            if len(asset.title) > MAX_TEXT_LENGTH:
                warnings.append(f"{name}: title exceeds {MAX_TEXT_LENGTH} characters")
            if len(asset.description) > MAX_TEXT_LENGTH:
                warnings.append(f"{name}: description exceeds {MAX_TEXT_LENGTH} characters")
        return warnings


class LeaderboardHooks(BaseKindHooks):
    SECTIONS = (
        ("start", "Start Conditions"),
        ("cancel", "Cancel Conditions"),
        ("submit", "Submit Conditions"),
        ("value", "Value"),
    )

    def build_triggers(self, source: AssetSource) -> tuple[Trigger, ...]:
        asset = source.asset
        if not isinstance(asset, Leaderboard):
            return super().build_triggers(source)

        triggers: list[Trigger] = []
        for attribute, label in self.SECTIONS:
            trigger: Trigger | None = getattr(asset, attribute)
            if trigger is not None:
                triggers.append(replace(trigger, label=label))
        return tuple(triggers)

    def modified_properties(
        self,
        source: AssetSource,
        generated: AssetSource,
    ) -> frozenset[ModifiedField]:
        left = source.asset
        right = generated.asset
        if not isinstance(left, Leaderboard) or not isinstance(right, Leaderboard):
            return frozenset()

        modified: set[ModifiedField] = set()
        if left.format is not right.format:
            modified.add(ModifiedField.FORMAT)
        if left.lower_is_better != right.lower_is_better:
            modified.add(ModifiedField.LOWER_IS_BETTER)
        return frozenset(modified)

    def validate(self, asset: Asset, *, validate_all: bool) -> list[str]:  # noqa: ARG002
        if not isinstance(asset, Leaderboard):
            return []

        warnings: list[str] = []
        name = asset.title or f"Leaderboard {asset.id}"
        if asset.submit is None or asset.submit.is_empty:
            warnings.append(f"{name}: leaderboard has no submit conditions")
        if asset.value is None or asset.value.is_empty:
            warnings.append(f"{name}: leaderboard has no value definition")
        if (
            asset.start is not None
            and asset.cancel is not None
            and asset.start.groups == asset.cancel.groups
        ):
            warnings.append(f"{name}: start and cancel conditions are identical")
        return warnings


class RichPresenceHooks(BaseKindHooks):
    def modified_properties(
        self,
        source: AssetSource,
        generated: AssetSource,
    ) -> frozenset[ModifiedField]:
        left = source.asset
        right = generated.asset
        if not isinstance(left, RichPresence) or not isinstance(right, RichPresence):
            return frozenset()
        if left.script != right.script:
            return frozenset({ModifiedField.SCRIPT})
        return frozenset()

    def validate(self, asset: Asset, *, validate_all: bool) -> list[str]:  # noqa: ARG002
        if isinstance(asset, RichPresence) and len(asset.script) > MAX_RICH_PRESENCE_LENGTH:
            return [
                f"Rich presence script is {len(asset.script)} characters, "
                f"limit is {MAX_RICH_PRESENCE_LENGTH}"
            ]
        return []


_HOOKS_BY_KIND: dict[AssetKind, KindHooks] = {
    AssetKind.ACHIEVEMENT: AchievementHooks(),
    AssetKind.LEADERBOARD: LeaderboardHooks(),
    AssetKind.RICH_PRESENCE: RichPresenceHooks(),
}


def hooks_for(kind: AssetKind) -> KindHooks:
    return _HOOKS_BY_KIND[kind]
