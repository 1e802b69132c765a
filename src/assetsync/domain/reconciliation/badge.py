"""Badge name selection across the three slots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assetsync.domain.model import SourceRole

    from .source import AssetSource

_PLACEHOLDER_BADGES = frozenset({"0", "00000"})


def is_valid_badge_name(badge_name: str | None) -> bool:
    return bool(badge_name) and badge_name not in _PLACEHOLDER_BADGES


@dataclass(frozen=True, slots=True)
class BadgeSelection:
    """Badge to display and the slot whose image should be shown for it."""

    badge_name: str
    source: SourceRole


def resolve_canonical_badge_name(
    *,
    generated: AssetSource,
    local: AssetSource,
    published: AssetSource,
) -> str | None:
    """Badge name used when the generated asset is committed without one."""

    for source in (generated, local, published):
        if is_valid_badge_name(source.held_badge_name):
            return source.held_badge_name
    return None


def resolve_display_badge(
    *,
    local: AssetSource,
    published: AssetSource,
    default_badge_name: str | None,
) -> BadgeSelection | None:
    """Select the badge to display, preferring the published copy.

    When neither slot has a usable badge, ``default_badge_name`` is shown
    through the local slot. The local asset itself is left untouched. Only the
    held assets are consulted, so an earlier default never outlives the
    assets it was derived from.
    """

    local.show_badge(None)
    for source in (published, local):
        if is_valid_badge_name(source.held_badge_name):
            return BadgeSelection(badge_name=source.held_badge_name, source=source.role)

    if default_badge_name:
        local.show_badge(default_badge_name)
        return BadgeSelection(badge_name=default_badge_name, source=local.role)

    return None
