from __future__ import annotations

from assetsync.domain.model import SourceRole, Trigger
from assetsync.domain.reconciliation import AssetSource
from tests.helpers.assets import make_achievement, make_trigger


def test_empty_source_reads_defaults() -> None:
    source = AssetSource(SourceRole.LOCAL)

    assert source.label == "Local"
    assert source.asset is None
    assert source.id == 0
    assert source.badge_name == ""
    assert source.triggers == ()


def test_source_reads_through_to_held_asset() -> None:
    source = AssetSource(SourceRole.GENERATED)
    source.set_asset(make_achievement(id=7, badge_name="1234", points=10))

    assert source.id == 7
    assert source.badge_name == "1234"
    assert source.points == 10
    assert source.title == "Win the game"


def test_triggers_are_built_lazily_and_cached() -> None:
    calls: list[AssetSource] = []

    def builder(source: AssetSource) -> tuple[Trigger, ...]:
        calls.append(source)
        return source.asset.triggers if source.asset is not None else ()

    source = AssetSource(SourceRole.LOCAL, build_triggers=builder)
    source.set_asset(make_achievement())

    assert calls == []
    first = source.triggers
    second = source.triggers

    assert first is second
    assert len(calls) == 1


def test_set_asset_invalidates_cached_triggers() -> None:
    source = AssetSource(SourceRole.LOCAL)
    source.set_asset(make_achievement())
    assert source.triggers[0].label == "Requirements"

    replacement = make_achievement(triggers=(make_trigger(label="Other"),))
    source.set_asset(replacement)

    assert source.triggers[0].label == "Other"


def test_show_badge_overrides_display_until_asset_replaced() -> None:
    source = AssetSource(SourceRole.LOCAL)
    source.set_asset(make_achievement(badge_name=""))

    source.show_badge("12345")

    assert source.badge_name == "12345"
    assert source.asset is not None
    assert source.asset.badge_name == ""

    source.set_asset(make_achievement(badge_name="999"))
    assert source.badge_name == "999"


def test_clear_empties_the_slot() -> None:
    source = AssetSource(SourceRole.PUBLISHED)
    source.set_asset(make_achievement(id=3))

    source.clear()

    assert source.asset is None
    assert source.id == 0


def test_show_badge_none_drops_override() -> None:
    source = AssetSource(SourceRole.LOCAL)
    source.set_asset(make_achievement(badge_name="55"))
    source.show_badge("12345")

    source.show_badge(None)

    assert source.badge_name == "55"
    assert source.held_badge_name == "55"
