from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from assetsync.domain.model import FIRST_LOCAL_ID, AssetKind, CompareState, SourceRole
from assetsync.domain.reconciliation import (
    AchievementHooks,
    AssetReconciler,
    Diagnostics,
    NothingToCommitError,
    ReentrantRefreshError,
)
from tests.helpers.assets import loaded_reconciler, make_achievement

if TYPE_CHECKING:
    from assetsync.domain.model import Trigger
    from assetsync.domain.reconciliation import AssetSource


def test_allocate_local_id_shares_candidate() -> None:
    reconciler = loaded_reconciler(
        generated=make_achievement(id=0),
        local=make_achievement(id=0),
    )

    assert reconciler.allocate_local_id(500) is True
    assert reconciler.generated.id == 500
    assert reconciler.local.id == 500
    assert reconciler.id == 500
    assert reconciler.allocate_local_id(500) is False


def test_allocate_local_id_respects_published_anchor() -> None:
    reconciler = loaded_reconciler(
        generated=make_achievement(id=0),
        local=make_achievement(id=FIRST_LOCAL_ID),
        published=make_achievement(id=77),
    )

    assert reconciler.allocate_local_id(500) is False
    assert reconciler.local.id == FIRST_LOCAL_ID
    assert reconciler.id == 77


def test_allocate_local_id_on_empty_reconciler_is_invariant_violation() -> None:
    reconciler = AssetReconciler(AssetKind.ACHIEVEMENT)

    with pytest.raises(AssertionError):
        reconciler.allocate_local_id(500)


def test_default_badge_is_displayed_through_local() -> None:
    reconciler = loaded_reconciler(
        generated=make_achievement(badge_name="12345"),
        local=make_achievement(badge_name=""),
        published=make_achievement(id=3, badge_name="0"),
    )

    assert reconciler.badge_name == "12345"
    assert reconciler.badge is not None
    assert reconciler.badge.badge_name == "12345"
    assert reconciler.badge.source is SourceRole.LOCAL
    assert reconciler.local.badge_name == "12345"
    assert reconciler.local.asset is not None
    assert reconciler.local.asset.badge_name == ""


def test_default_badge_follows_replaced_generated_asset() -> None:
    reconciler = loaded_reconciler(
        generated=make_achievement(badge_name="111"),
        local=make_achievement(badge_name=""),
    )
    assert reconciler.badge is not None
    assert reconciler.badge.badge_name == "111"

    reconciler.generated.set_asset(make_achievement(badge_name="222"))
    reconciler.refresh()

    fresh = loaded_reconciler(
        generated=make_achievement(badge_name="222"),
        local=make_achievement(badge_name=""),
    )
    assert reconciler.badge_name == fresh.badge_name == "222"
    assert reconciler.badge == fresh.badge
    assert reconciler.local.badge_name == "222"


def test_published_slot_is_labelled_with_status() -> None:
    reconciler = loaded_reconciler(
        generated=make_achievement(),
        published=make_achievement(id=3, is_unofficial=True),
    )

    assert reconciler.published.label == "Published (Unofficial)"
    assert reconciler.local.label == "Local"


def test_other_points_at_the_differing_slot() -> None:
    generated = make_achievement()
    reconciler = loaded_reconciler(generated=generated, local=replace(generated, title="Old"))

    assert reconciler.result.other is SourceRole.LOCAL
    assert reconciler.other is reconciler.local


def test_commit_then_refresh_is_same() -> None:
    generated = make_achievement(badge_name="")
    reconciler = loaded_reconciler(
        generated=generated,
        local=replace(generated, title="Old title", badge_name="4444"),
    )
    reconciler.allocate_local_id(900)
    assert reconciler.result.state is CompareState.LOCAL_DIFFERS

    result = reconciler.commit()

    assert result.state is CompareState.SAME
    assert reconciler.refresh().state is CompareState.SAME
    assert reconciler.local.asset is not None
    assert reconciler.local.asset.id == 900
    assert reconciler.local.asset.badge_name == "4444"


def test_commit_materializes_missing_local_copy() -> None:
    published = make_achievement(id=12, badge_name="321")
    reconciler = loaded_reconciler(
        generated=replace(published, id=0, badge_name=""),
        published=published,
    )
    assert reconciler.result.state is CompareState.PUBLISHED_MATCHES_NOT_LOCAL

    result = reconciler.commit()

    assert result.state is CompareState.SAME
    assert reconciler.local.id == 12
    assert reconciler.local.badge_name == "321"


def test_commit_collects_diagnostics() -> None:
    reconciler = loaded_reconciler(generated=make_achievement(points=3, description=""))
    diagnostics = Diagnostics()

    reconciler.commit(diagnostics)

    assert diagnostics.warnings == ("Win the game: description is empty",)
    assert reconciler.result.state is CompareState.SAME


def test_commit_without_generated_raises() -> None:
    reconciler = loaded_reconciler(local=make_achievement())

    with pytest.raises(NothingToCommitError):
        reconciler.commit()


def test_delete_clears_local_and_recomputes() -> None:
    generated = make_achievement()
    reconciler = loaded_reconciler(generated=generated, local=generated)
    assert reconciler.result.state is CompareState.SAME

    result = reconciler.delete()

    assert reconciler.local.asset is None
    assert result.state is CompareState.PUBLISHED_MATCHES_NOT_LOCAL
    assert result.can_update


def test_refresh_is_idempotent() -> None:
    generated = make_achievement(points=10, badge_name="55")
    reconciler = loaded_reconciler(
        generated=generated,
        local=replace(generated, points=5, badge_name=""),
        published=replace(generated, id=4, badge_name="0"),
    )

    first = reconciler.refresh()
    second = reconciler.refresh()

    assert first == second
    assert reconciler.badge is not None


def test_display_asset_prefers_generated_then_published() -> None:
    published = make_achievement(id=3, title="Published title")
    reconciler = loaded_reconciler(local=make_achievement(title="Local title"), published=published)

    assert reconciler.display_asset is published
    assert reconciler.result.state is CompareState.NONE


def test_nested_refresh_is_rejected() -> None:
    class _RefreshingHooks(AchievementHooks):
        def build_triggers(self, source: AssetSource) -> tuple[Trigger, ...]:
            reconciler.refresh()
            return super().build_triggers(source)

    reconciler = AssetReconciler(AssetKind.ACHIEVEMENT, hooks=_RefreshingHooks())

    with pytest.raises(ReentrantRefreshError):
        reconciler.load(generated=make_achievement())

    assert reconciler.result.state is CompareState.NONE
