"""Reconciliation core for the generated, local and published copies of an asset.

Layered flow:
1) slots receive whole asset values (``AssetSource.set_asset``)
2) ids are shared between generated and local (``identity``)
3) canonical and display badges are chosen (``badge``)
4) the comparison state machine runs (``engine``), diffing triggers (``diff``)
5) commits and deletes write the local slot (``apply``) and re-run 2-4

``AssetReconciler`` sequences these steps for one asset.
"""

from __future__ import annotations

from .apply import NothingToCommitError
from .badge import BadgeSelection, is_valid_badge_name
from .contracts import (
    ComparisonContext,
    ComparisonResult,
    Diagnostics,
    DisplayTrigger,
    ModifiedField,
)
from .diff import (
    EMPTY_TRIGGER,
    GroupComparison,
    RequirementComparison,
    TriggerComparison,
    diff_triggers,
)
from .engine import compare_sources, compare_to_generated
from .hooks import (
    AchievementHooks,
    BaseKindHooks,
    KindHooks,
    LeaderboardHooks,
    RichPresenceHooks,
    hooks_for,
)
from .identity import allocate_local_id, resolve_canonical_id
from .reconciler import AssetReconciler, ReentrantRefreshError
from .source import AssetSource, TriggerBuilder

__all__ = [
    "EMPTY_TRIGGER",
    "AchievementHooks",
    "AssetReconciler",
    "AssetSource",
    "BadgeSelection",
    "BaseKindHooks",
    "ComparisonContext",
    "ComparisonResult",
    "Diagnostics",
    "DisplayTrigger",
    "GroupComparison",
    "KindHooks",
    "LeaderboardHooks",
    "ModifiedField",
    "NothingToCommitError",
    "ReentrantRefreshError",
    "RequirementComparison",
    "RichPresenceHooks",
    "TriggerBuilder",
    "TriggerComparison",
    "allocate_local_id",
    "compare_sources",
    "compare_to_generated",
    "diff_triggers",
    "hooks_for",
    "is_valid_badge_name",
    "resolve_canonical_id",
]
