"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from assetsync.adapters.published import PublishedAssetFetcher
from assetsync.adapters.snapshot import load_snapshot
from assetsync.config import get_comparison_settings
from assetsync.domain.reconciliation import (
    AssetReconciler,
    ComparisonContext,
    ComparisonResult,
    Diagnostics,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from assetsync.adapters.published import PublishedFetchResult
    from assetsync.config import ComparisonSettings

type PublishedFetcher = Callable[..., PublishedFetchResult]

log = getLogger(__name__)


@dataclass(slots=True)
class SnapshotComparison:
    reconciler: AssetReconciler
    result: ComparisonResult
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    allocated: bool = False


def compare_snapshot(
    path: Path,
    *,
    settings: ComparisonSettings | None = None,
    allocate_id: int | None = None,
    commit: bool = False,
    validate_all: bool = False,
) -> SnapshotComparison:
    """Load a snapshot file and run the reconciliation for it.

    ``allocate_id`` shares a candidate id between the generated and local
    copies before comparing; ``commit`` promotes the generated copy to local.
    """

    effective_settings = settings or get_comparison_settings()
    snapshot = load_snapshot(path)
    reconciler = AssetReconciler(
        snapshot.kind,
        context=ComparisonContext(
            number_format=effective_settings.number_format,
            notes=snapshot.notes,
        ),
    )
    result = reconciler.load(
        generated=snapshot.generated,
        local=snapshot.local,
        published=snapshot.published,
    )
    log.info("Compared %s %s: %s", snapshot.kind.display_name, reconciler.id, result.state)

    allocated = False
    if allocate_id is not None:
        allocated = reconciler.allocate_local_id(allocate_id)
        result = reconciler.result

    diagnostics = Diagnostics()
    if commit:
        if not result.can_update:
            log.info("Nothing to update for %s %s", snapshot.kind.display_name, reconciler.id)
        else:
            result = reconciler.commit(diagnostics, validate_all=validate_all)

    return SnapshotComparison(
        reconciler=reconciler,
        result=result,
        diagnostics=diagnostics,
        allocated=allocated,
    )


def fetch_published_assets(
    game_id: int,
    *,
    fetcher: PublishedFetcher | None = None,
    include_unofficial: bool = True,
) -> PublishedFetchResult:
    """Fetch the published achievements of ``game_id``."""

    effective_fetcher = fetcher or PublishedAssetFetcher()
    log.info("Fetching published assets: game_id=%s, unofficial=%s", game_id, include_unofficial)
    return effective_fetcher(game_id, include_unofficial=include_unofficial)
