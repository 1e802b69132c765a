"""Commit operations that write the generated asset into the local slot.

Responsibilities of this stage:
- fill in the canonical id and badge on the generated asset when missing
- let the asset kind validate the change and collect warnings
- replace the local slot wholesale (or clear it on delete)

Warnings never abort a commit. Re-running the comparison is the caller's job.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assetsync.domain.model import Asset

    from .contracts import Diagnostics
    from .hooks import KindHooks
    from .source import AssetSource

log = getLogger(__name__)

_UNSET_BADGES = frozenset({"", "0"})


class NothingToCommitError(ValueError):
    """Raised when a commit is requested without a generated asset."""


def commit_generated(
    *,
    generated: AssetSource,
    local: AssetSource,
    hooks: KindHooks,
    canonical_id: int,
    badge_name: str | None,
    diagnostics: Diagnostics,
    validate_all: bool = False,
) -> Asset:
    """Replace the local slot with the generated asset and return what was written."""

    asset = generated.asset
    if asset is None:
        raise NothingToCommitError("No generated asset to commit")

    changes: dict[str, object] = {}
    if asset.id == 0:
        changes["id"] = canonical_id
    if asset.badge_name in _UNSET_BADGES and badge_name:
        changes["badge_name"] = badge_name
    if changes:
        asset = replace(asset, **changes)
        generated.set_asset(asset)

    warning_count = len(diagnostics)
    hooks.merge_local(asset, local.asset, diagnostics, validate_all=validate_all)
    for warning in diagnostics.warnings[warning_count:]:
        log.warning("%s", warning)

    local.set_asset(asset)
    log.debug("Committed %s %s to local", asset.kind.display_name, asset.id)
    return asset


def delete_local(
    *,
    local: AssetSource,
    hooks: KindHooks,
    diagnostics: Diagnostics | None = None,
) -> None:
    """Clear the local slot after giving the asset kind a chance to react."""

    hooks.merge_local(None, local.asset, diagnostics)
    local.clear()
