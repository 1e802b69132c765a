"""Identity reconciliation between the generated and local slots.

Rules:
- a published asset anchors identity; ids are never reallocated once it exists
- when only one of generated/local carries an id, it is copied to the other
- when neither carries an id, the candidate id is assigned to both

Ids are changed by handing a new asset value to the slot, never by mutating
the held asset.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .source import AssetSource

log = getLogger(__name__)


def allocate_local_id(
    candidate: int,
    *,
    generated: AssetSource,
    local: AssetSource,
    published: AssetSource,
) -> bool:
    """Give the generated and local copies a shared id.

    Returns ``True`` only when ``candidate`` was actually assigned.
    """

    if published.asset is not None:
        return False

    local_id = local.id
    generated_id = generated.id

    if local_id != generated_id:
        if local_id == 0:
            _assign_id(local, generated_id)
        if generated_id == 0:
            _assign_id(generated, local_id)
        return False

    if local_id != 0:
        return False

    if local.asset is None and generated.asset is None:
        # only reachable when a published-only asset drives an allocation
        assert False, "allocate_local_id called without a generated or local asset"  # noqa: B011, PT015
        return False

    _assign_id(local, candidate)
    _assign_id(generated, candidate)
    log.debug("Allocated local id %s", candidate)
    return True


def resolve_canonical_id(
    *,
    generated: AssetSource,
    local: AssetSource,
    published: AssetSource,
) -> int:
    """Pick the id the asset is displayed under."""

    if generated.id != 0:
        return generated.id
    if local.asset is not None and local.asset.has_local_id and published.id != 0:
        return published.id
    if local.id != 0:
        return local.id
    return published.id


def _assign_id(source: AssetSource, value: int) -> None:
    if source.asset is None:
        return
    source.set_asset(replace(source.asset, id=value))
