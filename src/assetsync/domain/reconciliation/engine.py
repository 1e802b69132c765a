"""Comparison state machine for the generated/local/published triple.

The branches are evaluated in order and are total over the inputs:

1. no generated asset                         -> ``NONE``
2. generated differs from local               -> ``LOCAL_DIFFERS``
3. matches local, published exists and differs -> ``PUBLISHED_DIFFERS``
4. matches everything present, no local copy  -> ``PUBLISHED_MATCHES_NOT_LOCAL``
5. matches everything, local exists           -> ``SAME``

The engine never mutates the slots it reads, so running it twice on the same
inputs yields equal results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from assetsync.domain.model import CompareState, SourceRole

from .contracts import ComparisonContext, ComparisonResult, ModifiedField
from .diff import diff_triggers, is_any_modified
from .hooks import BaseKindHooks

if TYPE_CHECKING:
    from .diff import TriggerComparison
    from .hooks import KindHooks
    from .source import AssetSource


LOCAL_DIFFERS_MESSAGE = "Local differs from generated"


@dataclass(frozen=True, slots=True)
class SourceComparison:
    """Outcome of comparing one slot against the generated slot."""

    is_modified: bool = False
    modified_fields: frozenset[ModifiedField] = frozenset()
    triggers: tuple[TriggerComparison, ...] = ()


def compare_to_generated(
    source: AssetSource,
    generated: AssetSource,
    *,
    hooks: KindHooks | None = None,
    context: ComparisonContext | None = None,
) -> SourceComparison:
    """Compare ``source`` with ``generated`` field by field and trigger by trigger."""

    if source.asset is None:
        return SourceComparison()

    active_hooks = hooks or BaseKindHooks()
    fields: set[ModifiedField] = set()
    if source.title != generated.title:
        fields.add(ModifiedField.TITLE)
    if source.description != generated.description:
        fields.add(ModifiedField.DESCRIPTION)
    fields.update(active_hooks.modified_properties(source, generated))

    triggers = diff_triggers(generated.triggers, source.triggers, context=context)
    return SourceComparison(
        is_modified=bool(fields) or is_any_modified(triggers),
        modified_fields=frozenset(fields),
        triggers=triggers,
    )


def compare_sources(
    *,
    generated: AssetSource,
    local: AssetSource,
    published: AssetSource,
    hooks: KindHooks | None = None,
    context: ComparisonContext | None = None,
) -> ComparisonResult:
    """Compute the display state for the three slots."""

    published_asset = published.asset
    if generated.asset is None:
        return _not_generated(local=local, published=published)

    local_comparison = compare_to_generated(local, generated, hooks=hooks, context=context)
    if local_comparison.is_modified:
        trigger_source = "Generated"
        if published_asset is not None:
            published_comparison = compare_to_generated(
                published, generated, hooks=hooks, context=context
            )
            if not published_comparison.is_modified:
                trigger_source = f"Generated (Same as {_published_name(published)})"
        return ComparisonResult(
            state=CompareState.LOCAL_DIFFERS,
            can_update=True,
            modification_message=LOCAL_DIFFERS_MESSAGE,
            trigger_source=trigger_source,
            other=SourceRole.LOCAL,
            modified_fields=local_comparison.modified_fields,
            triggers=local_comparison.triggers,
        )

    has_local = local.asset is not None
    if published_asset is not None:
        published_comparison = compare_to_generated(
            published, generated, hooks=hooks, context=context
        )
        if published_comparison.is_modified:
            return ComparisonResult(
                state=CompareState.PUBLISHED_DIFFERS,
                # promoting over an existing local copy is left to the user
                can_update=not has_local,
                modification_message=f"{_published_name(published)} differs from generated",
                trigger_source=(
                    "Generated (Same as Local)" if has_local else "Generated (Not in Local)"
                ),
                other=SourceRole.PUBLISHED,
                modified_fields=published_comparison.modified_fields,
                triggers=published_comparison.triggers,
            )

    if not has_local:
        if published_asset is None:
            trigger_source = "Generated (Not in Local)"
        else:
            trigger_source = f"Generated (Same as {_published_name(published)}, not in Local)"
        kind = generated.asset.kind.display_name
        return ComparisonResult(
            state=CompareState.PUBLISHED_MATCHES_NOT_LOCAL,
            can_update=True,
            modification_message=f"Local {kind} does not exist",
            trigger_source=trigger_source,
            triggers=generated.triggers,
        )

    if published_asset is None:
        trigger_source = "Generated (Same as Local)"
    else:
        trigger_source = f"Generated (Same as {_published_name(published)} and Local)"
    return ComparisonResult(
        state=CompareState.SAME,
        trigger_source=trigger_source,
        triggers=generated.triggers,
    )


def published_label(published: AssetSource) -> str:
    """Slot label for the published copy, naming its official status."""

    if published.asset is None:
        return "Published"
    return f"Published ({_published_name(published)})"


def _published_name(published: AssetSource) -> str:
    asset = published.asset
    return "Unofficial" if asset is not None and asset.is_unofficial else "Core"


def _not_generated(*, local: AssetSource, published: AssetSource) -> ComparisonResult:
    if published.asset is not None:
        return ComparisonResult(
            trigger_source=f"{_published_name(published)} (Not Generated)",
            triggers=published.triggers,
        )
    if local.asset is not None:
        return ComparisonResult(
            trigger_source="Local (Not Generated)",
            triggers=local.triggers,
        )
    return ComparisonResult(trigger_source="Not Generated")
