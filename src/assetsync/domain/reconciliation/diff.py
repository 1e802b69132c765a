"""Structural diff between two trigger lists.

Triggers are paired by label, groups by position and requirements by
sequence alignment. The result order is fixed: triggers from the reference
side first (in reference order, matched or added), then triggers that only
exist on the other side (in their original order). Snapshot tests rely on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import SequenceMatcher
from itertools import zip_longest
from typing import TYPE_CHECKING

from assetsync.domain.model import Requirement, RequirementGroup, Trigger

from .contracts import ComparisonContext

if TYPE_CHECKING:
    from collections.abc import Sequence

EMPTY_TRIGGER = Trigger(label="")
_EMPTY_GROUP = RequirementGroup(label="")


@dataclass(frozen=True, slots=True)
class RequirementComparison:
    requirement: Requirement | None
    other: Requirement | None
    definition: str = ""
    other_definition: str = ""
    note: str | None = None

    @property
    def is_modified(self) -> bool:
        return self.requirement != self.other


@dataclass(frozen=True, slots=True)
class GroupComparison:
    label: str
    requirements: tuple[RequirementComparison, ...] = ()
    is_unpaired: bool = False

    @property
    def is_modified(self) -> bool:
        # a group present on one side only differs even when it is empty
        return self.is_unpaired or any(requirement.is_modified for requirement in self.requirements)


@dataclass(frozen=True, slots=True)
class TriggerComparison:
    """One trigger from the reference side paired with its counterpart."""

    trigger: Trigger
    other: Trigger
    groups: tuple[GroupComparison, ...] = ()

    @property
    def label(self) -> str:
        return self.trigger.label or self.other.label

    @property
    def is_added(self) -> bool:
        return self.other is EMPTY_TRIGGER

    @property
    def is_removed(self) -> bool:
        return self.trigger is EMPTY_TRIGGER

    @property
    def is_modified(self) -> bool:
        return any(group.is_modified for group in self.groups)


def diff_triggers(
    reference: Sequence[Trigger],
    other: Sequence[Trigger],
    *,
    context: ComparisonContext | None = None,
) -> tuple[TriggerComparison, ...]:
    """Pair ``reference`` triggers with ``other`` triggers by label and diff each pair."""

    active_context = context or ComparisonContext()
    remaining = list(other)
    comparisons: list[TriggerComparison] = []

    for trigger in reference:
        counterpart = _take_by_label(remaining, trigger.label)
        comparisons.append(compare_trigger(trigger, counterpart, context=active_context))

    comparisons.extend(
        compare_trigger(EMPTY_TRIGGER, leftover, context=active_context) for leftover in remaining
    )
    return tuple(comparisons)


def is_any_modified(comparisons: Sequence[TriggerComparison]) -> bool:
    return any(comparison.is_modified for comparison in comparisons)


def compare_trigger(
    trigger: Trigger,
    other: Trigger,
    *,
    context: ComparisonContext,
) -> TriggerComparison:
    groups = tuple(
        _compare_group(
            left or _EMPTY_GROUP,
            right or _EMPTY_GROUP,
            context=context,
            is_unpaired=left is None or right is None,
        )
        for left, right in zip_longest(trigger.groups, other.groups)
    )
    return TriggerComparison(trigger=trigger, other=other, groups=groups)


def _take_by_label(candidates: list[Trigger], label: str) -> Trigger:
    for index, candidate in enumerate(candidates):
        if candidate.label == label:
            return candidates.pop(index)
    return EMPTY_TRIGGER


def _compare_group(
    group: RequirementGroup,
    other: RequirementGroup,
    *,
    context: ComparisonContext,
    is_unpaired: bool = False,
) -> GroupComparison:
    left = group.requirements
    right = other.requirements
    pairs: list[tuple[Requirement | None, Requirement | None]] = []

    matcher = SequenceMatcher(a=left, b=right, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            pairs.extend(zip(left[i1:i2], right[j1:j2], strict=True))
        else:
            # replace/delete/insert all reduce to a positional pairing of the two slices
            pairs.extend(zip_longest(left[i1:i2], right[j1:j2]))

    label = group.label or other.label
    return GroupComparison(
        label=label,
        requirements=tuple(_compare_requirement(a, b, context=context) for a, b in pairs),
        is_unpaired=is_unpaired,
    )


def _compare_requirement(
    requirement: Requirement | None,
    other: Requirement | None,
    *,
    context: ComparisonContext,
) -> RequirementComparison:
    number_format = context.number_format
    anchor = requirement or other
    return RequirementComparison(
        requirement=requirement,
        other=other,
        definition=requirement.render(number_format) if requirement else "",
        other_definition=other.render(number_format) if other else "",
        note=context.note_for(anchor.left.address) if anchor else None,
    )
