from __future__ import annotations

from dataclasses import replace

from assetsync.domain.model import (
    FIRST_LOCAL_ID,
    AssetKind,
    FieldSize,
    NumberFormat,
    Operand,
    OperandKind,
    Operator,
    Requirement,
    RequirementFlag,
    RequirementGroup,
    RichPresence,
    Trigger,
    format_number,
)
from tests.helpers.assets import make_achievement, make_requirement, make_trigger


def test_format_number_respects_number_format() -> None:
    assert format_number(10, NumberFormat.DECIMAL) == "10"
    assert format_number(10, NumberFormat.HEXADECIMAL) == "0x0A"


def test_memory_operand_renders_size_and_address() -> None:
    operand = Operand.memory(0x1234, FieldSize.WORD)

    assert operand.address == 0x1234
    assert operand.render() == "word(0x001234)"


def test_wrapped_operands_render_their_prefix() -> None:
    delta = Operand(kind=OperandKind.DELTA, value=0x10, size=FieldSize.BYTE)
    inverted = Operand(kind=OperandKind.INVERTED, value=0x10, size=FieldSize.BIT3)

    assert delta.render() == "prev(byte(0x000010))"
    assert inverted.render() == "~bit3(0x000010)"


def test_constant_operand_has_no_address() -> None:
    operand = Operand.constant(255)

    assert operand.address is None
    assert operand.render(NumberFormat.HEXADECIMAL) == "0xFF"


def test_requirement_render_includes_flag_and_hits() -> None:
    requirement = make_requirement(0x1234, 5, flag=RequirementFlag.RESET_IF, hit_target=3)

    assert requirement.render() == "ResetIf byte(0x001234) == 5 (3)"


def test_requirement_without_operator_renders_left_only() -> None:
    requirement = Requirement(
        left=Operand.memory(0x20, FieldSize.DWORD),
        flag=RequirementFlag.ADD_SOURCE,
    )

    assert requirement.operator is Operator.NONE
    assert requirement.render() == "AddSource dword(0x000020)"


def test_requirements_are_value_objects() -> None:
    assert make_requirement(0x10, 1) == make_requirement(0x10, 1)
    assert hash(make_requirement(0x10, 1)) == hash(make_requirement(0x10, 1))
    assert make_requirement(0x10, 1) != make_requirement(0x10, 2)


def test_group_labels_name_core_and_alternates() -> None:
    assert RequirementGroup.label_for(0) == "Core"
    assert RequirementGroup.label_for(2) == "Alt 2"


def test_trigger_counts_requirements_across_groups() -> None:
    trigger = make_trigger(
        [make_requirement(0x10, 1), make_requirement(0x11, 1)],
        [make_requirement(0x12, 1)],
    )

    assert trigger.requirement_count == 3
    assert not trigger.is_empty
    assert Trigger(label="Empty").is_empty


def test_asset_kind_and_local_id_detection() -> None:
    achievement = make_achievement(id=FIRST_LOCAL_ID)
    rich_presence = RichPresence(script="Display:\nPlaying")

    assert achievement.kind is AssetKind.ACHIEVEMENT
    assert achievement.has_local_id
    assert not replace(achievement, id=12).has_local_id
    assert rich_presence.kind is AssetKind.RICH_PRESENCE
    assert AssetKind.RICH_PRESENCE.display_name == "rich presence"
