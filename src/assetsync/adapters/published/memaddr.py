"""Codec for the trigger strings used by the remote authority.

Grammar (one trigger):

    trigger     := group ("S" group)*
    group       := requirement ("_" requirement)*
    requirement := [flag ":"] operand [operator operand] ["." hits "."]
    operand     := [d|p|b|~] "0x" size address | "h" hex | "f" float | int | "{recall}"

The first group is the core group, the others are alternates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from assetsync.domain.model import (
    FieldSize,
    Operand,
    OperandKind,
    Operator,
    Requirement,
    RequirementFlag,
    RequirementGroup,
    Trigger,
)

FLAG_CODES: Final[dict[str, RequirementFlag]] = {
    "P": RequirementFlag.PAUSE_IF,
    "R": RequirementFlag.RESET_IF,
    "Z": RequirementFlag.RESET_NEXT_IF,
    "A": RequirementFlag.ADD_SOURCE,
    "B": RequirementFlag.SUB_SOURCE,
    "C": RequirementFlag.ADD_HITS,
    "D": RequirementFlag.SUB_HITS,
    "I": RequirementFlag.ADD_ADDRESS,
    "N": RequirementFlag.AND_NEXT,
    "O": RequirementFlag.OR_NEXT,
    "M": RequirementFlag.MEASURED,
    "G": RequirementFlag.MEASURED_PERCENT,
    "Q": RequirementFlag.MEASURED_IF,
    "T": RequirementFlag.TRIGGER,
    "K": RequirementFlag.REMEMBER,
}
SIZE_CODES: Final[dict[str, FieldSize]] = {
    "M": FieldSize.BIT0,
    "N": FieldSize.BIT1,
    "O": FieldSize.BIT2,
    "P": FieldSize.BIT3,
    "Q": FieldSize.BIT4,
    "R": FieldSize.BIT5,
    "S": FieldSize.BIT6,
    "T": FieldSize.BIT7,
    "L": FieldSize.LOW4,
    "U": FieldSize.HIGH4,
    "H": FieldSize.BYTE,
    "W": FieldSize.TBYTE,
    "X": FieldSize.DWORD,
    "K": FieldSize.BITCOUNT,
}
PREFIX_CODES: Final[dict[str, OperandKind]] = {
    "d": OperandKind.DELTA,
    "p": OperandKind.PRIOR,
    "b": OperandKind.BCD,
    "~": OperandKind.INVERTED,
}
# longest first so "!=" is not read as "!" and "<=" is not read as "<"
OPERATOR_CODES: Final[tuple[tuple[str, Operator], ...]] = (
    ("!=", Operator.NOT_EQUAL),
    ("<=", Operator.LESS_EQUAL),
    (">=", Operator.GREATER_EQUAL),
    ("=", Operator.EQUAL),
    ("<", Operator.LESS),
    (">", Operator.GREATER),
    ("*", Operator.MULTIPLY),
    ("/", Operator.DIVIDE),
    ("&", Operator.BITWISE_AND),
    ("^", Operator.BITWISE_XOR),
)

_FLAG_BY_VALUE = {flag: code for code, flag in FLAG_CODES.items()}
_SIZE_BY_VALUE = {size: code for code, size in SIZE_CODES.items()}
_PREFIX_BY_VALUE = {kind: code for code, kind in PREFIX_CODES.items()}
_OPERATOR_BY_VALUE = {operator: code for code, operator in OPERATOR_CODES}

_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_INT_RE = re.compile(r"-?\d+")
_FLOAT_RE = re.compile(r"-?\d+(?:\.\d+)?")
_HITS_RE = re.compile(r"\.(\d+)\.")
_RECALL = "{recall}"


class TriggerParseError(ValueError):
    """Raised when a trigger string does not follow the expected grammar."""

    def __init__(self, message: str, *, text: str, position: int) -> None:
        super().__init__(f"{message} at position {position} in {text!r}")
        self.text = text
        self.position = position


@dataclass(slots=True)
class _Cursor:
    text: str
    position: int = 0

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    def peek(self, length: int = 1) -> str:
        return self.text[self.position : self.position + length]

    def consume(self, token: str) -> bool:
        if self.text.startswith(token, self.position):
            self.position += len(token)
            return True
        return False

    def match(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        found = pattern.match(self.text, self.position)
        if found is not None:
            self.position = found.end()
        return found

    def error(self, message: str) -> TriggerParseError:
        return TriggerParseError(message, text=self.text, position=self.position)


def parse_trigger(text: str, *, label: str = "") -> Trigger:
    """Parse ``text`` into a :class:`Trigger` labelled ``label``."""

    cursor = _Cursor(text.strip())
    if cursor.at_end:
        return Trigger(label=label)

    groups: list[RequirementGroup] = []
    while True:
        requirements = _parse_group(cursor)
        group_label = RequirementGroup.label_for(len(groups))
        groups.append(RequirementGroup(label=group_label, requirements=requirements))
        if cursor.at_end:
            break
        if not cursor.consume("S"):
            raise cursor.error("Expected alt group separator")

    return Trigger(label=label, groups=tuple(groups))


def serialize_trigger(trigger: Trigger) -> str:
    return "S".join(
        "_".join(serialize_requirement(requirement) for requirement in group.requirements)
        for group in trigger.groups
    )


def serialize_requirement(requirement: Requirement) -> str:
    text = ""
    if requirement.flag is not RequirementFlag.NONE:
        text = f"{_FLAG_BY_VALUE[requirement.flag]}:"
    text += _serialize_operand(requirement.left)
    if requirement.operator is not Operator.NONE and requirement.right is not None:
        text += _OPERATOR_BY_VALUE[requirement.operator] + _serialize_operand(requirement.right)
    if requirement.hit_target:
        text += f".{requirement.hit_target}."
    return text


def _parse_group(cursor: _Cursor) -> tuple[Requirement, ...]:
    # a trailing alt separator yields an empty group
    if cursor.at_end or cursor.peek() == "S":
        return ()

    requirements = [_parse_requirement(cursor)]
    while cursor.consume("_"):
        requirements.append(_parse_requirement(cursor))
    return tuple(requirements)


def _parse_requirement(cursor: _Cursor) -> Requirement:
    flag = RequirementFlag.NONE
    if cursor.peek(2)[1:] == ":":
        code = cursor.peek()
        if code not in FLAG_CODES:
            raise cursor.error(f"Unknown condition flag {code!r}")
        flag = FLAG_CODES[code]
        cursor.position += 2

    left = _parse_operand(cursor)
    operator = Operator.NONE
    right: Operand | None = None
    for code, candidate in OPERATOR_CODES:
        if cursor.consume(code):
            operator = candidate
            right = _parse_operand(cursor)
            break

    hit_target = 0
    hits = cursor.match(_HITS_RE)
    if hits is not None:
        hit_target = int(hits.group(1))

    return Requirement(left=left, operator=operator, right=right, flag=flag, hit_target=hit_target)


def _parse_operand(cursor: _Cursor) -> Operand:
    if cursor.consume(_RECALL):
        return Operand(kind=OperandKind.RECALL)

    kind = OperandKind.MEMORY
    prefix = cursor.peek()
    if prefix in PREFIX_CODES and cursor.text.startswith("0x", cursor.position + 1):
        kind = PREFIX_CODES[prefix]
        cursor.position += 1

    if cursor.consume("0x"):
        return _parse_memory(cursor, kind)

    if cursor.consume("h"):
        digits = cursor.match(_HEX_RE)
        if digits is None:
            raise cursor.error("Expected hex value")
        return Operand(kind=OperandKind.VALUE, value=int(digits.group(0), 16))
    if cursor.consume("f"):
        number = cursor.match(_FLOAT_RE)
        if number is None:
            raise cursor.error("Expected float value")
        return Operand(kind=OperandKind.FLOAT, value=float(number.group(0)))

    number = cursor.match(_INT_RE)
    if number is None:
        raise cursor.error("Expected operand")
    return Operand(kind=OperandKind.VALUE, value=int(number.group(0)))


def _parse_memory(cursor: _Cursor, kind: OperandKind) -> Operand:
    code = cursor.peek()
    if code in SIZE_CODES:
        size = SIZE_CODES[code]
        cursor.position += 1
    else:
        size = FieldSize.WORD
        cursor.consume(" ")

    digits = cursor.match(_HEX_RE)
    if digits is None:
        raise cursor.error("Expected memory address")
    return Operand(kind=kind, value=int(digits.group(0), 16), size=size)


def _serialize_operand(operand: Operand) -> str:
    if operand.kind is OperandKind.VALUE:
        return str(int(operand.value))
    if operand.kind is OperandKind.FLOAT:
        return f"f{float(operand.value)}"
    if operand.kind is OperandKind.RECALL:
        return _RECALL

    size = operand.size or FieldSize.WORD
    size_code = _SIZE_BY_VALUE.get(size, " ")
    prefix = _PREFIX_BY_VALUE.get(operand.kind, "")
    return f"{prefix}0x{size_code}{int(operand.value):04x}"
