"""Trigger building blocks: operands, requirements, groups and labelled triggers.

All values are frozen so requirements can be compared by equality and hashed
when triggers are aligned against each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import FieldSize, NumberFormat, OperandKind, Operator, RequirementFlag

_SIZE_TEXT: dict[FieldSize, str] = {
    FieldSize.BIT0: "bit0",
    FieldSize.BIT1: "bit1",
    FieldSize.BIT2: "bit2",
    FieldSize.BIT3: "bit3",
    FieldSize.BIT4: "bit4",
    FieldSize.BIT5: "bit5",
    FieldSize.BIT6: "bit6",
    FieldSize.BIT7: "bit7",
    FieldSize.LOW4: "low4",
    FieldSize.HIGH4: "high4",
    FieldSize.BYTE: "byte",
    FieldSize.WORD: "word",
    FieldSize.TBYTE: "tbyte",
    FieldSize.DWORD: "dword",
    FieldSize.BITCOUNT: "bitcount",
}

_WRAPPERS: dict[OperandKind, str] = {
    OperandKind.DELTA: "prev",
    OperandKind.PRIOR: "prior",
    OperandKind.BCD: "bcd",
}


def format_number(value: int, number_format: NumberFormat) -> str:
    if number_format is NumberFormat.HEXADECIMAL:
        return f"0x{value:02X}"
    return str(value)


@dataclass(frozen=True, slots=True)
class Operand:
    kind: OperandKind
    value: int | float = 0
    size: FieldSize | None = None

    @classmethod
    def memory(cls, address: int, size: FieldSize = FieldSize.BYTE) -> Operand:
        return cls(kind=OperandKind.MEMORY, value=address, size=size)

    @classmethod
    def constant(cls, value: int) -> Operand:
        return cls(kind=OperandKind.VALUE, value=value)

    @property
    def address(self) -> int | None:
        if not self.kind.reads_memory:
            return None
        return int(self.value)

    def render(self, number_format: NumberFormat = NumberFormat.DECIMAL) -> str:
        if self.kind is OperandKind.VALUE:
            return format_number(int(self.value), number_format)
        if self.kind is OperandKind.FLOAT:
            return repr(float(self.value))
        if self.kind is OperandKind.RECALL:
            return "{recall}"

        size = _SIZE_TEXT[self.size or FieldSize.BYTE]
        text = f"{size}(0x{int(self.value):06X})"
        if self.kind is OperandKind.INVERTED:
            return f"~{text}"
        wrapper = _WRAPPERS.get(self.kind)
        if wrapper is not None:
            return f"{wrapper}({text})"
        return text


@dataclass(frozen=True, slots=True)
class Requirement:
    left: Operand
    operator: Operator = Operator.NONE
    right: Operand | None = None
    flag: RequirementFlag = RequirementFlag.NONE
    hit_target: int = 0

    def render(self, number_format: NumberFormat = NumberFormat.DECIMAL) -> str:
        parts: list[str] = []
        if self.flag is not RequirementFlag.NONE:
            parts.append(str(self.flag))
        parts.append(self.left.render(number_format))
        if self.operator is not Operator.NONE and self.right is not None:
            parts.append(str(self.operator))
            parts.append(self.right.render(number_format))
        text = " ".join(parts)
        if self.hit_target:
            text = f"{text} ({self.hit_target})"
        return text


@dataclass(frozen=True, slots=True)
class RequirementGroup:
    label: str
    requirements: tuple[Requirement, ...] = ()

    @classmethod
    def label_for(cls, index: int) -> str:
        return "Core" if index == 0 else f"Alt {index}"


@dataclass(frozen=True, slots=True)
class Trigger:
    """A named set of condition groups.

    The label is the key used to pair triggers when two assets are compared.
    """

    label: str
    groups: tuple[RequirementGroup, ...] = field(default_factory=tuple)

    @property
    def requirement_count(self) -> int:
        return sum(len(group.requirements) for group in self.groups)

    @property
    def is_empty(self) -> bool:
        return self.requirement_count == 0
