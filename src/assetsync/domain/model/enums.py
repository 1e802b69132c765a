"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class AssetKind(StrEnum):
    ACHIEVEMENT = "achievement"
    LEADERBOARD = "leaderboard"
    RICH_PRESENCE = "rich_presence"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ")


class SourceRole(StrEnum):
    """Which representation of an asset a slot holds."""

    GENERATED = "Generated"
    LOCAL = "Local"
    PUBLISHED = "Published"


class CompareState(StrEnum):
    """How the generated asset relates to its local and published copies."""

    NONE = "none"
    SAME = "same"
    LOCAL_DIFFERS = "local_differs"
    PUBLISHED_DIFFERS = "published_differs"
    PUBLISHED_MATCHES_NOT_LOCAL = "published_matches_not_local"


class NumberFormat(StrEnum):
    DECIMAL = "decimal"
    HEXADECIMAL = "hexadecimal"


class FieldSize(StrEnum):
    BIT0 = "bit0"
    BIT1 = "bit1"
    BIT2 = "bit2"
    BIT3 = "bit3"
    BIT4 = "bit4"
    BIT5 = "bit5"
    BIT6 = "bit6"
    BIT7 = "bit7"
    LOW4 = "low4"
    HIGH4 = "high4"
    BYTE = "byte"
    WORD = "word"
    TBYTE = "tbyte"
    DWORD = "dword"
    BITCOUNT = "bitcount"


class OperandKind(StrEnum):
    MEMORY = "memory"
    DELTA = "delta"
    PRIOR = "prior"
    BCD = "bcd"
    INVERTED = "inverted"
    VALUE = "value"
    FLOAT = "float"
    RECALL = "recall"

    @property
    def reads_memory(self) -> bool:
        return self not in {OperandKind.VALUE, OperandKind.FLOAT, OperandKind.RECALL}


class Operator(StrEnum):
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    MULTIPLY = "*"
    DIVIDE = "/"
    BITWISE_AND = "&"
    BITWISE_XOR = "^"
    NONE = ""

    @property
    def is_comparison(self) -> bool:
        return self in {
            Operator.EQUAL,
            Operator.NOT_EQUAL,
            Operator.LESS,
            Operator.LESS_EQUAL,
            Operator.GREATER,
            Operator.GREATER_EQUAL,
        }


class RequirementFlag(StrEnum):
    NONE = ""
    PAUSE_IF = "PauseIf"
    RESET_IF = "ResetIf"
    RESET_NEXT_IF = "ResetNextIf"
    ADD_SOURCE = "AddSource"
    SUB_SOURCE = "SubSource"
    ADD_HITS = "AddHits"
    SUB_HITS = "SubHits"
    ADD_ADDRESS = "AddAddress"
    AND_NEXT = "AndNext"
    OR_NEXT = "OrNext"
    MEASURED = "Measured"
    MEASURED_PERCENT = "MeasuredPercent"
    MEASURED_IF = "MeasuredIf"
    TRIGGER = "Trigger"
    REMEMBER = "Remember"


class ValueFormat(StrEnum):
    VALUE = "VALUE"
    SCORE = "SCORE"
    FRAMES = "FRAMES"
    MILLISECS = "MILLISECS"
    SECS = "SECS"
    MINUTES = "MINUTES"
    SECS_AS_MINS = "SECS_AS_MINS"
    FIXED1 = "FIXED1"
    FIXED2 = "FIXED2"
    FIXED3 = "FIXED3"
    TENS = "TENS"
    HUNDREDS = "HUNDREDS"
    THOUSANDS = "THOUSANDS"
    UNSIGNED = "UNSIGNED"
    OTHER = "OTHER"
