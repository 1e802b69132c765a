"""Public domain model surface."""

from __future__ import annotations

from assetsync.domain.model.asset import (
    FIRST_LOCAL_ID,
    Achievement,
    Asset,
    Leaderboard,
    RichPresence,
)
from assetsync.domain.model.enums import (
    AssetKind,
    CompareState,
    FieldSize,
    NumberFormat,
    OperandKind,
    Operator,
    RequirementFlag,
    SourceRole,
    ValueFormat,
)
from assetsync.domain.model.trigger import (
    Operand,
    Requirement,
    RequirementGroup,
    Trigger,
    format_number,
)

__all__ = [
    "FIRST_LOCAL_ID",
    "Achievement",
    "Asset",
    "AssetKind",
    "CompareState",
    "FieldSize",
    "Leaderboard",
    "NumberFormat",
    "Operand",
    "OperandKind",
    "Operator",
    "Requirement",
    "RequirementFlag",
    "RequirementGroup",
    "RichPresence",
    "SourceRole",
    "Trigger",
    "ValueFormat",
    "format_number",
]
