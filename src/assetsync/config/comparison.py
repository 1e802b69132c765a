"""Settings that affect how comparisons are rendered."""

from __future__ import annotations

from dataclasses import dataclass

from assetsync.domain.model import NumberFormat

from .env import env_flag


@dataclass(frozen=True, slots=True)
class ComparisonSettings:
    hex_values: bool = False

    @property
    def number_format(self) -> NumberFormat:
        return NumberFormat.HEXADECIMAL if self.hex_values else NumberFormat.DECIMAL


def get_comparison_settings() -> ComparisonSettings:
    return ComparisonSettings(hex_values=env_flag("ASSETSYNC_HEX_VALUES"))
