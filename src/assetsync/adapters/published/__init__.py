"""Public interface for the published asset adapter."""

from __future__ import annotations

from .client import PublishedAPIError, PublishedAssetFetcher, PublishedFetchResult
from .memaddr import TriggerParseError, parse_trigger, serialize_requirement, serialize_trigger
from .schema import AssetPayload, AssetPayloadInput, GameExtendedResponse
from .translator import parse_achievement, parse_asset, parse_leaderboard, parse_rich_presence

__all__ = [
    "AssetPayload",
    "AssetPayloadInput",
    "GameExtendedResponse",
    "PublishedAPIError",
    "PublishedAssetFetcher",
    "PublishedFetchResult",
    "TriggerParseError",
    "parse_achievement",
    "parse_asset",
    "parse_leaderboard",
    "parse_rich_presence",
    "parse_trigger",
    "serialize_requirement",
    "serialize_trigger",
]
