"""HTTP client for the remote authority that publishes assets."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from assetsync.adapters.http_resilience import ResilientClient
from assetsync.config import PublishedConfig, get_published_config

from .schema import CORE_FLAGS, UNOFFICIAL_FLAGS, ErrorResponse, GameExtendedResponse
from .translator import parse_achievement

if TYPE_CHECKING:
    from collections.abc import Callable

    from assetsync.config import ResilienceConfig
    from assetsync.domain.model import Achievement

log = getLogger(__name__)

GAME_EXTENDED_ENDPOINT = "API_GetGameExtended.php"


class PublishedAPIError(RuntimeError):
    """Raised when the remote authority returns an application-level error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class PublishedFetchResult:
    game_id: int
    game_title: str
    achievements: tuple[Achievement, ...] = ()

    def by_id(self) -> dict[int, Achievement]:
        return {achievement.id: achievement for achievement in self.achievements}


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class PublishedAssetFetcher:
    """Fetch the published achievements of one game."""

    config: PublishedConfig = field(default_factory=get_published_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, game_id: int, *, include_unofficial: bool = True) -> PublishedFetchResult:
        return asyncio.run(
            self._fetch_async(game_id=game_id, include_unofficial=include_unofficial)
        )

    async def _fetch_async(self, *, game_id: int, include_unofficial: bool) -> PublishedFetchResult:
        flag_sets = [CORE_FLAGS]
        if include_unofficial:
            flag_sets.append(UNOFFICIAL_FLAGS)

        achievements: list[Achievement] = []
        game_title = ""
        async with self.client_factory(self.config.resilience) as client:
            for flags in flag_sets:
                response = await self._request_game(client=client, game_id=game_id, flags=flags)
                game_title = response.title
                payloads = sorted(
                    response.achievements.values(),
                    key=lambda payload: (payload.display_order, payload.id),
                )
                achievements.extend(
                    parse_achievement(payload, unofficial=flags == UNOFFICIAL_FLAGS)
                    for payload in payloads
                )

        log.info(
            "Fetched %s published achievements for game %s (%s)",
            len(achievements),
            game_id,
            game_title,
        )
        return PublishedFetchResult(
            game_id=game_id,
            game_title=game_title,
            achievements=tuple(achievements),
        )

    async def _request_game(
        self,
        *,
        client: ResilientClient,
        game_id: int,
        flags: int,
    ) -> GameExtendedResponse:
        params = httpx.QueryParams(
            {
                "i": game_id,
                "f": flags,
                "y": self.config.api_key,
                "z": self.config.user_name,
            }
        )
        response = await client.get(GAME_EXTENDED_ENDPOINT, params=params)

        payload = _json_or_none(response)
        if isinstance(payload, dict) and "Error" in payload:
            error_payload = ErrorResponse.model_validate(payload)
            log.error("Published API error for game %s: %s", game_id, error_payload.error)
            raise PublishedAPIError(error_payload.error, status_code=response.status_code)

        response.raise_for_status()
        if not isinstance(payload, dict) or "Achievements" not in payload:
            raise PublishedAPIError("Unexpected published API response payload")

        return GameExtendedResponse.model_validate(payload)


def _json_or_none(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return None
