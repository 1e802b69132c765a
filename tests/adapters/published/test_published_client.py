from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from assetsync.adapters.http_resilience import ResilientClient
from assetsync.adapters.published import PublishedAPIError, PublishedAssetFetcher
from assetsync.adapters.published.client import GAME_EXTENDED_ENDPOINT

if TYPE_CHECKING:
    from collections.abc import Callable

    from assetsync.config import PublishedConfig, ResilienceConfig


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(handler))

    return factory


def _achievement(achievement_id: int, display_order: int) -> dict[str, object]:
    return {
        "ID": achievement_id,
        "Title": f"Achievement {achievement_id}",
        "Description": "Do the thing",
        "Points": 5,
        "BadgeName": str(10000 + achievement_id),
        "MemAddr": "0xH1234=3",
        "DisplayOrder": display_order,
    }


def test_fetcher_requests_core_and_unofficial_sets(published_config: PublishedConfig) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.params["f"] == "3":
            achievements = {"11": _achievement(11, 2), "10": _achievement(10, 1)}
        else:
            achievements = {"99": _achievement(99, 0)}
        return httpx.Response(
            200, json={"ID": 1, "Title": "Example Game", "Achievements": achievements}
        )

    fetcher = PublishedAssetFetcher(
        config=published_config,
        client_factory=_make_client_factory(handler),
    )

    result = fetcher(1)

    assert [request.url.params["f"] for request in seen] == ["3", "5"]
    assert seen[0].url.path.endswith(GAME_EXTENDED_ENDPOINT)
    assert seen[0].url.params["y"] == "secret"
    assert seen[0].url.params["z"] == "tester"
    assert result.game_title == "Example Game"
    assert [achievement.id for achievement in result.achievements] == [10, 11, 99]
    assert [achievement.is_unofficial for achievement in result.achievements] == [
        False,
        False,
        True,
    ]
    assert set(result.by_id()) == {10, 11, 99}


def test_fetcher_can_skip_unofficial_set(published_config: PublishedConfig) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params["f"])
        return httpx.Response(200, json={"ID": 1, "Title": "Example Game", "Achievements": []})

    fetcher = PublishedAssetFetcher(
        config=published_config,
        client_factory=_make_client_factory(handler),
    )

    result = fetcher(1, include_unofficial=False)

    assert seen == ["3"]
    assert result.achievements == ()


def test_fetcher_raises_on_error_payload(published_config: PublishedConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"Error": "Invalid API Key"})

    fetcher = PublishedAssetFetcher(
        config=published_config,
        client_factory=_make_client_factory(handler),
    )

    with pytest.raises(PublishedAPIError) as excinfo:
        fetcher(1)

    assert str(excinfo.value) == "Invalid API Key"
    assert excinfo.value.status_code == 401


def test_fetcher_raises_on_http_error(published_config: PublishedConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not found")

    fetcher = PublishedAssetFetcher(
        config=published_config,
        client_factory=_make_client_factory(handler),
    )

    with pytest.raises(httpx.HTTPStatusError):
        fetcher(1)


def test_fetcher_rejects_unexpected_payload(published_config: PublishedConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ID": 1, "Title": "Example Game"})

    fetcher = PublishedAssetFetcher(
        config=published_config,
        client_factory=_make_client_factory(handler),
    )

    with pytest.raises(PublishedAPIError, match="Unexpected"):
        fetcher(1)
