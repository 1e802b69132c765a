from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from assetsync.config import PublishedConfig, RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ASSETSYNC_API_KEY",
        "ASSETSYNC_USER_NAME",
        "ASSETSYNC_BASE_URL",
        "ASSETSYNC_HEX_VALUES",
        "ASSETSYNC_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def published_config() -> PublishedConfig:
    return PublishedConfig(
        api_key="secret",
        user_name="tester",
        resilience=ResilienceConfig(
            name="published-test",
            base_url="https://published.test/API/",
            retry=RetryPolicy(total=0),
            ratelimit=RateLimit(max_calls=100, per_seconds=1.0),
        ),
    )


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[[dict[str, object]], Path]:
    def writer(data: dict[str, object]) -> Path:
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return writer
