"""Configuration for the remote authority that publishes assets."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

PUBLISHED_BASE_URL = "https://retroachievements.org/API/"
PUBLISHED_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class PublishedConfig:
    """Credentials and transport settings for fetching published assets."""

    api_key: str
    user_name: str
    resilience: ResilienceConfig


def get_published_config(*, resilience: ResilienceConfig | None = None) -> PublishedConfig:
    values = require_env_vars(("ASSETSYNC_API_KEY", "ASSETSYNC_USER_NAME"))
    base_url = os.getenv("ASSETSYNC_BASE_URL") or PUBLISHED_BASE_URL
    return PublishedConfig(
        api_key=values["ASSETSYNC_API_KEY"],
        user_name=values["ASSETSYNC_USER_NAME"],
        resilience=resilience
        or ResilienceConfig(
            name="published",
            base_url=base_url,
            timeout_seconds=PUBLISHED_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        ),
    )
