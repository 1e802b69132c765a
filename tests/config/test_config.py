from __future__ import annotations

import logging

import pytest

from assetsync.config import (
    InvalidConfigurationValueError,
    MissingConfigurationError,
    ResilienceConfig,
    configure_logging,
    env_flag,
    get_comparison_settings,
    get_published_config,
    require_env_var,
    require_env_vars,
)
from assetsync.config.published import PUBLISHED_BASE_URL
from assetsync.domain.model import NumberFormat


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.delenv("MISSING_B", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), (" Yes ", True), ("off", False), ("0", False)],
)
def test_env_flag_parses_booleans(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,
) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", raw)

    assert env_flag("EXAMPLE_FLAG") is expected


def test_env_flag_uses_default_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLAG", raising=False)

    assert env_flag("EXAMPLE_FLAG", default=True) is True


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "maybe")

    with pytest.raises(InvalidConfigurationValueError):
        env_flag("EXAMPLE_FLAG")


def test_comparison_settings_follow_hex_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_comparison_settings().number_format is NumberFormat.DECIMAL

    monkeypatch.setenv("ASSETSYNC_HEX_VALUES", "true")

    assert get_comparison_settings().number_format is NumberFormat.HEXADECIMAL


def test_published_config_requires_credentials() -> None:
    with pytest.raises(MissingConfigurationError) as exc:
        get_published_config()

    assert "ASSETSYNC_API_KEY" in str(exc.value)
    assert "ASSETSYNC_USER_NAME" in str(exc.value)


def test_published_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASSETSYNC_API_KEY", "key")
    monkeypatch.setenv("ASSETSYNC_USER_NAME", "user")

    config = get_published_config()

    assert (config.api_key, config.user_name) == ("key", "user")
    assert config.resilience.base_url == PUBLISHED_BASE_URL
    assert config.resilience.ratelimit is not None


def test_published_config_accepts_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASSETSYNC_API_KEY", "key")
    monkeypatch.setenv("ASSETSYNC_USER_NAME", "user")
    monkeypatch.setenv("ASSETSYNC_BASE_URL", "https://mirror.test/API/")

    assert get_published_config().resilience.base_url == "https://mirror.test/API/"

    custom = ResilienceConfig(name="custom")
    assert get_published_config(resilience=custom).resilience is custom


def test_configure_logging_reads_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    monkeypatch.setenv("ASSETSYNC_LOG_LEVEL", "debug")

    configure_logging()

    assert captured["level"] == logging.DEBUG
    assert captured["force"] is False


def test_configure_logging_ignores_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    monkeypatch.setenv("ASSETSYNC_LOG_LEVEL", "chatty")

    configure_logging()

    assert captured["level"] == logging.INFO
