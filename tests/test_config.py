from __future__ import annotations

import logging

import pytest

from larder.config import (
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_MAX_PAGE_BYTES,
    DEFAULT_USER_AGENT,
    FetchSettings,
)


def test_settings_defaults_from_empty_env() -> None:
    settings = FetchSettings.from_env({})

    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.timeout_seconds == DEFAULT_FETCH_TIMEOUT_SECONDS
    assert settings.max_page_bytes == DEFAULT_MAX_PAGE_BYTES
    assert settings.log_level == "INFO"
    assert settings.log_level_number == logging.INFO


def test_settings_read_overrides() -> None:
    settings = FetchSettings.from_env(
        {
            "LARDER_USER_AGENT": "larder-test/1.0",
            "LARDER_FETCH_TIMEOUT_SECONDS": "2.5",
            "LARDER_MAX_PAGE_BYTES": "4096",
            "LARDER_LOG_LEVEL": "debug",
        }
    )

    assert settings.user_agent == "larder-test/1.0"
    assert settings.timeout_seconds == 2.5
    assert settings.max_page_bytes == 4096
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("env", "name"),
    [
        ({"LARDER_USER_AGENT": "  "}, "LARDER_USER_AGENT"),
        ({"LARDER_FETCH_TIMEOUT_SECONDS": "0"}, "LARDER_FETCH_TIMEOUT_SECONDS"),
        ({"LARDER_FETCH_TIMEOUT_SECONDS": "soon"}, "LARDER_FETCH_TIMEOUT_SECONDS"),
        ({"LARDER_MAX_PAGE_BYTES": "10"}, "LARDER_MAX_PAGE_BYTES"),
        ({"LARDER_MAX_PAGE_BYTES": ""}, "LARDER_MAX_PAGE_BYTES"),
        ({"LARDER_LOG_LEVEL": "chatty"}, "LARDER_LOG_LEVEL"),
    ],
)
def test_settings_invalid_values_fail_fast(env: dict[str, str], name: str) -> None:
    with pytest.raises(ValueError, match=name):
        FetchSettings.from_env(env)
