"""Tests for environment-based configuration."""

from __future__ import annotations

import logging

import pytest

from retrycase.foundation.config import clear_settings_cache, configure_logging, get_settings


def test_defaults() -> None:
    s = get_settings()
    assert s.retry.attempts == 3
    assert s.retry.multiplier == 2.0
    assert s.retry.jitter_ratio == 0.5
    assert s.retry.seed is None
    assert s.log.level == "WARNING"


def test_cached() -> None:
    assert get_settings() is get_settings()


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RETRYCASE_RETRY__MULTIPLIER", "3")
    monkeypatch.setenv("RETRYCASE_RETRY__MAX_DELAY", "10")
    clear_settings_cache()
    s = get_settings()
    assert s.retry.multiplier == 3.0
    assert s.retry.max_delay == 10.0


def test_configured_backoff_follows_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from retrycase.runtime.retry.backoff import default_backoff

    monkeypatch.setenv("RETRYCASE_RETRY__MULTIPLIER", "4")
    monkeypatch.setenv("RETRYCASE_RETRY__MAX_DELAY", "1")
    clear_settings_cache()
    assert default_backoff().next_delay(0.1) == pytest.approx(0.4)
    assert default_backoff().next_delay(0.5) == 1.0


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = logging.getLogger("retrycase")
    previous = logger.level
    try:
        monkeypatch.setenv("RETRYCASE_LOG__LEVEL", "DEBUG")
        clear_settings_cache()
        assert configure_logging() is logger
        assert logger.level == logging.DEBUG
        configure_logging("ERROR")
        assert logger.level == logging.ERROR
    finally:
        logger.setLevel(previous)
