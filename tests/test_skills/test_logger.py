"""Tests for logging setup."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from structlog.testing import capture_logs

from skillsync.logger import setup_logging

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _restore_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield
    setup_logging()


def test_level_filters_lower_events() -> None:
    log = setup_logging("warning")

    with capture_logs() as captured:
        log.info("Pushed skill", skill="alpha")
        log.warning("Sync conflict", skill="alpha")

    assert [entry["event"] for entry in captured] == ["Sync conflict"]
    assert captured[0]["log_level"] == "warning"


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    log = setup_logging()

    with capture_logs() as captured:
        log.warning("Ignored")
        log.error("Kept")

    assert [entry["event"] for entry in captured] == ["Kept"]


def test_unknown_level_falls_back_to_info() -> None:
    log = setup_logging("chatty")

    with capture_logs() as captured:
        log.debug("Hidden")
        log.info("Shown")

    assert [entry["event"] for entry in captured] == ["Shown"]
