"""Shared fakes for feed tests."""

from __future__ import annotations

import threading

import pytest

from libs.core.domain.entities import Alert


class FakeFeedService:
    """Scripted stand-in for the remote alert service.

    Queued results are consumed in order; an exception instance is raised
    instead of returned. Set ``hold_fetch`` to park ``fetch_page`` until
    ``release_fetch`` is set.
    """

    def __init__(self) -> None:
        self.pages: list[list[Alert] | Exception] = []
        self.counters: list[int | Exception] = []
        self.resolve_errors: dict[int, Exception] = {}
        self.fetch_calls: list[tuple[str, int]] = []
        self.resolve_calls: list[tuple[str, int]] = []
        self.counter_calls = 0
        self.hold_fetch = False
        self.fetch_entered = threading.Event()
        self.release_fetch = threading.Event()

    def fetch_page(self, secret: str, cutoff: int) -> list[Alert]:
        self.fetch_calls.append((secret, cutoff))
        self.fetch_entered.set()
        if self.hold_fetch:
            self.release_fetch.wait(timeout=5)
        result = self.pages.pop(0) if self.pages else []
        if isinstance(result, Exception):
            raise result
        return list(result)

    def resolve(self, secret: str, alert_id: int) -> None:
        self.resolve_calls.append((secret, alert_id))
        error = self.resolve_errors.get(alert_id)
        if error is not None:
            raise error

    def fetch_counter(self, secret: str) -> int:
        self.counter_calls += 1
        result = self.counters.pop(0) if self.counters else 0
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def feed_service() -> FakeFeedService:
    return FakeFeedService()


@pytest.fixture
def make_feed_service() -> type[FakeFeedService]:
    return FakeFeedService
