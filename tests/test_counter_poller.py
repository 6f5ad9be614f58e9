"""Occupancy counter poll tests."""

import threading

import pytest

from libs.core.application.counter_poller import CounterPoller
from libs.core.application.credential_gate import CredentialGate
from libs.core.domain.errors import MalformedResponseError, TransportError


def _poller(feed_service, with_secret: bool = True, interval_sec: float = 2.0):
    credentials = CredentialGate()
    if with_secret:
        credentials.set("s3cret")
    return CounterPoller(
        source=feed_service,
        credentials=credentials,
        interval_sec=interval_sec,
    )


def test_failed_tick_does_not_block_next_update(feed_service) -> None:
    feed_service.counters.extend([TransportError("down", status=503), 17])
    poller = _poller(feed_service)

    assert poller.tick() is False
    assert poller.latest == 0
    assert poller.tick() is True
    assert poller.latest == 17


def test_malformed_counter_keeps_previous_value(feed_service) -> None:
    feed_service.counters.extend([4, MalformedResponseError("no row")])
    poller = _poller(feed_service)

    poller.tick()
    poller.tick()

    assert poller.latest == 4


def test_tick_without_credential_skips_fetch(feed_service) -> None:
    poller = _poller(feed_service, with_secret=False)

    assert poller.tick() is False
    assert feed_service.counter_calls == 0


def test_observers_receive_latest_value(feed_service) -> None:
    feed_service.counters.extend([3, 5])
    poller = _poller(feed_service)
    seen: list[int] = []
    poller.subscribe(seen.append)

    poller.tick()
    poller.tick()

    assert seen == [3, 5]


def test_scheduled_ticks_survive_failures_and_stop_cleanly(feed_service) -> None:
    feed_service.counters.extend([TransportError("down"), TransportError("down"), 9])
    poller = _poller(feed_service, interval_sec=0.01)
    updated = threading.Event()
    poller.subscribe(lambda value: updated.set())

    poller.start()
    try:
        assert updated.wait(timeout=5)
    finally:
        poller.stop(timeout_sec=5)

    assert poller.latest == 9
    assert poller.running is False
    assert feed_service.counter_calls >= 3


def test_interval_must_be_positive(feed_service) -> None:
    with pytest.raises(ValueError):
        _poller(feed_service, interval_sec=0)


def test_unexpected_tick_error_does_not_end_schedule(feed_service) -> None:
    feed_service.counters.extend([RuntimeError("socket reset"), 11])
    poller = _poller(feed_service, interval_sec=0.01)
    updated = threading.Event()
    poller.subscribe(lambda value: updated.set())

    poller.start()
    try:
        assert updated.wait(timeout=5)
        assert poller.running is True
    finally:
        poller.stop(timeout_sec=5)

    assert poller.latest == 11
