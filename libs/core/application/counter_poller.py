"""Periodic occupancy counter poll, isolated from the alert feed path."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from libs.core.application.contracts import CounterObserver, CounterSource
from libs.core.application.credential_gate import CredentialGate
from libs.core.domain.errors import CredentialMissing, FeedError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SEC = 2.0


class CounterPoller:
    """Fetches the counter on a fixed period and publishes the latest value."""

    def __init__(
        self,
        source: CounterSource,
        credentials: CredentialGate,
        interval_sec: float = DEFAULT_POLL_INTERVAL_SEC,
    ) -> None:
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        self._source = source
        self._credentials = credentials
        self._interval_sec = interval_sec
        self._lock = threading.Lock()
        self._latest = 0
        self._observers: list[CounterObserver] = []
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def latest(self) -> int:
        return self._latest

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def subscribe(self, observer: CounterObserver) -> Callable[[], None]:
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def start(self) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._stop.clear()
            self._thread = threading.Thread(
                target=self._run, name="counter-poller", daemon=True
            )
            self._thread.start()

    def stop(self, timeout_sec: float | None = None) -> None:
        self._stop.set()
        with self._lock:
            thread = self._thread
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout_sec)

    def tick(self) -> bool:
        """Poll once. Returns True when a new value was published."""
        try:
            secret = self._credentials.get()
        except CredentialMissing:
            return False

        try:
            value = self._source.fetch_counter(secret)
        except FeedError as error:
            logger.warning("Counter poll failed: %s", error)
            return False

        with self._lock:
            self._latest = value
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(value)
            except Exception:
                logger.exception("Counter observer failed")
        return True

    def _run(self) -> None:
        while not self._stop.wait(self._interval_sec):
            try:
                self.tick()
            except Exception:
                logger.exception("Counter tick failed")
