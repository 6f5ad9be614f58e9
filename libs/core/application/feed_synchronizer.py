from __future__ import annotations

import logging
import threading
from typing import Callable

from libs.core.application.contracts import AlertFeedGateway, FeedObserver
from libs.core.application.credential_gate import CredentialGate
from libs.core.domain.entities import (
    INITIAL_CUTOFF,
    Alert,
    FeedSnapshot,
    SessionPhase,
)
from libs.core.domain.errors import CredentialMissing, FeedError

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch alerts. Please try again later."
RESOLVE_FAILED_MESSAGE = "Failed to resolve alert. Please try again."


class FeedSynchronizer:
    """Owns the synchronized alert collection and its pagination cursor.

    The collection holds each alert id at most once and is kept sorted by id,
    newest first. Network calls run outside the state lock; every mutation
    happens after the call returns.
    """

    def __init__(
        self,
        gateway: AlertFeedGateway,
        credentials: CredentialGate,
    ) -> None:
        self._gateway = gateway
        self._credentials = credentials
        self._lock = threading.Lock()
        self._alerts: list[Alert] = []
        self._cutoff = INITIAL_CUTOFF
        self._fetching = False
        self._error: str | None = None
        self._phase = SessionPhase.UNINITIALIZED
        self._observers: list[FeedObserver] = []

    def snapshot(self) -> FeedSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def get(self, alert_id: int) -> Alert | None:
        with self._lock:
            for alert in self._alerts:
                if alert.alert_id == alert_id:
                    return alert
        return None

    def subscribe(self, observer: FeedObserver) -> Callable[[], None]:
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def open_session(self) -> FeedSnapshot:
        """Run the first fetch of the session once the credential is available."""
        if not self._credentials.is_set:
            return self.snapshot()
        with self._lock:
            if self._phase is not SessionPhase.UNINITIALIZED:
                return self._snapshot_locked()
            self._phase = SessionPhase.SYNCING
        phase_changed = False
        try:
            self.load_more()
        finally:
            with self._lock:
                if self._phase is SessionPhase.SYNCING:
                    self._phase = SessionPhase.READY
                    phase_changed = True
                snapshot = self._snapshot_locked()
        if phase_changed:
            self._publish(snapshot)
        return snapshot

    def load_more(self) -> FeedSnapshot:
        try:
            secret = self._credentials.get()
        except CredentialMissing:
            logger.debug("Skipping alert fetch: credential not set")
            return self.snapshot()

        with self._lock:
            if self._fetching or self._phase is SessionPhase.CLOSED:
                return self._snapshot_locked()
            self._fetching = True
            self._error = None
            cutoff = self._cutoff
            snapshot = self._snapshot_locked()
        self._publish(snapshot)

        page: list[Alert] | None = None
        try:
            page = self._gateway.fetch_page(secret, cutoff)
        except FeedError as error:
            logger.warning("Alert page fetch failed (cutoff=%s): %s", cutoff, error)
        finally:
            with self._lock:
                self._fetching = False
                if self._phase is not SessionPhase.CLOSED:
                    if page is None:
                        self._error = FETCH_FAILED_MESSAGE
                    elif page:
                        self._merge_page(page)
                snapshot = self._snapshot_locked()

        self._publish(snapshot)
        return snapshot

    def resolve(self, alert_id: int) -> FeedSnapshot:
        try:
            secret = self._credentials.get()
        except CredentialMissing:
            logger.debug("Skipping resolve of alert %s: credential not set", alert_id)
            return self.snapshot()

        try:
            self._gateway.resolve(secret, alert_id)
        except FeedError as error:
            logger.warning("Resolve of alert %s failed: %s", alert_id, error)
            with self._lock:
                if self._phase is not SessionPhase.CLOSED:
                    self._error = RESOLVE_FAILED_MESSAGE
                snapshot = self._snapshot_locked()
        else:
            with self._lock:
                if self._phase is not SessionPhase.CLOSED:
                    # filtering keeps the descending order
                    self._alerts = [
                        alert for alert in self._alerts if alert.alert_id != alert_id
                    ]
                snapshot = self._snapshot_locked()

        self._publish(snapshot)
        return snapshot

    def close(self) -> None:
        with self._lock:
            self._phase = SessionPhase.CLOSED
            self._observers.clear()

    def _merge_page(self, page: list[Alert]) -> None:
        known_ids = {alert.alert_id for alert in self._alerts}
        fresh: list[Alert] = []
        for alert in page:
            if alert.alert_id in known_ids:
                continue
            known_ids.add(alert.alert_id)
            fresh.append(alert)

        self._alerts = _sort_newest_first([*self._alerts, *fresh])

        page_max = max(alert.alert_id for alert in page)
        if page_max < self._cutoff:
            logger.warning(
                "Page max id %s is below cutoff %s, keeping cutoff",
                page_max,
                self._cutoff,
            )
        self._cutoff = max(self._cutoff, page_max)
        logger.info(
            "Merged %d of %d fetched alert(s), cutoff=%s",
            len(fresh),
            len(page),
            self._cutoff,
        )

    def _snapshot_locked(self) -> FeedSnapshot:
        return FeedSnapshot(
            alerts=tuple(self._alerts),
            cutoff=self._cutoff,
            fetching=self._fetching,
            error=self._error,
            phase=self._phase,
        )

    def _publish(self, snapshot: FeedSnapshot) -> None:
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Feed observer failed")


def _sort_newest_first(alerts: list[Alert]) -> list[Alert]:
    return sorted(alerts, key=lambda item: item.alert_id, reverse=True)
