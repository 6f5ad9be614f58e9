from __future__ import annotations

from dataclasses import dataclass

from libs.core.application.contracts import AlertFeedService
from libs.core.application.counter_poller import CounterPoller
from libs.core.application.credential_gate import CredentialGate
from libs.core.application.feed_synchronizer import FeedSynchronizer


@dataclass
class FeedSession:
    """Credential, feed and counter components sharing one session lifetime."""

    credentials: CredentialGate
    synchronizer: FeedSynchronizer
    poller: CounterPoller

    def start(self) -> None:
        self.poller.start()

    def close(self) -> None:
        self.poller.stop()
        self.synchronizer.close()


def build_feed_session(
    gateway: AlertFeedService,
    poll_interval_sec: float,
) -> FeedSession:
    """Wire a session around one client that serves both the feed and the counter."""
    credentials = CredentialGate()
    synchronizer = FeedSynchronizer(gateway=gateway, credentials=credentials)
    poller = CounterPoller(
        source=gateway,
        credentials=credentials,
        interval_sec=poll_interval_sec,
    )
    credentials.on_available(synchronizer.open_session)
    return FeedSession(
        credentials=credentials,
        synchronizer=synchronizer,
        poller=poller,
    )
