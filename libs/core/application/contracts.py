from typing import Callable, Protocol, TypedDict

from libs.core.domain.entities import Alert, FeedSnapshot

FeedObserver = Callable[[FeedSnapshot], None]
CounterObserver = Callable[[int], None]


class AlertFeedGateway(Protocol):
    """Remote alert feed contract."""

    def fetch_page(self, secret: str, cutoff: int) -> list[Alert]: ...

    def resolve(self, secret: str, alert_id: int) -> None: ...


class CounterSource(Protocol):
    """Remote occupancy counter contract."""

    def fetch_counter(self, secret: str) -> int: ...


class FeedState(TypedDict):
    """Feed state payload returned to the presentation layer."""

    alerts: list[dict[str, object]]
    cutoff: int
    loading: bool
    error: str | None
    phase: str


class AlertFeedService(AlertFeedGateway, CounterSource, Protocol):
    """Remote service serving both the alert feed and the counter."""
