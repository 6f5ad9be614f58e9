from dataclasses import dataclass
from enum import Enum

INITIAL_CUTOFF = 0


class SessionPhase(str, Enum):
    """Lifecycle of one feed session."""

    UNINITIALIZED = "uninitialized"
    SYNCING = "syncing"
    READY = "ready"
    CLOSED = "closed"


@dataclass(frozen=True)
class Alert:
    """Pending safety alert observed in the remote feed."""

    alert_id: int
    resource_ref: str
    description: str
    observed_at: str


@dataclass(frozen=True)
class FeedSnapshot:
    """Read-only view of the synchronized feed handed to observers."""

    alerts: tuple[Alert, ...]
    cutoff: int
    fetching: bool
    error: str | None
    phase: SessionPhase
