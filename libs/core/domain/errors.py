class FeedError(Exception):
    """Base error for alert feed operations."""


class TransportError(FeedError):
    """Remote call failed at the network level or returned a non-2xx status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponseError(FeedError):
    """Remote payload does not have the expected shape."""


class CredentialMissing(FeedError):
    """Operation attempted before an access secret was supplied."""
