from libs.core.application.contracts import AlertFeedService
from libs.core.application.session import FeedSession, build_feed_session
from libs.infra.remote.feed_client import AlertFeedClient
from services.feed_gateway.settings import Settings, load_settings

settings = load_settings()


def _build_session(
    gateway: AlertFeedService | None = None,
) -> FeedSession:
    if gateway is None:
        gateway = AlertFeedClient(
            api_base=settings.api_base,
            page_size=settings.page_size,
            counter_id=settings.counter_id,
            timeout_sec=settings.timeout_sec,
        )
    return build_feed_session(
        gateway=gateway,
        poll_interval_sec=settings.poll_interval_sec,
    )


feed_session = _build_session()


def get_settings() -> Settings:
    return settings


def get_feed_session() -> FeedSession:
    return feed_session


def reset_state(gateway: AlertFeedService | None = None) -> FeedSession:
    """Tear down the current session and start a fresh one."""
    global feed_session
    feed_session.close()
    feed_session = _build_session(gateway)
    return feed_session
