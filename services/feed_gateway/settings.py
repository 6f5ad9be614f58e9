"""Environment-driven settings for the feed gateway."""

import os
from dataclasses import dataclass

DEFAULT_API_BASE = "https://hackaton-processor-001.azurewebsites.net"


@dataclass(frozen=True)
class Settings:
    api_base: str
    page_size: int
    timeout_sec: float
    counter_id: str
    poll_interval_sec: float
    log_level: str


def load_settings() -> Settings:
    return Settings(
        api_base=os.getenv("ALERT_FEED_API_BASE", DEFAULT_API_BASE),
        page_size=int(os.getenv("ALERT_FEED_PAGE_SIZE", "100")),
        timeout_sec=float(os.getenv("ALERT_FEED_TIMEOUT_SEC", "15")),
        counter_id=os.getenv("COUNTER_ID", "unique_counter"),
        poll_interval_sec=float(os.getenv("COUNTER_POLL_INTERVAL_SEC", "2.0")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
