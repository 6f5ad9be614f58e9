"""HTTP client for the remote alert feed service."""

from __future__ import annotations

import json
import logging
from http.client import HTTPException
from typing import Any
from urllib import request
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode

from pydantic import ValidationError

from libs.core.domain.entities import Alert
from libs.core.domain.errors import MalformedResponseError, TransportError
from libs.infra.remote.payloads import CounterPage, FileDataPage

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"
DEFAULT_PAGE_SIZE = 100
DEFAULT_COUNTER_ID = "unique_counter"
DEFAULT_TIMEOUT_SEC = 15.0


class AlertFeedClient:
    """Stateless wrapper over the feed, resolve and counter endpoints."""

    def __init__(
        self,
        api_base: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        counter_id: str = DEFAULT_COUNTER_ID,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        self._api_base = api_base.rstrip("/")
        self._page_size = page_size
        self._counter_id = counter_id
        self._timeout_sec = timeout_sec

    def fetch_page(self, secret: str, cutoff: int) -> list[Alert]:
        query = urlencode(
            {
                "cutoffId": cutoff,
                "hasAlert": "false",
                "pageSize": self._page_size,
                "resolvedAlert": "false",
            }
        )
        payload = self._send("GET", f"/FileData?{query}", secret)
        try:
            page = FileDataPage.model_validate(payload)
        except ValidationError as error:
            raise MalformedResponseError(f"invalid alert page: {error}") from error
        return [
            Alert(
                alert_id=row.file_id,
                resource_ref=row.sas_url,
                description=row.alert,
                observed_at=row.timestamp,
            )
            for row in page.data
        ]

    def resolve(self, secret: str, alert_id: int) -> None:
        query = urlencode({"fileId": str(alert_id)})
        self._send("POST", f"/resolvealert?{query}", secret, expect_body=False)

    def fetch_counter(self, secret: str) -> int:
        query = urlencode({"counterId": self._counter_id})
        payload = self._send("GET", f"/Counter?{query}", secret)
        try:
            page = CounterPage.model_validate(payload)
        except ValidationError as error:
            raise MalformedResponseError(f"invalid counter payload: {error}") from error
        for row in page.data:
            if row.row_key == self._counter_id:
                return row.count
        raise MalformedResponseError(f"counter {self._counter_id!r} not in response")

    def _send(
        self,
        method: str,
        path: str,
        secret: str,
        expect_body: bool = True,
    ) -> Any:
        url = f"{self._api_base}{path}"
        req = request.Request(
            url=url,
            data=b"" if method == "POST" else None,
            headers={API_KEY_HEADER: secret, "Accept": "application/json"},
            method=method,
        )
        try:
            with request.urlopen(req, timeout=self._timeout_sec) as response:
                status = int(response.status)
                raw = response.read()
        except HTTPError as error:
            error.close()
            raise TransportError(
                f"{method} {path} returned {error.code}", status=error.code
            ) from error
        except (URLError, OSError, HTTPException) as error:
            raise TransportError(f"{method} {path} failed: {error}") from error

        if not 200 <= status < 300:
            raise TransportError(f"{method} {path} returned {status}", status=status)
        logger.debug("%s %s -> %s", method, path, status)
        if not expect_body:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            raise MalformedResponseError(f"{method} {path} returned non-JSON body") from error
