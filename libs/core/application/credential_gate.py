from __future__ import annotations

import logging
import threading
from typing import Callable

from libs.core.domain.errors import CredentialMissing

logger = logging.getLogger(__name__)


class CredentialGate:
    """Holds the access secret for one session.

    The secret is set once and never replaced. Components that need it call
    ``get()``; listeners registered with ``on_available`` run after it is set.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._secret: str | None = None
        self._listeners: list[Callable[[], object]] = []

    @property
    def is_set(self) -> bool:
        return self._secret is not None

    def set(self, secret: str) -> None:
        if not secret:
            raise ValueError("Credential must not be empty")
        with self._lock:
            if self._secret is not None:
                raise ValueError("Credential already set")
            self._secret = secret
            listeners = list(self._listeners)
        logger.info("Credential set, enabling %d dependent component(s)", len(listeners))
        for listener in listeners:
            listener()

    def get(self) -> str:
        secret = self._secret
        if secret is None:
            raise CredentialMissing("Credential not set")
        return secret

    def on_available(self, listener: Callable[[], object]) -> None:
        with self._lock:
            if self._secret is None:
                self._listeners.append(listener)
                return
        listener()
