"""Credential gate tests."""

import pytest

from libs.core.application.credential_gate import CredentialGate
from libs.core.domain.errors import CredentialMissing


def test_get_before_set_raises() -> None:
    gate = CredentialGate()

    assert gate.is_set is False
    with pytest.raises(CredentialMissing):
        gate.get()


def test_set_once_and_notify_listeners() -> None:
    gate = CredentialGate()
    calls: list[str] = []
    gate.on_available(lambda: calls.append("ready"))

    gate.set("key-1")

    assert gate.get() == "key-1"
    assert calls == ["ready"]


def test_listener_added_after_set_runs_immediately() -> None:
    gate = CredentialGate()
    gate.set("key-1")
    calls: list[str] = []

    gate.on_available(lambda: calls.append("ready"))

    assert calls == ["ready"]


def test_second_set_is_rejected() -> None:
    gate = CredentialGate()
    gate.set("key-1")

    with pytest.raises(ValueError, match="already set"):
        gate.set("key-2")
    assert gate.get() == "key-1"


def test_empty_secret_is_rejected() -> None:
    gate = CredentialGate()

    with pytest.raises(ValueError):
        gate.set("")
    assert gate.is_set is False
