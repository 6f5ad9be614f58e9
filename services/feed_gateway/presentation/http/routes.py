from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from libs.core.application.contracts import FeedState
from libs.core.domain.entities import Alert, FeedSnapshot
from services.feed_gateway.dependencies import get_feed_session

router = APIRouter()


class CredentialRequest(BaseModel):
    api_key: str = Field(min_length=1)


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/ready")
def ready() -> dict[str, str]:
    return {"status": "ready"}


@router.get("/version")
def version() -> dict[str, str]:
    return {"version": "0.1.0"}


@router.post("/v1/session/credential")
def set_credential(payload: CredentialRequest) -> dict[str, object]:
    session = get_feed_session()
    try:
        session.credentials.set(payload.api_key)
    except ValueError as error:
        raise HTTPException(status_code=409, detail=str(error)) from error
    return _snapshot_to_dict(session.synchronizer.snapshot())


@router.get("/v1/session")
def get_session_status() -> dict[str, object]:
    session = get_feed_session()
    return {
        "phase": session.synchronizer.snapshot().phase.value,
        "credential_set": session.credentials.is_set,
    }


@router.get("/v1/alerts")
def get_alerts() -> dict[str, object]:
    return _snapshot_to_dict(get_feed_session().synchronizer.snapshot())


@router.post("/v1/alerts/load-more")
def load_more_alerts() -> dict[str, object]:
    return _snapshot_to_dict(get_feed_session().synchronizer.load_more())


@router.get("/v1/alerts/{alert_id}")
def get_alert_details(alert_id: int) -> dict[str, object]:
    alert = get_feed_session().synchronizer.get(alert_id)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")
    return _alert_to_dict(alert)


@router.post("/v1/alerts/{alert_id}/resolve")
def resolve_alert(alert_id: int) -> dict[str, object]:
    return _snapshot_to_dict(get_feed_session().synchronizer.resolve(alert_id))


@router.post("/v1/alerts/{alert_id}/report")
def report_alert(alert_id: int) -> dict[str, object]:
    return resolve_alert(alert_id)


@router.post("/v1/alerts/{alert_id}/false-positive")
def mark_false_positive(alert_id: int) -> dict[str, object]:
    return resolve_alert(alert_id)


@router.get("/v1/counter")
def get_counter() -> dict[str, int]:
    return {"count": get_feed_session().poller.latest}


def _snapshot_to_dict(snapshot: FeedSnapshot) -> FeedState:
    return {
        "alerts": [_alert_to_dict(alert) for alert in snapshot.alerts],
        "cutoff": snapshot.cutoff,
        "loading": snapshot.fetching,
        "error": snapshot.error,
        "phase": snapshot.phase.value,
    }


def _alert_to_dict(alert: Alert) -> dict[str, object]:
    return {
        "alert_id": str(alert.alert_id),
        "resource_ref": alert.resource_ref,
        "description": alert.description,
        "observed_at": alert.observed_at,
    }
