from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from spas.config import settings
from spas.dependencies import get_alert_store
from spas.schemas.alert import Alert, AlertCreate, AlertStats, AlertType, AlertUpdate, Severity
from spas.schemas.common import ItemEnvelope, ListEnvelope, StatsEnvelope
from spas.services.store import AlertStore, ConflictError, NotFoundError
from spas.timeutil import Period

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("/", response_model=ListEnvelope[Alert])
async def list_alerts(
    type: AlertType | None = Query(None),
    severity: Severity | None = Query(None),
    region: str | None = Query(None),
    status: Literal["all", "active", "resolved"] = Query("all"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    page: int = Query(1, ge=1),
    store: AlertStore = Depends(get_alert_store),
):
    """Alerts, most severe and newest first, paginated."""
    items, pagination = store.query(
        type=type, severity=severity, region=region, status=status, page=page, limit=limit,
    )
    return ListEnvelope[Alert](data=items, pagination=pagination)


@router.get("/active", response_model=ListEnvelope[Alert])
async def list_active_alerts(
    region: str | None = Query(None),
    store: AlertStore = Depends(get_alert_store),
):
    alerts = store.active(region=region)
    return ListEnvelope[Alert](data=alerts, count=len(alerts))


@router.get("/stats", response_model=StatsEnvelope[AlertStats])
async def get_alert_stats(
    region: str | None = Query(None),
    period: Period = Query("24h"),
    store: AlertStore = Depends(get_alert_store),
):
    return StatsEnvelope[AlertStats](stats=store.stats(period=period, region=region), period=period)


@router.get("/{alert_id}", response_model=ItemEnvelope[Alert])
async def get_alert(alert_id: str, store: AlertStore = Depends(get_alert_store)):
    try:
        return ItemEnvelope[Alert](data=store.get(alert_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/", response_model=ItemEnvelope[Alert], status_code=201)
async def create_alert(payload: AlertCreate, store: AlertStore = Depends(get_alert_store)):
    alert = store.create(payload)
    return ItemEnvelope[Alert](message="Alert created successfully", data=alert)


@router.put("/{alert_id}", response_model=ItemEnvelope[Alert])
async def update_alert(alert_id: str, patch: AlertUpdate, store: AlertStore = Depends(get_alert_store)):
    """Overwrite only the fields present in the body."""
    try:
        alert = store.update(alert_id, patch)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ItemEnvelope[Alert](message="Alert updated successfully", data=alert)


@router.patch("/{alert_id}/resolve", response_model=ItemEnvelope[Alert])
async def resolve_alert(alert_id: str, store: AlertStore = Depends(get_alert_store)):
    try:
        alert = store.resolve(alert_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ItemEnvelope[Alert](message="Alert resolved successfully", data=alert)
