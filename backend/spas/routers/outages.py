from fastapi import APIRouter, Depends, HTTPException, Query

from spas.config import settings
from spas.dependencies import get_outage_store
from spas.schemas.common import ItemEnvelope, ListEnvelope, StatsEnvelope
from spas.schemas.outage import Outage, OutageCreate, OutageStats, OutageStatus, OutageUpdate
from spas.services.store import ConflictError, NotFoundError, OutageStore
from spas.timeutil import Period

router = APIRouter(prefix="/outages", tags=["outages"])


@router.get("/", response_model=ListEnvelope[Outage])
async def list_outages(
    status: OutageStatus | None = Query(None),
    region: str | None = Query(None),
    location: str | None = Query(None),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    page: int = Query(1, ge=1),
    store: OutageStore = Depends(get_outage_store),
):
    """Outages, latest start first, paginated."""
    items, pagination = store.query(
        status=status, region=region, location=location, page=page, limit=limit,
    )
    return ListEnvelope[Outage](data=items, pagination=pagination)


@router.get("/active", response_model=ListEnvelope[Outage])
async def list_active_outages(
    region: str | None = Query(None),
    store: OutageStore = Depends(get_outage_store),
):
    outages = store.active(region=region)
    return ListEnvelope[Outage](data=outages, count=len(outages))


@router.get("/stats", response_model=StatsEnvelope[OutageStats])
async def get_outage_stats(
    region: str | None = Query(None),
    period: Period = Query("24h"),
    store: OutageStore = Depends(get_outage_store),
):
    return StatsEnvelope[OutageStats](stats=store.stats(period=period, region=region), period=period)


@router.get("/{outage_id}", response_model=ItemEnvelope[Outage])
async def get_outage(outage_id: str, store: OutageStore = Depends(get_outage_store)):
    try:
        return ItemEnvelope[Outage](data=store.get(outage_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/", response_model=ItemEnvelope[Outage], status_code=201)
async def create_outage(payload: OutageCreate, store: OutageStore = Depends(get_outage_store)):
    outage = store.create(payload)
    return ItemEnvelope[Outage](message="Outage created successfully", data=outage)


@router.put("/{outage_id}", response_model=ItemEnvelope[Outage])
async def update_outage(outage_id: str, patch: OutageUpdate, store: OutageStore = Depends(get_outage_store)):
    """Overwrite only the fields present in the body."""
    try:
        outage = store.update(outage_id, patch)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ItemEnvelope[Outage](message="Outage updated successfully", data=outage)


@router.patch("/{outage_id}/resolve", response_model=ItemEnvelope[Outage])
async def resolve_outage(outage_id: str, store: OutageStore = Depends(get_outage_store)):
    try:
        outage = store.resolve(outage_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ItemEnvelope[Outage](message="Outage resolved successfully", data=outage)
