from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from spas.dependencies import get_reading_store
from spas.schemas.common import ListEnvelope, StatsEnvelope
from spas.schemas.reading import PowerReading, ReadingCreate, ReadingStats, ReadingSubmitted
from spas.services.alert_rules import reading_alerts
from spas.services.readings import InMemoryReadingStore
from spas.services.store import NotFoundError
from spas.timeutil import Period, as_utc

router = APIRouter(prefix="/power", tags=["power"])


@router.get("/current", response_model=ListEnvelope[PowerReading])
async def get_current_readings(
    location: str | None = Query(None),
    region: str | None = Query(None),
    store: InMemoryReadingStore = Depends(get_reading_store),
):
    """Most recent reading for each location."""
    readings = store.current(location=location, region=region)
    return ListEnvelope[PowerReading](data=readings, count=len(readings))


@router.get("/history", response_model=ListEnvelope[PowerReading])
async def get_reading_history(
    location: str | None = Query(None),
    region: str | None = Query(None),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    store: InMemoryReadingStore = Depends(get_reading_store),
):
    readings = store.history(
        location=location,
        region=region,
        start=as_utc(start_date) if start_date else None,
        end=as_utc(end_date) if end_date else None,
        limit=limit,
    )
    return ListEnvelope[PowerReading](data=readings, count=len(readings))


@router.get("/location/{location}", response_model=ListEnvelope[PowerReading])
async def get_location_readings(
    location: str,
    limit: int = Query(50, ge=1, le=1000),
    store: InMemoryReadingStore = Depends(get_reading_store),
):
    try:
        readings = store.by_location(location, limit=limit)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ListEnvelope[PowerReading](data=readings, count=len(readings))


@router.post("/reading", response_model=ReadingSubmitted, status_code=201)
async def submit_reading(payload: ReadingCreate, store: InMemoryReadingStore = Depends(get_reading_store)):
    """Record a device reading and report any threshold alerts it trips."""
    reading = store.submit(payload)
    alerts = reading_alerts(reading, now=reading.timestamp)
    return ReadingSubmitted(data=reading, alerts=alerts or None)


@router.get("/stats", response_model=StatsEnvelope[ReadingStats])
async def get_reading_stats(
    location: str | None = Query(None),
    region: str | None = Query(None),
    period: Period = Query("24h"),
    store: InMemoryReadingStore = Depends(get_reading_store),
):
    stats = store.stats(period=period, location=location, region=region)
    return StatsEnvelope[ReadingStats](stats=stats, period=period)
