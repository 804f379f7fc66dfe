from fastapi import APIRouter, Depends, HTTPException, Query

from spas.schemas.region import (
    Region,
    RegionAlerts,
    RegionDetail,
    RegionOutage,
    RegionOutageListing,
    SourceDiagnostics,
)
from spas.schemas.trend import TrendPeriod, TrendPoint
from spas.dependencies import get_region_source, get_trend_synthesizer
from spas.services.alert_rules import describe_region, generate_alerts
from spas.services.region_loader import CsvRegionSource, find_region
from spas.services.trends import (
    AGGREGATE_NOISE,
    ALL_REGIONS,
    REGION_NOISE,
    TrendSynthesizer,
    cross_region_baseline,
    region_baseline,
)
from spas.timeutil import parse_datetime

router = APIRouter(prefix="/power-data", tags=["power-data"])


@router.get("/", response_model=list[Region])
async def list_regions(source: CsvRegionSource = Depends(get_region_source)):
    """All region rows from the power data file (empty if unreadable)."""
    result = await source.load()
    return result.regions


@router.get("/regions", response_model=list[str])
async def list_region_names(source: CsvRegionSource = Depends(get_region_source)):
    result = await source.load()
    return [r.name for r in result.regions]


@router.get("/regions/{name}", response_model=RegionDetail)
async def get_region(name: str, source: CsvRegionSource = Depends(get_region_source)):
    """One region with its status badges and derived alerts."""
    result = await source.load()
    region = find_region(result.regions, name)
    if region is None:
        raise HTTPException(status_code=404, detail="Region not found")
    return describe_region(region)


@router.get("/outages", response_model=RegionOutageListing)
async def list_region_outages(source: CsvRegionSource = Depends(get_region_source)):
    """Outages embedded in the region file, flattened and split by status."""
    result = await source.load()
    listing = RegionOutageListing()
    for region in result.regions:
        for status, outages, bucket in (
            ("active", region.active_outages, listing.active),
            ("scheduled", region.scheduled_outages, listing.scheduled),
        ):
            for o in outages:
                bucket.append(RegionOutage(
                    id=f"{region.name}-{o.location}-{status}",
                    location=o.location,
                    region=region.name,
                    start_time=parse_datetime(o.start_time),
                    estimated_duration=o.duration,
                    affected_users=o.users_affected,
                    status=status,
                    cause=o.cause,
                ))
    return listing


@router.get("/trends", response_model=list[TrendPoint])
async def get_trends(
    region: str | None = Query(None),
    period: TrendPeriod = Query("24h"),
    source: CsvRegionSource = Depends(get_region_source),
    synthesizer: TrendSynthesizer = Depends(get_trend_synthesizer),
):
    """Simulated trend series for one region, or averaged across all regions."""
    result = await source.load()
    if region and region != ALL_REGIONS:
        match = find_region(result.regions, region)
        if match is None:
            raise HTTPException(status_code=404, detail="Region not found")
        return synthesizer.synthesize(region_baseline(match), period, REGION_NOISE)
    return synthesizer.synthesize(cross_region_baseline(result.regions), period, AGGREGATE_NOISE)


@router.get("/alerts", response_model=list[RegionAlerts])
async def list_region_alerts(source: CsvRegionSource = Depends(get_region_source)):
    """Alert messages derived from each region's current readings."""
    result = await source.load()
    return [RegionAlerts(region=r.name, alerts=generate_alerts(r)) for r in result.regions]


@router.get("/diagnostics", response_model=SourceDiagnostics)
async def get_diagnostics(source: CsvRegionSource = Depends(get_region_source)):
    """Whether the power data file was readable, and what parsing fell back to defaults."""
    result = await source.load()
    return SourceDiagnostics(
        source=result.source,
        available=result.available,
        region_count=len(result.regions),
        warnings=result.warnings,
    )
