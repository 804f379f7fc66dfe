from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from spas.dependencies import get_region_source, get_trend_synthesizer
from spas.schemas.common import ItemEnvelope
from spas.schemas.trend import (
    HourlyReport,
    QualitySummary,
    RegionsReport,
    StabilityMetrics,
    TrendPeriod,
    TrendPoint,
    TrendReport,
)
from spas.services import analytics
from spas.services.region_loader import CsvRegionSource, find_region
from spas.services.trends import (
    AGGREGATE_NOISE,
    ALL_REGIONS,
    REGION_NOISE,
    TrendSynthesizer,
    cross_region_baseline,
    region_baseline,
)
from spas.timeutil import utcnow

router = APIRouter(prefix="/analytics", tags=["analytics"])


async def _series(
    source: CsvRegionSource,
    synthesizer: TrendSynthesizer,
    period: str,
    region: str | None = None,
) -> list[TrendPoint]:
    result = await source.load()
    if region and region != ALL_REGIONS:
        match = find_region(result.regions, region)
        if match is None:
            raise HTTPException(status_code=404, detail="Region not found")
        return synthesizer.synthesize(region_baseline(match), period, REGION_NOISE)
    return synthesizer.synthesize(cross_region_baseline(result.regions), period, AGGREGATE_NOISE)


@router.get("/trends", response_model=TrendReport)
async def get_trends(
    period: TrendPeriod = Query("24h"),
    region: str | None = Query(None),
    source: CsvRegionSource = Depends(get_region_source),
    synthesizer: TrendSynthesizer = Depends(get_trend_synthesizer),
):
    """Simulated power-quality series with its averages."""
    points = await _series(source, synthesizer, period, region)
    return TrendReport(data=points, stats=analytics.trend_averages(points, period), region=region)


@router.get("/stability", response_model=ItemEnvelope[StabilityMetrics])
async def get_stability(
    period: TrendPeriod = Query("24h"),
    region: str | None = Query(None),
    source: CsvRegionSource = Depends(get_region_source),
    synthesizer: TrendSynthesizer = Depends(get_trend_synthesizer),
):
    points = await _series(source, synthesizer, period, region)
    return ItemEnvelope[StabilityMetrics](data=analytics.stability_metrics(points))


@router.get("/summary", response_model=ItemEnvelope[QualitySummary])
async def get_summary(
    period: TrendPeriod = Query("24h"),
    source: CsvRegionSource = Depends(get_region_source),
    synthesizer: TrendSynthesizer = Depends(get_trend_synthesizer),
):
    """Voltage/frequency/stability bucket counts over the simulated series."""
    points = await _series(source, synthesizer, period)
    return ItemEnvelope[QualitySummary](data=analytics.quality_summary(points, period))


@router.get("/regions", response_model=RegionsReport)
async def get_regions(source: CsvRegionSource = Depends(get_region_source)):
    result = await source.load()
    overviews, summary = analytics.region_overviews(result.regions)
    return RegionsReport(data=overviews, summary=summary)


@router.get("/hourly", response_model=HourlyReport)
async def get_hourly(
    date: date | None = Query(None),
    synthesizer: TrendSynthesizer = Depends(get_trend_synthesizer),
):
    """Simulated hour-by-hour profile for one day (today by default)."""
    day = date or utcnow().date()
    return HourlyReport(date=day, data=synthesizer.hourly(day))
