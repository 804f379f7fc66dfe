"""Aggregates over trend series and region rows for the analytics views."""

from spas.schemas.region import Region
from spas.schemas.trend import (
    FrequencySummary,
    QualitySummary,
    RegionOverview,
    RegionsSummary,
    StabilityLevels,
    StabilityMetrics,
    StabilitySummary,
    TrendAverages,
    TrendPoint,
    VoltageSummary,
)
from spas.services.status import EXCELLENT, GOOD, NORMAL, STABLE, classify_frequency, classify_stability, classify_voltage


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def trend_averages(points: list[TrendPoint], period: str) -> TrendAverages:
    return TrendAverages(
        avg_voltage=round(_mean([p.voltage for p in points]), 1),
        avg_frequency=round(_mean([p.frequency for p in points]), 1),
        avg_stability=round(_mean([p.stability for p in points])),
        period=period,
    )


def stability_levels(values: list[float]) -> StabilityLevels:
    tiers = [classify_stability(v).status for v in values]
    return StabilityLevels(
        excellent=tiers.count(EXCELLENT),
        good=tiers.count(GOOD),
        poor=len(tiers) - tiers.count(EXCELLENT) - tiers.count(GOOD),
    )


def stability_metrics(points: list[TrendPoint]) -> StabilityMetrics:
    values = [p.stability for p in points]
    return StabilityMetrics(
        avg_stability=round(_mean(values)),
        levels=stability_levels(values),
        total_readings=len(points),
    )


def quality_summary(points: list[TrendPoint], period: str) -> QualitySummary:
    voltages = [p.voltage for p in points]
    frequencies = [p.frequency for p in points]
    stabilities = [p.stability for p in points]

    voltage_badges = [classify_voltage(v) for v in voltages]
    normal = sum(1 for b in voltage_badges if b.status == NORMAL)
    low = sum(1 for b in voltage_badges if b.direction == "low")
    stable = sum(1 for f in frequencies if classify_frequency(f).status == STABLE)
    levels = stability_levels(stabilities)

    return QualitySummary(
        voltage=VoltageSummary(
            average=round(_mean(voltages), 1),
            min=min(voltages, default=0.0),
            max=max(voltages, default=0.0),
            normal=normal,
            low=low,
            high=len(voltages) - normal - low,
        ),
        frequency=FrequencySummary(
            average=round(_mean(frequencies), 1),
            min=min(frequencies, default=0.0),
            max=max(frequencies, default=0.0),
            stable=stable,
            unstable=len(frequencies) - stable,
        ),
        stability=StabilitySummary(
            average=round(_mean(stabilities)),
            excellent=levels.excellent,
            good=levels.good,
            poor=levels.poor,
        ),
        total_readings=len(points),
        period=period,
    )


def region_overviews(regions: list[Region]) -> tuple[list[RegionOverview], RegionsSummary]:
    overviews = [
        RegionOverview(
            name=r.name,
            avg_voltage=r.average_voltage,
            avg_frequency=r.average_frequency,
            stability=r.stability_percent,
            active_outages=len(r.active_outages),
            total_users=r.users_affected,
            power_quality=classify_stability(r.stability_percent).status,
        )
        for r in regions
    ]
    summary = RegionsSummary(
        total_regions=len(overviews),
        avg_stability=round(_mean([o.stability for o in overviews])),
        total_active_outages=sum(o.active_outages for o in overviews),
        total_users=sum(o.total_users for o in overviews),
    )
    return overviews, summary
