"""Synthetic power-quality trend series.

There is no historical telemetry, so trend charts are simulated: each bucket
is the baseline average plus bounded uniform noise, clamped to the physical
range. The random source is injected so a seeded generator reproduces a
series exactly.
"""

import math
import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from spas.grid.thresholds import (
    FREQUENCY_CLAMP,
    NOMINAL_FREQUENCY,
    NOMINAL_STABILITY,
    NOMINAL_VOLTAGE,
    STABILITY_CLAMP,
    VOLTAGE_CLAMP,
)
from spas.schemas.region import Region
from spas.schemas.trend import HourlyPoint, TrendPoint
from spas.timeutil import utcnow


@dataclass(frozen=True)
class TrendRange:
    buckets: int
    step: timedelta
    label_format: str


TREND_RANGES: dict[str, TrendRange] = {
    "24h": TrendRange(buckets=24, step=timedelta(hours=1), label_format="%H:%M"),
    "7d": TrendRange(buckets=28, step=timedelta(hours=6), label_format="%b %d"),
    "30d": TrendRange(buckets=30, step=timedelta(days=1), label_format="%b %d"),
}


@dataclass(frozen=True)
class Baseline:
    voltage: float = NOMINAL_VOLTAGE
    frequency: float = NOMINAL_FREQUENCY
    stability: float = NOMINAL_STABILITY


@dataclass(frozen=True)
class NoiseProfile:
    """Full width of the uniform perturbation applied around the baseline."""
    voltage: float
    frequency: float
    stability: float


REGION_NOISE = NoiseProfile(voltage=10.0, frequency=1.0, stability=20.0)
# Averaging across regions smooths the series
AGGREGATE_NOISE = NoiseProfile(voltage=8.0, frequency=0.8, stability=15.0)


@dataclass(frozen=True)
class HourlyNoise:
    voltage: float = 8.0
    frequency: float = 0.8
    demand: float = 10.0


HOURLY_NOISE = HourlyNoise()
# Percent of peak capacity around which simulated demand cycles
BASE_DEMAND = 80.0

ALL_REGIONS = "All Regions"


def region_baseline(region: Region) -> Baseline:
    return Baseline(
        voltage=region.average_voltage,
        frequency=region.average_frequency,
        stability=region.stability_percent,
    )


def cross_region_baseline(regions: list[Region]) -> Baseline:
    if not regions:
        return Baseline()
    n = len(regions)
    return Baseline(
        voltage=sum(r.average_voltage for r in regions) / n,
        frequency=sum(r.average_frequency for r in regions) / n,
        stability=sum(r.stability_percent for r in regions) / n,
    )


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


class TrendSynthesizer:
    def __init__(self, rng: random.Random | None = None, clock: Callable[[], datetime] = utcnow):
        self._rng = rng or random.Random()
        self._clock = clock

    def synthesize(
        self,
        baseline: Baseline,
        period: str = "24h",
        noise: NoiseProfile = REGION_NOISE,
    ) -> list[TrendPoint]:
        """Buckets oldest first; the last bucket is stamped at the current time."""
        window = TREND_RANGES[period]
        now = self._clock()
        points = []
        for i in range(window.buckets - 1, -1, -1):
            at = now - window.step * i
            points.append(TrendPoint(
                timestamp=at,
                time=at.strftime(window.label_format),
                voltage=round(_clamp(baseline.voltage + self._jitter(noise.voltage), VOLTAGE_CLAMP), 2),
                frequency=round(_clamp(baseline.frequency + self._jitter(noise.frequency), FREQUENCY_CLAMP), 2),
                stability=round(_clamp(baseline.stability + self._jitter(noise.stability), STABILITY_CLAMP), 1),
            ))
        return points

    def _jitter(self, spread: float) -> float:
        return (self._rng.random() - 0.5) * spread

    def hourly(self, day: date) -> list[HourlyPoint]:
        """One point per hour of day following a daily load cycle.

        Stability is derived from how far voltage and frequency sit from
        nominal rather than drawn independently.
        """
        points = []
        for hour in range(24):
            voltage = _clamp(
                NOMINAL_VOLTAGE + math.sin(hour / 6) * 3 + self._jitter(HOURLY_NOISE.voltage), VOLTAGE_CLAMP)
            frequency = _clamp(
                NOMINAL_FREQUENCY + math.sin(hour / 4) * 0.3 + self._jitter(HOURLY_NOISE.frequency), FREQUENCY_CLAMP)
            stability = _clamp(
                NOMINAL_STABILITY - abs(voltage - NOMINAL_VOLTAGE) * 2 - abs(frequency - NOMINAL_FREQUENCY) * 10,
                STABILITY_CLAMP,
            )
            demand = BASE_DEMAND + math.sin(hour / 6) * 20 + self._jitter(HOURLY_NOISE.demand)
            points.append(HourlyPoint(
                timestamp=datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc),
                hour=f"{hour:02d}:00",
                voltage=round(voltage, 1),
                frequency=round(frequency, 1),
                stability=round(stability),
                demand=round(demand),
            ))
        return points
