from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel

TrendPeriod = Literal["24h", "7d", "30d"]


class TrendPoint(BaseModel):
    timestamp: datetime
    time: str  # display label, "14:00" or "Jun 03"
    voltage: float
    frequency: float
    stability: float


class TrendAverages(BaseModel):
    avg_voltage: float = 0.0
    avg_frequency: float = 0.0
    avg_stability: int = 0
    period: str = "24h"


class TrendReport(BaseModel):
    success: bool = True
    data: list[TrendPoint] = []
    stats: TrendAverages
    region: str | None = None


class StabilityLevels(BaseModel):
    excellent: int = 0
    good: int = 0
    poor: int = 0


class StabilityMetrics(BaseModel):
    avg_stability: int = 0
    levels: StabilityLevels
    total_readings: int = 0


class VoltageSummary(BaseModel):
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    normal: int = 0
    low: int = 0
    high: int = 0


class FrequencySummary(BaseModel):
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    stable: int = 0
    unstable: int = 0


class StabilitySummary(BaseModel):
    average: int = 0
    excellent: int = 0
    good: int = 0
    poor: int = 0


class QualitySummary(BaseModel):
    voltage: VoltageSummary
    frequency: FrequencySummary
    stability: StabilitySummary
    total_readings: int = 0
    period: str = "24h"


class RegionOverview(BaseModel):
    name: str
    avg_voltage: float
    avg_frequency: float
    stability: int
    active_outages: int = 0
    total_users: int = 0
    power_quality: str = "Good"


class RegionsSummary(BaseModel):
    total_regions: int = 0
    avg_stability: int = 0
    total_active_outages: int = 0
    total_users: int = 0


class RegionsReport(BaseModel):
    success: bool = True
    data: list[RegionOverview] = []
    summary: RegionsSummary


class HourlyPoint(BaseModel):
    timestamp: datetime
    hour: str  # "00:00" .. "23:00"
    voltage: float
    frequency: float
    stability: int
    demand: int  # percent of peak


class HourlyReport(BaseModel):
    success: bool = True
    date: date
    data: list[HourlyPoint] = []
