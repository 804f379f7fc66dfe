from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from spas.grid.thresholds import NOMINAL_FREQUENCY, NOMINAL_STABILITY, NOMINAL_VOLTAGE


class ParsedOutage(BaseModel):
    """Outage as embedded in a region row: free-text start time and duration."""
    location: str
    start_time: str
    duration: str
    users_affected: int = 0
    cause: str = "Unknown"

    model_config = {"frozen": True}


class Region(BaseModel):
    name: str
    live_frequency: float = NOMINAL_FREQUENCY
    live_voltage: float = NOMINAL_VOLTAGE
    quality_trend: str = "Unknown"  # Improving, Declining, Stable, Unknown
    active_outages: list[ParsedOutage] = []
    scheduled_outages: list[ParsedOutage] = []
    users_affected: int = 0
    average_voltage: float = NOMINAL_VOLTAGE
    average_frequency: float = NOMINAL_FREQUENCY
    stability_percent: int = NOMINAL_STABILITY

    model_config = {"frozen": True}


class ParseWarning(BaseModel):
    line: int
    field: str
    value: str
    message: str


class RegionLoadResult(BaseModel):
    source: str = ""
    available: bool = True
    regions: list[Region] = []
    warnings: list[ParseWarning] = []


class RegionOutage(BaseModel):
    id: str
    location: str
    region: str
    start_time: datetime | None = None
    estimated_duration: str
    affected_users: int = 0
    status: Literal["active", "scheduled"]
    cause: str


class RegionOutageListing(BaseModel):
    active: list[RegionOutage] = []
    scheduled: list[RegionOutage] = []


class StatusBadge(BaseModel):
    status: str  # Dangerous, Low, Normal, High / Stable, Unstable / Excellent, Good, Poor
    direction: Literal["low", "high"] | None = None
    variant: Literal["default", "secondary", "destructive"] = "default"


class RegionDetail(BaseModel):
    region: Region
    voltage_status: StatusBadge
    frequency_status: StatusBadge
    stability_status: StatusBadge
    alerts: list[str] = []


class RegionAlerts(BaseModel):
    region: str
    alerts: list[str] = []


class SourceDiagnostics(BaseModel):
    source: str
    available: bool
    region_count: int = 0
    warnings: list[ParseWarning] = []
