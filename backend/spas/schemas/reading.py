from pydantic import BaseModel, Field

from spas.grid.thresholds import READING_FREQUENCY_RANGE, READING_VOLTAGE_RANGE
from spas.schemas.alert import ReadingAlert
from spas.schemas.common import UtcDatetime


class PowerReading(BaseModel):
    id: str
    device_id: str
    location: str
    region: str
    voltage: float
    frequency: float
    current: float | None = None
    power: float | None = None
    timestamp: UtcDatetime
    created_at: UtcDatetime


class ReadingCreate(BaseModel):
    voltage: float = Field(ge=READING_VOLTAGE_RANGE[0], le=READING_VOLTAGE_RANGE[1])
    frequency: float = Field(ge=READING_FREQUENCY_RANGE[0], le=READING_FREQUENCY_RANGE[1])
    current: float | None = Field(default=None, gt=0)
    power: float | None = Field(default=None, gt=0)
    location: str = Field(min_length=1)
    region: str = Field(min_length=1)
    device_id: str = Field(min_length=1)


class ReadingSubmitted(BaseModel):
    success: bool = True
    message: str = "Power reading recorded successfully"
    data: PowerReading
    alerts: list[ReadingAlert] | None = None


class ReadingStats(BaseModel):
    avg_voltage: float = 0.0
    avg_frequency: float = 0.0
    min_voltage: float = 0.0
    max_voltage: float = 0.0
    min_frequency: float = 0.0
    max_frequency: float = 0.0
    total_readings: int = 0
