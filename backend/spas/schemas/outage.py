from typing import Literal

from pydantic import BaseModel, Field

from spas.schemas.common import UtcDatetime

OutageStatus = Literal["active", "scheduled", "resolved"]


class Outage(BaseModel):
    id: str
    location: str
    region: str
    start_time: UtcDatetime
    estimated_end_time: UtcDatetime
    actual_end_time: UtcDatetime | None = None
    cause: str
    status: OutageStatus
    affected_users: int = 0
    description: str | None = None
    created_at: UtcDatetime


class OutageCreate(BaseModel):
    location: str = Field(min_length=1)
    region: str = Field(min_length=1)
    start_time: UtcDatetime
    estimated_end_time: UtcDatetime
    cause: str = Field(min_length=1)
    status: OutageStatus
    affected_users: int = Field(default=0, ge=0)
    description: str | None = None


class OutageUpdate(BaseModel):
    actual_end_time: UtcDatetime | None = None
    status: OutageStatus | None = None
    estimated_end_time: UtcDatetime | None = None
    cause: str | None = Field(default=None, min_length=1)
    description: str | None = None


class OutageStats(BaseModel):
    total: int = 0
    active: int = 0
    resolved: int = 0
    scheduled: int = 0
    avg_duration_minutes: int = 0
    total_affected_users: int = 0
