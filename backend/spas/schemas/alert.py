from typing import Literal

from pydantic import BaseModel, Field

from spas.schemas.common import UtcDatetime

AlertType = Literal["undervoltage", "overvoltage", "frequency_instability", "outage", "maintenance"]
Severity = Literal["low", "medium", "high", "critical"]

SEVERITY_RANK: dict[str, int] = {"critical": 4, "high": 3, "medium": 2, "low": 1}


class Alert(BaseModel):
    id: str
    type: AlertType
    severity: Severity
    location: str
    region: str
    message: str
    affected_users: int = 0
    timestamp: UtcDatetime
    created_at: UtcDatetime
    resolved_at: UtcDatetime | None = None

    @property
    def is_resolved(self) -> bool:
        return self.resolved_at is not None


class AlertCreate(BaseModel):
    type: AlertType
    severity: Severity
    location: str = Field(min_length=1)
    region: str = Field(min_length=1)
    message: str = Field(min_length=1)
    affected_users: int = Field(default=0, ge=0)


class AlertUpdate(BaseModel):
    resolved_at: UtcDatetime | None = None
    message: str | None = Field(default=None, min_length=1)
    severity: Severity | None = None


class AlertStats(BaseModel):
    total: int = 0
    active: int = 0
    resolved: int = 0
    by_type: dict[str, int] = {}
    by_severity: dict[str, int] = {}
    total_affected_users: int = 0


class ReadingAlert(BaseModel):
    """Alert derived from a submitted reading; returned to the caller, not stored."""
    type: AlertType
    severity: Severity
    message: str
    location: str
    region: str
    timestamp: UtcDatetime
