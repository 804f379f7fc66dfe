"""Alert and outage stores.

Routers depend on the abstract AlertStore / OutageStore so a database-backed
implementation can replace the in-memory one. The in-memory stores keep
records for the lifetime of the process and serialize every operation
behind a single lock.
"""

import logging
import math
import threading
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import TypeVar

from spas.schemas.alert import SEVERITY_RANK, Alert, AlertCreate, AlertStats, AlertUpdate
from spas.schemas.common import Pagination
from spas.schemas.outage import Outage, OutageCreate, OutageStats, OutageUpdate
from spas.timeutil import period_cutoff, utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")
Clock = Callable[[], datetime]


class StoreError(Exception):
    pass


class NotFoundError(StoreError):
    pass


class ConflictError(StoreError):
    pass


def paginate(items: list[T], page: int, limit: int) -> tuple[list[T], Pagination]:
    start = (page - 1) * limit
    return items[start:start + limit], Pagination(
        current_page=page,
        total_pages=math.ceil(len(items) / limit),
        total_items=len(items),
        items_per_page=limit,
    )


def region_matches(value: str, wanted: str | None) -> bool:
    """Case-insensitive substring match; no filter when wanted is empty."""
    return not wanted or wanted.lower() in value.lower()


class IdGenerator:
    """Millisecond-timestamp ids, bumped when two records share a millisecond."""

    def __init__(self, clock: Clock = utcnow):
        self._clock = clock
        self._last = 0

    def next(self) -> str:
        candidate = int(self._clock().timestamp() * 1000)
        self._last = max(candidate, self._last + 1)
        return str(self._last)


def alert_sort_key(alert: Alert):
    return (SEVERITY_RANK[alert.severity], alert.timestamp)


# --- Alerts ---

class AlertStore(ABC):
    @abstractmethod
    def create(self, payload: AlertCreate) -> Alert: ...

    @abstractmethod
    def get(self, alert_id: str) -> Alert: ...

    @abstractmethod
    def query(
        self,
        type: str | None = None,
        severity: str | None = None,
        region: str | None = None,
        status: str = "all",
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[Alert], Pagination]: ...

    @abstractmethod
    def active(self, region: str | None = None) -> list[Alert]: ...

    @abstractmethod
    def update(self, alert_id: str, patch: AlertUpdate) -> Alert: ...

    @abstractmethod
    def resolve(self, alert_id: str) -> Alert: ...

    @abstractmethod
    def stats(self, period: str = "24h", region: str | None = None) -> AlertStats: ...


class InMemoryAlertStore(AlertStore):
    def __init__(self, alerts: Iterable[Alert] | None = None, clock: Clock = utcnow):
        self._alerts: list[Alert] = list(alerts or [])
        self._lock = threading.Lock()
        self._clock = clock
        self._ids = IdGenerator(clock)

    def create(self, payload: AlertCreate) -> Alert:
        with self._lock:
            now = self._clock()
            alert = Alert(
                id=self._ids.next(),
                timestamp=now,
                created_at=now,
                resolved_at=None,
                **payload.model_dump(),
            )
            self._alerts.append(alert)
        logger.info("Alert %s created: %s/%s in %s", alert.id, alert.type, alert.severity, alert.region)
        return alert

    def get(self, alert_id: str) -> Alert:
        with self._lock:
            return self._alerts[self._index(alert_id)]

    def query(self, type=None, severity=None, region=None, status="all", page=1, limit=50):
        with self._lock:
            matches = [
                a for a in self._alerts
                if (not type or a.type == type)
                and (not severity or a.severity == severity)
                and region_matches(a.region, region)
                and (status == "all"
                     or (status == "active" and not a.is_resolved)
                     or (status == "resolved" and a.is_resolved))
            ]
        matches.sort(key=alert_sort_key, reverse=True)
        return paginate(matches, page, limit)

    def active(self, region=None):
        with self._lock:
            matches = [a for a in self._alerts if not a.is_resolved and region_matches(a.region, region)]
        matches.sort(key=alert_sort_key, reverse=True)
        return matches

    def update(self, alert_id: str, patch: AlertUpdate) -> Alert:
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            idx = self._index(alert_id)
            current = self._alerts[idx]
            if "resolved_at" in changes and current.is_resolved:
                raise ConflictError("Alert is already resolved")
            updated = current.model_copy(update=changes)
            self._alerts[idx] = updated
        logger.info("Alert %s updated: %s", alert_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    def resolve(self, alert_id: str) -> Alert:
        with self._lock:
            idx = self._index(alert_id)
            current = self._alerts[idx]
            if current.is_resolved:
                raise ConflictError("Alert is already resolved")
            resolved = current.model_copy(update={"resolved_at": self._clock()})
            self._alerts[idx] = resolved
        logger.info("Alert %s resolved", alert_id)
        return resolved

    def stats(self, period="24h", region=None):
        cutoff = period_cutoff(period, self._clock())
        with self._lock:
            recent = [a for a in self._alerts if a.timestamp >= cutoff and region_matches(a.region, region)]
        return AlertStats(
            total=len(recent),
            active=sum(1 for a in recent if not a.is_resolved),
            resolved=sum(1 for a in recent if a.is_resolved),
            by_type=dict(Counter(a.type for a in recent)),
            by_severity=dict(Counter(a.severity for a in recent)),
            total_affected_users=sum(a.affected_users for a in recent),
        )

    def _index(self, alert_id: str) -> int:
        for i, alert in enumerate(self._alerts):
            if alert.id == alert_id:
                return i
        raise NotFoundError("Alert not found")


# --- Outages ---

class OutageStore(ABC):
    @abstractmethod
    def create(self, payload: OutageCreate) -> Outage: ...

    @abstractmethod
    def get(self, outage_id: str) -> Outage: ...

    @abstractmethod
    def query(
        self,
        status: str | None = None,
        region: str | None = None,
        location: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[Outage], Pagination]: ...

    @abstractmethod
    def active(self, region: str | None = None) -> list[Outage]: ...

    @abstractmethod
    def update(self, outage_id: str, patch: OutageUpdate) -> Outage: ...

    @abstractmethod
    def resolve(self, outage_id: str) -> Outage: ...

    @abstractmethod
    def stats(self, period: str = "24h", region: str | None = None) -> OutageStats: ...


class InMemoryOutageStore(OutageStore):
    def __init__(self, outages: Iterable[Outage] | None = None, clock: Clock = utcnow):
        self._outages: list[Outage] = list(outages or [])
        self._lock = threading.Lock()
        self._clock = clock
        self._ids = IdGenerator(clock)

    def create(self, payload: OutageCreate) -> Outage:
        with self._lock:
            outage = Outage(
                id=self._ids.next(),
                actual_end_time=None,
                created_at=self._clock(),
                **payload.model_dump(),
            )
            self._outages.append(outage)
        logger.info("Outage %s created: %s at %s, %s", outage.id, outage.status, outage.location, outage.region)
        return outage

    def get(self, outage_id: str) -> Outage:
        with self._lock:
            return self._outages[self._index(outage_id)]

    def query(self, status=None, region=None, location=None, page=1, limit=50):
        with self._lock:
            matches = [
                o for o in self._outages
                if (not status or o.status == status)
                and region_matches(o.region, region)
                and region_matches(o.location, location)
            ]
        matches.sort(key=lambda o: o.start_time, reverse=True)
        return paginate(matches, page, limit)

    def active(self, region=None):
        with self._lock:
            matches = [o for o in self._outages if o.status == "active" and region_matches(o.region, region)]
        matches.sort(key=lambda o: o.start_time, reverse=True)
        return matches

    def update(self, outage_id: str, patch: OutageUpdate) -> Outage:
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            idx = self._index(outage_id)
            current = self._outages[idx]
            if current.status == "resolved" and changes.get("status", "resolved") != "resolved":
                raise ConflictError("Outage is already resolved")
            if changes.get("status") == "resolved" and current.status != "resolved":
                changes.setdefault("actual_end_time", self._clock())
            updated = current.model_copy(update=changes)
            self._outages[idx] = updated
        logger.info("Outage %s updated: %s", outage_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    def resolve(self, outage_id: str) -> Outage:
        with self._lock:
            idx = self._index(outage_id)
            current = self._outages[idx]
            if current.status == "resolved":
                raise ConflictError("Outage is already resolved")
            resolved = current.model_copy(update={"status": "resolved", "actual_end_time": self._clock()})
            self._outages[idx] = resolved
        logger.info("Outage %s resolved", outage_id)
        return resolved

    def stats(self, period="24h", region=None):
        cutoff = period_cutoff(period, self._clock())
        with self._lock:
            recent = [o for o in self._outages if o.start_time >= cutoff and region_matches(o.region, region)]

        by_status = Counter(o.status for o in recent)
        durations = [
            (o.actual_end_time - o.start_time).total_seconds()
            for o in recent
            if o.status == "resolved" and o.actual_end_time is not None
        ]
        avg_minutes = round(sum(durations) / len(durations) / 60) if durations else 0

        return OutageStats(
            total=len(recent),
            active=by_status["active"],
            resolved=by_status["resolved"],
            scheduled=by_status["scheduled"],
            avg_duration_minutes=avg_minutes,
            total_affected_users=sum(o.affected_users for o in recent),
        )

    def _index(self, outage_id: str) -> int:
        for i, outage in enumerate(self._outages):
            if outage.id == outage_id:
                return i
        raise NotFoundError("Outage not found")
