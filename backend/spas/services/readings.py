"""In-memory store for readings submitted by field devices."""

import logging
import threading
from collections.abc import Iterable
from datetime import datetime

from spas.schemas.reading import PowerReading, ReadingCreate, ReadingStats
from spas.services.store import Clock, IdGenerator, NotFoundError, region_matches
from spas.timeutil import period_cutoff, utcnow

logger = logging.getLogger(__name__)


class InMemoryReadingStore:
    def __init__(self, readings: Iterable[PowerReading] | None = None, clock: Clock = utcnow):
        self._readings: list[PowerReading] = list(readings or [])
        self._lock = threading.Lock()
        self._clock = clock
        self._ids = IdGenerator(clock)

    def submit(self, payload: ReadingCreate) -> PowerReading:
        with self._lock:
            now = self._clock()
            reading = PowerReading(id=self._ids.next(), timestamp=now, created_at=now, **payload.model_dump())
            self._readings.append(reading)
        logger.debug("Reading %s from %s: %.1fV %.2fHz", reading.id, reading.device_id,
                     reading.voltage, reading.frequency)
        return reading

    def current(self, location: str | None = None, region: str | None = None) -> list[PowerReading]:
        """Latest reading per location."""
        latest: dict[str, PowerReading] = {}
        for reading in self._filtered(location, region):
            seen = latest.get(reading.location)
            if seen is None or reading.timestamp > seen.timestamp:
                latest[reading.location] = reading
        return list(latest.values())

    def history(
        self,
        location: str | None = None,
        region: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 100,
    ) -> list[PowerReading]:
        """Newest-first readings, capped at limit."""
        matches = [
            r for r in self._filtered(location, region)
            if (start is None or r.timestamp >= start) and (end is None or r.timestamp <= end)
        ]
        matches.sort(key=lambda r: r.timestamp, reverse=True)
        return matches[:limit]

    def by_location(self, location: str, limit: int = 50) -> list[PowerReading]:
        matches = sorted(self._filtered(location, None), key=lambda r: r.timestamp, reverse=True)
        if not matches:
            raise NotFoundError("No readings found for this location")
        return matches[:limit]

    def stats(self, period: str = "24h", location: str | None = None, region: str | None = None) -> ReadingStats:
        cutoff = period_cutoff(period, self._clock())
        recent = [r for r in self._filtered(location, region) if r.timestamp >= cutoff]
        if not recent:
            return ReadingStats()

        voltages = [r.voltage for r in recent]
        frequencies = [r.frequency for r in recent]
        return ReadingStats(
            avg_voltage=sum(voltages) / len(voltages),
            avg_frequency=sum(frequencies) / len(frequencies),
            min_voltage=min(voltages),
            max_voltage=max(voltages),
            min_frequency=min(frequencies),
            max_frequency=max(frequencies),
            total_readings=len(recent),
        )

    def _filtered(self, location: str | None, region: str | None) -> list[PowerReading]:
        with self._lock:
            return [
                r for r in self._readings
                if region_matches(r.location, location) and region_matches(r.region, region)
            ]
