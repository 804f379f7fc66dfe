"""Region power-quality file loader.

The file is comma-separated with a header row and ten positional columns:

    name, live frequency, live voltage, quality trend, active outages,
    scheduled outages, users affected, avg voltage, avg frequency, stability%

Outage columns hold entries joined by " || "; each entry is
"location | start | duration | users | cause". Parsing is lenient: a bad
value falls back to its default and is reported as a ParseWarning instead of
failing the row.
"""

import asyncio
import logging
import math
from datetime import datetime
from pathlib import Path

from spas.grid.thresholds import NOMINAL_FREQUENCY, NOMINAL_STABILITY, NOMINAL_VOLTAGE, STABILITY_CLAMP
from spas.schemas.region import ParsedOutage, ParseWarning, Region, RegionLoadResult
from spas.timeutil import utcnow

logger = logging.getLogger(__name__)

FIELD_DELIMITER = ","
OUTAGE_ENTRY_SEPARATOR = " || "
OUTAGE_FIELD_SEPARATOR = " | "
MIN_FIELDS = 10
OUTAGE_FIELDS = 5


def parse_outages(
    raw: str,
    now: datetime | None = None,
    warnings: list[ParseWarning] | None = None,
    line: int = 0,
    field: str = "outages",
) -> list[ParsedOutage]:
    """Parse one outage column into entries; malformed entries become a sentinel."""
    if not raw or not raw.strip():
        return []

    outages = []
    for entry in raw.split(OUTAGE_ENTRY_SEPARATOR):
        parts = entry.split(OUTAGE_FIELD_SEPARATOR)
        if len(parts) >= OUTAGE_FIELDS:
            location, start, duration, users, cause = (p.strip() for p in parts[:OUTAGE_FIELDS])
            users_affected = _parse_int(users)
            if users_affected is None:
                _warn(warnings, line, field, users, "unparsable outage user count, using 0")
                users_affected = 0
            outages.append(ParsedOutage(
                location=location,
                start_time=start,
                duration=duration,
                users_affected=users_affected,
                cause=cause,
            ))
        else:
            _warn(warnings, line, field, entry,
                  f"outage entry has {len(parts)} of {OUTAGE_FIELDS} fields")
            outages.append(_sentinel_outage(now))
    return outages


def _sentinel_outage(now: datetime | None) -> ParsedOutage:
    return ParsedOutage(
        location="Unknown",
        start_time=(now or utcnow()).isoformat(),
        duration="0h",
        users_affected=0,
        cause="Unknown",
    )


def parse_regions(text: str, now: datetime | None = None, source: str = "") -> RegionLoadResult:
    """Parse the full file contents. The first line is a header and is skipped."""
    warnings: list[ParseWarning] = []
    regions: list[Region] = []

    lines = text.strip().splitlines()
    for lineno, row in enumerate(lines[1:], start=2):
        values = row.split(FIELD_DELIMITER)
        if len(values) < MIN_FIELDS:
            if row.strip():
                _warn(warnings, lineno, "row", row,
                      f"row has {len(values)} fields, expected {MIN_FIELDS}; skipped")
            continue
        regions.append(_parse_row(values, lineno, warnings, now))

    if warnings:
        logger.debug("Region file %s parsed with %d warnings", source or "<text>", len(warnings))
    return RegionLoadResult(source=source, available=True, regions=regions, warnings=warnings)


def _parse_row(values: list[str], lineno: int, warnings: list[ParseWarning],
               now: datetime | None) -> Region:
    def num(idx: int, name: str, default: float) -> float:
        value = _parse_float(values[idx])
        if value is None:
            _warn(warnings, lineno, name, values[idx], f"unparsable number, using {default}")
            return default
        return value

    def count(idx: int, name: str, default: int, strip: str = "") -> int:
        raw = values[idx].replace(strip, "") if strip else values[idx]
        value = _parse_int(raw)
        if value is None:
            _warn(warnings, lineno, name, values[idx], f"unparsable integer, using {default}")
            return default
        return value

    stability = count(9, "stability_percent", NOMINAL_STABILITY, strip="%")
    low, high = STABILITY_CLAMP
    if not low <= stability <= high:
        # kept as-is; existing files carry such values
        _warn(warnings, lineno, "stability_percent", values[9], f"stability outside {low:g}-{high:g}%")

    return Region(
        name=values[0].strip(),
        live_frequency=num(1, "live_frequency", NOMINAL_FREQUENCY),
        live_voltage=num(2, "live_voltage", NOMINAL_VOLTAGE),
        quality_trend=values[3].strip() or "Unknown",
        active_outages=parse_outages(values[4], now, warnings, lineno, "active_outages"),
        scheduled_outages=parse_outages(values[5], now, warnings, lineno, "scheduled_outages"),
        users_affected=count(6, "users_affected", 0),
        average_voltage=num(7, "average_voltage", NOMINAL_VOLTAGE),
        average_frequency=num(8, "average_frequency", NOMINAL_FREQUENCY),
        stability_percent=stability,
    )


class CsvRegionSource:
    """Reads the region file on every call; never raises."""

    def __init__(self, path: str | Path, timeout: float = 5.0):
        self.path = Path(path)
        self.timeout = timeout

    async def load(self) -> RegionLoadResult:
        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(self.path.read_text, encoding="utf-8"),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error("Timed out after %.1fs reading region file %s", self.timeout, self.path)
            return RegionLoadResult(source=str(self.path), available=False)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read region file %s: %s", self.path, e)
            return RegionLoadResult(source=str(self.path), available=False)

        result = parse_regions(text, source=str(self.path))
        logger.debug("Loaded %d regions from %s", len(result.regions), self.path)
        return result


def find_region(regions: list[Region], name: str) -> Region | None:
    wanted = name.strip().lower()
    for region in regions:
        if region.name.lower() == wanted:
            return region
    return None


def _warn(warnings: list[ParseWarning] | None, line: int, field: str, value: str, message: str):
    if warnings is not None:
        warnings.append(ParseWarning(line=line, field=field, value=value, message=message))


def _parse_float(val: str) -> float | None:
    try:
        value = float(val.strip())
    except (ValueError, AttributeError):
        return None
    return value if math.isfinite(value) else None


def _parse_int(val: str) -> int | None:
    val = val.strip()
    try:
        return int(val)
    except ValueError:
        pass
    try:
        return int(float(val))  # "87.5" -> 87
    except (ValueError, OverflowError):
        return None
