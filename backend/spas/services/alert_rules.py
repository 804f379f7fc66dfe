"""Alert derivation from current readings.

Region alerts are plain display strings, recomputed on every read. Reading
alerts carry a type and severity and are returned with a submitted reading.
Both are driven by the status classifier so they share its bands.
"""

from datetime import datetime

from spas.schemas.alert import ReadingAlert
from spas.schemas.reading import PowerReading
from spas.schemas.region import Region, RegionDetail
from spas.services.status import DANGEROUS, POOR, UNSTABLE, classify_frequency, classify_stability, classify_voltage
from spas.timeutil import utcnow


def generate_alerts(region: Region) -> list[str]:
    """Alert messages in check order: voltage, frequency, stability, outages."""
    alerts = []
    name = region.name

    voltage = classify_voltage(region.live_voltage)
    if voltage.status == DANGEROUS and voltage.direction == "low":
        alerts.append(f"UNDERVOLTAGE: Risk of appliance malfunction in {name}")
    elif voltage.status == DANGEROUS and voltage.direction == "high":
        alerts.append(f"OVERVOLTAGE: Risk of appliance damage in {name}")

    if classify_frequency(region.live_frequency).status == UNSTABLE:
        alerts.append(f"FREQUENCY INSTABILITY: Power quality issue detected in {name}")

    if classify_stability(region.stability_percent).status == POOR:
        alerts.append(f"LOW POWER STABILITY: {region.stability_percent}% stability in {name}")

    if region.active_outages:
        alerts.append(f"ACTIVE OUTAGES: {len(region.active_outages)} outage(s) reported in {name}")

    return alerts


def describe_region(region: Region) -> RegionDetail:
    return RegionDetail(
        region=region,
        voltage_status=classify_voltage(region.live_voltage),
        frequency_status=classify_frequency(region.live_frequency),
        stability_status=classify_stability(region.stability_percent),
        alerts=generate_alerts(region),
    )


def reading_alerts(reading: PowerReading, now: datetime | None = None) -> list[ReadingAlert]:
    now = now or utcnow()
    alerts = []

    def add(type_: str, severity: str, message: str):
        alerts.append(ReadingAlert(
            type=type_,
            severity=severity,
            message=message,
            location=reading.location,
            region=reading.region,
            timestamp=now,
        ))

    voltage = classify_voltage(reading.voltage)
    if voltage.status == DANGEROUS and voltage.direction == "low":
        add("undervoltage", "high",
            f"UNDERVOLTAGE: Voltage is {reading.voltage}V at {reading.location}")
    elif voltage.status == DANGEROUS and voltage.direction == "high":
        add("overvoltage", "high",
            f"OVERVOLTAGE: Voltage is {reading.voltage}V at {reading.location}")

    if classify_frequency(reading.frequency).status == UNSTABLE:
        add("frequency_instability", "medium",
            f"FREQUENCY INSTABILITY: Frequency is {reading.frequency}Hz at {reading.location}")

    return alerts
