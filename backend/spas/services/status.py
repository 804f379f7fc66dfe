"""Qualitative status tiers for voltage, frequency and stability readings."""

from spas.grid.thresholds import (
    FREQUENCY_MAX,
    FREQUENCY_MIN,
    STABILITY_EXCELLENT,
    STABILITY_GOOD,
    VOLTAGE_DANGEROUS_HIGH,
    VOLTAGE_DANGEROUS_LOW,
    VOLTAGE_NORMAL_MAX,
    VOLTAGE_NORMAL_MIN,
)
from spas.schemas.region import StatusBadge

DANGEROUS = "Dangerous"
LOW = "Low"
NORMAL = "Normal"
HIGH = "High"
STABLE = "Stable"
UNSTABLE = "Unstable"
EXCELLENT = "Excellent"
GOOD = "Good"
POOR = "Poor"


def classify_voltage(voltage: float) -> StatusBadge:
    if voltage < VOLTAGE_DANGEROUS_LOW:
        return StatusBadge(status=DANGEROUS, direction="low", variant="destructive")
    if voltage < VOLTAGE_NORMAL_MIN:
        return StatusBadge(status=LOW, direction="low", variant="secondary")
    if voltage > VOLTAGE_DANGEROUS_HIGH:
        return StatusBadge(status=DANGEROUS, direction="high", variant="destructive")
    if voltage > VOLTAGE_NORMAL_MAX:
        return StatusBadge(status=HIGH, direction="high", variant="secondary")
    return StatusBadge(status=NORMAL, variant="default")


def classify_frequency(frequency: float) -> StatusBadge:
    if frequency < FREQUENCY_MIN:
        return StatusBadge(status=UNSTABLE, direction="low", variant="destructive")
    if frequency > FREQUENCY_MAX:
        return StatusBadge(status=UNSTABLE, direction="high", variant="destructive")
    return StatusBadge(status=STABLE, variant="default")


def classify_stability(stability: float) -> StatusBadge:
    if stability >= STABILITY_EXCELLENT:
        return StatusBadge(status=EXCELLENT, variant="default")
    if stability >= STABILITY_GOOD:
        return StatusBadge(status=GOOD, variant="secondary")
    return StatusBadge(status=POOR, variant="destructive")

