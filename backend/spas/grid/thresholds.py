"""Power-quality bands for the Ghana grid (230 V / 50 Hz nominal).

Every status badge, derived alert and analytics bucket reads its cut-points
from here.
"""

# =============================================================================
# NOMINAL VALUES (also the defaults for unparsable region fields)
# =============================================================================

NOMINAL_VOLTAGE = 230.0
NOMINAL_FREQUENCY = 50.0
NOMINAL_STABILITY = 100

# =============================================================================
# VOLTAGE BANDS (V)
# =============================================================================

VOLTAGE_DANGEROUS_LOW = 200.0   # below: undervoltage, appliance malfunction
VOLTAGE_NORMAL_MIN = 220.0      # below: low
VOLTAGE_NORMAL_MAX = 240.0      # above: high
VOLTAGE_DANGEROUS_HIGH = 250.0  # above: overvoltage, appliance damage

# =============================================================================
# FREQUENCY BAND (Hz), inclusive
# =============================================================================

FREQUENCY_MIN = 49.0
FREQUENCY_MAX = 51.0

# =============================================================================
# STABILITY INDEX (%)
# =============================================================================

STABILITY_EXCELLENT = 90
STABILITY_GOOD = 70  # below: poor, raises a low-stability alert

# =============================================================================
# PHYSICAL CLAMP RANGES FOR SIMULATED TRENDS
# =============================================================================

VOLTAGE_CLAMP = (200.0, 260.0)
FREQUENCY_CLAMP = (48.0, 52.0)
STABILITY_CLAMP = (0.0, 100.0)

# =============================================================================
# ACCEPTED RANGES FOR SUBMITTED DEVICE READINGS
# =============================================================================

READING_VOLTAGE_RANGE = (180.0, 260.0)
READING_FREQUENCY_RANGE = (48.0, 52.0)
