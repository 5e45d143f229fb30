"""
Application Constants
=====================

Centralized constants for the chart engine and the station client.

Usage:
    from plantstation.constants import Modulus, RawScale, REFERENCE_LINE_COLORS
"""

from __future__ import annotations

from dataclasses import dataclass

# =============================================================================
# Time axes
# =============================================================================


class Modulus:
    """Length of the circular wall-clock axes."""

    HOURS_PER_DAY = 24
    MINUTES_PER_HOUR = 60


# =============================================================================
# Raw value scaling (station stores integers)
# =============================================================================


class RawScale:
    """Divisors that turn raw station integers into display units."""

    TEMPERATURE = 100  # centi-degrees
    HUMIDITY = 100  # centi-percent
    PULSE = 1000  # milliseconds of pump time / milli-units
    VOLUME_AXIS = 1000  # config ``max`` is in milli-units


class AxisRounding:
    """Suggested value axes are widened to multiples of this step."""

    STEP = 10
    RANGE_MARGIN = 2  # multiples of ``range`` added on either side


# =============================================================================
# Reference line colours
# =============================================================================


@dataclass(frozen=True)
class ReferenceColorSet:
    """Colours for one channel's band, warning and target lines."""

    band: str
    low: str
    dst: str


# Index selects the set for channel N; wraps for more channels than sets.
REFERENCE_LINE_COLORS: tuple[ReferenceColorSet, ...] = (
    ReferenceColorSet(band="#d0d0d0", low="#ff0000", dst="#40b000"),
    ReferenceColorSet(band="#c0d0f0", low="#ff8000", dst="#2080ff"),
)


# =============================================================================
# Station
# =============================================================================


class StationDefaults:
    """Defaults for talking to the watering station."""

    URL = "http://localhost:8080"
    DATA_PATH = "/data"
    TIMEOUT_SECONDS = 10


class Analytics:
    """Watering analytics knobs."""

    HOUR_MEDIAN_WINDOW = 60  # minute samples folded into one hourly value
    DRYOUT_TRIM_DIVISOR = 6  # trim n // 6 outliers from each end
