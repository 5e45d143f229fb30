"""
Watering Analysis
=================

Small statistics the station itself uses to plan waterings, exposed here so
the dashboard can show them next to the charts:

- how long ago a channel was last watered
- the mean value since then (the open segment of the averaged overlay)
- the typical dry-out per day, from weight lost between non-watering samples
- the watering-time calibration, a least-squares fit of pulse length
  against the weight each watering added
- hourly medians folded from minute samples
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from plantstation.constants import Analytics, Modulus
from plantstation.domain.chart_payload import ChannelSummary
from plantstation.domain.exceptions import MalformedInputError

logger = logging.getLogger(__name__)

Value = float | int | None


@dataclass(frozen=True)
class WateringTime:
    """Pulse length in ms for a wanted weight gain: ``scale * gain + offset``.

    ``fitted`` is False when the prior calibration was kept because the
    samples could not support a fit.
    """

    scale: int
    offset: int
    fitted: bool = False


def hour_median(samples: Sequence[float | int], window: int = Analytics.HOUR_MEDIAN_WINDOW) -> float | int:
    """Median of the last ``window`` samples (upper median for even counts)."""
    if not samples:
        raise MalformedInputError("Cannot take the median of an empty series")
    recent = sorted(samples[-window:])
    return recent[len(recent) // 2]


def samples_since_watering(pulses: Sequence[Value]) -> int:
    """Samples taken after the most recent positive pulse."""
    for offset, pulse in enumerate(reversed(pulses)):
        if pulse is not None and pulse > 0:
            return offset
    return len(pulses)


def average_since_watering(values: Sequence[Value], pulses: Sequence[Value]) -> float | None:
    """Mean of the values after the last watering, right-aligning the two series."""
    since = samples_since_watering(pulses)
    start = max(len(values) - since, 0)
    tail = [v for v in values[start:] if v is not None] if since else []
    if not tail:
        return None
    return sum(tail) / len(tail)


def _weight_steps(weights: Sequence[Value], pulses: Sequence[Value]) -> Iterator[tuple[float, Value]]:
    """Yield ``(gain, pulse before the step)`` between consecutive present weights.

    Series are aligned on their newest sample. A step only counts once a
    positive weight has been seen.
    """
    offset = len(weights) - len(pulses)
    previous_weight: Value = None
    previous_pulse: Value = 0

    for i, pulse in enumerate(pulses):
        j = offset + i
        if 0 <= j < len(weights):
            weight = weights[j]
            if weight is not None:
                if previous_weight is not None and previous_weight > 0:
                    yield weight - previous_weight, previous_pulse
                previous_weight = weight
        previous_pulse = pulse


def _watered(pulse: Value) -> bool:
    return pulse is not None and pulse > 0


def estimate_dryout(
    weights: Sequence[Value],
    pulses: Sequence[Value],
    samples_per_day: int = Modulus.HOURS_PER_DAY,
) -> int:
    """Typical weight lost per day while no watering happens.

    Each step from a sample that was not followed by watering to the next
    contributes ``previous - current``. The sorted drops lose ``n // 6``
    entries at either end before averaging; the rounded daily figure is
    truncated toward zero. Returns 0 when there is nothing to measure.
    """
    drops = [-gain for gain, pulse in _weight_steps(weights, pulses) if not _watered(pulse)]
    if not drops:
        logger.info("No dry-out measured")
        return 0

    drops.sort()
    trim = len(drops) // Analytics.DRYOUT_TRIM_DIVISOR
    kept = drops[trim:len(drops) - trim]
    return math.trunc((sum(kept) * samples_per_day + len(kept) // 2) / len(kept))


def estimate_watering_time(
    weights: Sequence[Value],
    pulses: Sequence[Value],
    prior_scale: int = 0,
    prior_offset: int = 0,
) -> WateringTime:
    """Fit ``pulse = scale * gain + offset`` over every watered step.

    A positive prior scale adds two anchor points at the mean gain +/- 1/8,
    placed on the prior line, so few waterings bend the calibration rather
    than replace it. Without enough spread in the gains the prior is kept.
    A negative offset is dropped in favour of a line through the origin; a
    negative scale halves the mean pulse between scale and offset.
    """
    gains: list[float] = []
    times: list[float] = []
    for gain, pulse in _weight_steps(weights, pulses):
        if _watered(pulse):
            gains.append(float(gain))
            times.append(float(pulse))

    if prior_scale > 0 and gains:
        mean_gain = sum(gains) / len(gains)
        for anchor in (mean_gain - mean_gain / 8, mean_gain + mean_gain / 8):
            gains.append(anchor)
            times.append(anchor * prior_scale + prior_offset)

    n = len(gains)
    gain_sum = sum(gains)
    time_sum = sum(times)
    gain_sq_sum = sum(g * g for g in gains)
    dot = sum(g * t for g, t in zip(gains, times))

    if n and gain_sum * gain_sum < gain_sq_sum * n:
        slope = (dot - time_sum * gain_sum / n) / (gain_sq_sum - gain_sum * gain_sum / n)
        offset = int(time_sum / n - slope * gain_sum / n)
        scale = int(slope)
        fitted = True
    else:
        logger.info("Cannot calculate watering times from %s waterings; keeping prior", n)
        scale, offset, fitted = prior_scale, prior_offset, False

    if offset < 0:
        offset = 0
        if gain_sum > 0:
            scale = int(time_sum / gain_sum)
    elif scale < 0:
        if n:
            offset = int(0.5 * time_sum / n)
        if gain_sum:
            scale = int(time_sum * 0.5 / gain_sum)

    return WateringTime(scale=scale, offset=offset, fitted=fitted)


def summarize_channel(
    channel: str,
    values: Sequence[Value],
    pulses: Sequence[Value] | None = None,
    *,
    samples_per_day: int = Modulus.HOURS_PER_DAY,
    minute_samples: bool = False,
    prior: WateringTime | None = None,
) -> ChannelSummary:
    """Collect the figures above for one channel.

    Watering figures need a pulse series; the hourly median only makes sense
    for minute samples. ``prior`` is the calibration the station currently
    uses for this channel.
    """
    present = [v for v in values if v is not None]
    median = hour_median(present) if minute_samples and present else None
    if pulses is None:
        return ChannelSummary(channel=channel, hour_median=median)
    prior = prior or WateringTime(scale=0, offset=0)
    watering = estimate_watering_time(values, pulses, prior.scale, prior.offset)
    return ChannelSummary(
        channel=channel,
        samples_since_watering=samples_since_watering(pulses),
        average_since_watering=average_since_watering(values, pulses),
        dryout_per_day=estimate_dryout(values, pulses, samples_per_day),
        hour_median=median,
        watering_scale=watering.scale,
        watering_offset=watering.offset,
        watering_fitted=watering.fitted,
    )
