"""
Axis Range Deriver
==================

Derives axis bounds and threshold guide lines from a channel config.

- Volume axis (watering pulses): forced to ``0 .. ceil(max / 1000)``.
- Value axis (moisture / weight): suggested ``low - 2*range`` to
  ``dst + 2*range``, rounded outward to multiples of 10 so the tolerance band
  and some margin are always visible.
- Lines, in order: ``dst - range`` and ``dst + range`` (band colour),
  ``low`` (warning colour), ``dst`` (target colour).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping

from plantstation.constants import REFERENCE_LINE_COLORS, AxisRounding, RawScale, ReferenceColorSet
from plantstation.domain.channel_config import ChannelConfig
from plantstation.domain.chart_payload import AxisRange, ReferenceLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisDerivation:
    """Result of deriving one channel's axes and lines."""

    volume_min: float
    volume_max: float
    suggested_min: float
    suggested_max: float
    lines: tuple[ReferenceLine, ...]

    def volume_range(self, axis_id: str) -> AxisRange:
        return AxisRange(axis_id=axis_id, min=self.volume_min, max=self.volume_max)

    def value_range(self, axis_id: str) -> AxisRange:
        return AxisRange(axis_id=axis_id, suggested_min=self.suggested_min, suggested_max=self.suggested_max)


def color_set(channel_index: int) -> ReferenceColorSet:
    return REFERENCE_LINE_COLORS[channel_index % len(REFERENCE_LINE_COLORS)]


class AxisRangeDeriver:
    """Stateless; one instance can serve every channel and every build."""

    def __init__(self, step: int = AxisRounding.STEP, margin: int = AxisRounding.RANGE_MARGIN):
        self.step = step
        self.margin = margin

    def derive(
        self,
        config: ChannelConfig | Mapping[str, Any],
        channel_index: int = 0,
        *,
        axis_id: str | None = None,
        labels: Mapping[str, str] | None = None,
    ) -> AxisDerivation:
        """Compute ranges and lines for ``config``.

        ``labels`` may map ``band_low``/``band_high``/``low``/``dst`` to text
        drawn next to the line; lines carry no text otherwise.
        """
        if not isinstance(config, ChannelConfig):
            config = ChannelConfig.from_mapping(config, channel_index=channel_index)

        colors = color_set(channel_index)
        labels = labels or {}
        band_low, band_high = config.band
        spread = config.range * self.margin

        derivation = AxisDerivation(
            volume_min=0,
            volume_max=math.ceil(config.max / RawScale.VOLUME_AXIS),
            suggested_min=math.floor((config.low - spread) / self.step) * self.step,
            suggested_max=math.ceil((config.dst + spread) / self.step) * self.step,
            lines=(
                ReferenceLine(band_low, colors.band, labels.get("band_low"), axis_id),
                ReferenceLine(band_high, colors.band, labels.get("band_high"), axis_id),
                ReferenceLine(config.low, colors.low, labels.get("low"), axis_id),
                ReferenceLine(config.dst, colors.dst, labels.get("dst"), axis_id),
            ),
        )
        logger.debug(
            "Channel %s axes: value %s..%s, volume 0..%s",
            channel_index,
            derivation.suggested_min,
            derivation.suggested_max,
            derivation.volume_max,
        )
        return derivation
