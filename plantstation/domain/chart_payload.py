"""
Chart Payload Domain Objects
============================
Immutable values produced by the chart engine and handed to the renderer.

A payload is built fresh for every fetched snapshot and never mutated
afterwards; binding it to a chart widget is the front end's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ReferenceLine:
    """Horizontal dashed guide at ``y`` drawn in ``style``."""

    y: float
    style: str
    text: str | None = None
    axis_id: str | None = None

    @property
    def is_drawable(self) -> bool:
        # A threshold of exactly 0 is never drawn.
        return bool(self.y) and bool(self.style)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"y": self.y, "style": self.style}
        if self.text is not None:
            data["text"] = self.text
        if self.axis_id is not None:
            data["axis_id"] = self.axis_id
        return data


@dataclass(frozen=True)
class AxisRange:
    """Forced (``min``/``max``) and suggested bounds for one axis."""

    axis_id: str
    min: float | None = None
    max: float | None = None
    suggested_min: float | None = None
    suggested_max: float | None = None

    def merge(self, other: "AxisRange") -> "AxisRange":
        """Combine two ranges for the same axis, keeping the widest extent."""
        if other.axis_id != self.axis_id:
            raise ValueError(f"Cannot merge axis {other.axis_id} into {self.axis_id}")
        return AxisRange(
            axis_id=self.axis_id,
            min=_pick(min, self.min, other.min),
            max=_pick(max, self.max, other.max),
            suggested_min=_pick(min, self.suggested_min, other.suggested_min),
            suggested_max=_pick(max, self.suggested_max, other.suggested_max),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "suggested_min": self.suggested_min,
            "suggested_max": self.suggested_max,
        }


def _pick(fn, a, b):
    if a is None:
        return b
    if b is None:
        return a
    return fn(a, b)


@dataclass(frozen=True)
class ChartSeries:
    """One named data array aligned to the payload labels."""

    name: str
    label: str
    axis_id: str
    kind: str
    data: tuple[float | None, ...]
    color: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "axis_id": self.axis_id,
            "kind": self.kind,
            "color": self.color,
            "data": list(self.data),
        }


@dataclass(frozen=True)
class ChannelSummary:
    """Watering figures for one channel at the end of the window."""

    channel: str
    samples_since_watering: int | None = None
    average_since_watering: float | None = None
    dryout_per_day: int | None = None
    hour_median: float | None = None
    watering_scale: int | None = None
    watering_offset: int | None = None
    watering_fitted: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "channel": self.channel,
            "samples_since_watering": self.samples_since_watering,
            "average_since_watering": (
                round(self.average_since_watering, 2) if self.average_since_watering is not None else None
            ),
            "dryout_per_day": self.dryout_per_day,
            "hour_median": self.hour_median,
            "watering_time": (
                {"scale": self.watering_scale, "offset": self.watering_offset, "fitted": self.watering_fitted}
                if self.watering_scale is not None
                else None
            ),
        }


@dataclass(frozen=True)
class ChartPayload:
    """Everything a renderer needs to draw one chart."""

    layout: str
    resolution: str
    window_end: int
    labels: tuple[int, ...]
    series: tuple[ChartSeries, ...]
    axes: tuple[AxisRange, ...] = ()
    reference_lines: tuple[ReferenceLine, ...] = ()
    summaries: tuple[ChannelSummary, ...] = ()

    @property
    def length(self) -> int:
        return len(self.labels)

    def series_by_name(self, name: str) -> ChartSeries:
        for item in self.series:
            if item.name == name:
                return item
        raise KeyError(name)

    def axis(self, axis_id: str) -> AxisRange | None:
        for item in self.axes:
            if item.axis_id == axis_id:
                return item
        return None

    def drawable_lines(self) -> tuple[ReferenceLine, ...]:
        return tuple(line for line in self.reference_lines if line.is_drawable)

    def to_dict(self) -> dict[str, Any]:
        """Serialise for the JSON API."""
        return {
            "layout": self.layout,
            "resolution": self.resolution,
            "window_end": self.window_end,
            "labels": list(self.labels),
            "series": [item.to_dict() for item in self.series],
            "axes": {item.axis_id: item.to_dict() for item in self.axes},
            "reference_lines": [line.to_dict() for line in self.reference_lines],
            "summaries": [summary.to_dict() for summary in self.summaries],
        }
