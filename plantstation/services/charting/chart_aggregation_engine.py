"""
Chart Aggregation Engine
========================

Turns one station snapshot into a chart-ready :class:`ChartPayload` for a
given :class:`ChartLayout`.

Steps, all pure and synchronous:

1. validate the snapshot (pydantic) and pick the layout's resolution section
2. take every declared series; the longest one sets the shared length and
   shorter ones are padded with ``None`` at the head (series end "now")
3. label positions on the circular hour/minute axis
4. scale temperature/humidity (÷100) and pulses (÷1000) for display
5. average-fill every channel with a pulse series, all channels in one pass
6. derive axis ranges and reference lines from each channel's config
7. attach per-channel watering figures, refitting the watering-time
   calibration from the station's current one

The input mapping is never modified and the same input always yields an
equal payload.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError as PydanticValidationError

from plantstation.constants import Modulus
from plantstation.domain.channel_config import ChannelConfig, parse_channel_configs
from plantstation.domain.chart_layout import ChartLayout, Resolution, SeriesSpec, get_layout
from plantstation.domain.chart_payload import AxisRange, ChartPayload, ChartSeries, ReferenceLine
from plantstation.domain.exceptions import MalformedInputError
from plantstation.schemas.telemetry import MeasurementData, StationSnapshot
from plantstation.services.charting.axis_range_deriver import AxisRangeDeriver
from plantstation.services.charting.segment_averager import SegmentAverager
from plantstation.services.charting.time_aligner import TimeAligner
from plantstation.services.charting.watering_analysis import WateringTime, summarize_channel

logger = logging.getLogger(__name__)

Value = float | int | None

_SAMPLES_PER_DAY = {
    Resolution.HOUR: Modulus.HOURS_PER_DAY,
    Resolution.MINUTE: Modulus.HOURS_PER_DAY * Modulus.MINUTES_PER_HOUR,
}


def _scale(values: Sequence[Value], divisor: float) -> tuple[Value, ...]:
    if divisor == 1:
        return tuple(values)
    return tuple(None if v is None else v / divisor for v in values)


def _pad_head(values: Sequence[Value], length: int) -> list[Value]:
    return [None] * (length - len(values)) + list(values)


class ChartAggregationEngine:
    """Builds chart payloads; holds no per-build state."""

    def __init__(
        self,
        averager: SegmentAverager | None = None,
        deriver: AxisRangeDeriver | None = None,
    ):
        self.averager = averager or SegmentAverager()
        self.deriver = deriver or AxisRangeDeriver()

    # ── Public API ───────────────────────────────────────────────────

    def build(self, payload: Mapping[str, Any] | StationSnapshot, layout: ChartLayout | str) -> ChartPayload:
        """Build the payload for one layout."""
        snapshot = self.validate(payload)
        if isinstance(layout, str):
            layout = get_layout(layout)
        return self._build(snapshot, layout)

    def build_many(
        self,
        payload: Mapping[str, Any] | StationSnapshot,
        layouts: Iterable[ChartLayout | str],
    ) -> dict[str, ChartPayload]:
        """Build several layouts from one snapshot (e.g. hour and minute charts)."""
        snapshot = self.validate(payload)
        results: dict[str, ChartPayload] = {}
        for layout in layouts:
            if isinstance(layout, str):
                layout = get_layout(layout)
            results[layout.name] = self._build(snapshot, layout)
        return results

    @staticmethod
    def validate(payload: Mapping[str, Any] | StationSnapshot) -> StationSnapshot:
        """Parse a raw snapshot, mapping schema failures to :class:`MalformedInputError`."""
        if isinstance(payload, StationSnapshot):
            return payload
        if not isinstance(payload, Mapping):
            raise MalformedInputError(f"Snapshot must be a JSON object, got {type(payload).__name__}")
        try:
            return StationSnapshot.model_validate(payload)
        except PydanticValidationError as exc:
            errors = [
                {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                for err in exc.errors()
            ]
            logger.warning("Rejected malformed snapshot: %s", errors)
            raise MalformedInputError("Snapshot failed validation", detail={"errors": errors}) from exc

    # ── Internals ────────────────────────────────────────────────────

    def _build(self, snapshot: StationSnapshot, layout: ChartLayout) -> ChartPayload:
        resolution = layout.resolution
        section: MeasurementData | None = getattr(snapshot, resolution.snapshot_field)
        if section is None:
            raise MalformedInputError(
                f"Snapshot has no '{resolution.snapshot_field}' section for layout {layout.name}",
            )

        raw = {spec.name: self._raw_series(section, spec) for spec in layout.series}
        length = max((len(values) for values in raw.values()), default=0)
        labels = TimeAligner(resolution.modulus).align(section.time, length)

        padded = {name: _pad_head(values, length) for name, values in raw.items()}
        scaled = {spec.name: _scale(padded[spec.name], spec.divisor) for spec in layout.series}
        series = [
            ChartSeries(
                name=spec.name,
                label=spec.label,
                axis_id=spec.axis_id,
                kind=spec.kind.value,
                data=scaled[spec.name],
                color=spec.color,
            )
            for spec in layout.series
        ]

        averaged = [channel for channel in layout.channels if channel.has_average]
        if averaged:
            outputs = self.averager.average_channels(
                [scaled[c.value_series] for c in averaged],
                [padded[c.pulse_series] for c in averaged],
                length,
            )
            for channel, output in zip(averaged, outputs):
                series.append(
                    ChartSeries(
                        name=channel.average_series,
                        label=channel.average_label,
                        axis_id=channel.value_axis_id,
                        kind="line",
                        data=tuple(output),
                        color=channel.average_color,
                    )
                )

        axes, lines = self._derive_axes(layout, parse_channel_configs(snapshot.config))

        summaries = tuple(
            summarize_channel(
                channel.name,
                scaled[channel.value_series],
                padded[channel.pulse_series] if channel.pulse_series else None,
                samples_per_day=_SAMPLES_PER_DAY[resolution],
                minute_samples=resolution is Resolution.MINUTE,
                prior=self._watering_prior(snapshot, channel.config_index),
            )
            for channel in layout.channels
        )

        logger.debug(
            "Built %s chart: %s samples ending at %s, %s series, %s reference lines",
            layout.name,
            length,
            section.time,
            len(series),
            len(lines),
        )
        return ChartPayload(
            layout=layout.name,
            resolution=resolution.value,
            window_end=section.time,
            labels=tuple(labels),
            series=tuple(series),
            axes=axes,
            reference_lines=lines,
            summaries=summaries,
        )

    @staticmethod
    def _watering_prior(snapshot: StationSnapshot, probe: int | None) -> WateringTime | None:
        current = snapshot.watering_prior(probe)
        if current is None:
            return None
        return WateringTime(scale=current.scale, offset=current.offset)

    @staticmethod
    def _raw_series(section: MeasurementData, spec: SeriesSpec) -> list[Value]:
        try:
            values = section.series(spec.field, spec.probe)
        except ValueError as exc:
            raise MalformedInputError(str(exc), detail={"series": spec.source}) from exc
        if values is None:
            raise MalformedInputError(f"Snapshot is missing series {spec.source}", detail={"series": spec.source})
        return values

    def _derive_axes(
        self,
        layout: ChartLayout,
        configs: tuple[ChannelConfig, ...],
    ) -> tuple[tuple[AxisRange, ...], tuple[ReferenceLine, ...]]:
        axes: dict[str, AxisRange] = {
            spec.axis_id: AxisRange(spec.axis_id, suggested_min=spec.suggested_min, suggested_max=spec.suggested_max)
            for spec in layout.axes
        }
        lines: list[ReferenceLine] = []

        def merge(extra: AxisRange) -> None:
            current = axes.get(extra.axis_id)
            axes[extra.axis_id] = current.merge(extra) if current else extra

        for index, channel in enumerate(layout.channels):
            if channel.config_index is None:
                continue
            if channel.config_index >= len(configs):
                logger.debug("No config for channel %s; skipping thresholds", channel.name)
                continue
            derivation = self.deriver.derive(
                configs[channel.config_index], index, axis_id=channel.value_axis_id
            )
            merge(derivation.value_range(channel.value_axis_id))
            if channel.volume_axis_id:
                merge(derivation.volume_range(channel.volume_axis_id))
            lines.extend(derivation.lines)

        return tuple(axes.values()), tuple(lines)
