"""
Chart Layouts
=============
Declarative description of which series a dashboard page draws.

The station's pages used to differ only in copy-pasted chart setup
(single moisture probe, two weight probes, hour vs. minute resolution).
A :class:`ChartLayout` captures those differences as data so one engine
can build every page:

- :class:`SeriesSpec`, one raw array taken from the snapshot
- :class:`ChannelSpec`, one plant with its value series, pulse series,
  averaged overlay and config index
- :class:`AxisSpec`, fixed suggested ranges for axes without a config
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from plantstation.constants import Modulus, RawScale
from plantstation.domain.exceptions import ValidationError


class Resolution(str, Enum):
    """Sampling resolution of a snapshot section."""

    HOUR = "hour"
    MINUTE = "minute"

    @property
    def snapshot_field(self) -> str:
        return "data" if self is Resolution.HOUR else "mindata"

    @property
    def modulus(self) -> int:
        return Modulus.HOURS_PER_DAY if self is Resolution.HOUR else Modulus.MINUTES_PER_HOUR


class SeriesKind(str, Enum):
    LINE = "line"
    BAR = "bar"


@dataclass(frozen=True)
class SeriesSpec:
    """A raw series copied (and optionally scaled) from the snapshot."""

    name: str
    field: str
    axis_id: str
    label: str
    probe: int | None = None
    divisor: float = 1
    kind: SeriesKind = SeriesKind.LINE
    color: str | None = None

    @property
    def source(self) -> str:
        return self.field if self.probe is None else f"{self.field}[{self.probe}]"


@dataclass(frozen=True)
class ChannelSpec:
    """One plant channel and the derived data drawn for it."""

    name: str
    value_series: str
    value_axis_id: str
    pulse_series: str | None = None
    volume_axis_id: str | None = None
    config_index: int | None = None
    average_series: str | None = None
    average_label: str = "Average"
    average_color: str | None = None

    @property
    def has_average(self) -> bool:
        return self.average_series is not None and self.pulse_series is not None


@dataclass(frozen=True)
class AxisSpec:
    axis_id: str
    position: str = "left"
    suggested_min: float | None = None
    suggested_max: float | None = None


@dataclass(frozen=True)
class ChartLayout:
    """A complete page description handed to the chart engine."""

    name: str
    resolution: Resolution
    series: tuple[SeriesSpec, ...]
    channels: tuple[ChannelSpec, ...] = ()
    axes: tuple[AxisSpec, ...] = ()

    def __post_init__(self) -> None:
        names = [spec.name for spec in self.series]
        if len(set(names)) != len(names):
            raise ValueError(f"Layout {self.name} declares duplicate series names")
        for channel in self.channels:
            if channel.value_series not in names:
                raise ValueError(f"Channel {channel.name} references unknown series {channel.value_series}")
            if channel.pulse_series is not None and channel.pulse_series not in names:
                raise ValueError(f"Channel {channel.name} references unknown series {channel.pulse_series}")

    def describe(self) -> dict[str, Any]:
        """Summary used by the layouts endpoint."""
        return {
            "name": self.name,
            "resolution": self.resolution.value,
            "series": [
                {"name": s.name, "source": s.source, "axis_id": s.axis_id, "kind": s.kind.value, "label": s.label}
                for s in self.series
            ],
            "channels": [
                {
                    "name": c.name,
                    "value_series": c.value_series,
                    "pulse_series": c.pulse_series,
                    "average_series": c.average_series if c.has_average else None,
                    "config_index": c.config_index,
                }
                for c in self.channels
            ],
            "axes": [{"axis_id": a.axis_id, "position": a.position} for a in self.axes],
        }


# ── Built-in layouts ─────────────────────────────────────────────────

_TEMPERATURE_AXIS = AxisSpec("temp-y-axis", suggested_min=10, suggested_max=30)
_HUMIDITY_AXIS = AxisSpec("hum-y-axis", suggested_min=0, suggested_max=100)


def _climate_series() -> tuple[SeriesSpec, ...]:
    return (
        SeriesSpec(
            "temperature", "temperature", "temp-y-axis", "Temperature",
            divisor=RawScale.TEMPERATURE, color="#ff8000",
        ),
        SeriesSpec(
            "humidity", "humidity", "hum-y-axis", "Humidity",
            divisor=RawScale.HUMIDITY, color="#2080ff",
        ),
    )


SINGLE_LAYOUT = ChartLayout(
    name="single",
    resolution=Resolution.HOUR,
    series=(
        SeriesSpec("moisture", "moisture", "moist-y-axis", "Moisture", color="#30a000"),
        *_climate_series(),
        SeriesSpec("level", "level", "level-y-axis", "Water Level", color="#001080"),
        SeriesSpec("weight", "weight", "weight-y-axis", "Plant Weight", color="#205020"),
        SeriesSpec(
            "water", "water", "water-y-axis", "Watering",
            divisor=RawScale.PULSE, kind=SeriesKind.BAR, color="#0030a0",
        ),
    ),
    channels=(
        ChannelSpec(
            name="plant",
            value_series="moisture",
            value_axis_id="moist-y-axis",
            pulse_series="water",
            volume_axis_id="water-y-axis",
            config_index=0,
            average_series="moisture_avg",
            average_label="Average Moisture",
            average_color="#ffa000",
        ),
    ),
    axes=(
        AxisSpec("moist-y-axis"),
        AxisSpec("water-y-axis", position="right"),
        AxisSpec("level-y-axis", position="right"),
        AxisSpec("weight-y-axis"),
        _TEMPERATURE_AXIS,
        _HUMIDITY_AXIS,
    ),
)


def _probe_series(probe: int, *, with_water: bool) -> tuple[SeriesSpec, ...]:
    number = probe + 1
    specs = [
        SeriesSpec(
            f"weight_{number}", "weight", "weight-y-axis", f"Plant {number} Weight",
            probe=probe, color=("#205020", "#204080")[probe % 2],
        )
    ]
    if with_water:
        specs.append(
            SeriesSpec(
                f"water_{number}", "water", "water-y-axis", f"Plant {number} Watering",
                probe=probe, divisor=RawScale.PULSE, kind=SeriesKind.BAR,
                color=("#1060c0", "#60a0e0")[probe % 2],
            )
        )
    return tuple(specs)


def _probe_channel(probe: int, *, with_water: bool) -> ChannelSpec:
    number = probe + 1
    return ChannelSpec(
        name=f"plant{number}",
        value_series=f"weight_{number}",
        value_axis_id="weight-y-axis",
        pulse_series=f"water_{number}" if with_water else None,
        volume_axis_id="water-y-axis" if with_water else None,
        config_index=probe,
        average_series=f"weight_{number}_avg" if with_water else None,
        average_label=f"Plant {number} Average Weight",
        average_color=("#ffa000", "#ff60a0")[probe % 2],
    )


DUAL_LAYOUT = ChartLayout(
    name="dual",
    resolution=Resolution.HOUR,
    series=(
        *_probe_series(0, with_water=True),
        *_probe_series(1, with_water=True),
        *_climate_series(),
    ),
    channels=(_probe_channel(0, with_water=True), _probe_channel(1, with_water=True)),
    axes=(
        AxisSpec("weight-y-axis"),
        AxisSpec("water-y-axis", position="right"),
        _TEMPERATURE_AXIS,
        _HUMIDITY_AXIS,
    ),
)

DUAL_MINUTE_LAYOUT = ChartLayout(
    name="dual-minute",
    resolution=Resolution.MINUTE,
    series=(
        *_probe_series(0, with_water=False),
        *_probe_series(1, with_water=False),
        *_climate_series(),
    ),
    channels=(_probe_channel(0, with_water=False), _probe_channel(1, with_water=False)),
    axes=(
        AxisSpec("weight-y-axis"),
        _TEMPERATURE_AXIS,
        _HUMIDITY_AXIS,
    ),
)

LAYOUTS: dict[str, ChartLayout] = {
    layout.name: layout for layout in (SINGLE_LAYOUT, DUAL_LAYOUT, DUAL_MINUTE_LAYOUT)
}


def get_layout(name: str) -> ChartLayout:
    """Look up a built-in layout by name."""
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown layout '{name}'", detail={"available": sorted(LAYOUTS)}
        ) from None
