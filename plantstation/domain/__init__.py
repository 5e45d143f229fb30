"""Domain value objects and exceptions for the chart engine."""

from plantstation.domain.channel_config import ChannelConfig, parse_channel_configs
from plantstation.domain.chart_layout import (
    LAYOUTS,
    AxisSpec,
    ChannelSpec,
    ChartLayout,
    Resolution,
    SeriesKind,
    SeriesSpec,
    get_layout,
)
from plantstation.domain.chart_payload import (
    AxisRange,
    ChannelSummary,
    ChartPayload,
    ChartSeries,
    ReferenceLine,
)

__all__ = [
    "LAYOUTS",
    "AxisRange",
    "AxisSpec",
    "ChannelConfig",
    "ChannelSpec",
    "ChannelSummary",
    "ChartLayout",
    "ChartPayload",
    "ChartSeries",
    "ReferenceLine",
    "Resolution",
    "SeriesKind",
    "SeriesSpec",
    "get_layout",
    "parse_channel_configs",
]
