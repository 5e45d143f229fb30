"""
Charting Services
=================

Time-series aggregation and chart configuration for the dashboard:

- :mod:`time_aligner`: circular hour/minute labels
- :mod:`segment_averager`: watering-to-watering averages
- :mod:`axis_range_deriver`: axis bounds and threshold lines
- :mod:`chart_aggregation_engine`: orchestration into a ``ChartPayload``
- :mod:`watering_analysis`: per-channel watering figures
"""

from plantstation.services.charting.axis_range_deriver import AxisDerivation, AxisRangeDeriver
from plantstation.services.charting.chart_aggregation_engine import ChartAggregationEngine
from plantstation.services.charting.segment_averager import SegmentAverager
from plantstation.services.charting.time_aligner import TimeAligner, align

__all__ = [
    "AxisDerivation",
    "AxisRangeDeriver",
    "ChartAggregationEngine",
    "SegmentAverager",
    "TimeAligner",
    "align",
]
