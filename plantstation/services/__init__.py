"""
Service Organization
====================

**charting/**
  Pure, stateless chart aggregation. No I/O; safe to call from anywhere.

**station_client**
  The single network boundary: fetches the station snapshot.

**container**
  Wires config, client and engine together for the Flask app.
"""

from .charting import ChartAggregationEngine
from .station_client import StationClient

__all__ = ["ChartAggregationEngine", "StationClient"]
