"""
Telemetry Schemas
=================

Pydantic models for the snapshot served by the watering station's
``/data`` endpoint::

    {
      "data":      {"time": 7, "weight": [[...], [...]], "water": [[...], [...]],
                    "temperature": [...], "humidity": [...]},
      "mindata":   {"time": 42, "weight": [[...], [...]], "water": [null, null], ...},
      "config":    [{"hour": 7, "start": 2000, "max": 20000,
                     "low": 1400, "dst": 1500, "range": 100}, ...],
      "watertime": [{"scale": 120, "offset": 900}, {"scale": 0, "offset": 0}]
    }

Single-probe stations send flat ``moisture``/``level``/``weight``/``water``
arrays and a single ``config`` object instead.

The station serialises a probe it has no samples for as ``null`` inside the
per-probe array (minute ``water`` always, hourly ``weight`` right after
startup). Such a probe reads as an empty series.
"""

from __future__ import annotations

import math
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

Number = Union[StrictInt, StrictFloat]
FlatSeries = list[Number]
ProbeSeries = list[Union[FlatSeries, None]]


def _is_probe_array(value: list) -> bool:
    return any(row is None or isinstance(row, list) for row in value)


def _check_finite(value: Any, field_name: str) -> Any:
    rows = value if _is_probe_array(value) else [value]
    for row in rows:
        if row is None:
            continue
        for item in row:
            if isinstance(item, float) and not math.isfinite(item):
                raise ValueError(f"{field_name} contains a non-finite value")
    return value


class MeasurementData(BaseModel):
    """One resolution's worth of samples, newest last."""

    model_config = ConfigDict(extra="ignore")

    time: StrictInt = Field(..., description="Wall-clock unit of the newest sample")
    moisture: FlatSeries | None = None
    temperature: FlatSeries | None = None
    humidity: FlatSeries | None = None
    level: FlatSeries | None = None
    weight: FlatSeries | ProbeSeries | None = None
    water: FlatSeries | ProbeSeries | None = None

    @field_validator("moisture", "temperature", "humidity", "level", "weight", "water")
    @classmethod
    def _finite(cls, value, info):
        if value is None:
            return value
        return _check_finite(value, info.field_name)

    def series(self, name: str, probe: int | None = None) -> list[Number] | None:
        """Return a raw series, indexing into per-probe arrays when ``probe`` is set.

        ``None`` means the field (or the probe) is absent. A probe sent as
        ``null`` returns an empty list. A flat array asked for with a probe
        index (or per-probe arrays asked for without one) raises ``ValueError``.
        """
        if name not in type(self).model_fields:
            return None
        raw = getattr(self, name)
        if raw is None:
            return None

        nested = _is_probe_array(raw)
        if probe is None:
            if nested:
                raise ValueError(f"{name} holds per-probe arrays; a probe index is required")
            return raw
        if raw and not nested:
            raise ValueError(f"{name} is a flat array; probe {probe} does not exist")
        if probe >= len(raw):
            return None
        return raw[probe] if raw[probe] is not None else []


class WateringTimeData(BaseModel):
    """Per-probe watering-time calibration: pulse ms = scale * weight gain + offset."""

    model_config = ConfigDict(extra="ignore")

    scale: StrictInt = 0
    offset: StrictInt = 0


class StationSnapshot(BaseModel):
    """Complete reply of the station's data endpoint."""

    model_config = ConfigDict(extra="ignore")

    data: MeasurementData
    mindata: MeasurementData | None = None
    config: dict[str, Any] | list[dict[str, Any]] | None = None
    watertime: list[WateringTimeData] | None = None

    def watering_prior(self, probe: int | None) -> WateringTimeData | None:
        """Calibration the station holds for ``probe``, if it sent one."""
        if probe is None or not self.watertime or probe >= len(self.watertime):
            return None
        return self.watertime[probe]
