"""
Channel Config Value Object
===========================
Immutable threshold set for one watering channel (one plant / one probe).

The station stores these per channel as ``{hour, start, max, low, dst, range}``:

- ``low``  : minimum safe level; the plant is watered when it drops below
- ``dst``  : target level the watering aims for
- ``range``: tolerance band around ``dst``
- ``max``  : upper bound of one watering pulse, in milli-units

``hour`` and ``start`` drive the station's own scheduler and are carried
along for display only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from plantstation.domain.exceptions import ConfigIncompleteError

REQUIRED_KEYS = ("low", "dst", "range", "max")


def _coerce_threshold(key: str, value: Any, channel_index: int | None) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigIncompleteError(
            f"Channel config '{key}' must be a number, got {value!r}",
            detail={"key": key, "channel": channel_index},
        )
    if not math.isfinite(value):
        raise ConfigIncompleteError(
            f"Channel config '{key}' must be finite, got {value!r}",
            detail={"key": key, "channel": channel_index},
        )
    return value


@dataclass(frozen=True)
class ChannelConfig:
    """Thresholds for one channel.

    Attributes:
        low: Minimum safe threshold
        dst: Target value
        range: Tolerance band around ``dst``
        max: Axis bound for volume-type series (milli-units)
        water_hour: Hour of day the station waters (informational)
        water_start: Initial watering duration in ms (informational)
    """

    low: float
    dst: float
    range: float
    max: float
    water_hour: int | None = None
    water_start: int | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], *, channel_index: int | None = None) -> "ChannelConfig":
        """Build from a station config record, rejecting incomplete records."""
        if not isinstance(raw, Mapping):
            raise ConfigIncompleteError(
                f"Channel config must be an object, got {type(raw).__name__}",
                detail={"channel": channel_index},
            )

        missing = [key for key in REQUIRED_KEYS if raw.get(key) is None]
        if missing:
            raise ConfigIncompleteError(
                f"Channel config is missing {', '.join(missing)}",
                detail={"missing": missing, "channel": channel_index},
            )

        values = {key: _coerce_threshold(key, raw[key], channel_index) for key in REQUIRED_KEYS}
        return cls(
            **values,
            water_hour=raw.get("hour"),
            water_start=raw.get("start"),
        )

    @property
    def band(self) -> tuple[float, float]:
        """Lower and upper edge of the tolerance band around ``dst``."""
        return self.dst - self.range, self.dst + self.range

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "low": self.low,
            "dst": self.dst,
            "range": self.range,
            "max": self.max,
        }
        if self.water_hour is not None:
            data["hour"] = self.water_hour
        if self.water_start is not None:
            data["start"] = self.water_start
        return data


def parse_channel_configs(raw: Any) -> tuple[ChannelConfig, ...]:
    """Normalise the snapshot's ``config`` field into an ordered tuple.

    Single-channel pages ship one record, multi-channel pages a list.
    ``None`` means no thresholds were sent.
    """
    if raw is None:
        return ()
    if isinstance(raw, Mapping):
        return (ChannelConfig.from_mapping(raw, channel_index=0),)
    if isinstance(raw, (list, tuple)):
        return tuple(ChannelConfig.from_mapping(item, channel_index=i) for i, item in enumerate(raw))
    raise ConfigIncompleteError(
        f"Config must be an object or a list of objects, got {type(raw).__name__}",
    )
