"""
Segment Averager
================

Turns a value series (moisture, plant weight) into a step series where each
position holds the mean of its watering-to-watering segment.

A segment grows one sample at a time and is closed *after* any sample whose
pulse (watering volume) is positive. At closure the segment's mean is written
once for every position it covered. Whatever is left after the last pulse is
an open segment and is closed the same way at the end of the window, so the
output always has exactly ``length`` entries.

Absent samples (``None`` or positions past the end of a shorter series) keep
their place in the segment but do not contribute to the mean. A segment made
only of absent samples is filled with ``None``.
"""

from __future__ import annotations

from typing import Sequence

from plantstation.domain.exceptions import DivisionDegenerateError, MalformedInputError

Value = float | int | None


def _at(series: Sequence[Value] | None, index: int) -> Value:
    if series is None or index >= len(series):
        return None
    return series[index]


def segment_mean(total: float, count: int) -> float:
    """Mean of a closed segment; a zero count means the caller broke an invariant."""
    if count <= 0:
        raise DivisionDegenerateError(
            "Segment closed without any samples", detail={"total": total, "count": count}
        )
    return total / count


class _SegmentState:
    """Running totals for one channel."""

    __slots__ = ("total", "count", "span", "output")

    def __init__(self) -> None:
        self.total = 0.0
        self.count = 0
        self.span = 0
        self.output: list[float | None] = []

    def add(self, value: Value) -> None:
        self.span += 1
        if value is not None:
            self.total += value
            self.count += 1

    def close(self) -> None:
        if self.span == 0:
            return
        fill = segment_mean(self.total, self.count) if self.count > 0 else None
        self.output.extend([fill] * self.span)
        self.total = 0.0
        self.count = 0
        self.span = 0


class SegmentAverager:
    """Watering-segment averaging for one or more channels."""

    def average(
        self,
        values: Sequence[Value],
        pulses: Sequence[Value],
        length: int | None = None,
    ) -> list[float | None]:
        """Average-fill ``values`` between positive ``pulses``.

        ``length`` defaults to ``len(values)``; when larger, the missing tail
        is treated as absent.

        Example::

            >>> SegmentAverager().average([10, 20, 30, 40], [0, 500, 0, 0])
            [15.0, 15.0, 35.0, 35.0]
        """
        return self.average_channels([values], [pulses], length)[0]

    def average_channels(
        self,
        values_by_channel: Sequence[Sequence[Value]],
        pulses_by_channel: Sequence[Sequence[Value] | None],
        length: int | None = None,
    ) -> list[list[float | None]]:
        """Run :meth:`average` for several channels sharing one index loop.

        Each channel keeps its own totals; only the index is shared, and
        ``pulses_by_channel[c][i]`` closes channel ``c`` alone.
        """
        if len(pulses_by_channel) != len(values_by_channel):
            raise MalformedInputError(
                f"Got {len(values_by_channel)} value series but {len(pulses_by_channel)} pulse series"
            )
        if length is None:
            length = max((len(values) for values in values_by_channel), default=0)
        if length < 0:
            raise MalformedInputError(f"Series length must not be negative, got {length}")

        states = [_SegmentState() for _ in values_by_channel]
        for i in range(length):
            for values, pulses, state in zip(values_by_channel, pulses_by_channel, states):
                state.add(_at(values, i))
                pulse = _at(pulses, i)
                if pulse is not None and pulse > 0:
                    state.close()

        for state in states:
            state.close()
        return [state.output for state in states]
