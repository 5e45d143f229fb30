"""
Time Aligner
============

Maps sample indices of a fetched window onto a circular wall-clock axis.

The window holds the ``length`` most recent samples; the newest one was taken
at ``window_end_unit`` (hour 0-23 or minute 0-59). Walking back from there
gives the unit the window started at, wrapping across midnight or the top of
the hour. Windows longer than the modulus simply repeat labels: the axis shows
wall-clock position, not elapsed time.
"""

from __future__ import annotations

from plantstation.domain.exceptions import MalformedInputError


def window_start(window_end_unit: int, length: int, modulus: int) -> int:
    """Unit at which a window of ``length`` samples ending at ``window_end_unit`` began."""
    return (window_end_unit + 1 - (length % modulus) + modulus) % modulus


def align(window_end_unit: int, length: int, modulus: int) -> list[int]:
    """Return ``length`` wall-clock labels ending at ``window_end_unit``.

    Example::

        >>> align(2, 5, 24)
        [22, 23, 0, 1, 2]
    """
    if modulus <= 0:
        raise MalformedInputError(f"Time axis modulus must be positive, got {modulus}")
    if length < 0:
        raise MalformedInputError(f"Window length must not be negative, got {length}")
    if not 0 <= window_end_unit < modulus:
        raise MalformedInputError(
            f"Window end {window_end_unit} is outside 0..{modulus - 1}",
            detail={"time": window_end_unit, "modulus": modulus},
        )

    start = window_start(window_end_unit, length, modulus)
    return [(start + i) % modulus for i in range(length)]


class TimeAligner:
    """Aligner bound to one modulus (24 for hourly data, 60 for minute data)."""

    def __init__(self, modulus: int):
        if modulus <= 0:
            raise MalformedInputError(f"Time axis modulus must be positive, got {modulus}")
        self.modulus = modulus

    def align(self, window_end_unit: int, length: int) -> list[int]:
        return align(window_end_unit, length, self.modulus)
