"""Centralized exception hierarchy for PlantStation.

All domain and service exceptions inherit from :class:`PlantStationError` so
that callers can catch a single base class when they need a broad safety net,
yet still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``plantstation/utils/http.safe_route``)
maps these to the correct HTTP status codes automatically.

Hierarchy
---------
::

    PlantStationError (base: maps to 500)
    ├── ValidationError              (400: bad input from caller)
    │   ├── MalformedInputError      (422: telemetry snapshot unusable)
    │   └── ConfigIncompleteError    (422: channel config lacks a threshold)
    ├── DivisionDegenerateError      (500: segment mean over zero samples)
    ├── ExternalServiceError         (502: station unreachable / bad reply)
    └── ConfigurationError           (500: missing / invalid app config)
"""

from __future__ import annotations


class PlantStationError(Exception):
    """Base exception for all PlantStation application errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, surfaced to the
        HTTP client only for 4xx subclasses).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging and error envelopes.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(PlantStationError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class MalformedInputError(ValidationError):
    """A telemetry snapshot is missing a series or holds unusable values (HTTP 422)."""

    http_status: int = 422


class ConfigIncompleteError(ValidationError):
    """A channel config lacks one of ``low``/``dst``/``range``/``max`` (HTTP 422)."""

    http_status: int = 422


# ── Server errors (5xx) ──────────────────────────────────────────────


class DivisionDegenerateError(PlantStationError):
    """A segment mean was requested over zero samples.

    Segments are only closed when they hold at least one value, so this
    signals a broken invariant rather than bad input.
    """

    http_status: int = 500


class ExternalServiceError(PlantStationError):
    """The watering station could not be reached or replied badly (HTTP 502)."""

    http_status: int = 502


class ConfigurationError(PlantStationError):
    """Missing or invalid application configuration (HTTP 500)."""

    http_status: int = 500
