from __future__ import annotations

import functools
import logging
from datetime import datetime, timezone
from typing import Any, Callable

from flask import Response, jsonify

_log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Generic user-facing messages, never internals
# ---------------------------------------------------------------------------
_GENERIC_MESSAGES: dict[int, str] = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    422: "Unprocessable entity",
    500: "An internal error occurred",
    502: "Watering station unavailable",
}


def iso_now() -> str:
    """Current UTC time as an ISO-8601 string with offset, to the second."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def safe_error(
    exc: BaseException,
    status: int = 500,
    *,
    context: str = "",
) -> Response:
    """Return a generic error response while logging the real exception.

    Parameters
    ----------
    exc:
        The caught exception. Logged server-side, **never** sent to the
        client.
    status:
        HTTP status code for the response (determines the generic message).
    context:
        Optional context string logged alongside *exc*, e.g.
        ``"building dual chart"``.
    """
    _log.error("API error [%s] %s: %s", status, context, exc, exc_info=exc)
    message = _GENERIC_MESSAGES.get(status, _GENERIC_MESSAGES[500])
    return error_response(message, status)


def success_response(
    data: dict | list | None = None,
    status: int = 200,
    *,
    message: str | None = None,
) -> Response:
    payload: dict[str, Any] = {"ok": True, "data": data, "error": None}
    if message is not None:
        payload["message"] = message
    response = jsonify(payload)
    response.status_code = status
    return response


def error_response(
    message: str,
    status: int = 500,
    *,
    detail: dict | None = None,
) -> Response:
    error: dict[str, Any] = {"message": message, "timestamp": iso_now()}
    if detail:
        error["detail"] = detail
    response = jsonify({"ok": False, "data": None, "error": error, "message": message})
    response.status_code = status
    return response


def domain_error_response(exc: BaseException, *, context: str = "") -> Response:
    """Map a :class:`PlantStationError` to its envelope.

    4xx errors carry their message and detail, written for the caller.
    5xx errors are logged and answered with a generic message.
    """
    status = getattr(exc, "http_status", 500)
    if status >= 500:
        return safe_error(exc, status, context=context or type(exc).__name__)
    message = str(exc) or _GENERIC_MESSAGES.get(status, "Request failed")
    return error_response(message, status, detail=getattr(exc, "detail", None))


# ---------------------------------------------------------------------------
# Route decorator, removes per-route try/except boilerplate
# ---------------------------------------------------------------------------


def safe_route(
    error_message: str = "An internal error occurred",
    *,
    error_status: int = 500,
) -> Callable:
    """Decorator that wraps a Flask route handler with standardized error handling.

    Catches :class:`~plantstation.domain.exceptions.PlantStationError`
    subclasses and maps them to the correct HTTP status via
    ``exc.http_status``. Any other ``Exception`` is logged and returns a
    generic 500.

    Usage::

        @dashboard_api.get("/charts/<layout>")
        @safe_route("Failed to build chart")
        def get_chart(layout):
            ...
    """
    from plantstation.domain.exceptions import PlantStationError

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Response:
            try:
                return fn(*args, **kwargs)
            except PlantStationError as exc:
                return domain_error_response(exc, context=error_message)
            except Exception as exc:
                return safe_error(exc, error_status, context=error_message)

        return wrapper

    return decorator
