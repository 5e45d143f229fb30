"""
Health API Blueprint
====================

Routes:
- GET /api/v1/health       - liveness check
- GET /api/v1/health/ping  - same, for monitoring tools that expect /ping
"""

from __future__ import annotations

from flask import Blueprint, Response

from plantstation.blueprints.api._common import get_container, success as _success
from plantstation.utils.http import iso_now, safe_route

health_api = Blueprint("health_api", __name__)


@health_api.get("")
@health_api.get("/ping")
@safe_route("Failed to handle ping request")
def ping() -> Response:
    """
    Basic liveness check. Does not contact the station.

    Returns:
        {"status": "ok", "timestamp": "...", "station_url": "..."}
    """
    container = get_container()
    return _success(
        {
            "status": "ok",
            "timestamp": iso_now(),
            "station_url": container.station_client.data_url,
        }
    )
