"""Dashboard API
=================

Chart payloads for the station dashboard.

Routes:
- GET  /api/v1/dashboard/layouts                     - built-in layouts
- GET  /api/v1/dashboard/charts/<layout>             - fetch snapshot, build one chart
- GET  /api/v1/dashboard/charts?layout=a&layout=b    - fetch once, build several charts
- POST /api/v1/dashboard/charts/<layout>             - build from the posted snapshot
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, request

from plantstation.blueprints.api._common import get_container, get_json, success as _success
from plantstation.domain.chart_layout import LAYOUTS, get_layout
from plantstation.utils.http import safe_route

logger = logging.getLogger(__name__)

dashboard_api = Blueprint("dashboard_api", __name__)


@dashboard_api.get("/layouts")
@safe_route("Failed to list layouts")
def list_layouts() -> Response:
    container = get_container()
    return _success(
        {
            "default": container.config.default_layout,
            "layouts": [layout.describe() for layout in LAYOUTS.values()],
        }
    )


@dashboard_api.get("/charts/<layout>")
@safe_route("Failed to build chart")
def get_chart(layout: str) -> Response:
    """Fetch the live snapshot and build ``layout`` from it."""
    chart_layout = get_layout(layout)
    container = get_container()
    snapshot = container.station_client.fetch_snapshot()
    payload = container.engine.build(snapshot, chart_layout)
    return _success(payload.to_dict())


@dashboard_api.get("/charts")
@safe_route("Failed to build charts")
def get_charts() -> Response:
    """Build every requested layout from a single station fetch.

    Layouts come from repeated ``layout`` query parameters; without any the
    configured default layout is used.
    """
    container = get_container()
    names = request.args.getlist("layout") or [container.config.default_layout]
    layouts = [get_layout(name) for name in names]
    snapshot = container.station_client.fetch_snapshot()
    charts = container.engine.build_many(snapshot, layouts)
    logger.debug("Built %s charts from one snapshot", len(charts))
    return _success({"charts": {name: payload.to_dict() for name, payload in charts.items()}})


@dashboard_api.post("/charts/<layout>")
@safe_route("Failed to build chart")
def build_chart(layout: str) -> Response:
    """Build ``layout`` from a snapshot posted as the request body."""
    chart_layout = get_layout(layout)
    container = get_container()
    payload = container.engine.build(get_json(), chart_layout)
    return _success(payload.to_dict())
