"""
Blueprint Common Utilities
==========================

Shared helper functions for the API blueprints.

Usage:
    from plantstation.blueprints.api._common import (
        get_container, get_json, success,
    )
"""
from __future__ import annotations

from typing import Any

from flask import current_app, request

from plantstation.utils.http import success_response


def get_container():
    """
    Get the service container from Flask app config.

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


def get_json() -> Any:
    """Get the JSON request body, or an empty dict when there is none."""
    body = request.get_json(silent=True)
    return {} if body is None else body


def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """Flask Response with format: {"ok": true, "data": ..., "error": null}"""
    return success_response(data, status, message=message)

