"""JSON API blueprints, all mounted under ``/api/v1``."""

from .dashboard import dashboard_api
from .health import health_api

__all__ = ["dashboard_api", "health_api"]
