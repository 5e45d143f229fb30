from __future__ import annotations

import atexit
import dataclasses
import logging
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from plantstation.blueprints.api import dashboard_api, health_api
from plantstation.config import AppConfig, load_config, setup_logging
from plantstation.domain.exceptions import ConfigurationError


def create_app(config_overrides: dict[str, Any] | None = None) -> Flask:
    config = load_config()
    if config_overrides:
        known = {field.name for field in dataclasses.fields(config)}
        for key, value in config_overrides.items():
            name = key if key in known else key.lower()
            if name not in known:
                raise ConfigurationError(f"Unknown configuration override '{key}'")
            setattr(config, name, value)
        # Re-run validation on the overridden values
        config.__post_init__()

    setup_logging(debug=config.DEBUG, log_file=config.log_file or None, level=config.log_level)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())

    from plantstation.services.container import ServiceContainer

    container = ServiceContainer.build(config)
    flask_app.config["CONTAINER"] = container
    atexit.register(container.shutdown)

    # Global JSON error handler for /api/ routes. Domain exceptions carry
    # their own ``http_status``.
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith("/api/"):
            raise exc
        from plantstation.domain.exceptions import PlantStationError
        from plantstation.utils.http import domain_error_response, error_response, safe_error

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, PlantStationError):
            return domain_error_response(exc)

        return safe_error(exc, 500, context="unhandled")

    V1 = "/api/v1"
    flask_app.register_blueprint(dashboard_api, url_prefix=f"{V1}/dashboard")
    flask_app.register_blueprint(health_api, url_prefix=f"{V1}/health")

    for bp_name in flask_app.blueprints:
        logging.info(" Registered blueprint: %s", bp_name)

    logging.getLogger(__name__).info("PlantStation dashboard initialized (station %s)", config.station_url)
    return flask_app


__all__ = ["AppConfig", "create_app"]
