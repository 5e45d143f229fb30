"""
Configuration for the PlantStation dashboard
=============================================
Runtime settings loaded from environment variables (prefix ``PLANTSTATION_``)
and the logging setup shared by the server entry points.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from plantstation.constants import StationDefaults
from plantstation.domain.chart_layout import LAYOUTS
from plantstation.domain.exceptions import ConfigurationError


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer.") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be a number.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("PLANTSTATION_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("PLANTSTATION_SECRET_KEY", "PlantStationDevSecretKey"))

    # Server
    host: str = field(default_factory=lambda: os.getenv("PLANTSTATION_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PLANTSTATION_PORT", 8000))

    # Watering station
    station_url: str = field(default_factory=lambda: os.getenv("PLANTSTATION_STATION_URL", StationDefaults.URL))
    station_data_path: str = field(
        default_factory=lambda: os.getenv("PLANTSTATION_STATION_DATA_PATH", StationDefaults.DATA_PATH)
    )
    station_timeout_seconds: float = field(
        default_factory=lambda: _env_float("PLANTSTATION_STATION_TIMEOUT", StationDefaults.TIMEOUT_SECONDS)
    )
    station_user: str = field(default_factory=lambda: os.getenv("PLANTSTATION_STATION_USER", ""))
    station_password: str = field(default_factory=lambda: os.getenv("PLANTSTATION_STATION_PASSWORD", ""))

    # Dashboard
    default_layout: str = field(default_factory=lambda: os.getenv("PLANTSTATION_DEFAULT_LAYOUT", "dual"))

    # Logging
    DEBUG: bool = field(default_factory=lambda: _env_bool("PLANTSTATION_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("PLANTSTATION_LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("PLANTSTATION_LOG_FILE", "logs/plantstation.log"))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.station_timeout_seconds <= 0:
            raise ConfigurationError(
                f"Station timeout must be positive, got {self.station_timeout_seconds}"
            )
        if self.default_layout not in LAYOUTS:
            raise ConfigurationError(
                f"Unknown default layout '{self.default_layout}'. Choose one of: {', '.join(sorted(LAYOUTS))}"
            )
        if not self.station_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Station URL must be http(s), got '{self.station_url}'")

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "SECRET_KEY": self.secret_key,
            "DEBUG": self.DEBUG,
            "STATION_URL": self.station_url,
            "DEFAULT_LAYOUT": self.default_layout,
        }


def setup_logging(debug: bool = False, log_file: str | None = None, level: str | None = None) -> None:
    """Setup logging configuration."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    if debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName((level or "INFO").upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(log_level)

    # Avoid duplicate handlers when create_app is called repeatedly
    has_console = any(getattr(h, "name", "") == "plantstation_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "plantstation_file" for h in root.handlers)
    added_handler = False

    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "plantstation_console"
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if log_file and not has_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "plantstation_file"
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    for handler in root.handlers:
        if getattr(handler, "name", "") in {"plantstation_console", "plantstation_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    return AppConfig()
