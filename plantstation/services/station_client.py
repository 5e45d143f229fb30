"""
Station Client
==============

Fetches the telemetry snapshot from the watering station's HTTP endpoint.

This is the only network boundary of the dashboard. A failed fetch raises
:class:`ExternalServiceError`; it never hands a partial snapshot to the
chart engine.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from plantstation.constants import StationDefaults
from plantstation.domain.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class StationClient:
    """Thin wrapper around ``requests`` for the station's ``/data`` endpoint."""

    def __init__(
        self,
        base_url: str = StationDefaults.URL,
        *,
        data_path: str = StationDefaults.DATA_PATH,
        timeout: float = StationDefaults.TIMEOUT_SECONDS,
        username: str | None = None,
        password: str | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.data_path = data_path if data_path.startswith("/") else f"/{data_path}"
        self.timeout = timeout
        self.auth = (username, password or "") if username else None
        self.session = session or requests.Session()

    @property
    def data_url(self) -> str:
        return f"{self.base_url}{self.data_path}"

    def fetch_snapshot(self) -> dict[str, Any]:
        """GET the snapshot and return the decoded JSON object."""
        url = self.data_url
        try:
            response = self.session.get(url, timeout=self.timeout, auth=self.auth)
            response.raise_for_status()
        except requests.exceptions.Timeout as exc:
            logger.warning("Station timeout after %ss: %s", self.timeout, url)
            raise ExternalServiceError("Watering station did not respond in time", detail={"url": url}) from exc
        except requests.exceptions.ConnectionError as exc:
            logger.warning("Cannot connect to station: %s", url)
            raise ExternalServiceError("Watering station is unreachable", detail={"url": url}) from exc
        except requests.exceptions.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.warning("Station replied %s for %s", status, url)
            raise ExternalServiceError(
                f"Watering station replied with HTTP {status}", detail={"url": url, "status": status}
            ) from exc
        except requests.exceptions.RequestException as exc:
            logger.error("Station request failed for %s: %s", url, exc)
            raise ExternalServiceError("Watering station request failed", detail={"url": url}) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Station sent non-JSON body from %s", url)
            raise ExternalServiceError("Watering station sent an invalid reply", detail={"url": url}) from exc

        if not isinstance(payload, dict):
            raise ExternalServiceError("Watering station sent an invalid reply", detail={"url": url})

        logger.debug("Fetched station snapshot from %s", url)
        return payload

    def close(self) -> None:
        self.session.close()
