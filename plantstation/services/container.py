from __future__ import annotations

import logging
from dataclasses import dataclass

from plantstation.config import AppConfig
from plantstation.services.charting import ChartAggregationEngine
from plantstation.services.station_client import StationClient

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate the dashboard's services."""

    config: AppConfig
    station_client: StationClient
    engine: ChartAggregationEngine

    @classmethod
    def build(cls, config: AppConfig) -> "ServiceContainer":
        station_client = StationClient(
            config.station_url,
            data_path=config.station_data_path,
            timeout=config.station_timeout_seconds,
            username=config.station_user or None,
            password=config.station_password or None,
        )
        logger.info("Station client targets %s", station_client.data_url)
        return cls(config=config, station_client=station_client, engine=ChartAggregationEngine())

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        self.station_client.close()
        logger.info("Station client closed")
