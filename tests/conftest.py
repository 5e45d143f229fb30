"""
Shared test fixtures for the PlantStation dashboard test suite.

Provides:
- Station snapshots shaped like the station's ``/data`` reply
  (two-probe hourly + minute data, single-probe hourly data)
- A Flask app / test client with the station fetch mocked out

Usage:
    def test_example(engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual")
        assert payload.labels == (22, 23, 0, 1, 2)
"""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from plantstation import create_app
from plantstation.services.charting import ChartAggregationEngine

# ---------------------------------------------------------------------------
# Logging, keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("plantstation").setLevel(logging.WARNING)


# ========================== Snapshot Fixtures ==============================


@pytest.fixture()
def dual_snapshot() -> dict:
    """Two weight probes; plant 1 was watered at hour 0, plant 2 not at all.

    Minute ``water`` is ``null`` per probe, as the station sends it.
    """
    return {
        "data": {
            "time": 2,
            "weight": [[100, 98, 96, 110, 108], [200, 195, 190, 185, 180]],
            "water": [[0, 0, 500, 0, 0], [0, 0, 0, 0, 0]],
            "temperature": [2000, 2100, 2200, 2300, 2400],
            "humidity": [5000, 5100, 5200, 5300, 5400],
        },
        "mindata": {
            "time": 30,
            "weight": [[108, 108, 107], [180, 180, 179]],
            "water": [None, None],
            "temperature": [2400, 2400, 2400],
            "humidity": [5400, 5400, 5400],
        },
        "config": [
            {"hour": 7, "start": 2000, "max": 20000, "low": 90, "dst": 105, "range": 5},
            {"hour": 8, "start": 2000, "max": 3000, "low": 170, "dst": 195, "range": 10},
        ],
        "watertime": [{"scale": 35, "offset": 10}, {"scale": 0, "offset": 0}],
    }


@pytest.fixture()
def single_snapshot() -> dict:
    """Single moisture probe with one watering at hour 22."""
    return {
        "data": {
            "time": 23,
            "moisture": [40, 42, 44, 30],
            "temperature": [2000, 2050, 2100, 2150],
            "humidity": [6000, 6000, 6100, 6100],
            "level": [10, 10, 9, 9],
            "weight": [500, 490, 480, 470],
            "water": [0, 0, 1500, 0],
        },
        "config": {"hour": 7, "start": 2000, "max": 2000, "low": 20, "dst": 50, "range": 5},
    }


# ========================== Service Fixtures ===============================


@pytest.fixture()
def engine() -> ChartAggregationEngine:
    return ChartAggregationEngine()


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app(monkeypatch, dual_snapshot):
    """App with the station fetch replaced by a Mock returning ``dual_snapshot``."""
    monkeypatch.setenv("PLANTSTATION_SECRET_KEY", "test-secret")
    app = create_app({"log_file": "", "station_url": "http://station.test"})
    app.config["TESTING"] = True
    container = app.config["CONTAINER"]
    monkeypatch.setattr(container.station_client, "fetch_snapshot", Mock(return_value=dual_snapshot))
    yield app
    container.shutdown()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def station_fetch(app) -> Mock:
    """The mocked ``fetch_snapshot``; set ``side_effect``/``return_value`` per test."""
    return app.config["CONTAINER"].station_client.fetch_snapshot
