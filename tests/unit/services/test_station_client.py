"""
Unit tests for StationClient with a mocked requests session.
"""

from unittest.mock import Mock

import pytest
import requests

from plantstation.domain.exceptions import ExternalServiceError
from plantstation.services.station_client import StationClient


@pytest.fixture()
def session():
    response = Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"data": {"time": 1}}
    mock = Mock()
    mock.get.return_value = response
    return mock


class TestFetchSnapshot:
    def test_returns_json_object(self, session):
        client = StationClient("http://station.local/", session=session, timeout=3)
        assert client.fetch_snapshot() == {"data": {"time": 1}}
        session.get.assert_called_once_with("http://station.local/data", timeout=3, auth=None)

    def test_basic_auth(self, session):
        client = StationClient("http://station.local", username="admin", password="pw", session=session)
        client.fetch_snapshot()
        assert session.get.call_args.kwargs["auth"] == ("admin", "pw")

    def test_custom_data_path(self, session):
        client = StationClient("http://station.local", data_path="api/data", session=session)
        assert client.data_url == "http://station.local/api/data"

    def test_timeout(self, session):
        session.get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(ExternalServiceError) as exc_info:
            StationClient(session=session).fetch_snapshot()
        assert exc_info.value.http_status == 502
        assert exc_info.value.detail["url"].endswith("/data")

    def test_unreachable(self, session):
        session.get.side_effect = requests.exceptions.ConnectionError()
        with pytest.raises(ExternalServiceError, match="unreachable"):
            StationClient(session=session).fetch_snapshot()

    def test_http_error_status(self, session):
        session.get.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError(
            response=Mock(status_code=503)
        )
        with pytest.raises(ExternalServiceError) as exc_info:
            StationClient(session=session).fetch_snapshot()
        assert exc_info.value.detail["status"] == 503

    def test_non_json_body(self, session):
        session.get.return_value.json.side_effect = ValueError("no json")
        with pytest.raises(ExternalServiceError, match="invalid reply"):
            StationClient(session=session).fetch_snapshot()

    def test_json_array_rejected(self, session):
        session.get.return_value.json.return_value = [1, 2]
        with pytest.raises(ExternalServiceError):
            StationClient(session=session).fetch_snapshot()

    def test_close_closes_session(self, session):
        StationClient(session=session).close()
        session.close.assert_called_once()
