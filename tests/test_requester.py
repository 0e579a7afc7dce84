"""Tests for the HTTP requester."""
import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from custom_components.daikin_aircon.requester import Requester, normalize_host

GET = "custom_components.daikin_aircon.requester.requests.get"


@pytest.mark.parametrize(
    ("host", "expected"),
    [
        ("192.168.1.20", "http://192.168.1.20"),
        ("http://aircon.local/", "http://aircon.local"),
        ("https://aircon.local:8443", "https://aircon.local:8443"),
        (None, "http://localhost"),
        ("", "http://localhost"),
    ],
)
def test_normalize_host(host, expected):
    assert normalize_host(host) == expected


def test_get_passes_body_to_callback():
    response = MagicMock(text="ret=OK,pow=1")
    bodies = []

    with patch(GET, return_value=response) as mock_get:
        requester = Requester("192.168.1.20", timeout=3)
        requester.get("/aircon/get_control_info", bodies.append)

    mock_get.assert_called_once_with(
        "http://192.168.1.20/aircon/get_control_info", timeout=3
    )
    assert bodies == ["ret=OK,pow=1"]
    assert requester.available is True


def test_transport_error_delivers_empty_body(caplog):
    bodies = []

    with patch(GET, side_effect=requests.ConnectionError("refused")):
        requester = Requester("aircon.local")
        with caplog.at_level(logging.ERROR):
            requester.get("/aircon/get_sensor_info", bodies.append)

    assert bodies == [""]
    assert requester.available is False
    assert "refused" in caplog.text


def test_http_error_status_delivers_empty_body():
    response = MagicMock(text="not found")
    response.raise_for_status.side_effect = requests.HTTPError("404")
    bodies = []

    with patch(GET, return_value=response):
        requester = Requester("aircon.local")
        requester.get("/aircon/get_control_info", bodies.append)

    assert bodies == [""]
    assert requester.available is False


def test_recovers_availability_after_success():
    bodies = []
    with patch(GET, side_effect=[requests.Timeout("slow"), MagicMock(text="ret=OK")]):
        requester = Requester("aircon.local")
        requester.get("/aircon/get_control_info", bodies.append)
        assert requester.available is False
        requester.get("/aircon/get_control_info", bodies.append)

    assert bodies == ["", "ret=OK"]
    assert requester.available is True


def test_writes_are_logged_at_info(caplog):
    with patch(GET, return_value=MagicMock(text="ret=OK")):
        requester = Requester("aircon.local")
        with caplog.at_level(logging.INFO):
            requester.get("/aircon/set_control_info?pow=1", lambda body: None, False)
            requester.get("/aircon/get_control_info", lambda body: None)

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert messages == ["GET http://aircon.local/aircon/set_control_info?pow=1"]
