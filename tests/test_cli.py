from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
import typer
from typer.testing import CliRunner

from cli.app import _get_state, app
from cli.config import DEFAULT_BASE_URL, load_config


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.reading_calls: List[Dict[str, Any]] = []
        self.hotspot_calls: List[Dict[str, Any]] = []
        self.analytics_calls: List[Dict[str, Any]] = []
        self.submitted: List[Dict[str, Any]] = []
        self.readings_payload: List[Dict[str, Any]] = [
            {
                "id": "city-0-0",
                "latitude": 28.6139,
                "longitude": 77.209,
                "decibel": 88.0,
                "timestamp": 1_717_243_200_000,
                "device_type": "static",
                "location_name": "Delhi",
            }
        ]
        self.hotspots_payload: List[Dict[str, Any]] = [
            {
                "id": "hotspot-1",
                "latitude": 28.6139,
                "longitude": 77.209,
                "average_decibel": 84.5,
                "reading_count": 24,
                "radius": 500.0,
                "location_name": "Delhi",
                "severity": "moderate",
                "color": "#f59e0b",
            }
        ]
        self.analytics_payload: Dict[str, Any] = {
            "statistics": {"count": 48, "average": 72, "minimum": 60.0, "maximum": 81.0},
            "analysis": {
                "pattern_type": "Erratic",
                "insight": "High variations in noise levels suggest irregular noise sources requiring attention.",
                "confidence": 65,
                "timestamp": 1_717_243_200_000,
            },
            "health": {
                "summary": "Moderate noise exposure detected. Some precautions recommended.",
                "recommendations": ["Take regular breaks from noisy areas"],
                "average_exposure": 72.3,
                "risk_level": "moderate",
                "timestamp": 1_717_243_200_000,
            },
            "prediction": [70] * 24,
        }
        self.closed = False

    def list_readings(self, **params: Any) -> List[Dict[str, Any]]:
        self.reading_calls.append(params)
        return self.readings_payload

    def list_hotspots(self, **params: Any) -> List[Dict[str, Any]]:
        self.hotspot_calls.append(params)
        return self.hotspots_payload

    def get_analytics(self, **params: Any) -> Dict[str, Any]:
        self.analytics_calls.append(params)
        return self.analytics_payload

    def get_contacts(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return {
            "location_name": "Guindy, Chennai, Tamil Nadu, India",
            "state": "Tamil Nadu",
            "organizations": [
                {
                    "id": 5,
                    "name": "Tamil Nadu Pollution Control Board",
                    "description": "State pollution monitoring and control authority for Tamil Nadu.",
                    "address": "76, Mount Salai, Guindy, Chennai-600032",
                    "phone": "044-22353134",
                    "email": "tnpcb@tn.nic.in",
                    "website": "https://tnpcb.gov.in",
                    "type": "Government",
                }
            ],
            "checklist": ["Exact location of the noise source"],
        }

    def submit_reading(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.submitted.append(payload)
        return {**payload, "id": "abc123def"}

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def stub(monkeypatch) -> StubClient:
    client = StubClient(config=None)

    def factory(config):
        client.config = config
        return client

    monkeypatch.setattr("cli.app.ApiClient", factory)
    return client


def test_readings_command(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(
        app, ["readings", "--lat", "12.98", "--lng", "80.15", "--radius", "5", "--min-db", "60"]
    )

    assert result.exit_code == 0
    assert "Readings (1)" in result.stdout
    assert "Delhi" in result.stdout
    assert stub.reading_calls == [
        {
            "latitude": 12.98,
            "longitude": 80.15,
            "radius_km": 5.0,
            "min_decibel": 60.0,
            "max_decibel": 150.0,
        }
    ]
    assert stub.closed is True


def test_readings_requires_coordinate_pair(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(app, ["readings", "--lat", "12.98"])

    assert result.exit_code == 2
    assert not stub.reading_calls


def test_hotspots_command(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(app, ["hotspots"])

    assert result.exit_code == 0
    assert "hotspot-1" in result.stdout
    assert "[moderate]" in result.stdout
    assert stub.hotspot_calls == [{"latitude": None, "longitude": None, "radius_km": None}]


def test_analytics_command(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(app, ["analytics", "--lat", "12.98", "--lng", "80.15"])

    assert result.exit_code == 0
    assert "Erratic" in result.stdout
    assert "Health Impact" in result.stdout
    assert "23h:70" in result.stdout


def test_contacts_command(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(app, ["contacts", "--lat", "13.0", "--lng", "80.2"])

    assert result.exit_code == 0
    assert "Tamil Nadu Pollution Control Board" in result.stdout
    assert "Include in your complaint" in result.stdout


def test_submit_command(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(app, ["submit", "--lat", "12.9", "--lng", "80.1", "-d", "71"])

    assert result.exit_code == 0
    assert "Reading accepted. id=abc123def" in result.stdout
    (payload,) = stub.submitted
    assert payload["decibel"] == 71.0
    assert payload["device_type"] == "mobile"
    assert isinstance(payload["timestamp"], int)


def test_measure_without_submit(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(app, ["measure", "--seconds", "3", "--interval", "0", "--seed", "1"])

    assert result.exit_code == 0
    assert "Average:" in result.stdout
    sample_lines = [line for line in result.stdout.splitlines() if line.strip()[:1].isdigit()]
    assert len(sample_lines) == 3
    assert not stub.submitted


def test_measure_submit_requires_location(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(app, ["measure", "-s", "2", "--interval", "0", "--submit"])

    assert result.exit_code == 2
    assert not stub.submitted


def test_measure_and_submit(stub: StubClient, runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        ["measure", "-s", "2", "--interval", "0", "--seed", "5", "--lat", "12.9", "--lng", "80.1", "--submit"],
    )

    assert result.exit_code == 0
    assert "Submitted Reading" in result.stdout
    (payload,) = stub.submitted
    assert "id" not in payload
    assert payload["device_type"] == "mobile"
    assert 45 <= payload["decibel"] <= 75
    assert payload["latitude"] == 12.9


def test_load_config_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://noise.example:9000/")
    monkeypatch.setenv("CLI_TIMEOUT", "not-a-number")

    config = load_config()

    assert config.base_url == "http://noise.example:9000"
    assert config.timeout == 30.0


def test_load_config_defaults(monkeypatch) -> None:
    monkeypatch.delenv("API_BASE_URL", raising=False)
    monkeypatch.delenv("CLI_TIMEOUT", raising=False)

    config = load_config(timeout=5.0)

    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == 5.0


def test_uninitialized_state_exits_with_error() -> None:
    with pytest.raises(typer.Exit) as excinfo:
        _get_state(SimpleNamespace(obj=None))

    assert excinfo.value.exit_code == 1
