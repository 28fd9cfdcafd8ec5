"""Pytest configuration and fixtures for Home Assistant REST API tests."""

from pathlib import Path
from typing import Any

import pytest

BASE_URL = "http://homeassistant.local:8123"
TOKEN = "test_token"  # noqa: S105


@pytest.fixture(autouse=True)
def clear_ha_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep HA_URL / HA_TOKEN and stray .env files out of the tests."""
    monkeypatch.delenv("HA_URL", raising=False)
    monkeypatch.delenv("HA_TOKEN", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_config_response() -> dict[str, Any]:
    """Fixture providing a sample `/api/config` response.

    Returns:
        A dictionary representing a configuration API response.

    """
    return {
        "components": ["http", "light", "sensor.cpuspeed"],
        "config_dir": "/config",
        "elevation": 510,
        "latitude": 45.8781529,
        "location_name": "Home",
        "longitude": 8.458853651,
        "time_zone": "Europe/Zurich",
        "unit_system": {
            "length": "km",
            "mass": "g",
            "temperature": "°C",
            "volume": "L",
            "wind_speed": "m/s",
        },
        "version": "2024.6.0",
        "whitelist_external_dirs": ["/config/www", "/media"],
        "state": "RUNNING",
    }


@pytest.fixture
def sample_state_response() -> dict[str, Any]:
    """Fixture providing a single entity state.

    Returns:
        A dictionary representing a state API response.

    """
    return {
        "entity_id": "light.bedroom",
        "state": "on",
        "attributes": {
            "friendly_name": "Bedroom",
            "icon": "mdi:lightbulb",
            "brightness": 180,
            "rgb_color": [255, 200, 120],
        },
        "last_changed": "2024-06-01T10:00:00+00:00",
        "last_reported": "2024-06-01T10:05:00+00:00",
        "last_updated": "2024-06-01T10:00:00+00:00",
        "context": {
            "id": "01HZ000000000000000000000",
            "parent_id": None,
            "user_id": "abcdef",
        },
    }


@pytest.fixture
def sample_states_response(sample_state_response: dict[str, Any]) -> list[dict]:
    """Fixture providing the states of three entities.

    Args:
        sample_state_response: Single state fixture.

    Returns:
        A list representing a states API response.

    """
    return [
        sample_state_response,
        {
            "entity_id": "sun.sun",
            "state": "above_horizon",
            "attributes": {"elevation": 42.1, "friendly_name": "Sun"},
            "last_changed": "2024-06-01T05:00:00+00:00",
        },
        {"entity_id": "sensor.empty", "state": "unknown", "attributes": {}},
    ]


@pytest.fixture
def sample_history_response() -> list[list[dict]]:
    """Fixture providing a history response for two entities.

    Returns:
        One inner list per entity, as sent by Home Assistant.

    """
    return [
        [
            {
                "entity_id": "light.bedroom",
                "state": "off",
                "attributes": {"friendly_name": "Bedroom"},
                "last_changed": "2024-06-01T08:00:00+00:00",
                "last_updated": "2024-06-01T08:00:00+00:00",
            },
            {"state": "on", "last_changed": "2024-06-01T10:00:00+00:00"},
        ],
        [
            {
                "entity_id": "sensor.temperature",
                "state": "21.5",
                "attributes": None,
                "last_changed": "2024-06-01T09:00:00+00:00",
            },
            {"state": "21.7", "last_changed": "2024-06-01T09:30:00+00:00"},
            {"state": "21.9", "last_changed": "2024-06-01T09:45:00+00:00"},
        ],
    ]


@pytest.fixture
def sample_logbook_response() -> list[dict]:
    """Fixture providing logbook entries.

    Returns:
        A list representing a logbook API response.

    """
    return [
        {
            "name": "Bedroom",
            "message": "turned on",
            "entity_id": "light.bedroom",
            "context_user_id": "abcdef",
            "domain": "light",
            "when": "2024-06-01T10:00:00+00:00",
        },
        {
            "name": "Home Assistant",
            "message": "started",
            "source": "homeassistant",
            "entity_id": "homeassistant.core",
            "context_id": "01HZ000000000000000000001",
            "when": "2024-06-01T04:00:00+00:00",
        },
    ]
