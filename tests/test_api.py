"""Tests for the FastAPI discovery surface."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.main_api import DiscoveryAPI
from config_loader import get_sample_config
from sony_discovery import Device, DiscoveryResult, DiscoveryStartError


@pytest.fixture
def discovery():
    mock = MagicMock()
    mock.discover = AsyncMock(
        return_value=DiscoveryResult(
            devices=[
                Device(
                    id="10.0.0.5-ILCE-7",
                    display_name="Alpha ILCE-7",
                    product="Camera",
                    model="ILCE-7",
                    hostname="10.0.0.5",
                )
            ],
            method="ssdp",
            duration_seconds=5.0123,
            hosts_queried=1,
            success_count=1,
        )
    )
    return mock


@pytest.fixture
def client(discovery):
    api = DiscoveryAPI(get_sample_config(), discovery)
    return TestClient(api.app)


class TestDiscoverRoute:
    def test_returns_camel_case_devices(self, client, discovery):
        resp = client.get("/api/devices/discover")

        assert resp.status_code == 200
        data = resp.json()
        assert data["devices"] == [
            {
                "id": "10.0.0.5-ILCE-7",
                "displayName": "Alpha ILCE-7",
                "product": "Camera",
                "model": "ILCE-7",
                "hostname": "10.0.0.5",
            }
        ]
        assert data["count"] == 1
        assert data["duration_seconds"] == 5.012
        discovery.discover.assert_awaited_once_with(None)

    def test_timeout_query_parameter(self, client, discovery):
        resp = client.get("/api/devices/discover", params={"timeout": 2})
        assert resp.status_code == 200
        discovery.discover.assert_awaited_once_with(2)

    def test_negative_timeout_is_rejected(self, client, discovery):
        resp = client.get("/api/devices/discover", params={"timeout": -1})
        assert resp.status_code == 422
        discovery.discover.assert_not_awaited()

    def test_start_failure_maps_to_503(self, client, discovery):
        discovery.discover.side_effect = DiscoveryStartError()

        resp = client.get("/api/devices/discover")

        assert resp.status_code == 503
        assert resp.json() == {"detail": "Failed to start SSDP search"}


class TestSystemRoutes:
    def test_health(self, client):
        resp = client.get("/api/system/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["discovery_timeout_seconds"] == 5
