"""Tests for the async SPAS API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from spas.services.spas_client import SpasClient

REGIONS = [
    {
        "name": "Ashanti",
        "live_frequency": 49.85,
        "live_voltage": 226.7,
        "quality_trend": "Improving",
        "active_outages": [],
        "scheduled_outages": [],
        "users_affected": 8500,
        "average_voltage": 228.9,
        "average_frequency": 49.92,
        "stability_percent": 84,
    },
    {
        "name": "Volta",
        "live_frequency": 50.08,
        "live_voltage": 244.6,
        "quality_trend": "Improving",
        "active_outages": [],
        "scheduled_outages": [],
        "users_affected": 0,
        "average_voltage": 238.2,
        "average_frequency": 50.03,
        "stability_percent": 90,
    },
]


def _mock_client(json_body=None, error=None):
    mock_resp = MagicMock()
    mock_resp.json.return_value = json_body
    mock_resp.raise_for_status = MagicMock()

    mock_client = AsyncMock()
    if error is not None:
        mock_client.get = AsyncMock(side_effect=error)
    else:
        mock_client.get = AsyncMock(return_value=mock_resp)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.mark.asyncio
async def test_load_power_data():
    mock_client = _mock_client(REGIONS)
    with patch("spas.services.spas_client.httpx.AsyncClient", return_value=mock_client):
        regions = await SpasClient("http://spas.test/api/v1").load_power_data()

    assert [r.name for r in regions] == ["Ashanti", "Volta"]
    assert regions[0].stability_percent == 84
    mock_client.get.assert_awaited_once_with("/power-data/", params=None)


@pytest.mark.asyncio
async def test_get_region_case_insensitive():
    with patch("spas.services.spas_client.httpx.AsyncClient", return_value=_mock_client(REGIONS)):
        region = await SpasClient("http://spas.test/api/v1").get_region("volta")
    assert region is not None
    assert region.name == "Volta"


@pytest.mark.asyncio
async def test_get_all_regions():
    with patch("spas.services.spas_client.httpx.AsyncClient", return_value=_mock_client(REGIONS)):
        names = await SpasClient("http://spas.test/api/v1").get_all_regions()
    assert names == ["Ashanti", "Volta"]


@pytest.mark.asyncio
async def test_load_power_data_failure_is_empty():
    mock_client = _mock_client(error=httpx.ConnectError("connection refused"))
    with patch("spas.services.spas_client.httpx.AsyncClient", return_value=mock_client):
        regions = await SpasClient("http://spas.test/api/v1").load_power_data()
    assert regions == []


@pytest.mark.asyncio
async def test_get_outages():
    body = {
        "active": [{
            "id": "Ashanti-Kumasi Central-active",
            "location": "Kumasi Central",
            "region": "Ashanti",
            "start_time": "2024-06-01T07:45:00Z",
            "estimated_duration": "3h",
            "affected_users": 8500,
            "status": "active",
            "cause": "Power line fault",
        }],
        "scheduled": [],
    }
    with patch("spas.services.spas_client.httpx.AsyncClient", return_value=_mock_client(body)):
        listing = await SpasClient("http://spas.test/api/v1").get_outages()
    assert len(listing.active) == 1
    assert listing.active[0].affected_users == 8500
    assert listing.scheduled == []


@pytest.mark.asyncio
async def test_get_trends_all_regions_omits_region_param():
    points = [{"timestamp": "2026-03-01T12:00:00Z", "time": "12:00",
               "voltage": 230.1, "frequency": 50.0, "stability": 91.5}]
    mock_client = _mock_client(points)
    with patch("spas.services.spas_client.httpx.AsyncClient", return_value=mock_client):
        trends = await SpasClient("http://spas.test/api/v1").get_trends("All Regions", "7d")

    assert len(trends) == 1
    assert trends[0].voltage == 230.1
    mock_client.get.assert_awaited_once_with("/power-data/trends", params={"period": "7d"})


@pytest.mark.asyncio
async def test_get_trends_invalid_body_is_empty():
    with patch("spas.services.spas_client.httpx.AsyncClient", return_value=_mock_client({"oops": True})):
        trends = await SpasClient("http://spas.test/api/v1").get_trends("Ashanti")
    assert trends == []
