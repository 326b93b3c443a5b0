"""
Unit tests for the external API clients.

Tests cover:
- Retry logic on 5xx errors
- No retry on 4xx errors
- Async context manager
- Document store project and subject calls
- Append-only log writes
- Weather mapping and missing API key
"""
import json

import pytest
import httpx
import respx
from unittest.mock import AsyncMock

import agritag.infrastructure.document_store_client as store_module
from agritag.domain.models import AssetNamespace, GeoPoint, TreeDocument, TreeLogEntry
from agritag.infrastructure.document_store_client import (
    DocumentStoreClient,
    get_document_store_client,
)
from agritag.infrastructure.external_api_client import (
    ExternalAPIClient,
    ExternalAPIError,
)
from agritag.infrastructure.weather_client import WeatherClient, to_snapshot

BASE_URL = "https://api.test"

WEATHER_RESPONSE = {
    "name": "Denpasar",
    "main": {"temp": 29.5, "humidity": 78},
    "weather": [{"description": "scattered clouds", "icon": "03d"}],
    "wind": {"speed": 3.6},
}


# ============================================================
# Base Client Tests
# ============================================================

class TestAsyncContextManager:
    """Tests for async context manager functionality."""

    @pytest.mark.asyncio
    async def test_context_manager_enter(self):
        """__aenter__ should return the client instance."""
        client = ExternalAPIClient(BASE_URL)

        async with client as ctx_client:
            assert ctx_client is client

    @pytest.mark.asyncio
    async def test_context_manager_exit_closes_client(self):
        """__aexit__ should close the HTTP client."""
        client = ExternalAPIClient(BASE_URL)
        client.close = AsyncMock()

        async with client:
            pass

        client.close.assert_called_once()


class TestErrorHandling:
    """Tests for retry and error mapping."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_successful_get_request(self):
        """Successful GET request should return parsed JSON."""
        client = ExternalAPIClient(BASE_URL)
        respx.get(f"{BASE_URL}/test").mock(
            return_value=httpx.Response(200, json={"result": "success"})
        )

        result = await client._make_request("GET", "/test")

        assert result == {"result": "success"}
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_body_returns_empty_dict(self):
        """204 responses decode to an empty dict."""
        client = ExternalAPIClient(BASE_URL)
        respx.patch(f"{BASE_URL}/test").mock(return_value=httpx.Response(204))

        assert await client._make_request("PATCH", "/test", json={}) == {}
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_4xx_error_no_retry(self):
        """4xx errors should not trigger retry and keep their status."""
        client = ExternalAPIClient(BASE_URL)
        respx.get(f"{BASE_URL}/test").mock(
            return_value=httpx.Response(404, text="Not Found")
        )

        with pytest.raises(ExternalAPIError, match="404") as exc_info:
            await client._make_request("GET", "/test")

        assert exc_info.value.status_code == 404
        assert exc_info.value.is_not_found
        assert respx.calls.call_count == 1
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_5xx_error_triggers_retry(self):
        """5xx errors should trigger retry."""
        client = ExternalAPIClient(BASE_URL)
        route = respx.get(f"{BASE_URL}/test")
        route.side_effect = [
            httpx.Response(500, text="Internal Server Error"),
            httpx.Response(200, json={"result": "success"}),
        ]

        result = await client._make_request("GET", "/test")

        assert result == {"result": "success"}
        assert respx.calls.call_count == 2  # Retried once
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_5xx_exhausts_retries(self):
        """Persistent server errors become a 502 ExternalAPIError."""
        client = ExternalAPIClient(BASE_URL)
        respx.get(f"{BASE_URL}/test").mock(
            return_value=httpx.Response(503, text="Unavailable")
        )

        with pytest.raises(ExternalAPIError, match="after retries") as exc_info:
            await client._make_request("GET", "/test")

        assert exc_info.value.status_code == 502
        assert respx.calls.call_count == 3
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_is_wrapped(self):
        """Connection failures are retried then wrapped."""
        client = ExternalAPIClient(BASE_URL)
        respx.get(f"{BASE_URL}/test").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(ExternalAPIError, match="refused"):
            await client._make_request("GET", "/test")

        assert respx.calls.call_count == 3
        await client.close()


# ============================================================
# Document Store Tests
# ============================================================

class TestDocumentStoreClient:
    """Tests for project and subject document calls."""

    def test_singleton_pattern(self):
        """get_document_store_client should return the same instance."""
        store_module._document_store_client = None

        client1 = get_document_store_client()
        client2 = get_document_store_client()

        assert client1 is client2

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_projects(self):
        """Projects are filtered by owner and decoded from camelCase."""
        client = DocumentStoreClient()
        route = respx.get(f"{client.base_url}/projects").mock(
            return_value=httpx.Response(200, json={"documents": [{
                "id": "proj-1",
                "name": "Kebun Alpukat",
                "geolocation": {"latitude": -8.659, "longitude": 115.242},
                "userId": "user-1",
                "createdAt": "2024-01-01T00:00:00.000Z",
                "startDate": "2024-01-01",
                "endDate": "2024-12-31",
            }]})
        )

        projects = await client.list_projects("user-1")

        assert route.calls.last.request.url.params["userId"] == "user-1"
        assert len(projects) == 1
        assert projects[0].user_id == "user-1"
        assert projects[0].geolocation == GeoPoint(latitude=-8.659, longitude=115.242)
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_create_project_merges_assigned_id(self):
        """The store-assigned id is merged into the created project."""
        client = DocumentStoreClient()
        respx.post(f"{client.base_url}/projects").mock(
            return_value=httpx.Response(201, json={"id": "proj-9"})
        )

        project = await client.create_project({
            "name": "Peternakan",
            "geolocation": {"latitude": -8.5, "longitude": 115.3},
            "userId": "user-1",
            "createdAt": "2024-05-01T00:00:00.000Z",
            "startDate": "2024-05-01",
            "endDate": "2024-05-01",
        })

        assert project.id == "proj-9"
        assert project.name == "Peternakan"
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_subjects_uses_namespace_collection(self, mature_tree):
        """Tree documents are read from the trees collection."""
        client = DocumentStoreClient()
        respx.get(f"{client.base_url}/projects/proj-1/trees").mock(
            return_value=httpx.Response(200, json={"documents": [{
                "id": mature_tree.id,
                "logs": [mature_tree.model_dump(by_alias=True, mode="json")],
            }]})
        )

        documents = await client.list_subjects("proj-1", AssetNamespace.TREE)

        assert documents == [TreeDocument(id=mature_tree.id, logs=[mature_tree])]
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_subject_not_found(self):
        """A subject with no document yet is None, not an error."""
        client = DocumentStoreClient()
        respx.get(f"{client.base_url}/projects/proj-1/animals/SF1SA0001").mock(
            return_value=httpx.Response(404, text="Not Found")
        )

        assert await client.get_subject("proj-1", AssetNamespace.ANIMAL, "SF1SA0001") is None
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_subject_propagates_other_errors(self):
        """Errors other than 404 still raise."""
        client = DocumentStoreClient()
        respx.get(f"{client.base_url}/projects/proj-1/trees/ST1AP0001").mock(
            return_value=httpx.Response(403, text="Forbidden")
        )

        with pytest.raises(ExternalAPIError):
            await client.get_subject("proj-1", AssetNamespace.TREE, "ST1AP0001")
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_append_to_existing_subject(self, mature_tree):
        """Existing subjects get the entry added to their logs array."""
        client = DocumentStoreClient()
        route = respx.patch(f"{client.base_url}/projects/proj-1/trees/ST1AP0001").mock(
            return_value=httpx.Response(200, json={})
        )

        await client.append_log_entry("proj-1", AssetNamespace.TREE, mature_tree, exists=True)

        body = json.loads(route.calls.last.request.content)
        [payload] = body["logs"]["arrayUnion"]
        assert payload["id"] == "ST1AP0001"
        assert payload["fertilizationDate"] == "2024-01-15"
        assert payload["updatedAt"] == "2024-03-01T08:00:00.000Z"
        assert "remark" not in payload
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_append_creates_new_subject(self):
        """A first entry creates the subject document."""
        client = DocumentStoreClient()
        entry = TreeLogEntry(id="ST1DU0005", age=1, updated_at="2024-05-01T00:00:00.000Z")
        route = respx.put(f"{client.base_url}/projects/proj-1/trees/ST1DU0005").mock(
            return_value=httpx.Response(200, json={})
        )

        await client.append_log_entry("proj-1", AssetNamespace.TREE, entry, exists=False)

        body = json.loads(route.calls.last.request.content)
        assert body == {
            "id": "ST1DU0005",
            "logs": [{"id": "ST1DU0005", "age": 1, "updatedAt": "2024-05-01T00:00:00.000Z"}],
        }
        await client.close()


# ============================================================
# Weather Client Tests
# ============================================================

class TestWeatherClient:
    """Tests for the current-weather client."""

    def test_to_snapshot(self):
        """OpenWeatherMap fields map onto the snapshot."""
        snapshot = to_snapshot(WEATHER_RESPONSE)

        assert snapshot.temperature == 29.5
        assert snapshot.humidity == 78
        assert snapshot.description == "scattered clouds"
        assert snapshot.location_name == "Denpasar"
        assert snapshot.wind_speed == 3.6
        assert snapshot.icon == "03d"

    def test_to_snapshot_tolerates_missing_sections(self):
        """Absent sections fall back to neutral values."""
        snapshot = to_snapshot({"main": {"temp": 20}})

        assert snapshot.description == ""
        assert snapshot.humidity == 0.0
        assert snapshot.wind_speed is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_current_weather(self):
        """Coordinates, metric units and the key are sent as query params."""
        client = WeatherClient(api_key="secret")
        route = respx.get(f"{client.base_url}/data/2.5/weather").mock(
            return_value=httpx.Response(200, json=WEATHER_RESPONSE)
        )

        snapshot = await client.get_current_weather(-8.659, 115.242)

        params = route.calls.last.request.url.params
        assert params["lat"] == "-8.659"
        assert params["lon"] == "115.242"
        assert params["units"] == "metric"
        assert params["appid"] == "secret"
        assert snapshot.temperature == 29.5
        await client.close()

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        """Without a key no request is made and a 503 error is raised."""
        client = WeatherClient(api_key="")

        with pytest.raises(ExternalAPIError, match="missing") as exc_info:
            await client.get_current_weather(0.0, 0.0)

        assert exc_info.value.status_code == 503
        await client.close()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
