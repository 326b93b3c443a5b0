"""
Unit tests for the dashboard application service.
"""
from datetime import datetime, timezone

import pytest

from agritag.domain.models import Predicted, Unresolved
from agritag.infrastructure.external_api_client import ExternalAPIError
from agritag.services.application.dashboard_service import (
    DashboardService,
    NO_ANIMAL_DATA,
    NO_TREE_DATA,
    WEATHER_FETCH_FAILED,
)
from agritag.services.domain.animal_health import CARE_NO_WEATHER, CARE_NONE, HEALTHY
from agritag.services.domain.harvest_advisor import (
    REC_CLEAR,
    REC_NO_WEATHER,
    WEATHER_UNAVAILABLE,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def dashboard_service(mock_store, mock_weather_client, harvest_advisor, health_advisor):
    """Dashboard service wired with mocks."""
    return DashboardService(mock_store, mock_weather_client, harvest_advisor, health_advisor)


# ============================================================
# Tree Dashboard Tests
# ============================================================

class TestTreeDashboard:
    """Tests for the tree dashboard."""

    @pytest.mark.asyncio
    async def test_tree_dashboard(self, dashboard_service, mock_weather_client, clear_weather):
        """All sections are assembled from the store and the weather."""
        dashboard = await dashboard_service.get_tree_dashboard("proj-1", NOW)

        assert [t.id for t in dashboard.trees] == ["ST1AP0001", "ST1DU0002"]
        assert dashboard.trees[0].age == 5
        assert [log.updated_at for log in dashboard.recent_logs] == [
            "2024-03-01T08:00:00.000Z",
            "2024-02-20T08:00:00.000Z",
            "2024-02-01T08:00:00.000Z",
        ]
        assert dashboard.activity.active == 2
        assert dashboard.activity.inactive == 0
        assert dashboard.logs_per_day == {
            "2024-02-01": 1,
            "2024-02-20": 1,
            "2024-03-01": 1,
        }
        assert dashboard.features["type"] == "FeatureCollection"
        assert len(dashboard.features["features"]) == 2
        assert dashboard.weather == clear_weather
        assert dashboard.weather_error is None
        assert dashboard.recommendations == [REC_CLEAR]
        mock_weather_client.get_current_weather.assert_called_once_with(-8.659, 115.242)

    @pytest.mark.asyncio
    async def test_prediction_for_first_tree(self, dashboard_service):
        """The first tree is forecast with its type as the variety."""
        dashboard = await dashboard_service.get_tree_dashboard("proj-1", NOW)

        assert isinstance(dashboard.prediction, Predicted)
        assert dashboard.prediction.harvest_date == "2024-12-15"
        assert dashboard.prediction.delay_reason is None

    @pytest.mark.asyncio
    async def test_missing_weather_key(self, dashboard_service, mock_weather_client):
        """A missing key is reported and the dashboard still renders."""
        mock_weather_client.get_current_weather.side_effect = ExternalAPIError(
            "Weather API key is missing", status_code=503
        )

        dashboard = await dashboard_service.get_tree_dashboard("proj-1", NOW)

        assert dashboard.weather is None
        assert dashboard.weather_error == "Weather API key is missing"
        assert dashboard.prediction.delay_reason == WEATHER_UNAVAILABLE
        assert dashboard.recommendations == [REC_NO_WEATHER]

    @pytest.mark.asyncio
    async def test_weather_failure(self, dashboard_service, mock_weather_client):
        """Other weather failures get a generic message."""
        mock_weather_client.get_current_weather.side_effect = ExternalAPIError("boom")

        dashboard = await dashboard_service.get_tree_dashboard("proj-1", NOW)

        assert dashboard.weather_error == WEATHER_FETCH_FAILED

    @pytest.mark.asyncio
    async def test_no_trees(self, dashboard_service, mock_store):
        """An empty project has no forecast."""
        mock_store.list_subjects.side_effect = None
        mock_store.list_subjects.return_value = []

        dashboard = await dashboard_service.get_tree_dashboard("proj-1", NOW)

        assert dashboard.trees == []
        assert dashboard.prediction == Unresolved(reason=NO_TREE_DATA)
        assert dashboard.features["features"] == []

    @pytest.mark.asyncio
    async def test_missing_project_propagates(self, dashboard_service, mock_store):
        """Store errors for the project itself are not swallowed."""
        mock_store.get_project.side_effect = ExternalAPIError("Not Found", status_code=404)

        with pytest.raises(ExternalAPIError):
            await dashboard_service.get_tree_dashboard("missing", NOW)


# ============================================================
# Farm Dashboard Tests
# ============================================================

class TestFarmDashboard:
    """Tests for the farm dashboard."""

    @pytest.mark.asyncio
    async def test_farm_dashboard(self, dashboard_service):
        """Animals are placed around the project centre."""
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)

        dashboard = await dashboard_service.get_farm_dashboard("proj-1", now)

        assert [a.id for a in dashboard.animals] == ["SF1SA0001"]
        assert dashboard.activity.active == 1
        assert dashboard.health_prediction == HEALTHY
        assert dashboard.recommendations == [CARE_NONE]
        [feature] = dashboard.features["features"]
        assert feature["geometry"]["coordinates"] == pytest.approx([115.242, -8.659])
        assert feature["properties"]["type"] == "Sapi"

    @pytest.mark.asyncio
    async def test_no_animals(self, dashboard_service, mock_store, mock_weather_client):
        """An empty farm reports no data and weather-only advice."""
        mock_store.list_subjects.side_effect = None
        mock_store.list_subjects.return_value = []
        mock_weather_client.get_current_weather.side_effect = ExternalAPIError("boom")

        dashboard = await dashboard_service.get_farm_dashboard("proj-1", NOW)

        assert dashboard.health_prediction == NO_ANIMAL_DATA
        assert dashboard.recommendations == [CARE_NO_WEATHER]
        assert dashboard.activity.inactive == 0
