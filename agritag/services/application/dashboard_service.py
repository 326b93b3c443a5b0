"""
Application service: tree and farm dashboards.
"""
import logging
from datetime import date, datetime
from typing import Optional, Tuple

from agritag.domain.dashboards import ActivitySummary, FarmDashboard, TreeDashboard
from agritag.domain.models import AssetNamespace, Project, Unresolved, WeatherSnapshot
from agritag.infrastructure.document_store_client import DocumentStoreClient
from agritag.infrastructure.external_api_client import ExternalAPIError
from agritag.infrastructure.weather_client import WeatherClient
from agritag.services.domain.animal_health import AnimalHealthAdvisor
from agritag.services.domain.harvest_advisor import HarvestAdvisor
from agritag.services.domain.log_history import (
    activity_summary,
    latest_per_subject,
    logs_per_day,
    sort_newest_first,
)
from agritag.services.domain.map_features import (
    animal_features,
    feature_collection,
    tree_features,
)

logger = logging.getLogger(__name__)

NO_TREE_DATA = "Tidak ada data pohon."
NO_ANIMAL_DATA = "Tidak ada data hewan."
WEATHER_FETCH_FAILED = "Failed to fetch weather data"
DEFAULT_VARIETY = "Hass"


class DashboardService:
    """
    Application service assembling the map dashboards.

    Orchestrates data fetching and the advisory engines. A weather outage
    degrades the dashboard instead of failing it.
    """

    def __init__(
        self,
        store: DocumentStoreClient,
        weather_client: WeatherClient,
        harvest_advisor: HarvestAdvisor,
        health_advisor: AnimalHealthAdvisor,
    ):
        """
        Initialize the service with dependencies.

        Args:
            store: Document store client
            weather_client: Weather client for the project location
            harvest_advisor: Tree harvest forecasting
            health_advisor: Animal health flags
        """
        self.store = store
        self.weather_client = weather_client
        self.harvest_advisor = harvest_advisor
        self.health_advisor = health_advisor

    async def get_tree_dashboard(
        self,
        project_id: str,
        now: Optional[datetime] = None,
    ) -> TreeDashboard:
        """
        Build the tree dashboard of a project.

        The harvest forecast is computed for the first tree, using its
        recorded type as the variety hint ("Hass" when unset).

        Args:
            project_id: Project ID
            now: Reference instant for the activity summary

        Returns:
            TreeDashboard
        """
        project = await self.store.get_project(project_id)
        documents = await self.store.list_subjects(project_id, AssetNamespace.TREE)

        trees = latest_per_subject(documents)
        all_logs = sort_newest_first(log for doc in documents for log in doc.logs)
        weather, weather_error = await self._fetch_weather(project)

        if trees:
            first = trees[0]
            prediction = self.harvest_advisor.adjust_for_weather(
                first, first.type or DEFAULT_VARIETY, weather
            )
        else:
            prediction = Unresolved(reason=NO_TREE_DATA)

        logger.info(f"Tree dashboard for {project_id}: {len(trees)} trees, {len(all_logs)} logs")

        return TreeDashboard(
            project_id=project_id,
            trees=trees,
            recent_logs=all_logs,
            activity=ActivitySummary(**activity_summary(trees, now)),
            logs_per_day=logs_per_day(all_logs),
            features=feature_collection(tree_features(trees)),
            weather=weather,
            weather_error=weather_error,
            prediction=prediction,
            recommendations=self.harvest_advisor.get_weather_recommendations(weather),
        )

    async def get_farm_dashboard(
        self,
        project_id: str,
        now: Optional[datetime] = None,
    ) -> FarmDashboard:
        """
        Build the farm dashboard of a project.

        Health advice is given for the first animal.

        Args:
            project_id: Project ID
            now: Reference instant for activity and vaccination checks

        Returns:
            FarmDashboard
        """
        project = await self.store.get_project(project_id)
        documents = await self.store.list_subjects(project_id, AssetNamespace.ANIMAL)

        animals = latest_per_subject(documents)
        all_logs = sort_newest_first(log for doc in documents for log in doc.logs)
        weather, weather_error = await self._fetch_weather(project)

        today: Optional[date] = now.date() if now else None
        first = animals[0] if animals else None
        if first is not None:
            health_prediction = self.health_advisor.predict_health_issues(first, today)
        else:
            health_prediction = NO_ANIMAL_DATA

        logger.info(f"Farm dashboard for {project_id}: {len(animals)} animals, {len(all_logs)} logs")

        return FarmDashboard(
            project_id=project_id,
            animals=animals,
            recent_logs=all_logs,
            activity=ActivitySummary(**activity_summary(animals, now)),
            logs_per_day=logs_per_day(all_logs),
            features=feature_collection(animal_features(animals, project.geolocation)),
            weather=weather,
            weather_error=weather_error,
            health_prediction=health_prediction,
            recommendations=self.health_advisor.get_care_recommendations(weather, first, today),
        )

    async def _fetch_weather(
        self,
        project: Project,
    ) -> Tuple[Optional[WeatherSnapshot], Optional[str]]:
        try:
            weather = await self.weather_client.get_current_weather(
                project.geolocation.latitude,
                project.geolocation.longitude,
            )
        except ExternalAPIError as e:
            logger.warning(f"Weather unavailable for project {project.id}: {e.message}")
            if e.status_code == 503:
                return None, e.message
            return None, WEATHER_FETCH_FAILED
        return weather, None
