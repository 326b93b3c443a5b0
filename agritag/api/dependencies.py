"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from agritag.infrastructure.document_store_client import (
    DocumentStoreClient,
    get_document_store_client,
)
from agritag.infrastructure.weather_client import (
    WeatherClient,
    get_weather_client,
)
from agritag.services.domain.animal_health import AnimalHealthAdvisor
from agritag.services.domain.harvest_advisor import HarvestAdvisor
from agritag.services.application.dashboard_service import DashboardService
from agritag.services.application.project_service import ProjectService
from agritag.services.application.tagging_service import TaggingService


def get_harvest_advisor() -> HarvestAdvisor:
    """
    Dependency factory for HarvestAdvisor.

    Returns:
        HarvestAdvisor instance
    """
    return HarvestAdvisor()


def get_animal_health_advisor() -> AnimalHealthAdvisor:
    """
    Dependency factory for AnimalHealthAdvisor.

    Returns:
        AnimalHealthAdvisor instance
    """
    return AnimalHealthAdvisor()


def get_tagging_service(
    store: Annotated[DocumentStoreClient, Depends(get_document_store_client)],
) -> TaggingService:
    """
    Dependency factory for TaggingService.

    Args:
        store: Document store client (injected)

    Returns:
        TaggingService instance
    """
    return TaggingService(store=store)


def get_project_service(
    store: Annotated[DocumentStoreClient, Depends(get_document_store_client)],
) -> ProjectService:
    """Dependency factory for ProjectService."""
    return ProjectService(store=store)


def get_dashboard_service(
    store: Annotated[DocumentStoreClient, Depends(get_document_store_client)],
    weather_client: Annotated[WeatherClient, Depends(get_weather_client)],
    harvest_advisor: Annotated[HarvestAdvisor, Depends(get_harvest_advisor)],
    health_advisor: Annotated[AnimalHealthAdvisor, Depends(get_animal_health_advisor)],
) -> DashboardService:
    """
    Dependency factory for DashboardService.

    Args:
        store: Document store client (injected)
        weather_client: Weather client (injected)
        harvest_advisor: Harvest advisor (injected)
        health_advisor: Animal health advisor (injected)

    Returns:
        DashboardService instance
    """
    return DashboardService(
        store=store,
        weather_client=weather_client,
        harvest_advisor=harvest_advisor,
        health_advisor=health_advisor,
    )


# Type aliases for cleaner route signatures
HarvestAdvisorDep = Annotated[HarvestAdvisor, Depends(get_harvest_advisor)]
AnimalHealthAdvisorDep = Annotated[AnimalHealthAdvisor, Depends(get_animal_health_advisor)]
TaggingServiceDep = Annotated[TaggingService, Depends(get_tagging_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
