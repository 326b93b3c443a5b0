"""
API router for the project dashboards.
"""
from fastapi import APIRouter, Path
from typing import Annotated

from agritag.api.dependencies import DashboardServiceDep
from agritag.api.errors import raise_not_found
from agritag.api.v1.models.responses import ERROR_RESPONSES
from agritag.domain.dashboards import FarmDashboard, TreeDashboard
from agritag.infrastructure.external_api_client import ExternalAPIError


router = APIRouter(
    prefix="/projects/{project_id}",
    tags=["dashboards"],
    responses=ERROR_RESPONSES,
)

ProjectId = Annotated[str, Path(description="Unique identifier for the project")]


@router.get(
    "/trees/dashboard",
    response_model=TreeDashboard,
    summary="Tree dashboard",
    description="""
    Latest state of every tree, activity over the last month, log counts per
    day, map features, current weather, the weather-adjusted harvest forecast
    of the first tree and weather-based care recommendations.

    A weather outage does not fail the request: `weather` is null and
    `weatherError` explains why.
    """,
)
async def tree_dashboard(
    project_id: ProjectId,
    dashboard_service: DashboardServiceDep,
) -> TreeDashboard:
    try:
        return await dashboard_service.get_tree_dashboard(project_id)
    except ExternalAPIError as e:
        raise_not_found(e, f"Project with ID '{project_id}' not found")


@router.get(
    "/animals/dashboard",
    response_model=FarmDashboard,
    summary="Farm dashboard",
    description="""
    Latest state of every animal, activity over the last month, log counts
    per day, map features, current weather, health flags of the first animal
    and care recommendations.
    """,
)
async def farm_dashboard(
    project_id: ProjectId,
    dashboard_service: DashboardServiceDep,
) -> FarmDashboard:
    try:
        return await dashboard_service.get_farm_dashboard(project_id)
    except ExternalAPIError as e:
        raise_not_found(e, f"Project with ID '{project_id}' not found")
