"""
API router for projects.
"""
from fastapi import APIRouter, Path, Query, status
from typing import Annotated, List

from agritag.api.dependencies import ProjectServiceDep
from agritag.api.errors import raise_not_found
from agritag.api.v1.models.requests import ProjectCreateRequest, ProjectUpdateRequest
from agritag.api.v1.models.responses import ERROR_RESPONSES
from agritag.domain.models import Project
from agritag.infrastructure.external_api_client import ExternalAPIError


router = APIRouter(
    prefix="/projects",
    tags=["projects"],
    responses=ERROR_RESPONSES,
)

ProjectId = Annotated[str, Path(description="Unique identifier for the project")]


@router.get(
    "",
    response_model=List[Project],
    summary="List the projects of a user",
)
async def list_projects(
    user_id: Annotated[str, Query(alias="userId", description="Owner of the projects")],
    project_service: ProjectServiceDep,
) -> List[Project]:
    return await project_service.list_projects(user_id)


@router.post(
    "",
    response_model=Project,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    description="Create a project centred on a location. Start and end date default to today.",
)
async def create_project(
    body: ProjectCreateRequest,
    project_service: ProjectServiceDep,
) -> Project:
    return await project_service.create_project(
        user_id=body.user_id,
        name=body.name,
        geolocation=body.geolocation,
    )


@router.get(
    "/{project_id}",
    response_model=Project,
    summary="Get a project",
)
async def get_project(
    project_id: ProjectId,
    project_service: ProjectServiceDep,
) -> Project:
    try:
        return await project_service.get_project(project_id)
    except ExternalAPIError as e:
        raise_not_found(e, f"Project with ID '{project_id}' not found")


@router.patch(
    "/{project_id}",
    response_model=Project,
    summary="Update a project",
)
async def update_project(
    project_id: ProjectId,
    body: ProjectUpdateRequest,
    project_service: ProjectServiceDep,
) -> Project:
    changes = body.model_dump(by_alias=True, exclude_none=True, mode="json")
    try:
        return await project_service.update_project(project_id, changes)
    except ExternalAPIError as e:
        raise_not_found(e, f"Project with ID '{project_id}' not found")
