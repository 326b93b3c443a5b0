"""
API router for scanning tags and recording log entries within a project.
"""
from fastapi import APIRouter, Path, status
from typing import Annotated

from agritag.api.dependencies import TaggingServiceDep
from agritag.api.errors import raise_not_found
from agritag.api.v1.models.responses import ERROR_RESPONSES, ScanResponse
from agritag.domain.models import (
    AnimalLogEntry,
    AnimalLogUpdate,
    TreeLogEntry,
    TreeLogUpdate,
)
from agritag.infrastructure.external_api_client import ExternalAPIError


router = APIRouter(
    prefix="/projects/{project_id}",
    tags=["tagging"],
    responses=ERROR_RESPONSES,
)

ProjectId = Annotated[str, Path(description="Unique identifier for the project")]
TagId = Annotated[str, Path(description="Scanned tag payload")]


@router.get(
    "/tags/{raw_id}",
    response_model=ScanResponse,
    summary="Scan a tag",
    description="""
    Decode a scanned tag and return every log entry recorded for its
    subject, newest first. The first entry is the current state and is
    used to pre-fill the next record.
    """,
)
async def scan_tag(
    project_id: ProjectId,
    raw_id: TagId,
    tagging_service: TaggingServiceDep,
) -> ScanResponse:
    try:
        tag, namespace, description, logs = await tagging_service.scan(project_id, raw_id)
    except ExternalAPIError as e:
        raise_not_found(e, f"Project with ID '{project_id}' not found")
    return ScanResponse(
        project_id=project_id,
        tag=tag,
        namespace=namespace,
        description=description,
        logs=logs,
    )


@router.post(
    "/trees/{raw_id}/logs",
    response_model=TreeLogEntry,
    status_code=status.HTTP_201_CREATED,
    summary="Record a tree log entry",
    description="""
    Append a new log entry to a tree. Fields omitted from the body keep the
    value of the tree's latest entry. Returns 400 for a non-tree tag and 404
    for an unknown project.
    """,
)
async def record_tree(
    project_id: ProjectId,
    raw_id: TagId,
    body: TreeLogUpdate,
    tagging_service: TaggingServiceDep,
) -> TreeLogEntry:
    try:
        return await tagging_service.record_tree(project_id, raw_id, body)
    except ExternalAPIError as e:
        raise_not_found(e, f"Project with ID '{project_id}' not found")


@router.post(
    "/animals/{raw_id}/logs",
    response_model=AnimalLogEntry,
    status_code=status.HTTP_201_CREATED,
    summary="Record an animal log entry",
    description="""
    Append a new log entry to an animal. Fields omitted from the body keep
    the value of the animal's latest entry; the animal type always comes
    from the tag. Returns 400 for a tree tag and 404 for an unknown project.
    """,
)
async def record_animal(
    project_id: ProjectId,
    raw_id: TagId,
    body: AnimalLogUpdate,
    tagging_service: TaggingServiceDep,
) -> AnimalLogEntry:
    try:
        return await tagging_service.record_animal(project_id, raw_id, body)
    except ExternalAPIError as e:
        raise_not_found(e, f"Project with ID '{project_id}' not found")
