"""
Infrastructure layer: document store client.

Projects are top-level documents. Each tagged subject is one document
under its project holding the subject's append-only ``logs`` array:

    projects/{projectId}/trees/{tagId}    -> {"id": ..., "logs": [...]}
    projects/{projectId}/animals/{tagId}  -> {"id": ..., "logs": [...]}
"""
import logging
from typing import Any, Dict, List, Optional, Union

from agritag.config import settings
from agritag.domain.models import (
    AnimalDocument,
    AnimalLogEntry,
    AssetNamespace,
    Project,
    TreeDocument,
    TreeLogEntry,
)
from agritag.infrastructure.api_constants import DocumentStoreEndpoints
from agritag.infrastructure.external_api_client import (
    ExternalAPIClient,
    ExternalAPIError,
)

logger = logging.getLogger(__name__)

SubjectDocument = Union[TreeDocument, AnimalDocument]
LogEntry = Union[TreeLogEntry, AnimalLogEntry]

_DOCUMENT_MODELS = {
    AssetNamespace.TREE: TreeDocument,
    AssetNamespace.ANIMAL: AnimalDocument,
}


def _dump(model) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


class DocumentStoreClient(ExternalAPIClient):
    """Client for the project/subject document store."""

    def __init__(self):
        """Initialize the client from settings."""
        super().__init__(
            base_url=settings.document_store_base_url,
            headers={"Authorization": f"Bearer {settings.document_store_api_key}"},
            timeout=settings.request_timeout,
        )

    # ------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------

    async def list_projects(self, user_id: str) -> List[Project]:
        """
        Fetch every project owned by a user.

        Args:
            user_id: Owner of the projects

        Returns:
            List of Project instances
        """
        data = await self._make_request(
            "GET",
            DocumentStoreEndpoints.PROJECTS,
            params={"userId": user_id},
        )
        return [Project(**doc) for doc in data.get("documents", [])]

    async def get_project(self, project_id: str) -> Project:
        """
        Fetch a single project.

        Raises:
            ExternalAPIError: With status 404 if the project does not exist
        """
        data = await self._make_request("GET", DocumentStoreEndpoints.project(project_id))
        return Project(**data)

    async def create_project(self, project: Dict[str, Any]) -> Project:
        """
        Store a new project. The store assigns the document ID.

        Args:
            project: Project fields in stored (camelCase) form, without "id"

        Returns:
            The created Project
        """
        data = await self._make_request("POST", DocumentStoreEndpoints.PROJECTS, json=project)
        return Project(**{**project, **data})

    async def update_project(self, project_id: str, changes: Dict[str, Any]) -> None:
        """Apply a partial update to a project."""
        await self._make_request(
            "PATCH",
            DocumentStoreEndpoints.project(project_id),
            json=changes,
        )

    # ------------------------------------------------------------
    # Subjects
    # ------------------------------------------------------------

    async def list_subjects(
        self,
        project_id: str,
        namespace: AssetNamespace,
    ) -> List[SubjectDocument]:
        """
        Fetch every subject document of a project collection.

        Args:
            project_id: Project ID
            namespace: Tree or animal collection

        Returns:
            List of subject documents with their full log history
        """
        data = await self._make_request(
            "GET",
            DocumentStoreEndpoints.subjects(project_id, namespace.collection),
        )
        model = _DOCUMENT_MODELS[namespace]
        return [model(**doc) for doc in data.get("documents", [])]

    async def get_subject(
        self,
        project_id: str,
        namespace: AssetNamespace,
        subject_id: str,
    ) -> Optional[SubjectDocument]:
        """
        Fetch one subject document.

        Returns:
            The subject document, or None if nothing was recorded yet
        """
        try:
            data = await self._make_request(
                "GET",
                DocumentStoreEndpoints.subject(project_id, namespace.collection, subject_id),
            )
        except ExternalAPIError as e:
            if e.is_not_found:
                return None
            raise
        return _DOCUMENT_MODELS[namespace](**data)

    async def append_log_entry(
        self,
        project_id: str,
        namespace: AssetNamespace,
        entry: LogEntry,
        exists: bool,
    ) -> None:
        """
        Append a log entry to a subject, creating the subject if needed.

        Args:
            project_id: Project ID
            namespace: Tree or animal collection
            entry: New log entry; its ``id`` is the subject ID
            exists: Whether the subject document already exists
        """
        path = DocumentStoreEndpoints.subject(project_id, namespace.collection, entry.id)
        payload = _dump(entry)

        if exists:
            await self._make_request("PATCH", path, json={"logs": {"arrayUnion": [payload]}})
        else:
            await self._make_request("PUT", path, json={"id": entry.id, "logs": [payload]})

        logger.info(f"Recorded {namespace.value} log for {entry.id} in project {project_id}")


# Singleton instance
_document_store_client: Optional[DocumentStoreClient] = None


def get_document_store_client() -> DocumentStoreClient:
    """
    Get or create the singleton document store client.

    Returns:
        DocumentStoreClient instance
    """
    global _document_store_client
    if _document_store_client is None:
        _document_store_client = DocumentStoreClient()
    return _document_store_client
