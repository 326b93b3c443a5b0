"""
Application service: tagging projects.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from agritag.domain.models import GeoPoint, Project
from agritag.infrastructure.document_store_client import DocumentStoreClient
from agritag.services.domain.log_history import now_timestamp


class ProjectService:
    """Creates, lists and edits the projects of a user."""

    def __init__(self, store: DocumentStoreClient):
        self.store = store

    async def list_projects(self, user_id: str) -> List[Project]:
        return await self.store.list_projects(user_id)

    async def get_project(self, project_id: str) -> Project:
        return await self.store.get_project(project_id)

    async def create_project(
        self,
        user_id: str,
        name: str,
        geolocation: GeoPoint,
        now: Optional[datetime] = None,
    ) -> Project:
        """
        Create a project that starts and ends today.

        Args:
            user_id: Owner of the project
            name: Display name
            geolocation: Map centre of the project
            now: Creation instant

        Returns:
            The stored Project
        """
        now = now or datetime.now(timezone.utc)
        today = now.astimezone(timezone.utc).date().isoformat()

        return await self.store.create_project({
            "name": name,
            "description": "",
            "logo": "",
            "geolocation": geolocation.model_dump(by_alias=True),
            "userId": user_id,
            "startDate": today,
            "endDate": today,
            "createdAt": now_timestamp(now),
        })

    async def update_project(self, project_id: str, changes: Dict[str, Any]) -> Project:
        """
        Apply a partial update and return the stored project.

        Raises:
            ValueError: If there is nothing to update
        """
        if not changes:
            raise ValueError("No project fields to update")
        await self.store.update_project(project_id, changes)
        return await self.store.get_project(project_id)
