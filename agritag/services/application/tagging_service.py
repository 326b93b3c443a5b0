"""
Application service: scanning tags and recording log entries.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple, Union

from agritag.domain.models import (
    AnimalLogEntry,
    AnimalLogUpdate,
    AssetNamespace,
    TagDescription,
    TagIdentifier,
    TreeLogEntry,
    TreeLogUpdate,
)
from agritag.infrastructure.document_store_client import DocumentStoreClient
from agritag.services.domain.log_history import (
    latest_entry,
    merge_animal_update,
    merge_tree_update,
    sort_newest_first,
)
from agritag.services.domain.tag_codec import describe_tag, namespace_for, parse_tag_id

logger = logging.getLogger(__name__)

LogEntry = Union[TreeLogEntry, AnimalLogEntry]


class TaggingService:
    """
    Application service for the scan-and-record workflow.

    Coordinates the tag codec, the log history rules and the document
    store. No business rules live here.
    """

    def __init__(self, store: DocumentStoreClient):
        """
        Initialize the service with dependencies.

        Args:
            store: Document store client for subject documents
        """
        self.store = store

    async def scan(
        self,
        project_id: str,
        raw_id: str,
    ) -> Tuple[TagIdentifier, AssetNamespace, TagDescription, List[LogEntry]]:
        """
        Decode a scanned tag and load the history of its subject.

        Args:
            project_id: Project the scan belongs to
            raw_id: Scanned tag payload

        Returns:
            Tuple of (decoded tag, namespace, display labels, logs newest first)

        Raises:
            ExternalAPIError: With status 404 if the project does not exist
        """
        tag = parse_tag_id(raw_id)
        namespace = namespace_for(tag)
        description = describe_tag(raw_id, namespace)

        await self._require_project(project_id)
        document = await self.store.get_subject(project_id, namespace, raw_id)
        logs = sort_newest_first(document.logs) if document else []

        logger.info(f"Scanned {raw_id} ({namespace.value}) with {len(logs)} log entries")
        return tag, namespace, description, logs

    async def record_tree(
        self,
        project_id: str,
        raw_id: str,
        update: TreeLogUpdate,
        now: Optional[datetime] = None,
    ) -> TreeLogEntry:
        """
        Append a new log entry to a tree.

        Raises:
            ValueError: If the tag is not a tree tag
            ExternalAPIError: With status 404 if the project does not exist
        """
        self._require_namespace(raw_id, AssetNamespace.TREE)
        await self._require_project(project_id)

        document = await self.store.get_subject(project_id, AssetNamespace.TREE, raw_id)
        latest = latest_entry(document.logs) if document else None

        entry = merge_tree_update(raw_id, update, latest, now)
        await self.store.append_log_entry(
            project_id, AssetNamespace.TREE, entry, exists=document is not None
        )
        return entry

    async def record_animal(
        self,
        project_id: str,
        raw_id: str,
        update: AnimalLogUpdate,
        now: Optional[datetime] = None,
    ) -> AnimalLogEntry:
        """
        Append a new log entry to an animal.

        Raises:
            ValueError: If the tag is a tree tag
            ExternalAPIError: With status 404 if the project does not exist
        """
        self._require_namespace(raw_id, AssetNamespace.ANIMAL)
        await self._require_project(project_id)

        document = await self.store.get_subject(project_id, AssetNamespace.ANIMAL, raw_id)
        latest = latest_entry(document.logs) if document else None
        species_name = describe_tag(raw_id, AssetNamespace.ANIMAL).species_name

        entry = merge_animal_update(raw_id, update, latest, species_name, now)
        await self.store.append_log_entry(
            project_id, AssetNamespace.ANIMAL, entry, exists=document is not None
        )
        return entry

    async def _require_project(self, project_id: str) -> None:
        # Subjects are only ever written under an existing project
        await self.store.get_project(project_id)

    @staticmethod
    def _require_namespace(raw_id: str, expected: AssetNamespace) -> None:
        actual = namespace_for(parse_tag_id(raw_id))
        if actual is not expected:
            raise ValueError(f"Tag '{raw_id}' cannot be recorded as {expected.collection}")
