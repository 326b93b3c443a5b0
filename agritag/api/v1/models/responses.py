"""
API response models using Pydantic.
"""
from typing import Annotated, Any, List, Union
from pydantic import BaseModel, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel

from agritag.domain.models import (
    AnimalLogEntry,
    AssetNamespace,
    LegacyTagDescription,
    LegacyTagIdentifier,
    PredictionResult,
    TagDescription,
    TagIdentifier,
    TreeLogEntry,
)
from agritag.services.domain.tag_codec import namespace_for, parse_tag_id


# Error responses shared by every endpoint that reaches an external service
ERROR_RESPONSES = {
    404: {"description": "Project or subject not found"},
    429: {"description": "Rate limit exceeded"},
    502: {"description": "Document store or weather service failure"},
}


def _log_namespace(value: Any) -> str:
    # Log entries carry no type field; the tag in their id decides
    raw_id = value.get("id", "") if isinstance(value, dict) else getattr(value, "id", "")
    return namespace_for(parse_tag_id(raw_id or "")).value


LogEntry = Annotated[
    Union[
        Annotated[TreeLogEntry, Tag(AssetNamespace.TREE.value)],
        Annotated[AnimalLogEntry, Tag(AssetNamespace.ANIMAL.value)],
    ],
    Discriminator(_log_namespace),
]


class _Response(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TagResponse(_Response):
    """Decoded current-layout tag."""
    tag: TagIdentifier
    namespace: AssetNamespace
    description: TagDescription

    class Config:
        json_schema_extra = {
            "example": {
                "tag": {
                    "raw": "ST1AP0001",
                    "deviceClass": "ST",
                    "version": "1",
                    "speciesCode": "AP",
                    "serial": "0001",
                },
                "namespace": "tree",
                "description": {
                    "category": "Smart Tree",
                    "tier": "Standard",
                    "speciesName": "Alpukat",
                    "serial": "0001",
                },
            }
        }


class LegacyTagResponse(_Response):
    """Decoded legacy-layout tag."""
    tag: LegacyTagIdentifier
    namespace: AssetNamespace
    description: LegacyTagDescription


class ScanResponse(TagResponse):
    """Decoded tag plus the history of its subject."""
    project_id: str
    logs: List[LogEntry] = Field(
        description="Log entries of the subject, newest first"
    )


class HarvestAdvisoryResponse(_Response):
    """Harvest forecast and weather recommendations for one tree."""
    prediction: PredictionResult
    recommendations: List[str]


class RecommendationsResponse(_Response):
    """Weather recommendations."""
    recommendations: List[str]


class AnimalAdvisoryResponse(_Response):
    """Health flags and care recommendations for one animal."""
    health_prediction: str
    recommendations: List[str]
