"""
API router for decoding tag identifiers.
"""
from fastapi import APIRouter, Path, Query
from typing import Annotated

from agritag.api.v1.models.responses import LegacyTagResponse, TagResponse
from agritag.domain.models import AssetNamespace
from agritag.services.domain.tag_codec import (
    describe_legacy_tag,
    describe_tag,
    namespace_for,
    parse_legacy_tag_id,
    parse_tag_id,
)


router = APIRouter(
    prefix="/tags",
    tags=["tags"],
)


@router.get(
    "/{raw_id}",
    response_model=TagResponse,
    summary="Decode a tag",
    description="""
    Split a scanned tag into device class, version, species code and serial,
    and resolve each code to a display label.

    Decoding never fails: unknown codes resolve to "Unknown" and short tags
    produce empty fields. The device class decides whether the species code
    is read from the tree table or the animal table.
    """,
    responses={429: {"description": "Rate limit exceeded"}},
)
async def decode_tag(
    raw_id: Annotated[str, Path(description="Scanned tag payload")],
) -> TagResponse:
    tag = parse_tag_id(raw_id)
    namespace = namespace_for(tag)
    return TagResponse(
        tag=tag,
        namespace=namespace,
        description=describe_tag(raw_id, namespace),
    )


@router.get(
    "/{raw_id}/legacy",
    response_model=LegacyTagResponse,
    summary="Decode a legacy tag",
    description="""
    Decode a tag written in the earlier location/species/subtype layout.
    Legacy tags carry no device class, so the namespace must be given.
    """,
    responses={429: {"description": "Rate limit exceeded"}},
)
async def decode_legacy_tag(
    raw_id: Annotated[str, Path(description="Scanned tag payload")],
    namespace: Annotated[AssetNamespace, Query(description="Which species tables to use")] = AssetNamespace.TREE,
) -> LegacyTagResponse:
    return LegacyTagResponse(
        tag=parse_legacy_tag_id(raw_id),
        namespace=namespace,
        description=describe_legacy_tag(raw_id, namespace),
    )
