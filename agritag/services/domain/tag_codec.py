"""
Domain service: tag identifier decoding.

Tags are compact barcode/NFC payloads made of fixed-width fields with no
delimiters and no checksum. Decoding is lenient: a short or malformed tag
yields empty fields and "Unknown" labels instead of an error, so a scan
always renders something.

Current layout:  <DeviceClass:2><Version:1><SpeciesCode:2><Serial:N>
Legacy layout:   <LocationCode:2><SpeciesCode:2><SubtypeCode:1><Serial:N>
"""
from functools import lru_cache
from typing import Optional

from agritag.domain.codes import (
    ANIMAL_SPECIES,
    ANIMAL_SUBTYPES,
    DEVICE_CLASSES,
    PRODUCT_TIERS,
    REGENCIES,
    TREE_SPECIES,
    TREE_SUBTYPES,
    lookup,
)
from agritag.domain.models import (
    AssetNamespace,
    LegacyTagDescription,
    LegacyTagIdentifier,
    TagDescription,
    TagIdentifier,
)

# Both layouts put the serial after the first five characters
SERIAL_OFFSET = 5

_SPECIES_TABLES = {
    AssetNamespace.TREE: TREE_SPECIES,
    AssetNamespace.ANIMAL: ANIMAL_SPECIES,
}

_SUBTYPE_TABLES = {
    AssetNamespace.TREE: TREE_SUBTYPES,
    AssetNamespace.ANIMAL: ANIMAL_SUBTYPES,
}


def parse_tag_id(raw_id: str) -> TagIdentifier:
    """
    Split a current-layout tag into its positional fields.

    Args:
        raw_id: Scanned tag payload, e.g. "ST1AP0001"

    Returns:
        TagIdentifier with device class, version, species code and serial
    """
    return TagIdentifier(
        raw=raw_id,
        device_class=raw_id[0:2],
        version=raw_id[2:3],
        species_code=raw_id[3:SERIAL_OFFSET],
        serial=raw_id[SERIAL_OFFSET:],
    )


def parse_legacy_tag_id(raw_id: str) -> LegacyTagIdentifier:
    """
    Split a legacy-layout tag into its positional fields.

    Args:
        raw_id: Scanned tag payload, e.g. "KRAPM0001"

    Returns:
        LegacyTagIdentifier with location, species, subtype and serial
    """
    return LegacyTagIdentifier(
        raw=raw_id,
        location_code=raw_id[0:2],
        species_code=raw_id[2:4],
        subtype_code=raw_id[4:SERIAL_OFFSET],
        serial=raw_id[SERIAL_OFFSET:],
    )


def namespace_for(tag: TagIdentifier) -> AssetNamespace:
    """Trees carry the tree device class; every other tag is an animal."""
    return AssetNamespace.TREE if tag.is_tree_tag else AssetNamespace.ANIMAL


@lru_cache(maxsize=1024)
def describe_tag(
    raw_id: str,
    namespace: Optional[AssetNamespace] = None,
) -> TagDescription:
    """
    Resolve a current-layout tag to display labels.

    The species table is chosen by ``namespace`` when given, otherwise by
    the device-class discriminator of the tag itself.

    Args:
        raw_id: Scanned tag payload
        namespace: Force the tree or animal species table

    Returns:
        TagDescription; unknown codes resolve to "Unknown"
    """
    tag = parse_tag_id(raw_id)
    namespace = namespace or namespace_for(tag)

    return TagDescription(
        category=lookup(DEVICE_CLASSES, tag.device_class),
        tier=lookup(PRODUCT_TIERS, tag.version),
        species_name=lookup(_SPECIES_TABLES[namespace], tag.species_code),
        serial=tag.serial,
    )


@lru_cache(maxsize=1024)
def describe_legacy_tag(
    raw_id: str,
    namespace: AssetNamespace = AssetNamespace.TREE,
) -> LegacyTagDescription:
    """
    Resolve a legacy-layout tag to display labels.

    Legacy tags carry no device class, so the caller must say which
    namespace the tag belongs to.
    """
    tag = parse_legacy_tag_id(raw_id)

    return LegacyTagDescription(
        location=lookup(REGENCIES, tag.location_code),
        species_name=lookup(_SPECIES_TABLES[namespace], tag.species_code),
        subtype_name=lookup(_SUBTYPE_TABLES[namespace], tag.subtype_code),
        serial=tag.serial,
    )
