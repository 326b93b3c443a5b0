"""
Domain service: GeoJSON point features for the map views.

Trees are drawn at their recorded location; trees recorded at the same
coordinate are fanned out on a small grid so every marker stays visible.
Animals have no reliable location and are laid out on a square grid
around the project centre.
"""
import math
from typing import Any, Sequence

import numpy as np

from agritag.domain.models import AnimalLogEntry, AssetNamespace, GeoPoint, TreeLogEntry
from agritag.services.domain.tag_codec import describe_legacy_tag, describe_tag, parse_tag_id

TREE_OFFSET_STEP = 0.00005  # ~5 m
TREE_GRID_COLUMNS = 3
ANIMAL_GRID_SPACING = 0.0001  # ~10 m

Feature = dict[str, Any]


def _point(longitude: float, latitude: float, properties: dict[str, Any]) -> Feature:
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {
            "type": "Point",
            "coordinates": [float(longitude), float(latitude)],
        },
    }


def _tree_type(raw_id: str) -> str:
    # Trees tagged before the device-class layout keep species at [2:4]
    if parse_tag_id(raw_id).is_tree_tag:
        return describe_tag(raw_id, AssetNamespace.TREE).species_name
    return describe_legacy_tag(raw_id, AssetNamespace.TREE).species_name


def tree_features(trees: Sequence[TreeLogEntry]) -> list[Feature]:
    """
    Build one point feature per tree.

    Args:
        trees: Latest entry of each tree

    Returns:
        List of GeoJSON features; trees without a location sit at (0, 0)
    """
    if not trees:
        return []

    latitudes = np.array([t.location.latitude if t.location else 0.0 for t in trees])
    longitudes = np.array([t.location.longitude if t.location else 0.0 for t in trees])

    # Position of each tree among the trees sharing its coordinate
    seen: dict[tuple[float, float], int] = {}
    occurrence = np.empty(len(trees), dtype=int)
    for i, key in enumerate(zip(latitudes.tolist(), longitudes.tolist())):
        count = seen.get(key, 0)
        occurrence[i] = count
        seen[key] = count + 1

    rows, cols = np.divmod(occurrence, TREE_GRID_COLUMNS)
    offset_lats = latitudes + rows * TREE_OFFSET_STEP
    offset_lons = longitudes + cols * TREE_OFFSET_STEP

    return [
        _point(lon, lat, {
            "treeType": _tree_type(tree.id),
            "treeId": tree.id,
            "originalLat": float(orig_lat),
            "originalLon": float(orig_lon),
        })
        for tree, lat, lon, orig_lat, orig_lon
        in zip(trees, offset_lats, offset_lons, latitudes, longitudes)
    ]


def animal_features(
    animals: Sequence[AnimalLogEntry],
    center: GeoPoint,
) -> list[Feature]:
    """
    Lay animals out on a square grid centred on the project location.

    Args:
        animals: Latest entry of each animal
        center: Project geolocation

    Returns:
        List of GeoJSON features in the order of ``animals``
    """
    if not animals:
        return []

    grid_size = math.ceil(math.sqrt(len(animals)))
    half_grid = grid_size // 2

    index = np.arange(len(animals))
    rows = index // grid_size - half_grid
    cols = index % grid_size - half_grid
    latitudes = center.latitude + rows * ANIMAL_GRID_SPACING
    longitudes = center.longitude + cols * ANIMAL_GRID_SPACING

    return [
        _point(lon, lat, {
            "type": describe_tag(animal.id, AssetNamespace.ANIMAL).species_name,
            "treeId": animal.id,
            "updatedAt": animal.updated_at,
        })
        for animal, lat, lon in zip(animals, latitudes, longitudes)
    ]


def feature_collection(features: list[Feature]) -> dict[str, Any]:
    """Wrap features in a GeoJSON FeatureCollection."""
    return {"type": "FeatureCollection", "features": features}
