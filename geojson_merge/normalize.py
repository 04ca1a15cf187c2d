"""
Normalize any GeoJSON root object to a FeatureCollection.

Geometries are wrapped in a Feature with empty properties, a Feature becomes
a one-element collection, and a FeatureCollection is passed through with a
fresh features list. Feature objects are moved into the result, never copied
or modified.
"""

from typing import Any, Dict, List

import geojson

from .errors import NormalizationError


GEOMETRY_TYPES = frozenset([
    'Point',
    'MultiPoint',
    'LineString',
    'MultiLineString',
    'Polygon',
    'MultiPolygon',
    'GeometryCollection',
])

ROOT_TYPES = GEOMETRY_TYPES | {'Feature', 'FeatureCollection'}


def _wrap_geometry(geometry: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [{
        'type': 'Feature',
        'properties': {},
        'geometry': geometry
    }]


def _feature(feature: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [feature]


def _feature_collection(collection: Dict[str, Any]) -> List[Dict[str, Any]]:
    features = collection.get('features')
    if not isinstance(features, list):
        raise NormalizationError(
            f"FeatureCollection 'features' must be an array, got {type(features).__name__}"
        )
    return list(features)


_FLATTENERS = {geom_type: _wrap_geometry for geom_type in GEOMETRY_TYPES}
_FLATTENERS['Feature'] = _feature
_FLATTENERS['FeatureCollection'] = _feature_collection


def normalize(value: Any) -> geojson.FeatureCollection:
    """
    Convert a GeoJSON root value into an equivalent FeatureCollection.

    Args:
        value: Parsed GeoJSON object of any root type

    Returns:
        FeatureCollection whose features list is newly built

    Raises:
        NormalizationError: value is not a mapping or its type is not a
            GeoJSON root type
    """
    if not isinstance(value, dict):
        raise NormalizationError(
            f"Expected a GeoJSON object, got {type(value).__name__}"
        )

    geojson_type = value.get('type')
    if geojson_type is None:
        raise NormalizationError("Missing 'type' member")

    flatten = _FLATTENERS.get(geojson_type) if isinstance(geojson_type, str) else None
    if flatten is None:
        raise NormalizationError(f"Unrecognized GeoJSON type: {geojson_type!r}")

    return geojson.FeatureCollection(flatten(value))
