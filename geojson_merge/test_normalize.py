#!/usr/bin/env python3
"""
Tests for normalize.py

Checks that every GeoJSON root type maps to the expected FeatureCollection
and that unrecognized input is rejected.
"""

import copy

import pytest

from geojson_merge.errors import NormalizationError
from geojson_merge.normalize import GEOMETRY_TYPES, normalize


SAMPLE_GEOMETRIES = {
    'Point': {'type': 'Point', 'coordinates': [10.395, 63.430]},
    'MultiPoint': {'type': 'MultiPoint', 'coordinates': [[10.395, 63.430], [10.396, 63.431]]},
    'LineString': {'type': 'LineString', 'coordinates': [[10.395, 63.430], [10.400, 63.435]]},
    'MultiLineString': {
        'type': 'MultiLineString',
        'coordinates': [[[10.395, 63.430], [10.400, 63.435]], [[10.41, 63.44], [10.42, 63.45]]]
    },
    'Polygon': {
        'type': 'Polygon',
        'coordinates': [[
            [10.395, 63.430], [10.396, 63.430], [10.396, 63.431], [10.395, 63.431], [10.395, 63.430]
        ]]
    },
    'MultiPolygon': {
        'type': 'MultiPolygon',
        'coordinates': [[[
            [10.395, 63.430], [10.396, 63.430], [10.396, 63.431], [10.395, 63.431], [10.395, 63.430]
        ]]]
    },
    'GeometryCollection': {
        'type': 'GeometryCollection',
        'geometries': [
            {'type': 'Point', 'coordinates': [0, 1]},
            {'type': 'LineString', 'coordinates': [[0, 0], [1, 1]]}
        ]
    },
}


def create_sample_feature(name='Old Church'):
    return {
        'type': 'Feature',
        'geometry': {'type': 'Point', 'coordinates': [10.395, 63.430]},
        'properties': {'name': name, 'start_date': 1850}
    }


def test_geometry_types_are_wrapped():
    """Each geometry becomes one Feature with empty properties."""
    assert set(SAMPLE_GEOMETRIES) == set(GEOMETRY_TYPES)

    for geom_type, geometry in SAMPLE_GEOMETRIES.items():
        result = normalize(geometry)

        assert result['type'] == 'FeatureCollection'
        assert len(result['features']) == 1
        feature = result['features'][0]
        assert feature['type'] == 'Feature'
        assert feature['properties'] == {}
        assert feature['geometry'] is geometry
        print(f"  ✓ {geom_type} wrapped in a Feature")


def test_feature_is_passed_through_unchanged():
    feature = create_sample_feature()
    snapshot = copy.deepcopy(feature)

    result = normalize(feature)

    assert result == {'type': 'FeatureCollection', 'features': [feature]}
    assert result['features'][0] is feature
    assert feature == snapshot


def test_feature_with_null_geometry():
    feature = {'type': 'Feature', 'geometry': None, 'properties': None}
    assert normalize(feature)['features'] == [feature]


def test_feature_collection_keeps_order_and_identity():
    features = [create_sample_feature(f"Building {i}") for i in range(5)]
    collection = {
        'type': 'FeatureCollection',
        'features': features,
        'bbox': [10.0, 63.0, 11.0, 64.0]
    }

    result = normalize(collection)

    assert [f['properties']['name'] for f in result['features']] == [f"Building {i}" for i in range(5)]
    assert all(a is b for a, b in zip(result['features'], features))
    # New list, input collection untouched
    assert result['features'] is not features
    assert 'bbox' not in result
    assert collection['features'] is features


def test_empty_feature_collection():
    result = normalize({'type': 'FeatureCollection', 'features': []})
    assert result == {'type': 'FeatureCollection', 'features': []}


def test_unknown_type_rejected():
    for value in [
        {'type': 'Topology', 'objects': {}},
        {'type': 'point', 'coordinates': [0, 1]},
        {'type': 42},
    ]:
        with pytest.raises(NormalizationError) as excinfo:
            normalize(value)
        assert excinfo.value.index is None


def test_missing_type_rejected():
    with pytest.raises(NormalizationError, match="Missing 'type'"):
        normalize({'coordinates': [0, 1]})


def test_non_object_rejected():
    for value in [None, [], 'Point', 3.14]:
        with pytest.raises(NormalizationError, match="Expected a GeoJSON object"):
            normalize(value)


def test_feature_collection_without_array_rejected():
    with pytest.raises(NormalizationError, match="'features' must be an array"):
        normalize({'type': 'FeatureCollection'})

    with pytest.raises(NormalizationError, match="'features' must be an array"):
        normalize({'type': 'FeatureCollection', 'features': {'0': create_sample_feature()}})


if __name__ == '__main__':
    import sys
    sys.exit(pytest.main([__file__, '-v']))
