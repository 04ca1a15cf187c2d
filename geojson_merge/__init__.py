"""
Merge GeoJSON documents into a single FeatureCollection.

Two entry points:
- merge(): takes already-parsed GeoJSON values of any root type (geometry,
  Feature, FeatureCollection) and returns one FeatureCollection in memory.
- merge_feature_collection_stream(): takes paths to FeatureCollection files
  and yields the merged collection as bytes without loading whole files.
"""

from .errors import MergeError, NormalizationError, ParseError
from .merge import merge, merge_files
from .normalize import normalize
from .stream import FeatureCollectionStream, merge_feature_collection_stream

__all__ = [
    'MergeError',
    'NormalizationError',
    'ParseError',
    'merge',
    'merge_files',
    'normalize',
    'FeatureCollectionStream',
    'merge_feature_collection_stream',
]
