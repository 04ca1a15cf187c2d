"""
In-memory merge of GeoJSON values.

Every input is normalized and its features appended, in order, to a single
output collection. The whole working set has to fit in memory; use
stream.merge_feature_collection_stream for large FeatureCollection files.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Union

import geojson
from tqdm import tqdm

from .errors import NormalizationError, ParseError
from .normalize import normalize

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def merge(inputs: Iterable[Any]) -> geojson.FeatureCollection:
    """
    Merge GeoJSON objects of any root type into one FeatureCollection.

    Args:
        inputs: GeoJSON values (geometry, Feature or FeatureCollection)

    Returns:
        FeatureCollection holding every input's features in input order

    Raises:
        NormalizationError: an input is not a GeoJSON root object; index is
            set to its position in inputs
    """
    features: List[Any] = []

    for i, value in enumerate(inputs):
        try:
            normalized = normalize(value)
        except NormalizationError as e:
            raise NormalizationError(e.reason, index=i) from e
        features.extend(normalized['features'])

    logger.debug(f"Merged {len(features)} features")
    return geojson.FeatureCollection(features)


def load_geojson(path: PathLike) -> Any:
    """Load one GeoJSON document from disk."""
    path = Path(path)
    with open(path, 'rb') as f:
        try:
            return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"Invalid JSON: {e}", path=str(path)) from e


def merge_files(paths: Sequence[PathLike], progress: bool = False) -> geojson.FeatureCollection:
    """
    Load GeoJSON files of any root type and merge them in memory.

    Args:
        paths: Files to merge, in output order
        progress: Show a progress bar while loading

    Returns:
        Merged FeatureCollection
    """
    inputs = []
    for path in tqdm(paths, desc="Loading GeoJSON", unit='file', disable=not progress):
        inputs.append(load_geojson(path))

    result = merge(inputs)
    logger.info(f"Merged {len(result['features'])} features from {len(inputs)} files")
    return result
