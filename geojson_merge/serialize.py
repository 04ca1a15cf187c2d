"""
Incremental serialization of a FeatureCollection.
"""

import json
from typing import Any, Iterable, Iterator

OPEN = b'{"type":"FeatureCollection","features":['
SEPARATOR = b','
CLOSE = b']}'


def dumps_feature(feature: Any, ensure_ascii: bool = False) -> bytes:
    """Serialize one feature as compact UTF-8 JSON."""
    return json.dumps(feature, ensure_ascii=ensure_ascii, separators=(',', ':')).encode('utf-8')


def iter_feature_collection(features: Iterable[Any], ensure_ascii: bool = False) -> Iterator[bytes]:
    """
    Yield a FeatureCollection document chunk by chunk.

    The next feature is only pulled from features when the consumer asks for
    the next chunk. If features raises, the exception propagates and the
    closing bracket is never written.

    Args:
        features: Feature values in output order
        ensure_ascii: Escape non-ASCII characters

    Yields:
        UTF-8 encoded chunks that concatenate to one JSON document
    """
    yield OPEN
    first = True
    for feature in features:
        chunk = dumps_feature(feature, ensure_ascii)
        if first:
            first = False
            yield chunk
        else:
            yield SEPARATOR + chunk
    yield CLOSE
