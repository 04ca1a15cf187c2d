"""
Incremental extraction of FeatureCollection features.

The input is a binary stream holding one or more concatenated JSON
documents, each expected to be a FeatureCollection object. The elements of
each document's top-level 'features' array are yielded one at a time as
they complete; nothing larger than a single feature is held in memory.
"""

import logging
from typing import Any, Callable, Iterator, Optional

import ijson
from ijson.common import ObjectBuilder

from .concat import DEFAULT_CHUNK_SIZE
from .errors import ParseError

logger = logging.getLogger(__name__)

FEATURES_KEY = 'features'
TYPE_KEY = 'type'

CONTAINER_START = ('start_map', 'start_array')
CONTAINER_END = ('end_map', 'end_array')


class _Document:
    """Top-level members seen so far in the document being parsed."""

    def __init__(self):
        self.type = None
        self.has_features = False
        self.feature_count = 0
        self.member = None  # key of the top-level member being read


def _build_value(events: Iterator, event: str, value: Any) -> Any:
    """Assemble one complete JSON value starting at (event, value)."""
    if event not in CONTAINER_START:
        return value

    builder = ObjectBuilder()
    depth = 0
    while True:
        builder.event(event, value)
        if event in CONTAINER_START:
            depth += 1
        elif event in CONTAINER_END:
            depth -= 1
            if depth == 0:
                return builder.value
        event, value = next(events)


def iter_features(
    source,
    path_hint: Optional[Callable[[], Optional[str]]] = None,
    expected_documents: Optional[int] = None,
    buf_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[Any]:
    """
    Yield the features of every FeatureCollection document in source.

    Members are matched by their exact top-level key, so keys such as
    "features.item" or nested "features" arrays are ignored.

    Args:
        source: Binary file-like object with a read(size) method
        path_hint: Callable returning the file currently being read, used
            in error messages
        expected_documents: Number of documents source must contain
        buf_size: Bytes requested from source per read

    Yields:
        Feature values in document order, then array order

    Raises:
        ParseError: malformed JSON, a top-level value that is not a
            FeatureCollection object, or a missing 'features' array
    """
    def fail(reason: str):
        return ParseError(reason, path=path_hint() if path_hint else None)

    events = ijson.basic_parse(source, buf_size=buf_size, multiple_values=True, use_float=True)
    document = None
    documents = 0
    # 0: between documents, 1: inside the top-level object, 2+: inside a member value
    depth = 0

    try:
        for event, value in events:
            if depth == 0:
                if event != 'start_map':
                    raise fail(f"Top-level value must be an object, got {event}")
                document = _Document()
                depth = 1
                continue

            if depth == 1:
                if event == 'map_key':
                    document.member = value
                    continue
                if event == 'end_map':
                    if not document.has_features:
                        raise fail("Document has no 'features' array")
                    if document.type != 'FeatureCollection':
                        raise fail(f"Expected a FeatureCollection, got type {document.type!r}")
                    documents += 1
                    logger.debug(f"Document {documents}: {document.feature_count} features")
                    document = None
                    depth = 0
                    continue

                if document.member == TYPE_KEY and event == 'string':
                    document.type = value
                elif document.member == FEATURES_KEY:
                    if event != 'start_array':
                        raise fail(f"'features' must be an array, got {event}")
                    document.has_features = True
                if event in CONTAINER_START:
                    depth = 2
                continue

            if depth == 2 and document.member == FEATURES_KEY:
                if event == 'end_array':
                    depth = 1
                    continue
                document.feature_count += 1
                yield _build_value(events, event, value)
                continue

            if event in CONTAINER_START:
                depth += 1
            elif event in CONTAINER_END:
                depth -= 1

    except ijson.JSONError as e:
        raise fail(f"Invalid JSON: {e}") from e

    if depth != 0:
        raise fail("Unexpected end of input inside a document")
    if expected_documents is not None and documents != expected_documents:
        raise fail(f"Expected {expected_documents} documents, found {documents}")
