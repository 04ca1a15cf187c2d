"""
Streaming merge of FeatureCollection files.

Pipeline (pull-based, each stage only advances when its consumer asks):

    ConcatenatedReader -> iter_features -> iter_feature_collection

Input files are opened one at a time, in order, and memory use is bounded
by the largest single feature rather than by file size. Only
FeatureCollection files are accepted; use merge.merge_files for other
GeoJSON root types.

Bytes already produced are never retracted: if a later file fails to open
or parse, the consumer has seen a truncated document followed by the error.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Sequence, Union

from .concat import ConcatenatedReader
from .config import MergeConfig
from .parse import iter_features
from .serialize import iter_feature_collection

logger = logging.getLogger(__name__)


def _pipeline(paths: Sequence[Union[str, Path]], config: MergeConfig) -> Iterator[bytes]:
    if not paths:
        yield from iter_feature_collection([])
        return

    reader = ConcatenatedReader(paths, chunk_size=config.chunk_size)
    try:
        features = iter_features(
            reader,
            path_hint=lambda: reader.current_path,
            expected_documents=len(paths),
            buf_size=config.chunk_size
        )
        yield from iter_feature_collection(features, ensure_ascii=config.ensure_ascii)
        logger.debug(f"Streamed {reader.bytes_read} bytes from {reader.files_opened} files")
    finally:
        reader.close()


class FeatureCollectionStream:
    """
    Readable stream of a merged FeatureCollection.

    Iterate it for byte chunks, or use read() like a binary file. Closing it
    before exhaustion releases the open input file and stops the merge.
    """

    def __init__(self, paths: Sequence[Union[str, Path]], config: Optional[MergeConfig] = None):
        self.paths = list(paths)
        self.config = config or MergeConfig()
        self.closed = False
        self._chunks = _pipeline(self.paths, self.config)
        self._buffer = b''
        self._pending_error: Optional[BaseException] = None

    def __iter__(self):
        return self

    def __next__(self) -> bytes:
        if self._buffer:
            chunk, self._buffer = self._buffer, b''
            return chunk
        if self._pending_error is not None:
            error, self._pending_error = self._pending_error, None
            raise error
        if self.closed:
            raise StopIteration
        return next(self._chunks)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes, or everything that remains if size < 0."""
        # None means unbounded
        remaining = size if size is not None and size >= 0 else None

        parts = []
        while remaining is None or remaining > 0:
            try:
                chunk = next(self)
            except StopIteration:
                break
            except Exception as e:
                # hand back what was produced before the failure, raise on the next call
                if not parts:
                    raise
                self._pending_error = e
                break
            if remaining is not None:
                if len(chunk) > remaining:
                    chunk, self._buffer = chunk[:remaining], chunk[remaining:]
                remaining -= len(chunk)
            parts.append(chunk)
        return b''.join(parts)

    def write_to(self, fileobj: BinaryIO) -> int:
        """Copy the remaining stream to a binary file object, returning bytes written."""
        written = 0
        for chunk in self:
            fileobj.write(chunk)
            written += len(chunk)
        return written

    def close(self) -> None:
        """Stop the merge and close any open input file."""
        if self.closed:
            return
        self.closed = True
        self._buffer = b''
        self._chunks.close()


def merge_feature_collection_stream(
    paths: Sequence[Union[str, Path]],
    config: Optional[MergeConfig] = None
) -> FeatureCollectionStream:
    """
    Merge FeatureCollection files into one streamed FeatureCollection.

    Nothing is opened until the first chunk is requested.

    Args:
        paths: FeatureCollection files, in output order
        config: Read size and serialization settings

    Returns:
        FeatureCollectionStream yielding the merged document as UTF-8 bytes

    Raises (during iteration):
        OSError: a file cannot be opened or read
        ParseError: a file is not a FeatureCollection object with a
            'features' array
    """
    stream = FeatureCollectionStream(paths, config)
    logger.debug(f"Streaming merge of {len(stream.paths)} files")
    return stream
