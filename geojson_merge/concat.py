"""
Sequential concatenation of files into one binary stream.

Files are opened lazily and one at a time: the next file is only opened
after the previous one has reached EOF and been closed.
"""

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Union

from .errors import ParseError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class ConcatenatedReader:
    """Read-only binary file object over several files joined end to end."""

    def __init__(self, paths: Sequence[Union[str, Path]], chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize the reader. No file is opened until the first read.

        Args:
            paths: Files to read, in order
            chunk_size: Upper bound on bytes returned by one read()
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self.paths: List[Path] = [Path(p) for p in paths]
        self.chunk_size = chunk_size
        self.files_opened = 0
        self.bytes_read = 0
        self.closed = False

        self._next_index = 0
        self._file: Optional[BinaryIO] = None
        self._current_path: Optional[Path] = None
        self._file_bytes = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def current_path(self) -> Optional[str]:
        """Path of the file being read, or of the last file read."""
        return str(self._current_path) if self._current_path is not None else None

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        """
        Read up to size bytes from the current file, moving on to the next
        file at EOF. Returns b'' once every file is exhausted.
        """
        if self.closed:
            raise ValueError("I/O operation on closed ConcatenatedReader")
        if size == 0:
            return b''
        if size is None or size < 0 or size > self.chunk_size:
            size = self.chunk_size

        while True:
            if self._file is None and not self._open_next():
                return b''

            data = self._file.read(size)
            if data:
                self._file_bytes += len(data)
                self.bytes_read += len(data)
                return data

            self._close_current()

    def _open_next(self) -> bool:
        if self._next_index >= len(self.paths):
            return False

        path = self.paths[self._next_index]
        self._next_index += 1
        self._current_path = path
        self._file_bytes = 0

        logger.debug(f"Opening {path}")
        self._file = open(path, 'rb')
        self.files_opened += 1
        return True

    def _close_current(self) -> None:
        path = self._current_path
        empty = self._file_bytes == 0

        self._file.close()
        self._file = None
        logger.debug(f"Closed {path} after {self._file_bytes} bytes")

        if empty:
            raise ParseError("Empty file is not a GeoJSON document", path=str(path))

    def close(self) -> None:
        """Close the open file, if any. No further files will be opened."""
        if self.closed:
            return
        self.closed = True
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.debug(f"Closed {self._current_path} early")
