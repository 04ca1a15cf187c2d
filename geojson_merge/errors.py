"""
Exceptions raised while merging.

File open and read failures are not wrapped: they surface as the built-in
OSError raised by the filesystem.
"""

from typing import Optional


class MergeError(Exception):
    """Base class for merge failures."""


class NormalizationError(MergeError):
    """A value is not a recognized GeoJSON root object."""

    def __init__(self, reason: str, index: Optional[int] = None):
        self.reason = reason
        self.index = index
        if index is not None:
            super().__init__(f"Input {index}: {reason}")
        else:
            super().__init__(reason)


class ParseError(MergeError):
    """A streamed file is not a well-formed FeatureCollection document."""

    def __init__(self, reason: str, path: Optional[str] = None):
        self.reason = reason
        self.path = path
        if path is not None:
            super().__init__(f"{reason} (while reading {path})")
        else:
            super().__init__(reason)
