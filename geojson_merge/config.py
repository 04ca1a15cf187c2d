"""
Merge settings, optionally loaded from a YAML file.

Example config.yaml:

    chunk_size: 1048576
    ensure_ascii: false
    indent: 2
    log_level: DEBUG
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

import yaml

from .concat import DEFAULT_CHUNK_SIZE

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class MergeConfig:
    """Settings shared by the in-memory and streaming merges."""

    chunk_size: int = DEFAULT_CHUNK_SIZE  # bytes per input read
    ensure_ascii: bool = False
    indent: Optional[int] = None  # in-memory output only
    log_level: str = 'INFO'

    def __post_init__(self):
        if not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        if self.indent is not None and (not isinstance(self.indent, int) or self.indent < 0):
            raise ValueError(f"indent must be a non-negative integer, got {self.indent!r}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)


def load_config(config_path: Union[str, Path, None] = None) -> MergeConfig:
    """Load configuration from YAML file. Missing values keep their defaults."""
    if config_path is None:
        return MergeConfig()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    known = {field.name for field in fields(MergeConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    return MergeConfig(**data)
