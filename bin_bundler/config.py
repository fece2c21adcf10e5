"""Configuration objects and constants for the bundler."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_HASH_ALGORITHM = "md5"
DEFAULT_ENCODING = "utf-8"
GZIP_SUFFIX = ".gz"


@dataclass
class BundleConfig:
    """Top-level settings that control scanning, hashing and compression."""

    asset_directory: Path
    html_glob: str
    gzip_level: int = 0
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    encoding: str = DEFAULT_ENCODING
    dry_run: bool = False

    @property
    def gzip_enabled(self) -> bool:
        return bool(self.gzip_level)
