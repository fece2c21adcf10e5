"""Utility helpers for regex escaping and path handling."""

from __future__ import annotations

import os
import re
from pathlib import Path

WINDOWS_SEPARATOR = "\\"


def escape_for_regex(value: str) -> str:
    """Escape every regex metacharacter so ``value`` matches literally."""
    return re.escape(value)


def to_posix_path(value: str) -> str:
    """Normalize OS path separators to forward slashes for web references."""
    return value.replace(WINDOWS_SEPARATOR, "/")


def build_asset_prefix_pattern(asset_directory: Path | str) -> re.Pattern[str]:
    """Match a leading ``/<asset dir name>`` segment of a reference string."""
    name = os.path.basename(os.path.normpath(str(asset_directory)))
    return re.compile(rf"^/{escape_for_regex(name)}(?=/|$)")


def strip_asset_prefix(reference: str, asset_directory: Path | str) -> str:
    """Drop the ``/<asset dir name>`` prefix; other references pass through."""
    return build_asset_prefix_pattern(asset_directory).sub("", reference, count=1)


def resolve_source_path(reference: str, asset_directory: Path | str) -> Path:
    """Map an HTML-visible reference onto the real asset directory."""
    relative = strip_asset_prefix(reference, asset_directory).lstrip("/")
    return Path(asset_directory) / relative
