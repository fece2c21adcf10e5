"""Compress, hash and write minified assets under content-derived names."""

from __future__ import annotations

import gzip
import hashlib
import logging
import os
from pathlib import Path
from typing import List, Union

import aiofiles
import aiofiles.os

from .config import GZIP_SUFFIX, BundleConfig
from .models import BundleState, ReferenceRecord
from .utils import to_posix_path

logger = logging.getLogger("bin_bundler")


def to_bytes(content: Union[str, bytes]) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return content


def compress_content(data: bytes, level: int) -> bytes:
    """Gzip ``data`` with a fixed header timestamp so output is reproducible."""
    return gzip.compress(data, compresslevel=level, mtime=0)


def content_hash(data: bytes, algorithm: str) -> str:
    return hashlib.new(algorithm, data).hexdigest()


def hashed_filename(digest: str, source: Path, compressed: bool) -> str:
    """Build ``<digest><original extension>[.gz]``."""
    extension = os.path.splitext(source.name)[1]
    if compressed:
        extension += GZIP_SUFFIX
    return f"{digest}{extension}"


async def write_atomic(destination: Path, data: bytes) -> None:
    """Write through a sibling temporary file and swap it into place."""
    temporary = destination.with_name(f".{destination.name}.tmp")
    try:
        async with aiofiles.open(temporary, "wb") as handle:
            await handle.write(data)
        await aiofiles.os.replace(temporary, destination)
    except OSError:
        if await aiofiles.os.path.exists(temporary):
            await aiofiles.os.remove(temporary)
        raise


async def materialize_record(
    record: ReferenceRecord,
    state: BundleState,
    config: BundleConfig,
) -> str:
    """Write the hashed asset, remove its source and return the new reference."""
    data = to_bytes(record.content)
    if config.gzip_enabled:
        data = compress_content(data, config.gzip_level)

    record.digest = content_hash(data, config.hash_algorithm)
    record.final_size = len(data)
    filename = hashed_filename(record.digest, record.source_path, config.gzip_enabled)
    destination = record.source_path.parent / filename

    if config.dry_run:
        logger.info("Would write %s", destination)
    else:
        await write_atomic(destination, data)
        # Another reference string may already have consumed the same source.
        if destination != record.source_path and record.source_path not in state.removed_sources:
            await aiofiles.os.remove(record.source_path)
            state.removed_sources.add(record.source_path)

    record.new_reference = to_posix_path(
        os.path.normpath(os.path.join(os.path.dirname(record.reference), filename))
    )
    logger.info(
        "%s -> %s (%d -> %d bytes)",
        record.reference,
        record.new_reference,
        record.original_size,
        record.final_size,
    )
    return record.new_reference


async def materialize_records(state: BundleState, config: BundleConfig) -> List[ReferenceRecord]:
    """Materialize every unique record sequentially, category by category."""
    records = state.iter_records()
    for record in records:
        await materialize_record(record, state, config)
    return records
