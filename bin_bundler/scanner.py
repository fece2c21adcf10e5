"""Discover HTML documents and the unique asset references they contain."""

from __future__ import annotations

import glob
import logging
import os
from pathlib import Path
from typing import List, Mapping

import aiofiles

from .config import BundleConfig
from .errors import AssetResolutionError, NoHtmlFilesError
from .models import BundleState, HtmlDocument, ReferenceRecord
from .transforms import AssetCategory
from .utils import resolve_source_path, to_posix_path

logger = logging.getLogger("bin_bundler")


def discover_html_paths(html_glob: str) -> List[Path]:
    """Expand the HTML glob to a sorted list of regular files."""
    pattern = to_posix_path(html_glob)
    paths = sorted(
        Path(match)
        for match in glob.glob(pattern, recursive=True)
        if os.path.isfile(match)
    )
    if not paths:
        raise NoHtmlFilesError(pattern)
    logger.info("Found %d HTML file(s) matching %s", len(paths), pattern)
    return paths


async def load_document(path: Path, encoding: str) -> HtmlDocument:
    async with aiofiles.open(path, "r", encoding=encoding, newline="") as handle:
        content = await handle.read()
    return HtmlDocument(path=path, content=content)


async def scan_document(
    document: HtmlDocument,
    state: BundleState,
    config: BundleConfig,
    matchers: Mapping[str, AssetCategory],
) -> None:
    """Record every asset reference in ``document``, minifying new ones inline.

    A reference string already seen under the same category only gains another
    referencing document; its asset is never read or transformed again.
    """
    for name, category in matchers.items():
        target = state.records.setdefault(name, {})
        for reference in category.find_references(document.content):
            if reference in target:
                logger.debug("Reusing %s reference %s for %s", name, reference, document.path)
                target[reference].html_paths.append(document.path)
                continue

            source = resolve_source_path(reference, config.asset_directory)
            try:
                async with aiofiles.open(source, "rb") as handle:
                    data = await handle.read()
                content = await category.transform(data, source)
            except Exception as exc:  # pylint: disable=broad-except
                logger.debug("Failed to read or minify %s: %s", source, exc)
                raise AssetResolutionError(document.path, name, reference) from exc

            logger.debug("Minified %s asset %s (%s)", name, reference, source)
            target[reference] = ReferenceRecord(
                category=name,
                reference=reference,
                source_path=source,
                content=content,
                html_paths=[document.path],
                original_size=len(data),
            )


async def scan_documents(
    paths: List[Path],
    state: BundleState,
    config: BundleConfig,
    matchers: Mapping[str, AssetCategory],
) -> None:
    """Load and scan each HTML document in order, one at a time."""
    for path in paths:
        document = await load_document(path, config.encoding)
        state.documents[path] = document
        await scan_document(document, state, config, matchers)
