"""Rewrite quoted asset references in HTML and persist changed documents."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List

import aiofiles

from .config import BundleConfig
from .models import BundleState, HtmlDocument, ReferenceRecord
from .utils import escape_for_regex

logger = logging.getLogger("bin_bundler")


def rewrite_document(document: HtmlDocument, old_reference: str, new_reference: str) -> None:
    """Replace every ``"old"`` with ``"new"`` and mark the document changed.

    Matching is textual and includes the surrounding double quotes, so a
    reference that is a substring of a longer one is left alone.
    """
    pattern = re.compile(f'"{escape_for_regex(old_reference)}"')
    replacement = f'"{new_reference}"'
    document.content = pattern.sub(lambda _match: replacement, document.content)
    document.changed = True


def rewrite_documents(state: BundleState, records: Iterable[ReferenceRecord]) -> None:
    for record in records:
        if record.new_reference is None:
            raise RuntimeError(f"Reference {record.reference} was never materialized")
        for html_path in record.html_paths:
            rewrite_document(state.documents[html_path], record.reference, record.new_reference)


async def persist_documents(state: BundleState, config: BundleConfig) -> List[HtmlDocument]:
    """Write back only documents whose content was rewritten."""
    written: List[HtmlDocument] = []
    for document in state.documents.values():
        if not document.changed:
            continue
        if config.dry_run:
            logger.info("Would update %s", document.path)
        else:
            async with aiofiles.open(
                document.path, "w", encoding=config.encoding, newline=""
            ) as handle:
                await handle.write(document.content)
            logger.info("Updated %s", document.path)
        written.append(document)
    return written
