"""High-level orchestration: scan, materialize, rewrite, persist."""

from __future__ import annotations

import logging
import time
from typing import Mapping, Optional

from .config import BundleConfig
from .materializer import materialize_records
from .models import BundleReport, BundleState
from .rewriter import persist_documents, rewrite_documents
from .scanner import discover_html_paths, scan_documents
from .transforms import MATCHERS, AssetCategory

logger = logging.getLogger("bin_bundler")


async def run_bundler(
    config: BundleConfig,
    matchers: Optional[Mapping[str, AssetCategory]] = None,
) -> BundleReport:
    """Run every phase in order; any failure aborts the remaining phases."""
    matchers = MATCHERS if matchers is None else matchers
    start = time.perf_counter()

    html_paths = discover_html_paths(config.html_glob)
    state = BundleState(records={name: {} for name in matchers})

    await scan_documents(html_paths, state, config, matchers)
    records = await materialize_records(state, config)
    rewrite_documents(state, records)
    written = await persist_documents(state, config)

    report = BundleReport(
        documents_scanned=len(state.documents),
        documents_written=len(written),
        assets_materialized=len(records),
        bytes_before=sum(record.original_size for record in records),
        bytes_after=sum(record.final_size for record in records),
        total_seconds=time.perf_counter() - start,
    )
    logger.debug("Bundle report: %s", report)
    return report
