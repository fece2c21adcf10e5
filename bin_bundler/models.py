"""Data models shared by the scan, materialize and rewrite phases."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Union


@dataclass
class HtmlDocument:
    """An HTML file held in memory for the duration of a run."""

    path: Path
    content: str
    changed: bool = False


@dataclass
class ReferenceRecord:
    """A unique asset reference string and everything derived from it."""

    category: str
    reference: str
    source_path: Path
    content: Union[str, bytes]
    html_paths: List[Path] = field(default_factory=list)
    digest: Optional[str] = None
    new_reference: Optional[str] = None
    original_size: int = 0
    final_size: int = 0


@dataclass
class BundleState:
    """Accumulated state threaded through Scan -> Materialize -> Rewrite."""

    documents: Dict[Path, HtmlDocument] = field(default_factory=dict)
    records: Dict[str, Dict[str, ReferenceRecord]] = field(default_factory=dict)
    removed_sources: Set[Path] = field(default_factory=set)

    def iter_records(self) -> List[ReferenceRecord]:
        """Return every record, category by category, in discovery order."""
        return [
            record
            for category_records in self.records.values()
            for record in category_records.values()
        ]


@dataclass
class BundleReport:
    """Summary of a completed run."""

    documents_scanned: int
    documents_written: int
    assets_materialized: int
    bytes_before: int
    bytes_after: int
    total_seconds: float
