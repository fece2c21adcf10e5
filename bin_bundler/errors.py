"""Exceptions raised while bundling assets."""

from __future__ import annotations

from pathlib import Path


class BundleError(RuntimeError):
    """Base class for fatal bundling failures."""


class NoHtmlFilesError(BundleError):
    """The HTML glob did not match any file."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"Found 0 HTML file. (pattern: {pattern})")
        self.pattern = pattern


class AssetResolutionError(BundleError):
    """A referenced asset could not be read or minified."""

    def __init__(self, html_path: Path, category: str, reference: str) -> None:
        super().__init__(
            f"At {html_path} for {category.upper()} files : {reference}."
        )
        self.html_path = html_path
        self.category = category
        self.reference = reference
