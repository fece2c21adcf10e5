"""Registry of asset categories: how to find them in HTML and how to minify them."""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Dict, Iterator, Union

import rcssmin
import rjsmin

TransformResult = Union[str, bytes]
Transform = Callable[
    [bytes, Path], Union[TransformResult, Awaitable[TransformResult]]
]

SVG_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
# A DOCTYPE with an internal subset declares entities the body may use; keep it.
SVG_PROLOG_PATTERN = re.compile(r"<\?xml.*?\?>|<!DOCTYPE[^\[>]*>", re.DOTALL | re.IGNORECASE)
SVG_WHITESPACE_PATTERN = re.compile(r"\s+")
SVG_MARKUP_PATTERN = re.compile(
    r"(?P<preserve><(?P<tag>[\w:.-]+)\b[^>]*\bxml:space=[\"']preserve[\"'][^>]*(?<!/)>"
    r".*?</(?P=tag)\s*>)"
    r"|(?P<text><text\b.*?</text\s*>)"
    r"|(?P<gap>(?<=>)\s+(?=<))"
    r"|\s+",
    re.DOTALL,
)


@dataclass(frozen=True)
class AssetCategory:
    """Detection pattern plus minifier for one kind of asset."""

    name: str
    pattern: re.Pattern[str]
    minifier: Transform

    def find_references(self, html: str) -> Iterator[str]:
        """Yield each reference string in the order it appears in ``html``."""
        for match in self.pattern.finditer(html):
            reference = next((group for group in match.groups() if group), None)
            if reference:
                yield reference

    async def transform(self, data: bytes, source: Path) -> TransformResult:
        """Run the minifier, awaiting it when it is asynchronous."""
        result = self.minifier(data, source)
        if inspect.isawaitable(result):
            result = await result
        return result


async def minify_js(data: bytes, source: Path) -> str:
    return rjsmin.jsmin(data.decode("utf-8"), keep_bang_comments=False)


async def minify_css(data: bytes, source: Path) -> str:
    return rcssmin.cssmin(data.decode("utf-8"), keep_bang_comments=False)


def _minify_svg_piece(match: re.Match[str]) -> str:
    if match.group("preserve"):
        return match.group("preserve")
    if match.group("text"):
        return SVG_WHITESPACE_PATTERN.sub(" ", match.group("text"))
    if match.group("gap"):
        return ""
    return " "


def minify_svg(data: bytes, source: Path) -> str:
    """Strip comments, prolog and insignificant whitespace from an SVG document.

    Inside ``<text>`` whitespace runs shrink to one space and are never
    dropped between tags; ``xml:space="preserve"`` regions are left as is.
    """
    text = data.decode("utf-8")
    text = SVG_COMMENT_PATTERN.sub("", text)
    text = SVG_PROLOG_PATTERN.sub("", text)
    return SVG_MARKUP_PATTERN.sub(_minify_svg_piece, text).strip()


MATCHERS: Dict[str, AssetCategory] = {
    "js": AssetCategory(
        name="js",
        pattern=re.compile(r'<script.*src="([\w/.-]+)"', re.IGNORECASE),
        minifier=minify_js,
    ),
    "css": AssetCategory(
        name="css",
        pattern=re.compile(
            r'<link.*(?:rel="?stylesheet"?.*href="([\w/.-]+)"'
            r'|href="([\w/.-]+)".*rel="?stylesheet"?)',
            re.IGNORECASE,
        ),
        minifier=minify_css,
    ),
    "svg": AssetCategory(
        name="svg",
        pattern=re.compile(r'<img.*src="([\w/.-]+\.svg)"', re.IGNORECASE),
        minifier=minify_svg,
    ),
}
