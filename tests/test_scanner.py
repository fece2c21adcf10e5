import asyncio
from pathlib import Path

import pytest

from bin_bundler.config import BundleConfig
from bin_bundler.errors import AssetResolutionError, NoHtmlFilesError
from bin_bundler.models import BundleState
from bin_bundler.scanner import discover_html_paths, load_document, scan_documents
from bin_bundler.transforms import MATCHERS, AssetCategory


def _counting_matchers(calls):
    def record_call(data, source):
        calls.append(source)
        return data.decode().strip()

    return {"js": AssetCategory(name="js", pattern=MATCHERS["js"].pattern, minifier=record_call)}


def test_discover_html_paths_is_sorted_and_files_only(tmp_path: Path):
    (tmp_path / "b.html").write_text("", encoding="utf-8")
    (tmp_path / "a.html").write_text("", encoding="utf-8")
    (tmp_path / "dir.html").mkdir()
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "c.html").write_text("", encoding="utf-8")

    assert discover_html_paths(str(tmp_path / "*.html")) == [tmp_path / "a.html", tmp_path / "b.html"]
    assert nested / "c.html" in discover_html_paths(str(tmp_path / "**" / "*.html"))


def test_discover_html_paths_raises_on_no_match(tmp_path: Path):
    with pytest.raises(NoHtmlFilesError, match="Found 0 HTML file"):
        discover_html_paths(str(tmp_path / "*.html"))


def test_load_document_preserves_line_endings(tmp_path: Path):
    path = tmp_path / "crlf.html"
    path.write_bytes(b"<p>a</p>\r\n<p>b</p>\r\n")
    document = asyncio.run(load_document(path, "utf-8"))
    assert document.content == "<p>a</p>\r\n<p>b</p>\r\n"
    assert document.changed is False


def test_scan_transforms_each_reference_once(site: Path):
    (site / "about.html").write_text(
        '<script src="/assets/app.js"></script>\n<script src="/assets/app.js"></script>\n',
        encoding="utf-8",
    )
    calls = []
    config = BundleConfig(asset_directory=site / "assets", html_glob=str(site / "*.html"))
    state = BundleState()
    paths = discover_html_paths(config.html_glob)

    asyncio.run(scan_documents(paths, state, config, _counting_matchers(calls)))

    assert calls == [site / "assets" / "app.js"]
    record = state.records["js"]["/assets/app.js"]
    assert record.source_path == site / "assets" / "app.js"
    assert record.html_paths == [
        site / "about.html",
        site / "about.html",
        site / "index.html",
        site / "index.html",
    ]
    assert set(state.documents) == {site / "about.html", site / "index.html"}


def test_scan_keys_records_by_reference_string(site: Path):
    (site / "index.html").write_text(
        '<script src="/assets/app.js"></script>\n<script src="app.js"></script>\n',
        encoding="utf-8",
    )
    calls = []
    config = BundleConfig(asset_directory=site / "assets", html_glob=str(site / "*.html"))
    state = BundleState()

    asyncio.run(scan_documents([site / "index.html"], state, config, _counting_matchers(calls)))

    assert list(state.records["js"]) == ["/assets/app.js", "app.js"]
    assert calls == [site / "assets" / "app.js", site / "assets" / "app.js"]


def test_scan_reports_missing_asset(site: Path):
    (site / "index.html").write_text('<img src="/assets/logo.svg">\n', encoding="utf-8")
    config = BundleConfig(asset_directory=site / "assets", html_glob=str(site / "*.html"))

    with pytest.raises(AssetResolutionError) as excinfo:
        asyncio.run(scan_documents([site / "index.html"], BundleState(), config, MATCHERS))

    error = excinfo.value
    assert error.html_path == site / "index.html"
    assert error.category == "svg"
    assert error.reference == "/assets/logo.svg"
    assert "SVG" in str(error)
    assert isinstance(error.__cause__, FileNotFoundError)


def test_scan_reports_failing_transform(site: Path):
    def broken(data, source):
        raise ValueError("unexpected token")

    matchers = {"js": AssetCategory(name="js", pattern=MATCHERS["js"].pattern, minifier=broken)}
    config = BundleConfig(asset_directory=site / "assets", html_glob=str(site / "*.html"))

    with pytest.raises(AssetResolutionError) as excinfo:
        asyncio.run(scan_documents([site / "index.html"], BundleState(), config, matchers))

    assert excinfo.value.reference == "/assets/app.js"
    assert isinstance(excinfo.value.__cause__, ValueError)
