"""Shared fixtures that lay out a small generated site on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

APP_JS = """// application entry point
function add(first, second) {
    return first + second;
}

console.log(add(1, 2));
"""

APP_CSS = """/* layout */
body {
    margin: 0;
    padding: 0;
}

.title {
    color: #ff0000;
}
"""

LOGO_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<!-- drawn by hand -->
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">
    <rect x="0" y="0" width="10" height="10" fill="red"/>
</svg>
"""

INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
<link rel="stylesheet" href="/assets/app.css">
<script src="/assets/app.js"></script>
</head>
<body>
<h1 class="title">Hello</h1>
<script src="/assets/app.js"></script>
</body>
</html>
"""


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A site root with ``assets/`` and an ``index.html`` referencing them."""
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "app.js").write_text(APP_JS, encoding="utf-8")
    (assets / "app.css").write_text(APP_CSS, encoding="utf-8")
    (tmp_path / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    return tmp_path
