"""Content-hash and minify the static assets referenced by HTML files."""

__version__ = "0.1.0"
