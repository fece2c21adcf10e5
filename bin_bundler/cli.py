"""Command-line entry point for the asset bundler."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from .bundler import run_bundler
from .config import BundleConfig
from .errors import BundleError

logger = logging.getLogger("bin_bundler.cli")

SUCCESS_MESSAGE = "Successfully bundled bin assets."


class _UsageParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = _UsageParser(
        prog="bin-bundler",
        description=(
            "Minify the assets referenced by HTML files, rename them to their "
            "content hash and rewrite the references."
        ),
    )
    parser.add_argument(
        "asset_directory",
        type=Path,
        help="Directory holding the assets; its name is the URL prefix used in HTML",
    )
    parser.add_argument("html_glob", help="Glob pattern selecting the HTML files to process")
    parser.add_argument(
        "gzip_level",
        nargs="?",
        type=int,
        default=0,
        help="Gzip compression level; 0 or omitted disables compression",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scan and minify without writing or deleting any file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = BundleConfig(
        asset_directory=args.asset_directory,
        html_glob=args.html_glob,
        gzip_level=args.gzip_level,
        dry_run=args.dry_run,
    )

    try:
        report = asyncio.run(run_bundler(config))
    except BundleError as exc:
        cause = f" ({exc.__cause__})" if exc.__cause__ else ""
        logger.error("%s%s", exc, cause)
        raise SystemExit(1) from exc

    logger.info(
        "Finished in %.2fs (%d assets, %d -> %d bytes, %d/%d HTML files updated)",
        report.total_seconds,
        report.assets_materialized,
        report.bytes_before,
        report.bytes_after,
        report.documents_written,
        report.documents_scanned,
    )
    print(SUCCESS_MESSAGE)


if __name__ == "__main__":
    main()
