"""Command line entry point for the icon generator."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from keyicon.build import build_all
from keyicon.packagers import PACKAGERS, default_packager

DEFAULT_OUTPUT_DIR = Path("src-tauri") / "icons"


def _parse_args(argv: list[str] | None, default_output: Path) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate the keyboard app icon in every required size.")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=default_output,
        help="directory for the PNG, .icns and .ico files",
    )
    parser.add_argument(
        "--packager",
        choices=["auto", *PACKAGERS],
        default="auto",
        help="how to build icon.icns (default: iconutil when available, else Pillow)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug details")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, default_output: Path = DEFAULT_OUTPUT_DIR) -> int:
    args = _parse_args(argv, default_output)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.packager == "auto":
        packager = default_packager()
    else:
        packager = PACKAGERS[args.packager]()

    build_all(args.output_dir, packager)
    return 0
