"""Generate the icon PNGs and package them as ``icon.icns`` and ``icon.ico``."""

from __future__ import annotations

import logging
import shutil
import struct
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple, Optional

from keyicon.packagers import Packager, default_packager
from keyicon.painter import paint
from keyicon.png import encode

logger = logging.getLogger(__name__)


class IconSize(NamedTuple):
    filename: str
    dimension: int


SIZES = (
    IconSize("16x16.png", 16),
    IconSize("16x16@2x.png", 32),
    IconSize("32x32.png", 32),
    IconSize("32x32@2x.png", 64),
    IconSize("128x128.png", 128),
    IconSize("128x128@2x.png", 256),
    IconSize("256x256.png", 256),
    IconSize("256x256@2x.png", 512),
    IconSize("512x512.png", 512),
    IconSize("512x512@2x.png", 1024),
)

ICONSET_NAME = "icon.iconset"
ICNS_NAME = "icon.icns"
ICO_NAME = "icon.ico"
ICO_SOURCE = "256x256.png"

# ICONDIR (6 bytes) followed by a single ICONDIRENTRY (16 bytes)
ICO_HEADER = struct.Struct("<HHH")
ICO_ENTRY = struct.Struct("<BBBBHHII")
ICO_IMAGE_OFFSET = ICO_HEADER.size + ICO_ENTRY.size


@dataclass
class BuildReport:
    """What a run produced. A packaging step that failed is left as ``None``."""

    rasters: list[Path] = field(default_factory=list)
    icns: Optional[Path] = None
    ico: Optional[Path] = None


def iconset_name(filename: str) -> str:
    """Name ``iconutil`` expects for one of our PNGs, e.g. ``icon_16x16@2x.png``."""
    return f"icon_{filename}"


def generate_rasters(output_dir: Path) -> list[Path]:
    """Paint and encode every entry of :data:`SIZES` into ``output_dir``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for size in SIZES:
        pixels = paint(size.dimension, size.dimension)
        path = output_dir / size.filename
        path.write_bytes(encode(size.dimension, size.dimension, pixels))
        logger.info("  Created %s", size.filename)
        written.append(path)
    return written


def build_icns(output_dir: Path, packager: Packager) -> Path:
    """Stage the PNGs as an ``.iconset`` and hand them to ``packager``."""
    destination = output_dir / ICNS_NAME
    with tempfile.TemporaryDirectory(prefix="keyicon-") as tmp:
        stage = Path(tmp) / ICONSET_NAME
        stage.mkdir()
        for size in SIZES:
            shutil.copyfile(output_dir / size.filename, stage / iconset_name(size.filename))
        packager.package(stage, destination)
    return destination


def ico_bytes(png: bytes) -> bytes:
    """Wrap one 256px PNG in a Windows ``.ico`` container."""
    # reserved, type=1 (icon), count=1
    header = ICO_HEADER.pack(0, 1, 1)
    # width=0 and height=0 mean 256, no palette, planes=1, 32bpp
    entry = ICO_ENTRY.pack(0, 0, 0, 0, 1, 32, len(png), ICO_IMAGE_OFFSET)
    return header + entry + png


def build_ico(output_dir: Path) -> Path:
    """Write ``icon.ico`` around the previously generated 256px PNG."""
    png = (output_dir / ICO_SOURCE).read_bytes()
    destination = output_dir / ICO_NAME
    destination.write_bytes(ico_bytes(png))
    return destination


def build_all(output_dir: Path, packager: Optional[Packager] = None) -> BuildReport:
    """Run the whole pipeline.

    PNG generation errors propagate. The ``.icns`` and ``.ico`` steps are
    independent: a failure in one is logged and the run carries on.
    """
    output_dir = Path(output_dir)
    report = BuildReport()

    logger.info("Generating keyboard icon PNGs...")
    report.rasters = generate_rasters(output_dir)

    logger.info("\nGenerating macOS .icns file...")
    try:
        report.icns = build_icns(output_dir, packager or default_packager())
        logger.info("  Created %s", ICNS_NAME)
    except Exception as exc:
        logger.error("  Error: %s", exc)

    logger.info("\nGenerating Windows .ico file...")
    try:
        report.ico = build_ico(output_dir)
        logger.info("  Created %s", ICO_NAME)
    except Exception as exc:
        logger.error("  Error: %s", exc)

    logger.info("\nDone! Keyboard icon with gold keys on dark background.")
    return report
