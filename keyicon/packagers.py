"""Turn a staged ``.iconset`` directory into a macOS ``.icns`` file."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from PIL import Image

logger = logging.getLogger(__name__)


class PackagingError(RuntimeError):
    """A platform packager could not produce its container."""


class Packager(Protocol):
    def package(self, source_dir: Path, destination: Path) -> None:
        ...


class IconutilPackager:
    """Run the macOS ``iconutil`` tool. Its output goes straight to the console."""

    def __init__(self, command: str = "iconutil") -> None:
        self.command = command

    def package(self, source_dir: Path, destination: Path) -> None:
        args = [self.command, "-c", "icns", str(source_dir), "-o", str(destination)]
        logger.debug("Running %s", subprocess.list2cmdline(args))
        try:
            subprocess.run(args, check=True)
        except FileNotFoundError as exc:
            raise PackagingError(f"{self.command} not found") from exc
        except subprocess.CalledProcessError as exc:
            raise PackagingError(f"{self.command} exited with status {exc.returncode}") from exc


class PillowIcnsPackager:
    """Write the ``.icns`` with Pillow, for hosts without ``iconutil``."""

    def package(self, source_dir: Path, destination: Path) -> None:
        sources = sorted(source_dir.glob("*.png"))
        if not sources:
            raise PackagingError(f"no PNG files in {source_dir}")

        try:
            images = [Image.open(path).convert("RGBA") for path in sources]
            images.sort(key=lambda img: img.size[0], reverse=True)
            images[0].save(destination, format="ICNS", append_images=images[1:])
        except OSError as exc:
            raise PackagingError(f"could not write {destination.name}: {exc}") from exc


def default_packager() -> Packager:
    if shutil.which("iconutil"):
        return IconutilPackager()
    logger.debug("iconutil not found, using Pillow to write .icns")
    return PillowIcnsPackager()


PACKAGERS = {
    "iconutil": IconutilPackager,
    "pillow": PillowIcnsPackager,
}
