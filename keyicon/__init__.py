"""Procedural keyboard app icon generator with PNG, ICNS and ICO output."""

from keyicon.crc import crc32
from keyicon.painter import paint
from keyicon.png import encode

__version__ = "0.1.0"

__all__ = ["crc32", "encode", "paint"]
