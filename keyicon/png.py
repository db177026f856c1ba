"""Encode RGBA pixel buffers as PNG files."""

import struct
import zlib
from dataclasses import dataclass

from keyicon.crc import crc32

SIGNATURE = b'\x89PNG\r\n\x1a\n'

BIT_DEPTH = 8
COLOR_TYPE_RGBA = 6


@dataclass(frozen=True)
class Chunk:
    """A PNG chunk. The crc covers tag and payload."""

    tag: bytes
    payload: bytes

    @property
    def crc(self):
        return crc32(self.tag + self.payload)

    def to_bytes(self):
        return (
            struct.pack('>I', len(self.payload))
            + self.tag
            + self.payload
            + struct.pack('>I', self.crc)
        )


@dataclass(frozen=True)
class StoredChunk(Chunk):
    """A chunk read back from a file, with the crc that was stored for it."""

    stored_crc: int = 0

    @property
    def valid(self):
        return self.crc == self.stored_crc


def encode(width, height, pixels):
    """Create PNG file bytes from a row-major list of RGBA tuples."""
    # IHDR chunk: 8-bit RGBA, no interlace
    ihdr = Chunk(b'IHDR', struct.pack('>IIBBBBB', width, height, BIT_DEPTH, COLOR_TYPE_RGBA, 0, 0, 0))

    # IDAT chunk - compress pixel data with filter bytes
    raw_data = bytearray()
    for y in range(height):
        raw_data.append(0)  # Filter type: None
        for pixel in pixels[y * width:(y + 1) * width]:
            raw_data.extend(pixel)
    idat = Chunk(b'IDAT', zlib.compress(bytes(raw_data), 9))

    iend = Chunk(b'IEND', b'')

    return SIGNATURE + ihdr.to_bytes() + idat.to_bytes() + iend.to_bytes()


def iter_chunks(data):
    """Walk the chunks of a PNG written by :func:`encode`.

    Only the framing is parsed; payloads are returned as-is.
    """
    if data[:8] != SIGNATURE:
        raise ValueError('not a PNG file')
    offset = 8
    while offset < len(data):
        length, = struct.unpack_from('>I', data, offset)
        tag = data[offset + 4:offset + 8]
        payload = data[offset + 8:offset + 8 + length]
        stored_crc, = struct.unpack_from('>I', data, offset + 8 + length)
        yield StoredChunk(tag, payload, stored_crc)
        offset += 12 + length


def read_header(data):
    """Return ``(width, height, bit_depth, color_type)`` from the IHDR chunk."""
    for chunk in iter_chunks(data):
        if chunk.tag == b'IHDR':
            width, height, depth, color_type = struct.unpack_from('>IIBB', chunk.payload)
            return width, height, depth, color_type
    raise ValueError('missing IHDR chunk')
