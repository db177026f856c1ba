from __future__ import annotations

import io
import struct
import sys
import unittest
import zlib
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from keyicon.painter import paint
from keyicon.png import SIGNATURE, Chunk, encode, iter_chunks, read_header


class ChunkTests(unittest.TestCase):
    def test_serialized_layout(self) -> None:
        data = Chunk(b"IEND", b"").to_bytes()

        self.assertEqual(data, b"\x00\x00\x00\x00IEND\xaeB`\x82")

    def test_crc_covers_tag_and_payload(self) -> None:
        chunk = Chunk(b"tEXt", b"Comment\x00keys")
        data = chunk.to_bytes()

        stored, = struct.unpack(">I", data[-4:])
        self.assertEqual(stored, zlib.crc32(b"tEXtComment\x00keys") & 0xFFFFFFFF)
        self.assertEqual(struct.unpack(">I", data[:4])[0], len(chunk.payload))


class EncodeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.pixels = paint(16, 16)
        self.data = encode(16, 16, self.pixels)

    def test_signature(self) -> None:
        self.assertEqual(self.data[:8], b"\x89PNG\r\n\x1a\n")
        self.assertEqual(self.data[:8], SIGNATURE)

    def test_chunk_order(self) -> None:
        tags = [chunk.tag for chunk in iter_chunks(self.data)]

        self.assertEqual(tags, [b"IHDR", b"IDAT", b"IEND"])

    def test_header(self) -> None:
        self.assertEqual(read_header(self.data), (16, 16, 8, 6))

        ihdr = next(iter_chunks(self.data))
        self.assertEqual(len(ihdr.payload), 13)
        self.assertEqual(ihdr.payload[10:], b"\x00\x00\x00")

    def test_every_chunk_crc_validates(self) -> None:
        for chunk in iter_chunks(self.data):
            with self.subTest(tag=chunk.tag):
                self.assertTrue(chunk.valid)

    def test_corrupted_payload_fails_crc(self) -> None:
        corrupted = bytearray(self.data)
        corrupted[20] ^= 0xFF  # inside the IHDR payload

        ihdr = next(iter_chunks(bytes(corrupted)))
        self.assertFalse(ihdr.valid)

    def test_rows_are_unfiltered(self) -> None:
        idat = [chunk for chunk in iter_chunks(self.data) if chunk.tag == b"IDAT"][0]
        raw = zlib.decompress(idat.payload)

        self.assertEqual(len(raw), 16 * (1 + 16 * 4))
        for y in range(16):
            row = raw[y * 65:(y + 1) * 65]
            self.assertEqual(row[0], 0)
            expected = bytes(channel for pixel in self.pixels[y * 16:(y + 1) * 16] for channel in pixel)
            self.assertEqual(row[1:], expected)

    def test_pillow_decodes_same_pixels(self) -> None:
        with Image.open(io.BytesIO(self.data)) as image:
            self.assertEqual(image.format, "PNG")
            self.assertEqual(image.mode, "RGBA")
            self.assertEqual(image.size, (16, 16))
            self.assertEqual(image.tobytes(), bytes(channel for pixel in self.pixels for channel in pixel))

    def test_encode_is_deterministic(self) -> None:
        self.assertEqual(encode(16, 16, self.pixels), self.data)

    def test_rejects_non_png(self) -> None:
        with self.assertRaises(ValueError):
            list(iter_chunks(b"GIF89a" + bytes(10)))


if __name__ == "__main__":
    unittest.main()
