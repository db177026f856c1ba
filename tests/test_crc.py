from __future__ import annotations

import sys
import unittest
import zlib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from keyicon.crc import crc32


class Crc32Tests(unittest.TestCase):
    def test_empty_input_is_zero(self) -> None:
        self.assertEqual(crc32(b""), 0)

    def test_standard_check_value(self) -> None:
        self.assertEqual(crc32(b"123456789"), 0xCBF43926)

    def test_matches_zlib(self) -> None:
        samples = [
            b"IEND",
            b"IHDR" + bytes(13),
            bytes(range(256)) * 4,
            b"\xff" * 1000,
        ]
        for data in samples:
            with self.subTest(length=len(data)):
                self.assertEqual(crc32(data), zlib.crc32(data) & 0xFFFFFFFF)

    def test_accepts_bytearray(self) -> None:
        self.assertEqual(crc32(bytearray(b"keyboard")), zlib.crc32(b"keyboard") & 0xFFFFFFFF)


if __name__ == "__main__":
    unittest.main()
