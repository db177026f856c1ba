"""Table-driven CRC-32 used to seal PNG chunks."""

POLYNOMIAL = 0xEDB88320


def _make_table():
    """Build the 256-entry lookup table for the reflected polynomial."""
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            if c & 1:
                c = POLYNOMIAL ^ (c >> 1)
            else:
                c >>= 1
        table.append(c)
    return tuple(table)


_TABLE = _make_table()


def crc32(data):
    """Return the CRC-32 of ``data`` as an unsigned 32-bit int."""
    crc = 0xFFFFFFFF
    for byte in data:
        crc = (crc >> 8) ^ _TABLE[(crc ^ byte) & 0xFF]
    return crc ^ 0xFFFFFFFF
