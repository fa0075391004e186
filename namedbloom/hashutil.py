from __future__ import annotations

import hashlib


def sha256_u64(data: bytes) -> int:
    """First 8 bytes of the SHA-256 digest as a big-endian unsigned integer."""
    return int.from_bytes(hashlib.sha256(data).digest()[:8], "big")


def fold64_to_16(h: int) -> int:
    """XOR-fold a 64-bit hash to 32 bits, then to a 16-bit fingerprint."""
    h32 = ((h >> 32) ^ h) & 0xFFFFFFFF
    return ((h32 >> 16) ^ h32) & 0xFFFF
