from __future__ import annotations

from typing import Optional

import zlib

from .constants import GZIP_READ_SIZE, GZIP_WBITS
from .errors import CompressionError


class GzipCodec:
    def __init__(self, level: Optional[int] = None):
        self.level = level

    def compress(self, data: bytes) -> bytes:
        c = zlib.compressobj(self.level if self.level is not None else 6, zlib.DEFLATED, GZIP_WBITS)
        return c.compress(data) + c.flush()

    def decompress_into(self, data: bytes, buf: bytearray) -> bytearray:
        """Inflate the first gzip member of ``data`` into ``buf`` (cleared first).

        Bytes after the first member are ignored.
        """
        del buf[:]
        d = zlib.decompressobj(GZIP_WBITS)
        view = memoryview(data)
        try:
            for pos in range(0, len(view), GZIP_READ_SIZE):
                buf += d.decompress(view[pos : pos + GZIP_READ_SIZE])
                if d.eof:
                    break
            buf += d.flush()
        except zlib.error as e:
            raise CompressionError(f"gzip decompression failed: {e}") from e
        if not d.eof:
            raise CompressionError("gzip stream truncated")
        return buf


_DEFAULT = GzipCodec()


def gunzip_into(data: bytes, buf: bytearray) -> bytearray:
    return _DEFAULT.decompress_into(data, buf)


def gzip_bytes(data: bytes, level: Optional[int] = None) -> bytes:
    return GzipCodec(level).compress(data)
