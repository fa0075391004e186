from __future__ import annotations

import re
from typing import BinaryIO, Optional

from .constants import FORMAT_DER, FORMAT_FIXED, FORMAT_GENERIC
from .der import encode_named_bloom
from .errors import ConfigError
from .records import NamedBloomRecord


_HEX32 = re.compile(r"\+?[0-9A-Fa-f]+")


class GenericEncoder:
    """``name bytes || filter bytes`` with no length prefix or delimiter.

    Names must be self-delimiting by convention (e.g. fixed width).
    """

    def encode(self, record: NamedBloomRecord) -> bytes:
        return record.name.encode("utf-8") + record.data


class FixedEncoder:
    """4-byte rows: low 16 bits of the hex-parsed member name, then the filter.

    Member names are packed DOS date/time stamps written as 32-bit hex; the
    low half (the time) becomes the row serial.
    """

    def name_to_word(self, name: str) -> bytes:
        if not _HEX32.fullmatch(name):
            raise ConfigError(f"member name {name!r} is not hexadecimal")
        v = int(name, 16)
        if v > 0xFFFFFFFF:
            raise ConfigError(f"member name {name!r} overflows 32 bits")
        return (v & 0xFFFF).to_bytes(2, "big")

    def encode(self, record: NamedBloomRecord) -> bytes:
        return self.name_to_word(record.name) + record.data


class DerEncoder:
    """``SEQUENCE { UTF8String name, OCTET STRING filter }`` per record."""

    def encode(self, record: NamedBloomRecord) -> bytes:
        return encode_named_bloom(record.name, record.data)


_ENCODERS = {
    FORMAT_GENERIC: GenericEncoder,
    FORMAT_FIXED: FixedEncoder,
    FORMAT_DER: DerEncoder,
}


def get_encoder(fmt: str):
    try:
        return _ENCODERS[fmt]()
    except KeyError:
        raise ConfigError(f"unknown output format: {fmt!r} (choose from {', '.join(_ENCODERS)})") from None


class RecordWriter:
    """Encodes records into a binary stream.

    Use as a context manager: the stream is flushed on exit, including when
    the scan fails, so records written so far stay committed.
    """

    def __init__(self, stream: BinaryIO, encoder=None):
        self.stream = stream
        self.encoder = encoder if encoder is not None else FixedEncoder()
        self.count = 0

    def write_record(self, record: NamedBloomRecord) -> None:
        self.stream.write(self.encoder.encode(record))
        self.count += 1

    def flush(self) -> None:
        self.stream.flush()

    def __enter__(self) -> "RecordWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.flush()
        return None
