from __future__ import annotations

from typing import Tuple

from .codec import gunzip_into
from .context import ScanContext
from .der import decode_octet_pair


def decode_entry(raw: bytes, ctx: ScanContext) -> Tuple[bytearray, bytearray]:
    """Decode one archive member into ``ctx.names`` and ``ctx.jsonl``.

    ``raw`` must be a DER ``SEQUENCE`` of two ``OCTET STRING`` fields, each a
    gzip stream: the newline separated names followed by the jsonl lines.

    Raises:
        ContainerDecodeError: the container does not have that shape.
        CompressionError: either field is not a valid gzip stream.
    """
    gz_names, gz_jsonl = decode_octet_pair(raw)
    gunzip_into(gz_names, ctx.names)
    gunzip_into(gz_jsonl, ctx.jsonl)
    return ctx.names, ctx.jsonl
