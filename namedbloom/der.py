from __future__ import annotations

"""
DER schemas for namedbloom member containers and structured output.

Member container
- SEQUENCE {
    gzipped_names  OCTET STRING,
    gzipped_jsonl  OCTET STRING
  }

Structured output record
- SEQUENCE {
    name   UTF8String,
    bloom  OCTET STRING (2 bytes, big-endian filter)
  }

Parsing is done by asn1crypto. Input must be canonical DER: a value whose
re-encoding differs from its input (indefinite or non-minimal lengths,
constructed strings, extra fields) is rejected.
"""

from typing import Tuple

from asn1crypto import core

from .errors import ContainerDecodeError


class NamedJsonContainer(core.Sequence):
    _fields = [
        ("gzipped_names", core.OctetString),
        ("gzipped_jsonl", core.OctetString),
    ]


class NamedBloomDer(core.Sequence):
    _fields = [
        ("name", core.UTF8String),
        ("bloom", core.OctetString),
    ]


def _load(spec, data: bytes, first: str, second: str):
    data = bytes(data)
    try:
        value = spec.load(data, strict=True)
        a = value[first]
        b = value[second]
        if not isinstance(a, spec._fields[0][1]) or not isinstance(b, spec._fields[1][1]):
            raise ValueError("missing field")
        a_native = a.native
        b_native = b.native
        if value.dump(force=True) != data:
            raise ValueError("not canonical DER")
    except (ValueError, TypeError) as e:
        raise ContainerDecodeError(f"der: {spec.__name__}: {e}") from e
    return a_native, b_native


def decode_octet_pair(data: bytes) -> Tuple[bytes, bytes]:
    """Decode ``SEQUENCE { OCTET STRING, OCTET STRING }`` into its two payloads."""
    return _load(NamedJsonContainer, data, "gzipped_names", "gzipped_jsonl")


def encode_octet_pair(first: bytes, second: bytes) -> bytes:
    return NamedJsonContainer({"gzipped_names": bytes(first), "gzipped_jsonl": bytes(second)}).dump()


def encode_named_bloom(name: str, bloom: bytes) -> bytes:
    return NamedBloomDer({"name": name, "bloom": bytes(bloom)}).dump()


def decode_named_bloom(data: bytes) -> Tuple[str, bytes]:
    return _load(NamedBloomDer, data, "name", "bloom")
