from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import INT64_MAX, INT64_MIN, NULL_FINGERPRINT
from .hashutil import fold64_to_16, sha256_u64
from .records import NamedJsonRecord


KIND_NULL = 0
KIND_BOOL = 1
KIND_INT = 2
KIND_STR = 3


@dataclass(frozen=True)
class SimpleValue:
    kind: int
    value: Any = None

    @classmethod
    def from_json(cls, value: Any) -> "SimpleValue":
        """Project a JSON value onto null/bool/int64/string.

        Arrays, objects, floats and integers outside the int64 range all
        become null.
        """
        # bool first: json booleans are ints in Python
        if isinstance(value, bool):
            return cls(KIND_BOOL, value)
        if isinstance(value, int):
            if INT64_MIN <= value <= INT64_MAX:
                return cls(KIND_INT, value)
            return NULL
        if isinstance(value, str):
            return cls(KIND_STR, value)
        return NULL

    def to_hash(self) -> int:
        if self.kind == KIND_BOOL:
            return sha256_u64(b"\x01" if self.value else b"\x00")
        if self.kind == KIND_INT:
            return sha256_u64(self.value.to_bytes(8, "big", signed=True))
        if self.kind == KIND_STR:
            return sha256_u64(self.value.encode("utf-8"))
        return NULL_FINGERPRINT

    def fingerprint(self) -> int:
        return fold64_to_16(self.to_hash())


NULL = SimpleValue(KIND_NULL)


class FieldHasher:
    """Maps one configured JSON field of a record to its 16-bit fingerprint."""

    def __init__(self, key: str):
        self.key = key

    def simple_value(self, record: NamedJsonRecord) -> SimpleValue:
        return SimpleValue.from_json(record.get_value(self.key))

    def field_to_fingerprint(self, record: NamedJsonRecord) -> int:
        return self.simple_value(record).fingerprint()


def value_fingerprint(value: Any) -> int:
    return SimpleValue.from_json(value).fingerprint()
