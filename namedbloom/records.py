from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .constants import BLOOM_BYTES


@dataclass
class NamedJsonRecord:
    name: str
    json: Dict[str, Any]

    def get_value(self, key: str) -> Any:
        return self.json.get(key)


@dataclass(frozen=True)
class NamedBloomRecord:
    name: str
    data: bytes

    def __post_init__(self):
        if len(self.data) != BLOOM_BYTES:
            raise ValueError(f"bloom data must be {BLOOM_BYTES} bytes")

    @classmethod
    def from_filter(cls, name: str, bloom: int) -> "NamedBloomRecord":
        return cls(name=name, data=bloom.to_bytes(BLOOM_BYTES, "big"))

    @property
    def bloom(self) -> int:
        return int.from_bytes(self.data, "big")
