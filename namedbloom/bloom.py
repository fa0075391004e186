from __future__ import annotations

from typing import Iterable, Tuple

from .constants import PROBE_MASK, PROBE_SHIFTS


def probe_positions(fingerprint: int) -> Tuple[int, ...]:
    """Bit positions selected by the four 4-bit windows of a fingerprint.

    The windows partition one 16-bit value, so the probes are correlated;
    this trades false-positive rate for a single hash per value.
    """
    return tuple((fingerprint >> s) & PROBE_MASK for s in PROBE_SHIFTS)


def probe_mask(fingerprint: int) -> int:
    m = 0
    for pos in probe_positions(fingerprint):
        m |= 1 << pos
    return m


def update_bloom(bloom: int, fingerprint: int) -> int:
    return (bloom | probe_mask(fingerprint)) & 0xFFFF


class BloomFolder:
    """OR-accumulates fingerprints into a 16-bit filter. Bits are never cleared."""

    def __init__(self, bloom: int = 0):
        self.bloom = bloom

    def add(self, fingerprint: int) -> int:
        self.bloom = update_bloom(self.bloom, fingerprint)
        return self.bloom

    def fold(self, fingerprints: Iterable[int]) -> int:
        for fp in fingerprints:
            self.add(fp)
        return self.bloom
