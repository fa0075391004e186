from __future__ import annotations


class ScanContext:
    """Scratch state owned by one sequential scan.

    Holds the raw member bytes, the inflated name and jsonl buffers and the
    Bloom accumulator of the member being processed. Buffers are cleared in
    place between members rather than reallocated.
    """

    def __init__(self):
        self.raw = bytearray()
        self.names = bytearray()
        self.jsonl = bytearray()
        self.bloom = 0

    def reset(self) -> None:
        del self.raw[:]
        del self.names[:]
        del self.jsonl[:]
        self.bloom = 0
