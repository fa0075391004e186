from __future__ import annotations

import os
import zipfile
import zlib
from typing import BinaryIO, Callable, Iterable, Iterator, Optional, Tuple

from .align import align_records
from .bloom import BloomFolder
from .constants import GZIP_READ_SIZE
from .container import decode_entry
from .context import ScanContext
from .errors import ArchiveReadError
from .fieldhash import FieldHasher
from .records import NamedBloomRecord


def iter_archive_paths(stream: BinaryIO) -> Iterator[str]:
    """Yield one archive path per input line until end of stream.

    Lines are decoded with the filesystem encoding so any byte path survives.
    """
    for line in stream:
        if line.endswith(b"\n"):
            line = line[:-1]
            if line.endswith(b"\r"):
                line = line[:-1]
        yield os.fsdecode(line)


def open_archive(path: str) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(path)
    except zipfile.BadZipFile as e:
        raise ArchiveReadError(f"{path}: not a zip archive: {e}") from e


def _read_member(zf: zipfile.ZipFile, info: zipfile.ZipInfo, buf: bytearray) -> bytearray:
    del buf[:]
    try:
        with zf.open(info) as fh:
            while True:
                chunk = fh.read(GZIP_READ_SIZE)
                if not chunk:
                    break
                buf += chunk
    except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError) as e:
        raise ArchiveReadError(f"{info.filename}: cannot read member: {e}") from e
    return buf


class ArchiveScanner:
    """Sequential archive -> member -> Bloom filter driver.

    Every member of every archive yields exactly one record, written to
    ``writer`` before the next member is read. The first error aborts the
    scan; records already written are left as they are.

    Args:
        hasher: object with ``field_to_fingerprint(record) -> int``.
        writer: object with ``write_record(NamedBloomRecord)``.
        strict_alignment: raise on name/jsonl count mismatch instead of
            truncating to the shorter list.
        progress: optional callback receiving a short status line.
    """

    def __init__(
        self,
        hasher: FieldHasher,
        writer,
        *,
        strict_alignment: bool = False,
        progress: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.hasher = hasher
        self.writer = writer
        self.strict_alignment = strict_alignment
        self.progress = progress
        self.ctx = ScanContext()
        self.archives_scanned = 0
        self.members_scanned = 0

    def member_filter(self, raw: bytes) -> Tuple[int, int]:
        """Return (record count, 16-bit filter) for one member's raw bytes.

        The context must have been reset for this member.
        """
        names, jsonl = decode_entry(raw, self.ctx)
        items = align_records(names, jsonl, strict=self.strict_alignment)
        folder = BloomFolder(self.ctx.bloom)
        for item in items:
            folder.add(self.hasher.field_to_fingerprint(item))
        self.ctx.bloom = folder.bloom
        return len(items), folder.bloom

    def summarize_member(self, zf: zipfile.ZipFile, info: zipfile.ZipInfo) -> Tuple[str, int, int]:
        self.ctx.reset()
        raw = _read_member(zf, info, self.ctx.raw)
        count, bloom = self.member_filter(raw)
        return info.filename, count, bloom

    def scan_member(self, zf: zipfile.ZipFile, info: zipfile.ZipInfo) -> NamedBloomRecord:
        name, _count, bloom = self.summarize_member(zf, info)
        record = NamedBloomRecord.from_filter(name, bloom)
        self.writer.write_record(record)
        self.members_scanned += 1
        return record

    def scan_archive(self, path: str) -> int:
        """Scan one archive in directory order; returns the member count."""
        if self.progress is not None:
            self.progress(f"   scanning: {path}")
        n = 0
        with open_archive(path) as zf:
            for info in zf.infolist():
                self.scan_member(zf, info)
                n += 1
        self.archives_scanned += 1
        return n

    def scan_paths(self, paths: Iterable[str]) -> int:
        total = 0
        for path in paths:
            total += self.scan_archive(path)
        return total
