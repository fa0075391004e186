"""
namedbloom: per-shard 16-bit Bloom summaries for zipped named-jsonl archives.

Features:

- Reads zip archives whose members are DER containers holding two gzip streams:
  newline separated record names and the matching JSON lines.
- Projects one configured JSON field per record to null/bool/int64/string,
  hashes it with SHA-256 and XOR-folds the digest to a 16-bit fingerprint.
- Folds fingerprints into one 16-bit filter per member (4 probe bits each).
- Emits one record per member, in archive and member order: generic
  (name || filter), fixed 4-byte rows, or DER sequences.

The command line front-end lives in namedbloom.cli; the scan driver in
namedbloom.scanner takes explicit hasher/writer objects.
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "errors",
    "der",
    "codec",
    "context",
    "records",
    "container",
    "align",
    "hashutil",
    "fieldhash",
    "bloom",
    "encoder",
    "scanner",
    "config",
    "cli",
]
