from __future__ import annotations

import os
import sys
import time
import argparse
import zipfile

from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple

from namedbloom.codec import gzip_bytes
from namedbloom.config import ScanConfig, load_config
from namedbloom.constants import ENV_OUTPUT_FORMAT, ENV_TARGET_KEY, OUTPUT_FORMATS
from namedbloom.der import encode_octet_pair
from namedbloom.encoder import RecordWriter, get_encoder
from namedbloom.errors import NamedBloomError
from namedbloom.fieldhash import FieldHasher
from namedbloom.scanner import ArchiveScanner, iter_archive_paths, open_archive


def _progress(line: str) -> None:
    print(line, file=sys.stderr, flush=True)


def cmd_build(config: ScanConfig, *, rdr: Optional[BinaryIO] = None, wtr: Optional[BinaryIO] = None) -> bool:
    """Read archive paths (one per line) and write one Bloom record per member.

    Args:
        config: Field key, output format and alignment policy.
        rdr: Binary stream of archive paths; defaults to stdin.
        wtr: Binary output stream; defaults to stdout.

    Records are streamed as each member completes and the output is flushed
    at the end, also when the scan aborts.
    """
    rdr = rdr if rdr is not None else sys.stdin.buffer
    wtr = wtr if wtr is not None else sys.stdout.buffer
    t0 = time.time()
    with RecordWriter(wtr, get_encoder(config.output_format)) as writer:
        scanner = ArchiveScanner(
            FieldHasher(config.field_key),
            writer,
            strict_alignment=config.strict_alignment,
            progress=_progress if config.verbose else None,
        )
        scanner.scan_paths(iter_archive_paths(rdr))
    if config.verbose:
        dt = max(0.000001, time.time() - t0)
        print(
            f"Done: {scanner.archives_scanned} archives, {scanner.members_scanned} members "
            f"in {dt:.1f}s; format={config.output_format} key={config.field_key!r}",
            file=sys.stderr,
        )
    return True


def cmd_inspect(archives: List[str], config: ScanConfig) -> bool:
    """Print ``name<TAB>records<TAB>filter`` for every member of the given archives."""
    scanner = ArchiveScanner(FieldHasher(config.field_key), None, strict_alignment=config.strict_alignment)
    for path in archives:
        with open_archive(path) as zf:
            for info in zf.infolist():
                name, count, bloom = scanner.summarize_member(zf, info)
                print(f"{name}\t{count}\t{bloom:04x}")
    return True


def _read_bytes(path: str) -> bytes:
    with open(path, "rb") as fh:
        return fh.read()


def cmd_pack(output: str, members: Sequence[Tuple[str, str, str]], *, quiet: bool = False) -> bool:
    """Write a zip archive of named-jsonl containers.

    Args:
        output: Path of the zip file to create.
        members: (member name, names file, jsonl file) triples, in order.
    """
    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(str(out), "w", compression=zipfile.ZIP_STORED) as zf:
        for name, names_path, jsonl_path in members:
            blob = encode_octet_pair(gzip_bytes(_read_bytes(names_path)), gzip_bytes(_read_bytes(jsonl_path)))
            zf.writestr(name, blob)
            if not quiet:
                print(f"    packing: {name} ({len(blob)} bytes)")
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="namedbloom",
        description="Summarize zipped named-jsonl shards as 16-bit Bloom filters",
        epilog=(
            f"The field key defaults to ${ENV_TARGET_KEY}; the output format to "
            f"${ENV_OUTPUT_FORMAT} (else 'fixed')."
        ),
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_build = sub.add_parser("build", help="Read zip paths from stdin, write Bloom records to stdout")
    ap_build.add_argument("--key", help=f"JSON field to summarize (default: ${ENV_TARGET_KEY})")
    ap_build.add_argument("--format", choices=list(OUTPUT_FORMATS), help="Output record encoding")
    ap_build.add_argument("--strict", action="store_true", help="Fail when name and jsonl line counts differ")
    ap_build.add_argument("--verbose", action="store_true", help="Report progress on stderr")

    ap_inspect = sub.add_parser("inspect", help="Print per-member record counts and filters")
    ap_inspect.add_argument("archives", nargs="+", help="Zip archive paths")
    ap_inspect.add_argument("--key", help=f"JSON field to summarize (default: ${ENV_TARGET_KEY})")
    ap_inspect.add_argument("--strict", action="store_true", help="Fail when name and jsonl line counts differ")

    ap_pack = sub.add_parser("pack", help="Build a zip of named-jsonl containers")
    ap_pack.add_argument("output", help="Output zip path")
    ap_pack.add_argument(
        "--member",
        nargs=3,
        action="append",
        required=True,
        metavar=("NAME", "NAMES_FILE", "JSONL_FILE"),
        help="Member name plus its names file and jsonl file (repeatable)",
    )
    ap_pack.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "build":
            config = load_config(
                key=args.key,
                output_format=args.format,
                strict_alignment=args.strict,
                verbose=args.verbose,
                environ=os.environ,
            )
            cmd_build(config)
        elif args.cmd == "inspect":
            config = load_config(key=args.key, strict_alignment=args.strict, environ=os.environ)
            cmd_inspect(args.archives, config)
        elif args.cmd == "pack":
            cmd_pack(args.output, [tuple(m) for m in args.member], quiet=args.quiet)
        else:
            raise RuntimeError("Unknown command")
    except (NamedBloomError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
