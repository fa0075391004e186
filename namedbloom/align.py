from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List

from .errors import AlignmentError, JsonLineError
from .records import NamedJsonRecord


def split_lines(buf: bytes) -> Iterator[bytes]:
    """Yield newline separated lines; a trailing newline adds no empty line."""
    pos = 0
    n = len(buf)
    while pos < n:
        end = buf.find(b"\n", pos)
        if end < 0:
            yield bytes(buf[pos:])
            return
        yield bytes(buf[pos:end])
        pos = end + 1


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON constant {name}")


def _parse_int(s: str):
    # "-0" is read as a float and so projects to null, not to int 0
    return -0.0 if s == "-0" else int(s)


def parse_name(line: bytes, line_no: int) -> str:
    if line.endswith(b"\r"):
        line = line[:-1]
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError as e:
        raise JsonLineError(f"name is not valid UTF-8: {e}", line_no) from e


def parse_object(line: bytes, line_no: int) -> Dict[str, Any]:
    try:
        obj = json.loads(line.decode("utf-8"), parse_constant=_reject_constant, parse_int=_parse_int)
        # lone surrogate escapes parse but cannot be hashed as UTF-8
        json.dumps(obj, ensure_ascii=False).encode("utf-8")
    except (UnicodeError, ValueError) as e:
        raise JsonLineError(f"invalid JSON: {e}", line_no) from e
    if not isinstance(obj, dict):
        raise JsonLineError(f"expected a JSON object, got {type(obj).__name__}", line_no)
    return obj


def align_records(names: bytes, jsonl: bytes, *, strict: bool = False) -> List[NamedJsonRecord]:
    """Pair name lines with jsonl lines by position.

    With ``strict`` off the result has the length of the shorter list and
    surplus lines of the longer one are not parsed. With ``strict`` on a
    count mismatch raises ``AlignmentError``.
    """
    name_lines = list(split_lines(names))
    json_lines = list(split_lines(jsonl))
    if strict and len(name_lines) != len(json_lines):
        raise AlignmentError(f"{len(name_lines)} names but {len(json_lines)} jsonl lines")
    items: List[NamedJsonRecord] = []
    for i, (nline, jline) in enumerate(zip(name_lines, json_lines)):
        items.append(NamedJsonRecord(name=parse_name(nline, i), json=parse_object(jline, i)))
    return items
