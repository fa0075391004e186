from __future__ import annotations

import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from typing import Dict, Optional

from namedbloom.constants import ENV_OUTPUT_FORMAT, ENV_TARGET_KEY
from namedbloom.der import decode_named_bloom


def _write_shard(root: Path, stem: str, names: str, jsonl: str):
    names_path = root / f"{stem}.names"
    jsonl_path = root / f"{stem}.jsonl"
    names_path.write_text(names, encoding="utf-8")
    jsonl_path.write_text(jsonl, encoding="utf-8")
    return str(names_path), str(jsonl_path)


class CLIIntegrationTests(unittest.TestCase):
    def run_cli(
        self,
        args,
        *,
        expect: Optional[int] = 0,
        stdin: bytes = b"",
        env_extra: Optional[Dict[str, str]] = None,
    ):
        cmd = [sys.executable, "-m", "namedbloom.cli"] + list(args)
        env = os.environ.copy()
        env.pop(ENV_TARGET_KEY, None)
        env.pop(ENV_OUTPUT_FORMAT, None)
        env.update(env_extra or {})
        repo_root = Path(__file__).resolve().parent
        existing = env.get("PYTHONPATH", "")
        env["PYTHONPATH"] = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
        proc = subprocess.run(cmd, input=stdin, stdout=subprocess.PIPE, stderr=subprocess.PIPE, env=env)
        if expect is not None and proc.returncode != expect:
            raise AssertionError(
                f"CLI exited {proc.returncode}, expected {expect}\nCommand: {' '.join(cmd)}\n"
                f"STDOUT:\n{proc.stdout!r}\nSTDERR:\n{proc.stderr.decode(errors='replace')}"
            )
        return proc

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        helo = _write_shard(
            self.root,
            "helo",
            "0\n1\n2\n",
            '{"helo":"wrld"}\n{"helo":"WRLD"}\n{"helo":"WWWW"}\n',
        )
        other = _write_shard(self.root, "other", "0\n", '{"other":1}\n')
        self.archive = self.root / "0.zip"
        self.run_cli(
            [
                "pack",
                str(self.archive),
                "--member", "5a3b1c2d", *helo,
                "--member", "5a3b1c2e", *other,
                "--quiet",
            ]
        )

    def test_build_fixed_from_env(self):
        proc = self.run_cli(
            ["build"],
            stdin=f"{self.archive}\n".encode(),
            env_extra={ENV_TARGET_KEY: "helo"},
        )
        self.assertEqual(proc.stdout, b"\x1c\x2d\xb4\x33" + b"\x1c\x2e\x00\x01")

    def test_build_generic_and_der(self):
        stdin = f"{self.archive}\n".encode()
        proc = self.run_cli(["build", "--key", "helo", "--format", "generic"], stdin=stdin)
        self.assertEqual(proc.stdout, b"5a3b1c2d\xb4\x33" + b"5a3b1c2e\x00\x01")
        proc = self.run_cli(
            ["build", "--key", "helo", "--verbose"],
            stdin=stdin,
            env_extra={ENV_OUTPUT_FORMAT: "der"},
        )
        first_len = proc.stdout[1] + 2
        self.assertEqual(decode_named_bloom(proc.stdout[:first_len]), ("5a3b1c2d", b"\xb4\x33"))
        self.assertEqual(decode_named_bloom(proc.stdout[first_len:]), ("5a3b1c2e", b"\x00\x01"))
        self.assertIn(b"scanning:", proc.stderr)

    def test_inspect(self):
        proc = self.run_cli(["inspect", str(self.archive), "--key", "helo"])
        lines = proc.stdout.decode().splitlines()
        self.assertEqual(lines, ["5a3b1c2d\t3\tb433", "5a3b1c2e\t1\t0001"])

    def test_missing_key(self):
        proc = self.run_cli(["build"], stdin=f"{self.archive}\n".encode(), expect=2)
        self.assertIn(ENV_TARGET_KEY.encode(), proc.stderr)
        self.assertEqual(proc.stdout, b"")

    def test_failure_keeps_emitted_records(self):
        bad = self.root / "bad.zip"
        bad.write_bytes(b"not a zip")
        stdin = f"{self.archive}\n{bad}\n".encode()
        proc = self.run_cli(["build", "--key", "helo"], stdin=stdin, expect=2)
        self.assertEqual(proc.stdout, b"\x1c\x2d\xb4\x33" + b"\x1c\x2e\x00\x01")
        self.assertIn(b"Error:", proc.stderr)

    def test_unhashable_string_reports_error(self):
        names, jsonl = _write_shard(self.root, "s", "0\n", '{"helo":"\\ud800"}\n')
        archive = self.root / "surrogate.zip"
        self.run_cli(["pack", str(archive), "--member", "00000001", names, jsonl, "--quiet"])
        proc = self.run_cli(["build", "--key", "helo"], stdin=f"{archive}\n".encode(), expect=2)
        self.assertIn(b"Error:", proc.stderr)
        self.assertNotIn(b"Traceback", proc.stderr)

    def test_fixed_rejects_non_hex_names(self):
        names, jsonl = _write_shard(self.root, "n", "0\n", '{"helo":"wrld"}\n')
        archive = self.root / "named.zip"
        self.run_cli(["pack", str(archive), "--member", "not-hex", names, jsonl, "--quiet"])
        proc = self.run_cli(["build", "--key", "helo"], stdin=f"{archive}\n".encode(), expect=2)
        self.assertIn(b"not hexadecimal", proc.stderr)


if __name__ == "__main__":
    unittest.main()
