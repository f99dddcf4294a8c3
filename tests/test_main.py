import importlib
import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from lbconfig.__main__ import main
from lbconfig.config.defaults import ENABLE_LEAST_REQUEST_ENV, EXTRA_PROVIDERS_ENV


CLEAN_ENV = {ENABLE_LEAST_REQUEST_ENV: "", EXTRA_PROVIDERS_ENV: ""}

CUSTOM_DESCRIPTOR = """\
name: c1
loadBalancingPolicy:
  policies:
    - typedExtensionConfig:
        typedConfig:
          '@type': typed_struct
          typeUrl: type.googleapis.com/test/myPolicy
          value:
            weight: 3
    - typedExtensionConfig:
        typedConfig:
          '@type': round_robin
"""


class TestMain(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name: str, text: str) -> Path:
        path = Path(self.tmp.name) / name
        path.write_text(text, encoding="utf-8")
        return path

    def run_main(self, argv: list[str]) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        code = 0
        with patch.dict(os.environ, CLEAN_ENV), redirect_stdout(out), redirect_stderr(err):
            try:
                main(argv)
            except SystemExit as e:
                code = int(e.code) if isinstance(e.code, int) else 1
        return code, out.getvalue(), err.getvalue()

    def test_resolve_prints_json(self) -> None:
        path = self.write("c.yml", "name: c1\nlbPolicy: ROUND_ROBIN\n")
        code, out, _ = self.run_main(["resolve", str(path)])
        self.assertEqual(code, 0)
        self.assertEqual(
            json.loads(out), {"wrr_locality": {"childPolicy": [{"round_robin": {}}]}}
        )

    def test_unregistered_custom_policy_falls_back(self) -> None:
        path = self.write("c.yml", CUSTOM_DESCRIPTOR)
        code, out, err = self.run_main(["resolve", str(path)])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), {"round_robin": {}})
        self.assertIn("skipping", err)

    def test_registered_custom_policy(self) -> None:
        path = self.write("c.yml", CUSTOM_DESCRIPTOR)
        code, out, _ = self.run_main(["resolve", str(path), "--provider", "myPolicy"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), {"myPolicy": {"weight": 3}})

    def test_print_plan(self) -> None:
        path = self.write("c.json", json.dumps({"lbPolicy": "ROUND_ROBIN"}))
        code, out, _ = self.run_main(["resolve", str(path), "--print-plan"])
        self.assertEqual(code, 0)
        self.assertIn("- policy=wrr_locality path=config", out)
        self.assertIn("- policy=round_robin", out)

    def test_invalid_cluster_exits_with_error(self) -> None:
        path = self.write(
            "c.yml",
            "name: c1\nlbPolicy: RING_HASH\nringHashLbConfig:\n  hashFunction: MURMUR_HASH_2\n",
        )
        code, out, err = self.run_main(["resolve", str(path)])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("error: Cluster c1: invalid ring hash function", err)

    def test_least_request_needs_flag(self) -> None:
        path = self.write("c.yml", "name: c1\nlbPolicy: LEAST_REQUEST\n")
        code, _, err = self.run_main(["resolve", str(path)])
        self.assertEqual(code, 1)
        self.assertIn("unsupported lb policy", err)

        code, out, _ = self.run_main(["resolve", str(path), "--enable-least-request"])
        self.assertEqual(code, 0)
        self.assertEqual(
            json.loads(out),
            {"wrr_locality": {"childPolicy": [{"least_request_experimental": {}}]}},
        )

    def test_missing_descriptor(self) -> None:
        code, _, err = self.run_main(["resolve", str(Path(self.tmp.name) / "none.yml")])
        self.assertEqual(code, 1)
        self.assertIn("unable to read descriptor", err)

    def test_malformed_yaml(self) -> None:
        path = self.write("c.yml", "name: [c1\n")
        code, _, err = self.run_main(["resolve", str(path)])
        self.assertEqual(code, 1)
        self.assertIn("invalid YAML descriptor", err)

    def test_no_command(self) -> None:
        code, _, err = self.run_main([])
        self.assertEqual(code, 1)
        self.assertIn("No command given", err)

    def test_policies(self) -> None:
        code, _, err = self.run_main(["policies", "--provider", "myPolicy"])
        self.assertEqual(code, 0)
        self.assertIn("myPolicy", err)
        self.assertIn("wrr_locality", err)

    def test_console_script_lists_policies(self) -> None:
        pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
        with pyproject.open("rb") as f:
            target = tomllib.load(f)["project"]["scripts"]["lbconfig"]
        module_name, _, attr = target.partition(":")
        entry = getattr(importlib.import_module(module_name), attr)
        self.assertIs(entry, main)

        out, err = io.StringIO(), io.StringIO()
        with patch.dict(os.environ, CLEAN_ENV), redirect_stdout(out), redirect_stderr(err):
            entry(["policies"])
        self.assertEqual(out.getvalue(), "")
        self.assertIn("round_robin", err.getvalue())
        self.assertIn("Payload types", err.getvalue())

    def test_version_exits_cleanly(self) -> None:
        code, out, _ = self.run_main(["--version"])
        self.assertEqual(code, 0)
        self.assertIn("0.1.0", out)


if __name__ == "__main__":
    unittest.main()
