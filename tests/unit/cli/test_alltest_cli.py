"""CLI flag handling, summary output and exit status tests.

Verifies how ``alltest.cli.main`` builds the run configuration and maps
failures and errors to the process exit code.
"""

from __future__ import annotations

import io
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from alltest import cli
from alltest.errors import InfrastructureError
from alltest.toolchain import ToolAction, ToolInvocation, ToolResult


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name).resolve()
        config_patcher = mock.patch("alltest.config.CONFIG_PATH", self.root / "no-config.json")
        config_patcher.start()
        self.addCleanup(config_patcher.stop)
        self.calls: list[tuple[str, str, ToolInvocation]] = []
        self.failing: set[str] = set()

    def _fake_run_tool(self, tool: str, directory: Path, invocation: ToolInvocation) -> ToolResult:
        rel = os.path.relpath(directory, self.root)
        self.calls.append((tool, rel, invocation))
        if rel in self.failing:
            return ToolResult(success=False, output=f"FAIL {rel}\n", returncode=1)
        return ToolResult(success=True, output=f"ok {rel}\n", returncode=0)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        code = 0
        with (
            mock.patch.object(sys, "argv", ["alltest", *argv]),
            mock.patch("alltest.cli.run_tool", side_effect=self._fake_run_tool),
            mock.patch("sys.stdout", stdout),
            mock.patch("sys.stderr", stderr),
        ):
            try:
                cli.main(default_root=self.root)
            except SystemExit as exc:
                code = int(exc.code or 0)
        return code, stdout.getvalue(), stderr.getvalue()

    def _write(self, relative: str) -> None:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("package x\n", encoding="utf-8")

    def _populate(self) -> None:
        self._write("pkgA/foo_test.go")
        self._write("pkgB/main.go")
        self._write("trash/pkgC/bar_test.go")

    def test_all_success_exits_zero(self) -> None:
        self._populate()
        self.failing = {os.path.join("trash", "pkgC")}

        code, stdout, _stderr = self._run()

        self.assertEqual(code, 0)
        self.assertIn("all tests/builds succeeded", stdout)
        self.assertEqual(sorted(rel for _tool, rel, _inv in self.calls), ["pkgA", "pkgB"])

    def test_failed_directory_exits_one_and_is_listed(self) -> None:
        self._populate()
        self.failing = {"pkgA"}

        code, stdout, _stderr = self._run()

        self.assertEqual(code, 1)
        self.assertIn("Failed: pkgA", stdout)
        self.assertIn("FAIL pkgA", stdout)
        self.assertIn("Failed directories:", stdout)
        self.assertIn("alltest:   pkgA", stdout)
        self.assertNotIn("all tests/builds succeeded", stdout)

    def test_skip_flag_excludes_directory(self) -> None:
        self._populate()

        code, _stdout, _stderr = self._run("--skip=pkgB")

        self.assertEqual(code, 0)
        self.assertEqual([rel for _tool, rel, _inv in self.calls], ["pkgA"])

    def test_unresolvable_explicit_skip_aborts_before_traversal(self) -> None:
        self._populate()

        code, _stdout, stderr = self._run("--skip=missing")

        self.assertEqual(code, 1)
        self.assertIn("Couldn't stat directory to skip missing", stderr)
        self.assertEqual(self.calls, [])

    def test_flags_reach_tool_invocation(self) -> None:
        self._write("pkgA/foo_test.go")

        self._run("--short", "--race", "--tool", "gotip")

        self.assertEqual(
            self.calls,
            [("gotip", "pkgA", ToolInvocation(ToolAction.TEST, ("-short", "-race")))],
        )

    def test_build_only_flag(self) -> None:
        self._write("pkgA/foo_test.go")

        self._run("--buildOnly")

        self.assertEqual(self.calls, [("go", "pkgA", ToolInvocation(ToolAction.BUILD))])

    def test_verbose_prints_success_lines(self) -> None:
        self._write("pkgA/foo_test.go")

        code, stdout, _stderr = self._run("-v")

        self.assertEqual(code, 0)
        self.assertIn("ok pkgA", stdout)
        self.assertIn("Success pkgA", stdout)

    def test_quiet_run_hides_success_output(self) -> None:
        self._write("pkgA/foo_test.go")

        _code, stdout, _stderr = self._run()

        self.assertNotIn("ok pkgA", stdout)
        self.assertNotIn("Success pkgA", stdout)

    def test_color_flag_colorizes_failures(self) -> None:
        self._write("pkgA/foo_test.go")
        self.failing = {"pkgA"}

        _code, stdout, _stderr = self._run("-c")

        self.assertIn("\033[", stdout)

    def test_infrastructure_error_exits_one_with_message(self) -> None:
        self._write("pkgA/foo_test.go")

        stdout = io.StringIO()
        stderr = io.StringIO()
        with (
            mock.patch.object(sys, "argv", ["alltest"]),
            mock.patch("alltest.cli.run_tool", side_effect=InfrastructureError("go not found")),
            mock.patch("sys.stdout", stdout),
            mock.patch("sys.stderr", stderr),
        ):
            with self.assertRaises(SystemExit) as exc_info:
                cli.main(default_root=self.root)

        self.assertEqual(exc_info.exception.code, 1)
        self.assertIn("Error: go not found", stderr.getvalue())
        self.assertNotIn("all tests/builds succeeded", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
