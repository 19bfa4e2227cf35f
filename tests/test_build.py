"""
Tests for Netflu project build orchestration.

The external toolchain is replaced with a mock of subprocess.run so these
tests do not need rustc installed.
"""

import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from netflu.build import BuildError, ExecutionError, ToolchainError, build_project, run_project
from netflu.config import BuildConfig
from netflu.pipeline import CompilationError, Stage

MAIN_SOURCE = 'fun main() { print("hi"); }\n'


class TestBuildProject(unittest.TestCase):
    """Test cases for build_project."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.project = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _write_source(self, source: str, relative: str = os.path.join("src", "main.ntf")) -> Path:
        path = self.project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    def test_missing_entry_file(self):
        with self.assertRaises(BuildError) as ctx:
            build_project(self.project, BuildConfig(run_toolchain=False))
        self.assertIn("Entry file not found", str(ctx.exception))

    def test_generate_only(self):
        source_path = self._write_source(MAIN_SOURCE)

        result = build_project(self.project, BuildConfig(run_toolchain=False))

        self.assertEqual(result.source_path, source_path)
        self.assertEqual(result.output_path, self.project / "target" / "generated.rs")
        self.assertEqual(
            result.output_path.read_text(encoding="utf-8"),
            'fn main() {\n    print!("hi");\n}\n'
        )
        self.assertFalse(result.toolchain_ran)
        self.assertIsNone(result.binary_path)

    def test_custom_layout(self):
        self._write_source("let x = 1;", "app.ntf")
        config = BuildConfig(entry_file="app.ntf", build_dir="out", run_toolchain=False)

        result = build_project(self.project, config)

        self.assertEqual(result.output_path, self.project / "out" / "generated.rs")

    def test_compilation_error_writes_nothing(self):
        self._write_source("print(y);")

        with self.assertRaises(CompilationError) as ctx:
            build_project(self.project, BuildConfig(run_toolchain=False))

        self.assertEqual(ctx.exception.stage, Stage.ANALYZE)
        self.assertFalse((self.project / "target").exists())

    @mock.patch("netflu.build.subprocess.run")
    def test_toolchain_success(self, mock_run):
        self._write_source(MAIN_SOURCE)
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="ok\n", stderr=""
        )

        result = build_project(self.project, BuildConfig(rustc="/opt/rustc"))

        command = mock_run.call_args[0][0]
        self.assertEqual(command[0], "/opt/rustc")
        self.assertEqual(command[1], str(self.project / "target" / "generated.rs"))
        self.assertEqual(command[2], "-o")
        self.assertEqual(mock_run.call_args[1], {"capture_output": True, "text": True})

        self.assertTrue(result.toolchain_ran)
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout, "ok\n")
        self.assertEqual(str(result.binary_path), command[3])
        # The generated file exists before the toolchain runs
        self.assertTrue(result.output_path.is_file())

    @mock.patch("netflu.build.subprocess.run")
    def test_toolchain_failure(self, mock_run):
        self._write_source(MAIN_SOURCE)
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="", stderr="error[E0425]"
        )

        with self.assertRaises(ToolchainError) as ctx:
            build_project(self.project, BuildConfig())

        error = ctx.exception
        self.assertEqual(error.returncode, 1)
        self.assertEqual(error.stderr, "error[E0425]")
        self.assertTrue(str(error).startswith("Compilation failed"))
        self.assertTrue((self.project / "target" / "generated.rs").is_file())

    @mock.patch("netflu.build.subprocess.run", side_effect=FileNotFoundError("rustc"))
    def test_toolchain_missing(self, mock_run):
        self._write_source(MAIN_SOURCE)

        with self.assertRaises(ToolchainError) as ctx:
            build_project(self.project, BuildConfig(rustc="no-such-rustc"))

        self.assertIsNone(ctx.exception.returncode)
        self.assertIn("no-such-rustc", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, FileNotFoundError)

    def test_source_not_utf8(self):
        path = self.project / "src" / "main.ntf"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"let x = \xff;")

        with self.assertRaises(BuildError) as ctx:
            build_project(self.project, BuildConfig(run_toolchain=False))

        self.assertIn("Cannot read", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)


class TestRunProject(unittest.TestCase):
    """Test cases for run_project."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.project = Path(self._tmp.name)
        source = self.project / "src" / "main.ntf"
        source.parent.mkdir(parents=True)
        source.write_text(MAIN_SOURCE, encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    @mock.patch("netflu.build.subprocess.run")
    def test_run_executes_binary(self, mock_run):
        mock_run.side_effect = [
            subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="warning: unused"),
            subprocess.CompletedProcess(args=[], returncode=0, stdout="hi", stderr=""),
        ]

        result = run_project(self.project, BuildConfig(run_toolchain=False))

        self.assertEqual(mock_run.call_count, 2)
        rustc_command = mock_run.call_args_list[0][0][0]
        program_command = mock_run.call_args_list[1][0][0]
        self.assertEqual(program_command, [rustc_command[3]])
        self.assertEqual(mock_run.call_args_list[1][1], {"capture_output": True, "text": True})

        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout, "hi")
        self.assertEqual(result.build.stderr, "warning: unused")

    @mock.patch("netflu.build.subprocess.run")
    def test_run_program_failure(self, mock_run):
        mock_run.side_effect = [
            subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr=""),
            subprocess.CompletedProcess(args=[], returncode=101, stdout="partial", stderr="panicked"),
        ]

        with self.assertRaises(ExecutionError) as ctx:
            run_project(self.project)

        error = ctx.exception
        self.assertTrue(str(error).startswith("Execution failed"))
        self.assertEqual(error.returncode, 101)
        self.assertEqual(error.stdout, "partial")
        self.assertEqual(error.stderr, "panicked")

    @mock.patch("netflu.build.subprocess.run")
    def test_run_stops_on_toolchain_failure(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="", stderr="error"
        )

        with self.assertRaises(ToolchainError) as ctx:
            run_project(self.project)

        self.assertNotIsInstance(ctx.exception, ExecutionError)
        self.assertEqual(mock_run.call_count, 1)

    @mock.patch("netflu.build.subprocess.run")
    def test_program_cannot_start(self, mock_run):
        mock_run.side_effect = [
            subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr=""),
            PermissionError("denied"),
        ]

        with self.assertRaises(ExecutionError) as ctx:
            run_project(self.project)

        self.assertIsNone(ctx.exception.returncode)
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)


if __name__ == '__main__':
    unittest.main()
