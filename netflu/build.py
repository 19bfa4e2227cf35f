"""
Build orchestration for Netflu projects.

Reads the project's entry file, runs the compilation pipeline, persists the
generated Rust and hands it to rustc. A run additionally executes the built
binary. Toolchain and execution failures are reported as ToolchainError and
ExecutionError, separate from pipeline CompilationErrors.
"""

import logging
import os
import subprocess
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Union

from .config import BuildConfig
from .pipeline import CompilerPipeline

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Raised when a project cannot be built for reasons outside the pipeline."""


class ToolchainError(BuildError):
    """The external toolchain could not be run or exited non-zero."""

    def __init__(self, message: str, command: List[str], returncode: Optional[int] = None,
                 stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class ExecutionError(ToolchainError):
    """The built program could not be started or exited non-zero."""


@dataclass
class BuildResult:
    """Outcome of a successful build."""
    source_path: Path
    output_path: Path
    binary_path: Optional[Path] = None
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""

    @property
    def toolchain_ran(self) -> bool:
        return self.returncode is not None


@dataclass
class RunResult:
    """Outcome of executing a built program."""
    build: BuildResult
    returncode: int
    stdout: str = ""
    stderr: str = ""


def build_project(project_dir: Union[str, Path], config: Optional[BuildConfig] = None) -> BuildResult:
    """
    Build the Netflu project rooted at project_dir.

    Raises:
        BuildError: If the entry file is missing or unreadable
        CompilationError: If the pipeline rejects the source
        ToolchainError: If rustc cannot be started or fails
    """
    config = config or BuildConfig()
    project_dir = Path(project_dir)

    source_path = project_dir / config.entry_file
    if not source_path.is_file():
        raise BuildError(f"Entry file not found: {source_path}")

    try:
        source = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BuildError(f"Cannot read {source_path}: {e}") from e

    options = replace(config.compiler, filename=str(source_path))
    result = CompilerPipeline(options).compile(source)

    build_dir = project_dir / config.build_dir
    try:
        build_dir.mkdir(parents=True, exist_ok=True)
        output_path = build_dir / config.output_name
        output_path.write_text(result.code, encoding="utf-8")
    except OSError as e:
        raise BuildError(f"Cannot write generated code to {build_dir}: {e}") from e
    logger.info("wrote %s", output_path)

    if not config.run_toolchain:
        return BuildResult(source_path=source_path, output_path=output_path)

    binary_path = build_dir / _binary_filename(config.binary_name)
    return run_toolchain(config.rustc, source_path, output_path, binary_path)


def run_toolchain(rustc: str, source_path: Path, output_path: Path, binary_path: Path) -> BuildResult:
    """Compile the generated Rust file with rustc and capture its output."""
    command = [rustc, str(output_path), "-o", str(binary_path)]
    logger.info("running %s", " ".join(command))

    try:
        completed = subprocess.run(command, capture_output=True, text=True)
    except OSError as e:
        raise ToolchainError(f"Failed to run {rustc}: {e}", command) from e

    if completed.returncode != 0:
        raise ToolchainError(
            f"Compilation failed: {rustc} exited with status {completed.returncode}",
            command,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr
        )

    return BuildResult(
        source_path=source_path,
        output_path=output_path,
        binary_path=binary_path,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr
    )


def run_project(project_dir: Union[str, Path], config: Optional[BuildConfig] = None) -> RunResult:
    """
    Build the project with rustc and execute the resulting binary.

    The toolchain always runs here, whatever the config says.

    Raises:
        BuildError: If the entry file is missing or unreadable
        CompilationError: If the pipeline rejects the source
        ToolchainError: If rustc cannot be started or fails
        ExecutionError: If the program cannot be started or exits non-zero
    """
    config = config or BuildConfig()
    config = config.model_copy(update={"run_toolchain": True, "skip_toolchain": False})

    build = build_project(project_dir, config)
    return run_binary(build)


def run_binary(build: BuildResult) -> RunResult:
    """Execute a built program and capture its output."""
    command = [str(build.binary_path)]
    logger.info("running %s", command[0])

    try:
        completed = subprocess.run(command, capture_output=True, text=True)
    except OSError as e:
        raise ExecutionError(f"Execution failed: {e}", command) from e

    if completed.returncode != 0:
        raise ExecutionError(
            f"Execution failed: program exited with status {completed.returncode}",
            command,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr
        )

    return RunResult(
        build=build,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr
    )


def _binary_filename(name: str) -> str:
    if os.name == "nt" and not name.endswith(".exe"):
        return name + ".exe"
    return name
