"""
Netflu command-line interface.

Examples:
    netflu compile hello.ntf                 # Print generated Rust to stdout
    netflu compile hello.ntf -o hello.rs     # Write generated Rust to a file
    netflu build                             # Build the project in the current directory
    netflu build path/to/project --no-toolchain
    netflu run path/to/project               # Build, then execute the binary
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .build import BuildError, ExecutionError, ToolchainError, build_project, run_project
from .config import BuildConfig, CompilerOptions
from .pipeline import CompilationError, CompilerPipeline

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_TOOLCHAIN_FAILURE = 3
EXIT_EXECUTION_FAILURE = 4


def cmd_compile(args) -> int:
    source_path = Path(args.file)
    try:
        source = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {source_path}: {e}", file=sys.stderr)
        return EXIT_FAILURE

    options = CompilerOptions(filename=str(source_path), entry_point=args.entry_point)
    try:
        result = CompilerPipeline(options).compile(source)
    except CompilationError as e:
        print(e.render(), file=sys.stderr)
        return EXIT_FAILURE

    if args.output:
        try:
            Path(args.output).write_text(result.code, encoding="utf-8")
        except OSError as e:
            print(f"error: cannot write {args.output}: {e}", file=sys.stderr)
            return EXIT_FAILURE
        logger.info("wrote %s", args.output)
    else:
        sys.stdout.write(result.code)
    return EXIT_OK


def _load_build_config(args) -> BuildConfig:
    """Environment settings with command-line flags layered on top."""
    config = BuildConfig()

    overrides = {}
    if args.rustc:
        overrides["rustc"] = args.rustc
    if args.build_dir:
        overrides["build_dir"] = args.build_dir
    if args.entry_file:
        overrides["entry_file"] = args.entry_file
    if getattr(args, "no_toolchain", False):
        overrides["run_toolchain"] = False
    return config.model_copy(update=overrides)


def _report_process_error(kind: str, error: ToolchainError):
    print(f"error[{kind}]: {error}", file=sys.stderr)
    if error.stdout:
        print(error.stdout, file=sys.stderr)
    if error.stderr:
        print(error.stderr, file=sys.stderr)


def cmd_build(args) -> int:
    try:
        config = _load_build_config(args)
        result = build_project(args.path, config)
    except ValidationError as e:
        print(f"error: invalid NETFLU_* setting: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except CompilationError as e:
        print(e.render(), file=sys.stderr)
        return EXIT_FAILURE
    except ToolchainError as e:
        _report_process_error("toolchain", e)
        return EXIT_TOOLCHAIN_FAILURE
    except BuildError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"Generated {result.output_path}")
    if result.toolchain_ran:
        print(f"Built {result.binary_path}")
        if result.stdout:
            print(result.stdout)
        if result.stderr:
            # rustc warnings
            print(result.stderr, file=sys.stderr)
    return EXIT_OK


def cmd_run(args) -> int:
    try:
        config = _load_build_config(args)
        result = run_project(args.path, config)
    except ValidationError as e:
        print(f"error: invalid NETFLU_* setting: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except CompilationError as e:
        print(e.render(), file=sys.stderr)
        return EXIT_FAILURE
    except ExecutionError as e:
        _report_process_error("run", e)
        return EXIT_EXECUTION_FAILURE
    except ToolchainError as e:
        _report_process_error("toolchain", e)
        return EXIT_TOOLCHAIN_FAILURE
    except BuildError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if result.build.stderr:
        print(result.build.stderr, file=sys.stderr)
    sys.stdout.write(result.stdout)
    if result.stderr:
        sys.stderr.write(result.stderr)
    return EXIT_OK


def _add_project_arguments(subparser: argparse.ArgumentParser):
    subparser.add_argument("path", nargs="?", default=".", help="Project directory")
    subparser.add_argument("--rustc", help="Path to the rustc binary")
    subparser.add_argument("--build-dir", help="Output directory inside the project")
    subparser.add_argument("--entry-file", help="Entry source file relative to the project")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netflu",
        description="Netflu compiler: translates .ntf source into Rust",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser("compile", help="Compile one source file to Rust")
    compile_parser.add_argument("file", help="Netflu source file")
    compile_parser.add_argument("-o", "--output", help="Write generated Rust to this file")
    compile_parser.add_argument("--entry-point", default="main",
                                help="Name of the entry procedure (default: main)")
    compile_parser.set_defaults(func=cmd_compile)

    build_parser = subparsers.add_parser("build", help="Build a Netflu project with rustc")
    _add_project_arguments(build_parser)
    build_parser.add_argument("--no-toolchain", action="store_true",
                              help="Only generate Rust, do not invoke rustc")
    build_parser.set_defaults(func=cmd_build)

    run_parser = subparsers.add_parser("run", help="Build a Netflu project and execute it")
    _add_project_arguments(run_parser)
    run_parser.set_defaults(func=cmd_run)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the netflu command."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
