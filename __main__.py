"""CLI entry point for uix-compiler.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the compiler or runs development tasks.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

from uixc.compiler import CompilationError, UIXCompiler
from uixc.config import CompilerConfig, EnvVar, describe_environment, get_environment, get_output_dir
from uixc.core import get_logger, setup_logging
from uixc.ir import ProgramLoadError, load_program_file
from uixc.output import format_compilation_report, write_output

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Compile Command
# =============================================================================


def cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile command."""
    try:
        program = load_program_file(args.ast)
    except FileNotFoundError:
        logger.error(f"AST file not found: {args.ast}")
        return 1
    except ProgramLoadError as e:
        logger.error(f"Could not load {args.ast}: {e}")
        return 1

    config = CompilerConfig.from_environment(
        strict_validation=args.strict or None,
        enable_typescript=args.typescript or None,
        enable_doc_generation=args.docs or None,
        component_name=args.component_name,
    )

    try:
        result = UIXCompiler(config).compile_sync(program)
    except CompilationError as e:
        logger.error(str(e))
        return 1

    if args.stdout:
        print(result.code, end="")
    else:
        write_output(result, get_output_dir(args.out_dir))

    for line in format_compilation_report(result, program if args.tree else None).splitlines():
        logger.info(line)
    return 0


def handle_compile_command(argv: list[str]) -> int:
    """Handle compile-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python . compile",
        description="Compile a parsed UIX AST (JSON) into a React component",
    )
    parser.add_argument(
        "ast",
        type=Path,
        help="Path to the parser's JSON AST output",
    )
    parser.add_argument(
        "--out-dir",
        "-o",
        type=Path,
        default=None,
        help="Output directory (default: UIX_OUTPUT_DIR or ./src)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first property validation failure",
    )
    parser.add_argument(
        "--typescript",
        "--ts",
        action="store_true",
        help="Emit TSX with prop interfaces",
    )
    parser.add_argument(
        "--docs",
        action="store_true",
        help="Also write ComponentDocs.md",
    )
    parser.add_argument(
        "--component-name",
        "-n",
        type=str,
        default=None,
        help="Name of the generated component (default: CompiledUI)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the generated code instead of writing files",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Include the program structure in the report",
    )
    parser.set_defaults(func=cmd_compile)

    args = parser.parse_args(argv)
    return args.func(args)


# =============================================================================
# Components Command
# =============================================================================


def cmd_components(argv: list[str]) -> int:
    """Print the built-in component registry report as JSON.

    Usage:
        python . components           # All components
        python . components Button    # One component
    """
    report = UIXCompiler().registry.generate_report()
    if argv:
        missing = [name for name in argv if name not in report["components"]]
        if missing:
            logger.error(f"Unknown component(s): {', '.join(missing)}")
            return 1
        report = {name: report["components"][name] for name in argv}
    print(json.dumps(report, indent=2, default=str))
    return 0


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(argv: list[str]) -> int:
    """List UIX_* environment variables with their resolved values.

    Usage:
        python . env            # All variables
        python . env compiler   # One category (compiler, output, logging)
    """
    category = argv[0] if argv else None
    lines = describe_environment(category)
    if not lines:
        logger.error(f"Unknown category: {category}")
        return 1
    logger.info("Environment:")
    for line in lines:
        logger.info(f"  {line}")
    return 0


# =============================================================================
# Test Command
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python . test                # Run all tests
        python . test --unit         # Run only unit tests
        python . test --integration  # Run end-to-end compilation tests
        python . test -k "bind"      # Run tests matching pattern

    Test Tiers:
        unit        - Fast tests of a single module
        integration - Full compilation runs across modules
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


# =============================================================================
# Entry Point
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\nCommands:")
    print("  compile     Compile a parsed UIX AST into a React component")
    print("  components  Show the built-in component registry")
    print("  env         Show UIX_* environment variables")
    print("  test        Run the test suite")
    print("\nExamples:")
    print("  python . compile ast.json                    # Write src/CompiledUI.jsx")
    print("  python . compile ast.json --ts --docs -o out # TSX plus ComponentDocs.md")
    print("  python . compile ast.json --strict --stdout  # Fail on invalid props")
    print("  python . components Button")
    print("  python . test --unit")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "compile": lambda: handle_compile_command(rest_args),
        "components": lambda: cmd_components(rest_args),
        "env": lambda: cmd_env(rest_args),
        "test": lambda: cmd_test(rest_args),
    }

    if command in commands:
        setup_logging(get_environment(EnvVar.UIX_LOG_LEVEL))
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
