"""Command-line interface.

Usage:
    typedmessage generate [--root DIR] [--locale-dir DIR] [--output FILE]
                          [--priority NAME ...] [-v]
    typedmessage check    [--root DIR] [--locale-dir DIR] [--priority NAME ...] [-v]

Option values default to the [tool.typedmessage] table of <root>/pyproject.toml,
then to the built-in defaults.

Exit codes:
    0 - success
    1 - locale directory missing, or (check) invalid locale files found
    2 - invalid configuration
"""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from typedmessage.codegen.pipeline import GeneratorOptions, generate_message_file
from typedmessage.codegen.reconciler import reconcile
from typedmessage.codegen.scanner import locale_symbols, scan_locale_files
from typedmessage.types import MessageWarning

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="typedmessage",
        description="Generate typed message catalogs from locale files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate src/generated/messages.py from ./locale:
  typedmessage generate

  # Custom layout, Japanese preferred over English:
  typedmessage generate --locale-dir i18n --output app/messages.py --priority ja --priority en

  # Fail CI when a locale file is malformed:
  typedmessage check
""",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--root",
        type=Path,
        default=Path(),
        help="Project root (default: current directory)",
    )
    common.add_argument(
        "--locale-dir",
        help="Locale directory relative to root",
    )
    common.add_argument(
        "--priority",
        action="append",
        metavar="NAME",
        help="Fallback priority entry, highest first (repeatable; last is the ultimate fallback)",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", parents=[common], help="Write the generated message module"
    )
    generate.add_argument("--output", help="Output path relative to root")

    subparsers.add_parser(
        "check", parents=[common], help="Validate locale files without writing output"
    )
    return parser


def _load_options(args: argparse.Namespace) -> GeneratorOptions:
    """Merge pyproject settings with command-line overrides."""
    options = GeneratorOptions.from_pyproject(args.root / "pyproject.toml")
    overrides: dict[str, object] = {}
    if args.locale_dir is not None:
        overrides["locale_dir"] = args.locale_dir
    if getattr(args, "output", None) is not None:
        overrides["output_path"] = args.output
    if args.priority:
        overrides["fallback_priority_order"] = tuple(args.priority)
    return replace(options, **overrides) if overrides else options


def _print_problems(warnings: Sequence[MessageWarning], invalid_files: Sequence[str]) -> None:
    for warning in warnings:
        print(f"[WARN] {warning.key}: placeholder types do not match across locales")
        for conflict in warning.conflicts:
            print(f"       - {conflict.describe()}")
    for filename in invalid_files:
        print(f"[WARN] Invalid locale file skipped: {filename}")


def _run_generate(options: GeneratorOptions, root: Path) -> int:
    result = generate_message_file(options, root)
    if result is None:
        print(f"[ERROR] Locale directory not found: {options.resolve_locale_dir(root)}",
              file=sys.stderr)
        return 1

    _print_problems(result.warnings, result.invalid_files)
    print(f"[OK] Wrote {result.output_path} ({result.key_count} messages, "
          f"locales: {', '.join(result.locales) or '-'})")
    return 0


def _run_check(options: GeneratorOptions, root: Path) -> int:
    locale_dir = options.resolve_locale_dir(root)
    if not locale_dir.is_dir():
        print(f"[ERROR] Locale directory not found: {locale_dir}", file=sys.stderr)
        return 1

    locale_files = scan_locale_files(locale_dir, options.fallback_priority_order)
    result = reconcile(locale_files, locale_dir)
    _print_problems(result.warnings, result.invalid_files)

    locales = locale_symbols(locale_files, options.fallback_priority_order)
    print(f"[INFO] {len(locale_files)} locale files, {len(result.messages)} messages, "
          f"locales: {', '.join(locales) or '-'}")
    if result.has_invalid_files:
        print(f"[ERROR] {len(result.invalid_files)} invalid locale files", file=sys.stderr)
        return 1
    print("[OK] Locale files are valid")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = _load_options(args)
    except (ValueError, tomllib.TOMLDecodeError) as e:
        print(f"[ERROR] Invalid configuration: {e}", file=sys.stderr)
        return 2

    root: Path = args.root
    try:
        if args.command == "generate":
            return _run_generate(options, root)
        return _run_check(options, root)
    except OSError as e:
        logger.error("I/O failure: %s", e)
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
