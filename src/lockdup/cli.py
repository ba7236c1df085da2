"""Find duplicates in npm/pnpm/yarn/bun lock files.

Usage:
  dup [dir] [--json | --summary] [--fix] [--strict] [--require-resolved]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .core import SpecifierPolicy, find_duplicates
from .discovery import find_lockfile, resolve_root
from .loader import LockfileReadError, read_lockfile
from .overrides import OverridesError, add_overrides
from .report import to_document, validate_document
from .settings import ConfigError, load_settings
from .summary import render_lines, render_summary

EXIT_DUPLICATES = 10
LOG_FORMAT = "%(levelname)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dup", description="Find duplicates in npm/pnpm/yarn/bun lockfile"
    )
    parser.add_argument("dir", nargs="?", default=None, help="Project directory")
    parser.add_argument(
        "-v", "--version", action="version", version=f"lockdup, {__version__}"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print the report as JSON")
    output.add_argument("--summary", action="store_true", help="Print a Markdown summary")
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Pin duplicated packages to their greatest version (same as DUP_EVIL=1)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit with status {EXIT_DUPLICATES} when duplicates are found",
    )
    parser.add_argument(
        "--require-resolved",
        action="store_true",
        help="Drop yarn entries that have no resolved version",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _print_overrides(root: Path, lockfile: Path, report: dict[str, list[str]]) -> None:
    result = add_overrides(root, lockfile.name, report)
    if result.target is None:
        print("Nothing to override.")
        return
    for name, version in result.applied.items():
        print(f"Add override: {name}@{version}")
    if result.snippet:
        print("Editing YAML files is not supported yet.")
        print(f'Please add the following lines to "{result.target.name}":')
        print(result.snippet, end="")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    root = resolve_root(args.dir)
    lockfile = find_lockfile(root)
    if lockfile is None:
        print("Not found any lockfile here.")
        return 0

    policy = settings.specifier_policy
    if args.require_resolved:
        policy = SpecifierPolicy.REQUIRE_RESOLVED

    try:
        raw = read_lockfile(lockfile, bun_binary=settings.bun_binary)
    except LockfileReadError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    duplicates = find_duplicates(raw, specifier_policy=policy)

    if args.json:
        document = to_document(duplicates)
        validate_document(document)
        print(json.dumps(document, indent=2))
    elif args.summary:
        print(render_summary(duplicates, lockfile.name), end="")
    else:
        for line in render_lines(duplicates):
            print(line)

    if args.fix or settings.apply_overrides:
        try:
            _print_overrides(root, lockfile, duplicates)
        except OverridesError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    if duplicates and args.strict:
        return EXIT_DUPLICATES
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
