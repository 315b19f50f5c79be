"""Command-line host: ``tagtree [paths...]`` or ``python -m tagtree``.

Reads each document (stdin when no paths are given), prints the detector's
findings, then parses and prints the tree or the structural error.

Exit status: 0 when every document parsed, 1 when a parse failed or was
skipped by ``--gate``, 2 when an input could not be read.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from tagtree.config import ReconcileMode
from tagtree.detector import detect
from tagtree.errors import ParseError
from tagtree.nodes import Node
from tagtree.parser import parse_markup
from tagtree.renderers import render_levels, render_tree
from tagtree.serialization import to_json


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagtree",
        description="Check HTML-like markup for common mistakes and print its tree.",
    )
    parser.add_argument("paths", nargs="*", help="documents to read (defaults to stdin)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ReconcileMode],
        default=ReconcileMode.LENIENT.value,
        help="closing-tag reconciliation mode (default: lenient)",
    )
    parser.add_argument(
        "--format",
        choices=["tree", "levels", "json"],
        default="tree",
        help="how to print the parsed tree (default: tree)",
    )
    parser.add_argument(
        "--gate",
        action="store_true",
        help="skip parsing a document that has findings",
    )
    parser.add_argument("--no-detect", action="store_true", help="don't run the checks")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _render(root: Node, fmt: str) -> str:
    if fmt == "json":
        return to_json(root, indent=2)
    if fmt == "levels":
        return render_levels(root)
    return render_tree(root)


def process(name: str, markup: str, args: argparse.Namespace) -> int:
    """Check and parse one document, printing results. Returns its exit status."""
    findings = [] if args.no_detect else detect(markup)
    for message in findings:
        print(f"{name}: {message}")

    if findings and args.gate:
        print(f"{name}: not parsed, {len(findings)} finding(s)", file=sys.stderr)
        return 1

    try:
        root = parse_markup(markup, mode=ReconcileMode(args.mode))
    except ParseError as e:
        print(f"{name}: Parsing error: {e}", file=sys.stderr)
        return 1
    print(_render(root, args.format))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    documents: list[tuple[str, str]] = []
    if not args.paths:
        documents.append(("<stdin>", sys.stdin.read()))
    for path in args.paths:
        try:
            documents.append((path, Path(path).read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as e:
            print(f"{path}: cannot read: {e}", file=sys.stderr)
            return 2

    status = 0
    for name, markup in documents:
        status = max(status, process(name, markup, args))
    return status


if __name__ == "__main__":
    sys.exit(main())
