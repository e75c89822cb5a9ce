"""Command-line interface for comparing scene documents."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from pathlib import Path
from typing import cast

from scene_assert.comparators import compare_documents
from scene_assert.config import CompareOptions, load_options
from scene_assert.logging import configure_logging
from scene_assert.report import collect
from scene_assert.scene.codec import DocumentFormatError, load_document

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser."""

    parser = argparse.ArgumentParser(prog="scene-assert")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for structured JSON logs written to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    compare_parser = subparsers.add_parser(
        "compare", help="Structurally compare two JSON scene documents"
    )
    compare_parser.add_argument("left", type=Path, help="Reference document JSON file.")
    compare_parser.add_argument("right", type=Path, help="Document JSON file to check.")
    compare_parser.add_argument(
        "--options",
        type=Path,
        default=None,
        help="YAML file with comparison options.",
    )
    compare_parser.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Numeric tolerance override.",
    )
    compare_parser.add_argument(
        "--check-identity",
        action="store_true",
        help="Also require compared composite values to be distinct objects.",
    )
    compare_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print passing assertions as well as failures.",
    )
    compare_parser.set_defaults(handler=_compare_command)
    return parser


def _resolve_options(args: argparse.Namespace) -> CompareOptions:
    options = load_options(args.options) if args.options is not None else CompareOptions()
    updates: dict[str, object] = {}
    if args.tolerance is not None:
        updates["tolerance"] = args.tolerance
    if args.check_identity:
        updates["check_identity"] = True
    if not updates:
        return options
    return CompareOptions.model_validate({**options.model_dump(), **updates})


def _compare_command(args: argparse.Namespace) -> int:
    try:
        options = _resolve_options(args)
        left = load_document(args.left)
        right = load_document(args.right)
    except (DocumentFormatError, ValueError) as exc:
        LOGGER.exception(
            "compare_failed stage=load left=%s right=%s",
            args.left,
            args.right,
            extra={"left": str(args.left), "right": str(args.right)},
        )
        print(f"error: {exc}")
        return EXIT_INPUT_ERROR

    with collect() as report:
        compare_documents(left, right, options)

    shown = report.records if args.verbose else report.failures
    for record in shown:
        print(record.describe())
    print(
        f"{len(report.records)} assertions, {len(report.failures)} failed "
        f"({args.left} vs {args.right})"
    )
    return EXIT_OK if report.ok else EXIT_MISMATCH


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return EXIT_OK
    configure_logging(log_level=args.log_level)
    command_handler = cast(Callable[[argparse.Namespace], int], handler)
    return command_handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
