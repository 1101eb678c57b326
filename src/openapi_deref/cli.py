"""Command line entry point for openapi-deref.

Loads a JSON OpenAPI document, resolves it fully and writes the result
as JSON to a file or stdout.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config.settings import load_settings
from .exceptions import OpenAPIDerefError
from .resolver import resolve_document
from .utils.logging_setup import setup_logging
from .utils.openapi import load_document
from .utils.openapi.json import json_dump

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``openapi-deref`` command."""
    parser = argparse.ArgumentParser(
        prog="openapi-deref",
        description="Fully dereference the schemas of an OpenAPI JSON document",
    )
    parser.add_argument("spec", type=Path, help="Path to the OpenAPI JSON document")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write result here instead of stdout",
    )
    parser.add_argument("--indent", type=int, default=2)
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides OPENAPI_DEREF_LOG_LEVEL)",
    )
    parser.add_argument(
        "--legacy-required-positions",
        action="store_true",
        default=None,
        help="Match composed required names by position",
    )
    parser.add_argument(
        "--resolve-inline-items",
        action="store_true",
        default=None,
        help="Also resolve references inside inline array items",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface.

    :param argv: Arguments, defaults to ``sys.argv[1:]``
    :type argv: Optional[List[str]]
    :return: Process exit status
    :rtype: int
    """
    args = build_parser().parse_args(argv)

    overrides = {
        key: value
        for key, value in {
            "log_level": args.log_level,
            "legacy_required_positions": args.legacy_required_positions,
            "resolve_inline_items": args.resolve_inline_items,
        }.items()
        if value is not None
    }

    try:
        settings = load_settings(**overrides)
        setup_logging(level=settings.log_level)
        document = load_document(args.spec)
    except OpenAPIDerefError as e:
        print(e.to_json(), file=sys.stderr)
        return 1

    report = resolve_document(document, settings)
    for kind, count in sorted(report.count_by_kind().items()):
        logger.info(f"{kind}: {count}")
    if not report.complete:
        logger.warning(f"Unresolved references: {', '.join(report.unresolved_names())}")

    try:
        if args.output:
            json_dump(document, args.output, indent=args.indent)
            logger.info(f"Wrote resolved document to {args.output}")
        else:
            json.dump(document, sys.stdout, indent=args.indent, ensure_ascii=False)
            sys.stdout.write("\n")
    except ValueError as e:
        # json raises ValueError on circular structures
        logger.error(f"Failed to serialize resolved document: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
