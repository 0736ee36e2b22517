"""Command-line interface for the converter."""

import argparse
import logging
import sys
from typing import List, Optional

__all__ = ["main", "parse_args"]

from ingest.config import (
    DEFAULT_OUTPUT_PATH,
    SCHEMA_VARIANTS,
    get_schema_variant,
    variant_for_path,
)
from ingest.errors import IngestionError
from ingest.logging_config import get_logger, setup_logging
from ingest.pipeline import convert

logger = get_logger("cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert the rug master spreadsheet (CSV or Excel) into data.json",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert the CSV master (schema picked from the file suffix)
  python -m ingest.cli HM_Rug_Master.csv

  # Convert the Excel master to a custom location
  python -m ingest.cli HM_Rug_Master_Complete.xlsx --output build/data.json

  # Use the default source of a variant
  python -m ingest.cli --variant excel

  # Show the columns each variant expects
  python -m ingest.cli --list-variants
        """,
    )

    parser.add_argument(
        "source",
        nargs="?",
        help="Source spreadsheet (default: the variant's configured source)",
    )
    parser.add_argument(
        "--variant",
        choices=list(SCHEMA_VARIANTS.keys()),
        help="Schema variant (default: inferred from the source suffix, else csv)",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_PATH,
        help=f"Output JSON path (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "--sheet",
        default="0",
        help="Worksheet index or name for Excel sources (default: first sheet)",
    )
    parser.add_argument(
        "--list-variants",
        action="store_true",
        help="List schema variants and their columns, then exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug output",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Don't write the JSONL run log",
    )

    return parser.parse_args(argv)


def show_variants() -> None:
    """Print the expected columns of every schema variant."""
    for variant in SCHEMA_VARIANTS.values():
        print(f"{variant.name} ({', '.join(variant.suffixes)})")
        print(f"  required: {', '.join(variant.required_columns)}")
        print(f"  optional: {', '.join(variant.optional_columns) or '-'}")
        print(f"  default source: {variant.default_source}")


def _sheet_arg(value: str):
    return int(value) if value.isdigit() else value


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI. Returns the process exit code."""
    args = parse_args(argv)

    if args.list_variants:
        show_variants()
        return 0

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
    )

    try:
        if args.variant:
            variant = get_schema_variant(args.variant)
        elif args.source:
            variant = variant_for_path(args.source)
        else:
            variant = get_schema_variant("csv")

        source = args.source or variant.default_source
        convert(source, args.output, variant=variant, sheet=_sheet_arg(args.sheet))
    except IngestionError as e:
        logger.error("Error converting source to JSON: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
