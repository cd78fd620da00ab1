"""
docprops - command-line entry point.

Prints the document properties of an Office container as JSON:

    docprops report.docx
    docprops deck.pptx --custom-properties s3://config-bucket/docprops/custom.json
"""

import argparse
import asyncio
import json
import math
import sys
from typing import Any, List, Optional

from docprops.core.config import ExtractorConfig
from docprops.core.config_loader import resolve_custom_properties
from docprops.core.errors import DocPropsError
from docprops.core.version import __version__
from docprops.extractor import DocPropsExtractor, logger

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docprops",
        description="Extract document properties from .docx, .xlsx and .pptx files.",
        epilog="Number fields that cannot be parsed are printed as null.",
    )
    parser.add_argument("path", help="Office Open XML container to read")
    parser.add_argument(
        "--custom-properties",
        metavar="LOCATION",
        help="JSON custom property table (local path or s3://bucket/key); "
        "defaults to $DOCPROPS_CUSTOM_PROPERTIES",
    )
    parser.add_argument(
        "--strict-custom-xml",
        action="store_true",
        help="fail on malformed docProps/custom.xml instead of ignoring it",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def to_json_safe(value: Any) -> Any:
    """Replace NaN and infinite numbers with None, which JSON can represent."""
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the docprops command."""
    args = build_argparser().parse_args(argv)
    logger.setLevel(args.log_level)

    try:
        custom_properties = resolve_custom_properties(args.custom_properties)
        config = ExtractorConfig(
            custom_properties=custom_properties,
            strict_custom_xml=args.strict_custom_xml,
        )
        result = asyncio.run(DocPropsExtractor(config).extract(args.path))
    except DocPropsError as e:
        print(f"docprops: {e}", file=sys.stderr)
        return 1

    print(json.dumps(to_json_safe(result), indent=2, ensure_ascii=False, allow_nan=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
