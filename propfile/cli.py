"""Command line entry point: print the merged properties for a name.

Settings precedence for the tool itself: command-line flags, then
environment variables (``PROPFILE_NAMESPACE``, ``LOG_LEVEL``, also read
from a ``.env`` file), then the tool's own ``propfile.properties`` layers.
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from .exceptions import MissingDefaultsError
from .loader import DEFAULT_NAMESPACE, LayeredConfigLoader, format_properties
from .logging_setup import LOG_LEVELS, configure_logging
from .service import PropertiesService

TOOL_NAME = "propfile"
OUTPUT_FORMATS = ("properties", "json")
EXIT_MISSING_DEFAULTS = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Merge bundled, local and global .properties files",
    )
    parser.add_argument("name", help="Configuration name (file name without .properties)")
    parser.add_argument(
        "--namespace",
        help=f"Global layer directory under the home directory (default: {DEFAULT_NAMESPACE})",
    )
    parser.add_argument(
        "--resources",
        help="Bundled resource package (default: propfile.resources)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Set logging level",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format",
    )
    parser.add_argument(
        "--sources",
        action="store_true",
        help="Show where each layer is looked up instead of the merged values",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(argv)

    namespace = args.namespace or os.getenv("PROPFILE_NAMESPACE") or DEFAULT_NAMESPACE
    explicit_level = args.log_level or os.getenv("LOG_LEVEL")
    configure_logging(explicit_level)

    tool_settings = _load_tool_settings(namespace)
    if not explicit_level:
        configure_logging(tool_settings.get("log.level"))
    output_format = args.format or tool_settings.get("output.format", "properties")
    if output_format not in OUTPUT_FORMATS:
        logger.warning(f"Unknown output.format '{output_format}', using properties")
        output_format = "properties"

    loader = LayeredConfigLoader(namespace=namespace, resources=args.resources)

    if args.sources:
        for layer, location in loader.sources(args.name).items():
            print(f"{layer.name.lower():<7} {location}")
        return 0

    try:
        properties = loader.read(args.name)
    except MissingDefaultsError as e:
        print(f"{TOOL_NAME}: {e}", file=sys.stderr)
        return EXIT_MISSING_DEFAULTS

    if output_format == "json":
        print(json.dumps(properties, indent=2, sort_keys=True, ensure_ascii=False))
    elif properties:
        print(format_properties(properties))
    return 0


def _load_tool_settings(namespace: str) -> PropertiesService:
    """Read the tool's own settings; they always have bundled defaults."""
    loader = LayeredConfigLoader(namespace=namespace)
    return PropertiesService(loader.read(TOOL_NAME))


__all__ = ["build_parser", "main"]
