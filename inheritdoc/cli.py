"""Command-line entry point for resolving ``<inheritdoc/>`` tags.

Reads XML documentation files produced by the C# compiler together with
DocFX ManagedReference metadata (``dotnet docfx metadata``), replaces every
``<inheritdoc/>`` tag with the documentation it refers to and writes the
result next to (or over) the original files.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from inheritdoc.errors import InheritDocError
from inheritdoc.load_config import load_config
from inheritdoc.log_level import TRACE
from inheritdoc.run_inheritdoc import run_inheritdoc

XML_DOC_FILE_NAME_PATTERNS_HELP = (
    "Comma delimited list of XML documentation file names to process (may use "
    "wild cards like 'Butterfly.*', do not include paths). Example: "
    "'Butterfly.Database.xml,Butterfly.Channel.*'"
)
GLOBAL_SOURCE_XML_FILES_HELP = (
    "Comma delimited list of extra XML documentation files to inherit from "
    "without rewriting them. Example: 'ref/mscorlib.xml'"
)
EXCLUDE_TYPES_HELP = (
    "Comma delimited list of type name patterns to exclude (may use wild "
    "cards). Example: 'System.Object,Internal.*'"
)


def _apply_args(config: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    """Override configuration values with the arguments given on the CLI."""
    config = config.copy()
    if args.base is not None:
        config["base_path"] = str(args.base)
    if args.metadata is not None:
        config["metadata_dir"] = str(args.metadata)
    if args.xml_doc_file_name_patterns is not None:
        config["doc_file_patterns"] = args.xml_doc_file_name_patterns
    if args.global_source_xml_files is not None:
        config["global_source_files"] = args.global_source_xml_files
    if args.exclude_types is not None:
        config["exclude_types"] = args.exclude_types
    if args.overwrite:
        config["overwrite_existing"] = True
    return config


def main() -> int:
    """Run inheritdoc resolution."""
    ap = argparse.ArgumentParser(
        description=(
            "Replace <inheritdoc/> tags in XML documentation files with "
            "documentation from base types, interfaces or cref targets."
        ),
    )
    ap.add_argument(
        "-b",
        "--base",
        type=Path,
        help="Base path to look for XML documentation files (default: current dir)",
    )
    ap.add_argument(
        "-m",
        "--metadata",
        type=Path,
        help="Directory containing DocFX *.yml metadata (default: base path)",
    )
    ap.add_argument(
        "-f",
        "--xml-doc-file-name-patterns",
        help=XML_DOC_FILE_NAME_PATTERNS_HELP,
    )
    ap.add_argument(
        "-g",
        "--global-source-xml-files",
        help=GLOBAL_SOURCE_XML_FILES_HELP,
    )
    ap.add_argument(
        "-x",
        "--exclude-types",
        help=EXCLUDE_TYPES_HELP,
    )
    ap.add_argument(
        "-o",
        "--overwrite",
        action="store_true",
        help="Overwrite existing xml files instead of writing '.new.xml' files",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v debug, -vv trace)",
    )
    args = ap.parse_args()

    level = {0: logging.INFO, 1: logging.DEBUG}.get(args.verbose, TRACE)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    config = _apply_args(load_config(args.config), args)
    try:
        written = run_inheritdoc(config)
    except InheritDocError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Updated {len(written)} XML documentation file(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
