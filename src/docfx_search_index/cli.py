"""Command line entry point for rebuilding a site's search index."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from docfx_search_index.config import (
    SCOPES_KEY,
    STRIP_SITE_NAME_KEY,
    USE_METADATA_KEY,
    USE_METADATA_TITLE_KEY,
    prepare_metadata,
)
from docfx_search_index.exceptions import SearchIndexError
from docfx_search_index.indexer import SearchIndexBuilder
from docfx_search_index.manifest import load_manifest

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "manifest.json"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docfx-search-index",
        description="Replace a built site's index.json with type and member level search entries.",
    )
    parser.add_argument("output_dir", type=Path, help="Folder holding the rendered site")
    parser.add_argument("--manifest", type=Path, help="Build manifest (default: OUTPUT_DIR/manifest.json)")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--metadata", type=Path, help="JSON file with the global build metadata")
    source.add_argument("--docfx-json", type=Path, help="docfx.json to read build.globalMetadata from")
    parser.add_argument("--use-metadata", action="store_true", default=None, help="Use page metadata")
    parser.add_argument(
        "--no-metadata-title", action="store_true", default=None, help="Keep HTML titles in metadata mode"
    )
    parser.add_argument(
        "--scope", action="append", dest="scopes", metavar="SCOPE", help="Scope to index (repeatable)"
    )
    parser.add_argument("--strip-site-name", action="store_true", default=None, help="Strip '| Site' from titles")
    parser.add_argument("--workers", type=int, default=1, help="Pages scanned concurrently")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_global_metadata(args: argparse.Namespace) -> dict[str, Any]:
    """Collect global metadata from files and command line overrides.

    Args:
        args: Parsed command line arguments.

    Returns:
        Global metadata mapping.
    """
    metadata: dict[str, Any] = {}
    if args.metadata is not None:
        metadata.update(json.loads(args.metadata.read_text(encoding="utf-8")))
    elif args.docfx_json is not None:
        docfx = json.loads(args.docfx_json.read_text(encoding="utf-8"))
        metadata.update((docfx.get("build") or {}).get("globalMetadata") or {})

    if args.use_metadata:
        metadata[USE_METADATA_KEY] = True
    if args.no_metadata_title:
        metadata[USE_METADATA_TITLE_KEY] = False
    if args.scopes:
        metadata[SCOPES_KEY] = args.scopes
    if args.strip_site_name:
        metadata[STRIP_SITE_NAME_KEY] = True
    return metadata


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool.

    Args:
        argv: Arguments, defaults to sys.argv.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        _, config = prepare_metadata(load_global_metadata(args))
        manifest = load_manifest(args.manifest or args.output_dir / MANIFEST_FILE_NAME)
        SearchIndexBuilder(config).process(manifest, args.output_dir, max_workers=args.workers)
    except (SearchIndexError, OSError, json.JSONDecodeError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
