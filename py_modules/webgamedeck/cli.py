#!/usr/bin/env python3
"""
Run one enrichment pass over the configured web games and print the library
entries as JSON.

Usage:
    webgamedeck-enrich --settings ~/.local/share/webgamedeck/settings.json
"""
import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .errors import SettingsError
from .services.enrichment_service import EnrichmentService
from .settings import load_settings, verify_settings
from .utils.paths import SETTINGS_PATH, WEBGAMEDECK_DATA_DIR

logger = logging.getLogger("webgamedeck")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch metadata and artwork for web games")
    parser.add_argument("--settings", default=SETTINGS_PATH,
                        help="Settings JSON file")
    parser.add_argument("--data-dir", default=WEBGAMEDECK_DATA_DIR,
                        help="Storage root for icons, backgrounds and profiles")
    parser.add_argument("--concurrency", type=int, default=None,
                        help="Games fetched in parallel (overrides settings)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    return parser


async def run(args: argparse.Namespace) -> List[dict]:
    settings = load_settings(args.settings)
    if args.concurrency:
        settings = replace(settings, max_concurrency=max(1, args.concurrency))
    for error in verify_settings(settings):
        logger.warning(f"[Settings] {error}")

    async with EnrichmentService(settings, data_dir=args.data_dir) as service:
        entries = await service.enrich_all()
    return [entry.to_dict() for entry in entries]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Logs go to stderr so stdout stays valid JSON
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )

    try:
        entries = asyncio.run(run(args))
    except SettingsError as e:
        logger.error(str(e))
        return 1

    json.dump(entries, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
