"""Small one-off script to check how a path resolves against the drive.

Usage (from repo root):
  set -o allexport; source .env; set +o allexport
  PYTHONPATH=. .venv/bin/python scripts/resolve_path.py Docs/2024/report.pdf

This script will NOT print your access token. It resolves the folder chain,
looks up the file and prints its record. With --fetch it also requests the
content URL and reports what the proxy would answer.
"""
from __future__ import annotations

import argparse
import asyncio

from drive_proxy.config import load_drive_config, settings
from drive_proxy.core.paths import split_path
from drive_proxy.core.resolver import NOT_FOUND, PathResolver
from drive_proxy.core.stream_proxy import ErrorOutcome, RedirectOutcome, StreamProxy
from drive_proxy.integrations.drive_client import DriveApiClient


async def main() -> None:
    parser = argparse.ArgumentParser(description="Resolve a drive path (testing only)")
    parser.add_argument("path", help="e.g. Docs/2024/report.pdf")
    parser.add_argument("--fetch", action="store_true", help="also fetch the content URL")
    args = parser.parse_args()

    config = load_drive_config(settings)
    print(f"Using drive origin: {config.origin}")

    segments = split_path(args.path)
    if not segments:
        raise SystemExit("empty path")

    resolver = PathResolver(DriveApiClient(config))
    folder_id = await resolver.resolve_folder_chain(segments[:-1])
    if folder_id is NOT_FOUND:
        print("Folder chain not found:", "/".join(segments[:-1]))
        return
    print(f"Folder: {folder_id or '(root)'}")

    found = await resolver.resolve_file(folder_id, segments[-1])
    if found is None:
        print("File not found:", segments[-1])
        return
    print(found.model_dump_json(indent=2))

    if args.fetch:
        outcome = await StreamProxy().fetch(found, segments[-1])
        if isinstance(outcome, ErrorOutcome):
            print(f"Proxy would answer {outcome.status}: {outcome.message}")
        elif isinstance(outcome, RedirectOutcome):
            print(f"Proxy would redirect to {outcome.url}")
        else:
            size = 0
            async for chunk in outcome.body:
                size += len(chunk)
            print(f"Proxy would stream {size} bytes with headers {outcome.headers}")


if __name__ == "__main__":
    asyncio.run(main())
