"""Command line entry point: gdrivefetch BASE_DIR."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from gdrivefetch.config import FetchConfig
from gdrivefetch.errors import GDriveFetchError
from gdrivefetch.fetcher import GoogleDriveFetcher
from gdrivefetch.inventory import InventoryCache
from gdrivefetch.models import RunResult
from gdrivefetch.util.log import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_FATAL = 2


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gdrivefetch",
        description=(
            "Download Google Drive files whose content (by MD5) is not present "
            "anywhere under BASE_DIR, placing each at its Drive folder path."
        ),
    )
    parser.add_argument("base_dir", help="Local base directory to reconcile against")
    parser.add_argument("--cache-file", help="Inventory cache JSON (default: files.json)")
    parser.add_argument("--client-secrets", help="OAuth client secrets JSON")
    parser.add_argument("--token-file", help="Cached OAuth token JSON")
    parser.add_argument(
        "--include-trashed",
        action="store_true",
        default=None,
        help="Include trashed Drive items in the remote listing",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="List missing files without downloading them",
    )
    parser.add_argument(
        "--refresh-remote",
        action="store_true",
        help="Ignore the cached remote listing and list Drive again",
    )
    parser.add_argument(
        "--refresh-local",
        action="store_true",
        help="Ignore the cached local scan and scan BASE_DIR again",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open a browser for the OAuth flow; print the URL instead",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every listed and scanned file",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> FetchConfig:
    """Environment defaults, overridden by explicit command line flags."""
    config = FetchConfig.from_env(args.base_dir)
    overrides = {
        "cache_file": args.cache_file,
        "client_secrets_file": args.client_secrets,
        "token_file": args.token_file,
        "include_trashed": args.include_trashed,
        "dry_run": args.dry_run,
        "log_file": args.log_file,
        "log_level": "DEBUG" if args.verbose else None,
    }
    return replace(
        config,
        refresh_remote=args.refresh_remote,
        refresh_local=args.refresh_local,
        **{k: v for k, v in overrides.items() if v is not None},
    )


def _print_report(result: RunResult) -> None:
    for r in result.results:
        print(f"{r.resolved_path} (md5={r.md5_checksum})")
        line = f"=> {r.local_path} [{r.status}"
        if r.reason:
            line += f": {r.reason}"
        if r.error_message:
            line += f": {r.error_type}: {r.error_message}"
        print(line + "]")

    s = result.summary
    not_processed = result.missing_count - len(result.results)
    print(
        f"{result.missing_count} remote files don't exist locally "
        f"(downloaded: {s.get('success', 0)}, skipped: {s.get('skipped', 0)}, "
        f"failed: {s.get('failed', 0)}, not processed: {not_processed})"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = build_config(args)
    setup_logging(config.log_level, config.log_file)

    try:
        fetcher = GoogleDriveFetcher(
            config.auth_info,
            scopes=config.scopes,
            supports_all_drives=config.supports_all_drives,
            include_trashed=config.include_trashed,
            open_browser=not args.no_browser,
        )
        result = fetcher.run(
            config.base_dir,
            InventoryCache(config.cache_file),
            dry_run=config.dry_run,
            refresh_remote=config.refresh_remote,
            refresh_local=config.refresh_local,
        )
    except GDriveFetchError as exc:
        logger.error("%s: %s %s", exc.__class__.__name__, exc, exc.details or "")
        return EXIT_FATAL

    _print_report(result)
    return EXIT_OK if result.status == "success" else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
