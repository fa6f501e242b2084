# ruff: noqa: T201

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from shelfsync.app import sync_catalog
from shelfsync.config import (
    ConfigurationError,
    SyncConfig,
    configure_logging,
    get_sync_config,
    parse_zero_stock_policy,
)
from shelfsync.domain.reconciliation import SyncScope

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise the KeyCRM catalog into Strapi")
    parser.add_argument(
        "--scope",
        choices=[scope.value for scope in SyncScope],
        default=SyncScope.ALL.value,
        help="What to reconcile (default: %(default)s)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        help="Number of top-level entities between pauses (defaults to config)",
    )
    parser.add_argument(
        "--batch-pause",
        type=float,
        help="Seconds to pause after each batch (defaults to config)",
    )
    parser.add_argument(
        "--zero-stock",
        type=str,
        help="Whether zero-quantity warehouse rows are 'skip'ped or 'create'd",
    )
    parser.add_argument(
        "--relation-offset",
        type=int,
        help="Subtracted from store ids used as relation targets (defaults to config)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _build_sync_config(args: argparse.Namespace) -> SyncConfig:
    config = get_sync_config()
    overrides: dict[str, object] = {}
    if args.batch_size is not None:
        if args.batch_size < 1:
            raise ValueError("Batch size must be positive")
        overrides["batch_size"] = args.batch_size
    if args.batch_pause is not None:
        if args.batch_pause < 0:
            raise ValueError("Batch pause must be non-negative")
        overrides["batch_pause_seconds"] = args.batch_pause
    if args.zero_stock is not None:
        overrides["zero_stock_policy"] = parse_zero_stock_policy(args.zero_stock)
    if args.relation_offset is not None:
        if args.relation_offset < 0:
            raise ValueError("Relation offset must be non-negative")
        overrides["relation_id_offset"] = args.relation_offset
    return dataclasses.replace(config, **overrides)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        sync_config = _build_sync_config(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        summary = sync_catalog(scope=SyncScope(parsed_args.scope), sync_config=sync_config)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    for line in summary.lines():
        print(line)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
