#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import sys
from logging import getLogger
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from inventory_refresh.app import describe_collection, load_persister
from inventory_refresh.common.logging import configure_logging
from inventory_refresh.config import ConfigurationError, get_log_level
from inventory_refresh.domain.collection import InventoryCollectionError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check inventory collection definitions and show their resolved strategies"
    )
    parser.add_argument(
        "definitions",
        nargs="?",
        help="TOML definitions file (default: $INVENTORY_REFRESH_DEFINITIONS)",
    )
    parser.add_argument(
        "--log-level",
        default=get_log_level(),
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=parsed_args.log_level, force=True)

    try:
        persister = load_persister(parsed_args.definitions)
    except (ConfigurationError, InventoryCollectionError) as exc:
        log.debug("Rejected collection definitions", exc_info=exc)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:  # noqa: BLE001
        log.exception("Fatal error while loading collection definitions")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for collection in persister:
        print(describe_collection(collection))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
