from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from modcatalog.app import download_catalog, dump_active_catalog, update_catalog
from modcatalog.config import configure_logging, get_storage_config
from modcatalog.domain.updater import RunState

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Maintain the mod compatibility catalog")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    update = subparsers.add_parser("update", help="Run the catalog updater once")
    update.add_argument(
        "--force",
        action="store_true",
        help="Run even when the updater is disabled in the configuration",
    )

    subparsers.add_parser("dump", help="Write the maintainer data dump for the active catalog")
    subparsers.add_parser("download", help="Download the published catalog")

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    level = logging.DEBUG if parsed_args.verbose else logging.INFO

    try:
        if parsed_args.command == "update":
            configure_logging(level=level, logfile=get_storage_config().updater_log_path())
            result = update_catalog(force=parsed_args.force)
            if result.outcome == RunState.ABORTED:
                sys.exit(1)
            if result.outcome == RunState.PERSISTED and not result.persisted:
                sys.exit(1)
        elif parsed_args.command == "dump":
            configure_logging(level=level)
            if not dump_active_catalog():
                sys.exit(1)
        elif parsed_args.command == "download":
            configure_logging(level=level)
            catalog = download_catalog()
            if catalog is None:
                sys.exit(1)
            log.info("Catalog %s is available.", catalog.version_string())
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
