# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from cms_management.app import (
    MigrationScriptError,
    load_migration,
    render_migration,
    run_migration,
)
from cms_management.common import configure_logging
from cms_management.domain.schema import SchemaValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build and apply content schema migrations")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every registered change",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Print the change records as JSON")
    apply = subparsers.add_parser("apply", help="Submit the migration to the management API")
    for command in (render, apply):
        command.add_argument(
            "script",
            type=Path,
            help="Python file defining migrate(migration)",
        )
        command.add_argument(
            "--name",
            type=str,
            help="Migration name (defaults to the script file name)",
        )
    render.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        migration = load_migration(parsed_args.script, name=parsed_args.name)
    except (MigrationScriptError, SchemaValidationError):
        log.exception("Invalid migration script")
        sys.exit(2)

    try:
        if parsed_args.command == "render":
            print(json.dumps(render_migration(migration), indent=parsed_args.indent))
        elif parsed_args.command == "apply":
            result = run_migration(migration)
            log.info("Migration %s applied: %s", result.migration_id, result.status)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during migration")
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
