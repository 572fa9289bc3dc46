from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from repertipy.app import reconcile_snapshot, report_migration_status, run_snapshot_migrations
from repertipy.config import (
    ConfigurationError,
    MigrationStrategy,
    configure_logging,
    get_migration_config,
    parse_strategy,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from repertipy.domain import MigrationStats

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Migrate repertoire pieces to catalog references")
    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Report migration status without changes")
    status.add_argument("snapshot", type=Path, help="Roster snapshot (JSON)")
    status.add_argument(
        "--top",
        type=int,
        default=5,
        help="Number of most frequent unmatched pieces to list (default: %(default)s)",
    )

    reconcile = subparsers.add_parser(
        "reconcile", help="Link all pieces, creating one catalog entry per unmatched piece"
    )
    reconcile.add_argument("snapshot", type=Path, help="Roster snapshot (JSON)")
    reconcile.add_argument(
        "--output",
        type=Path,
        help="Where to write the reconciled snapshot (defaults to rewriting SNAPSHOT)",
    )
    reconcile.add_argument(
        "--no-create",
        dest="create_missing",
        action="store_false",
        default=None,
        help="Only link to existing catalog entries",
    )
    reconcile.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute statistics without writing anything",
    )

    run = subparsers.add_parser("run", help="Run the startup migrations")
    run.add_argument("snapshot", type=Path, help="Roster snapshot (JSON)")
    run.add_argument(
        "--output",
        type=Path,
        help="Where to write the migrated snapshot (defaults to rewriting SNAPSHOT)",
    )
    run.add_argument(
        "--strategy",
        type=str,
        choices=[strategy.value for strategy in MigrationStrategy],
        help="Migration path to use (defaults to config)",
    )

    args = parser.parse_args(list(argv))
    if getattr(args, "top", 0) < 0:
        raise ValueError("--top must be non-negative")
    return args


def _log_stats(stats: MigrationStats, *, top: int = 0) -> None:
    log.info(
        "Pieces: total=%s, migrated=%s (%s%%), linked=%s, remaining=%s, created=%s",
        stats.total_pieces,
        stats.migrated_pieces,
        stats.percent_migrated,
        stats.linked_pieces,
        stats.remaining_legacy,
        stats.new_master_pieces_created,
    )
    for title, composer, count in stats.top_unmatched(top):
        log.info("Unmatched: %s by %s (%s)", title, composer, count)
    for error in stats.errors:
        log.warning("Error: %s", error)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging(level=get_migration_config().log_level)
        parsed_args = _parse_args(args_list)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "status":
            stats = report_migration_status(parsed_args.snapshot)
            _log_stats(stats, top=parsed_args.top)
        elif parsed_args.command == "reconcile":
            stats = reconcile_snapshot(
                parsed_args.snapshot,
                output_path=parsed_args.output,
                create_missing=parsed_args.create_missing,
                dry_run=parsed_args.dry_run,
            )
            _log_stats(stats)
        elif parsed_args.command == "run":
            result = run_snapshot_migrations(
                parsed_args.snapshot,
                output_path=parsed_args.output,
                strategy=parse_strategy(parsed_args.strategy) if parsed_args.strategy else None,
            )
            log.info(
                "Migrated %s students; catalog now has %s entries",
                len(result.roster),
                len(result.catalog),
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during migration")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def entrypoint() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    entrypoint()
