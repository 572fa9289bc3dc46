"""Application entry points working on snapshot files."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from repertipy.adapters.snapshot import Snapshot, dump_snapshot, load_snapshot
from repertipy.config import get_migration_config
from repertipy.domain import ReconcileOptions, migration_status, reconcile, run_migrations

if TYPE_CHECKING:
    from pathlib import Path

    from repertipy.domain import MigrationRunResult, MigrationStats
    from repertipy.domain.model import MigrationStrategy


log = getLogger(__name__)


def report_migration_status(snapshot_path: Path) -> MigrationStats:
    """Return dry-run statistics for the snapshot at ``snapshot_path``."""

    snapshot = load_snapshot(snapshot_path)
    return migration_status(snapshot.roster, snapshot.catalog)


def reconcile_snapshot(
    snapshot_path: Path,
    *,
    output_path: Path | None = None,
    create_missing: bool | None = None,
    dry_run: bool = False,
) -> MigrationStats:
    """Reconcile a snapshot and write the result.

    Without ``output_path`` the snapshot is rewritten in place. Nothing is
    written in dry-run mode.
    """

    config = get_migration_config()
    options = ReconcileOptions(
        create_missing=config.create_missing if create_missing is None else create_missing,
        dry_run=dry_run,
    )
    snapshot = load_snapshot(snapshot_path)
    stats = reconcile(snapshot.roster, snapshot.catalog, options)
    if not dry_run:
        dump_snapshot(snapshot, output_path or snapshot_path)
    return stats


def run_snapshot_migrations(
    snapshot_path: Path,
    *,
    output_path: Path | None = None,
    strategy: MigrationStrategy | None = None,
) -> MigrationRunResult:
    """Run the startup migrations over a snapshot and write the migrated copy."""

    config = get_migration_config()
    snapshot = load_snapshot(snapshot_path)
    result = run_migrations(
        snapshot.roster,
        snapshot.catalog,
        strategy=strategy or config.strategy,
    )
    dump_snapshot(
        Snapshot(roster=result.roster, catalog=result.catalog),
        output_path or snapshot_path,
    )
    log.info("Startup migrations added %s catalog entries", len(result.created))
    return result
