"""Repertoire reference migration: pure in-memory domain logic, no I/O."""

from __future__ import annotations

from .catalog import Catalog, find_exact_match
from .details import (
    UNKNOWN_COMPOSER,
    UNKNOWN_TITLE,
    PieceDetails,
    piece_composer,
    piece_details,
    piece_difficulty,
    piece_title,
)
from .migrate import (
    ListMigration,
    create_canonical_piece,
    create_student_piece,
    migrate_lesson_pieces,
    migrate_one,
    migrate_student_list,
)
from .reconcile import MigrationStats, ReconcileOptions, migration_status, reconcile
from .resolve import PieceResolver, clear_cache, resolve
from .runner import MigrationRunResult, run_migrations

__all__ = [
    "UNKNOWN_COMPOSER",
    "UNKNOWN_TITLE",
    "Catalog",
    "ListMigration",
    "MigrationRunResult",
    "MigrationStats",
    "PieceDetails",
    "PieceResolver",
    "ReconcileOptions",
    "clear_cache",
    "create_canonical_piece",
    "create_student_piece",
    "find_exact_match",
    "migrate_lesson_pieces",
    "migrate_one",
    "migrate_student_list",
    "migration_status",
    "piece_composer",
    "piece_details",
    "piece_difficulty",
    "piece_title",
    "reconcile",
    "resolve",
    "run_migrations",
]
