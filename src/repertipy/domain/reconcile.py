"""Roster-wide, deduplicating reconciliation of legacy piece references.

Three passes over every student's current pieces, past pieces and lesson
pieces:

1) discovery: count pieces, record pieces that cannot be migrated, and collect
   the distinct (title, composer) pairs that have no catalog match
2) creation: add one catalog entry per distinct unmatched pair
3) application: link every legacy piece against the enriched catalog

Only pass 2 and pass 3 mutate anything, and neither runs in dry-run mode.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypeAlias

from repertipy.domain.catalog import find_exact_match
from repertipy.domain.migrate import create_canonical_piece, migrate_one
from repertipy.domain.model import is_migrated

if TYPE_CHECKING:
    from collections.abc import Iterator, MutableSequence

    from repertipy.domain.model import CanonicalPiece, Lesson, PieceReference, Roster, Student


log = getLogger(__name__)

PairKey: TypeAlias = tuple[str, str]


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconcileOptions:
    create_missing: bool = True
    dry_run: bool = False


@dataclass(slots=True)
class MigrationStats:
    """Counters collected by one reconciliation call.

    ``migrated_pieces`` only counts pieces that were already linked when the
    call started. Pieces linked during the call are counted in
    ``linked_pieces``. ``unmatched_pieces`` keeps the historical derived
    value ``total - migrated - created``; use ``remaining_legacy`` for the
    number of pieces that are still unlinked.
    """

    total_pieces: int = 0
    migrated_pieces: int = 0
    new_master_pieces_created: int = 0
    unmatched_pieces: int = 0
    linked_pieces: int = 0
    errors: list[str] = field(default_factory=list["str"])
    pending: Counter[PairKey] = field(default_factory=Counter["PairKey"])

    @property
    def remaining_legacy(self) -> int:
        return self.total_pieces - self.migrated_pieces - self.linked_pieces

    @property
    def percent_migrated(self) -> int:
        if self.total_pieces == 0:
            return 0
        return round((self.migrated_pieces + self.linked_pieces) / self.total_pieces * 100)

    def top_unmatched(self, limit: int = 5) -> list[tuple[str, str, int]]:
        return [
            (title, composer, count)
            for (title, composer), count in self.pending.most_common(limit)
        ]


@dataclass(slots=True)
class _PieceSlot:
    """One piece list inside the roster and where it lives."""

    owner: Student | Lesson
    attribute: str
    context: str

    @property
    def pieces(self) -> list[PieceReference]:
        return getattr(self.owner, self.attribute)

    def replace(self, pieces: list[PieceReference]) -> None:
        setattr(self.owner, self.attribute, pieces)

    def describe(self, piece: PieceReference) -> str:
        return f"Piece {piece.id}{self.context} is missing title or composer"


def _piece_slots(roster: Roster) -> Iterator[_PieceSlot]:
    for student in roster:
        yield _PieceSlot(student, "current_pieces", "")
        yield _PieceSlot(student, "past_pieces", "")
        for lesson in student.lessons:
            yield _PieceSlot(lesson, "pieces", f" in lesson {lesson.id}")


def reconcile(
    roster: Roster,
    catalog: MutableSequence[CanonicalPiece],
    options: ReconcileOptions | None = None,
) -> MigrationStats:
    """Migrate every legacy piece in ``roster``, creating at most one entry per pair.

    ``roster`` and ``catalog`` are updated in place unless ``options.dry_run``.
    """

    opts = options or ReconcileOptions()
    stats = MigrationStats()

    _discover(roster, catalog, stats)

    if opts.create_missing and not opts.dry_run:
        for title, composer in stats.pending:
            catalog.append(create_canonical_piece(title, composer))
            stats.new_master_pieces_created += 1

    if not opts.dry_run:
        _apply(roster, catalog, stats)

    stats.unmatched_pieces = (
        stats.total_pieces - stats.migrated_pieces - stats.new_master_pieces_created
    )
    log.info(
        "Reconciliation %s: total=%s, already_migrated=%s, linked=%s, created=%s, errors=%s",
        "dry run" if opts.dry_run else "finished",
        stats.total_pieces,
        stats.migrated_pieces,
        stats.linked_pieces,
        stats.new_master_pieces_created,
        len(stats.errors),
    )
    return stats


def migration_status(
    roster: Roster, catalog: MutableSequence[CanonicalPiece]
) -> MigrationStats:
    """Report what ``reconcile`` would find, without touching anything."""

    return reconcile(roster, catalog, ReconcileOptions(create_missing=False, dry_run=True))


def _discover(
    roster: Roster, catalog: MutableSequence[CanonicalPiece], stats: MigrationStats
) -> None:
    for slot in _piece_slots(roster):
        for piece in slot.pieces:
            stats.total_pieces += 1
            if is_migrated(piece):
                stats.migrated_pieces += 1
                continue

            key = piece.match_key
            if key is None:
                message = slot.describe(piece)
                log.warning(message)
                stats.errors.append(message)
                continue

            if find_exact_match(catalog, *key) is None:
                stats.pending[key] += 1


def _apply(
    roster: Roster, catalog: MutableSequence[CanonicalPiece], stats: MigrationStats
) -> None:
    for slot in _piece_slots(roster):
        migrated_list: list[PieceReference] = []
        for piece in slot.pieces:
            if is_migrated(piece) or piece.match_key is None:
                migrated_list.append(piece)
                continue
            migrated = migrate_one(piece, catalog)
            if is_migrated(migrated):
                stats.linked_pieces += 1
            migrated_list.append(migrated)
        slot.replace(migrated_list)
