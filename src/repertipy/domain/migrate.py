"""Attach legacy piece references to the canonical catalog.

``migrate_one`` only ever links to existing entries. The list and lesson
helpers build on it; ``migrate_student_list`` additionally creates catalog
entries for pieces that have no match, one per piece, without deduplication.
Use ``repertipy.domain.reconcile`` for roster-wide deduplicated migration.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from logging import getLogger
from typing import TYPE_CHECKING

from repertipy.domain.catalog import find_exact_match
from repertipy.domain.model import (
    CanonicalPiece,
    PieceStatus,
    ResolvedPiece,
    is_migrated,
    new_piece_id,
    student_piece_id,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from repertipy.domain.model import Difficulty, Lesson, PieceReference


log = getLogger(__name__)


def create_canonical_piece(
    title: str,
    composer: str,
    *,
    difficulty: Difficulty | None = None,
    notes: str | None = None,
    created_date: date | None = None,
) -> CanonicalPiece:
    return CanonicalPiece(
        id=new_piece_id(),
        title=title,
        composer=composer,
        difficulty=difficulty,
        notes=notes,
        created_date=created_date or date.today(),
    )


def create_student_piece(
    student_id: str,
    canonical: CanonicalPiece,
    *,
    status: PieceStatus = PieceStatus.CURRENT,
    start_date: date | None = None,
    notes: str | None = None,
) -> ResolvedPiece:
    """Assign ``canonical`` to a student as an already migrated reference."""

    return ResolvedPiece(
        id=student_piece_id(student_id, canonical.id),
        master_piece_id=canonical.id,
        status=status,
        start_date=start_date or date.today(),
        notes=notes,
        title=canonical.title,
        composer=canonical.composer,
    )


def migrate_one(piece: PieceReference, catalog: Sequence[CanonicalPiece]) -> PieceReference:
    """Link ``piece`` to an exactly matching catalog entry, if there is one.

    Already migrated pieces and pieces without a match are returned as is.
    """

    if is_migrated(piece):
        return piece

    match = find_exact_match(catalog, piece.title, piece.composer)
    if match is None:
        return piece
    log.debug("Linked piece %s to catalog entry %s", piece.id, match.id)
    return piece.resolved(match.id)


@dataclass(slots=True)
class ListMigration:
    """Migrated copy of a piece list plus the catalog entries it created."""

    pieces: list[PieceReference] = field(default_factory=list["PieceReference"])
    created: list[CanonicalPiece] = field(default_factory=list["CanonicalPiece"])


def migrate_student_list(
    pieces: Iterable[PieceReference], catalog: Sequence[CanonicalPiece]
) -> ListMigration:
    """Migrate one student's piece list, creating catalog entries for misses.

    Matching only looks at ``catalog``; entries created here are not reused
    for later pieces in the same list.
    """

    result = ListMigration()
    for piece in pieces:
        migrated = migrate_one(piece, catalog)
        if is_migrated(migrated):
            result.pieces.append(migrated)
            continue

        key = migrated.match_key
        if key is None:
            log.warning("Skipping piece %s: missing title or composer", piece.id)
            result.pieces.append(migrated)
            continue

        title, composer = key
        created = create_canonical_piece(title, composer)
        result.created.append(created)
        result.pieces.append(migrated.resolved(created.id))
        log.debug("Created catalog entry %s for piece %s", created.id, piece.id)

    return result


def migrate_lesson_pieces(
    lessons: Iterable[Lesson], catalog: Sequence[CanonicalPiece]
) -> list[Lesson]:
    """Return copies of ``lessons`` with their pieces linked where possible."""

    return [
        replace(lesson, pieces=[migrate_one(piece, catalog) for piece in lesson.pieces])
        for lesson in lessons
    ]
