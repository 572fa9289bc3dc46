"""Domain model for repertoire references and the canonical catalog."""

from __future__ import annotations

from .enums import Difficulty, MigrationStrategy, PieceStatus
from .identifiers import (
    ID_PREFIXES,
    PIECE_PREFIX,
    STUDENT_PIECE_PREFIX,
    ids_match,
    new_piece_id,
    strip_id_prefix,
    student_piece_id,
    with_prefix,
)
from .pieces import (
    CanonicalPiece,
    LegacyPiece,
    Lesson,
    PieceReference,
    ResolvedPiece,
    Roster,
    Student,
    is_migrated,
)

__all__ = [
    "ID_PREFIXES",
    "PIECE_PREFIX",
    "STUDENT_PIECE_PREFIX",
    "CanonicalPiece",
    "Difficulty",
    "LegacyPiece",
    "Lesson",
    "MigrationStrategy",
    "PieceReference",
    "PieceStatus",
    "ResolvedPiece",
    "Roster",
    "Student",
    "ids_match",
    "is_migrated",
    "new_piece_id",
    "strip_id_prefix",
    "student_piece_id",
    "with_prefix",
]
