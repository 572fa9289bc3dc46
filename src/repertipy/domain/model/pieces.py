"""Repertoire entities: the canonical catalog entry and student/lesson references.

A reference starts out as a ``LegacyPiece`` carrying its own title/composer and
becomes a ``ResolvedPiece`` once it points at a ``CanonicalPiece``. The legacy
title/composer stay on the resolved piece for backward compatibility.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, TypeAlias, TypeGuard

from repertipy.domain.model.enums import PieceStatus

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from datetime import date

    from repertipy.domain.model.enums import Difficulty


@dataclass(frozen=True, slots=True, kw_only=True)
class CanonicalPiece:
    """One musical work in the shared catalog."""

    id: str
    title: str
    composer: str
    difficulty: Difficulty | None = None
    notes: str | None = None
    created_date: date | None = None
    extra: Mapping[str, object] = field(
        default_factory=dict["str", "object"], repr=False, hash=False
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class _PieceReferenceBase:
    id: str
    status: PieceStatus = PieceStatus.CURRENT
    start_date: date | None = None
    notes: str | None = None
    # deprecated, kept on migrated pieces too
    title: str | None = None
    composer: str | None = None
    extra: Mapping[str, object] = field(
        default_factory=dict["str", "object"], repr=False, hash=False
    )

    @property
    def match_key(self) -> tuple[str, str] | None:
        if not self.title or not self.composer:
            return None
        return self.title, self.composer


@dataclass(frozen=True, slots=True, kw_only=True)
class LegacyPiece(_PieceReferenceBase):
    """Reference that has not been attached to the catalog yet."""

    def resolved(self, master_piece_id: str) -> ResolvedPiece:
        """Return a copy pointing at ``master_piece_id``; legacy fields are kept."""

        values = {item.name: getattr(self, item.name) for item in fields(self)}
        return ResolvedPiece(master_piece_id=master_piece_id, **values)


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedPiece(_PieceReferenceBase):
    """Reference attached to a canonical catalog entry."""

    master_piece_id: str


PieceReference: TypeAlias = LegacyPiece | ResolvedPiece


def is_migrated(piece: PieceReference) -> TypeGuard[ResolvedPiece]:
    return isinstance(piece, ResolvedPiece)


@dataclass(slots=True, kw_only=True)
class Lesson:
    id: str
    lesson_date: date | None = None
    pieces: list[PieceReference] = field(default_factory=list["PieceReference"])
    extra: dict[str, object] = field(default_factory=dict["str", "object"], repr=False)


@dataclass(slots=True, kw_only=True)
class Student:
    """A student and the three kinds of piece lists they own."""

    id: str
    name: str | None = None
    current_pieces: list[PieceReference] = field(default_factory=list["PieceReference"])
    past_pieces: list[PieceReference] = field(default_factory=list["PieceReference"])
    lessons: list[Lesson] = field(default_factory=list["Lesson"])
    extra: dict[str, object] = field(default_factory=dict["str", "object"], repr=False)

    def iter_pieces(self) -> Iterator[PieceReference]:
        yield from self.current_pieces
        yield from self.past_pieces
        for lesson in self.lessons:
            yield from lesson.pieces


Roster: TypeAlias = list[Student]
