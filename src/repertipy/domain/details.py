"""Display details for piece references, migrated or not."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from repertipy.domain.model import is_migrated
from repertipy.domain.resolve import default_resolver

if TYPE_CHECKING:
    from collections.abc import Sequence

    from repertipy.domain.model import CanonicalPiece, Difficulty, PieceReference
    from repertipy.domain.resolve import PieceResolver

UNKNOWN_TITLE = "Unknown Piece"
UNKNOWN_COMPOSER = "Unknown Composer"


@dataclass(frozen=True, slots=True)
class PieceDetails:
    title: str
    composer: str
    difficulty: Difficulty | None = None


def canonical_for(
    piece: PieceReference,
    catalog: Sequence[CanonicalPiece],
    *,
    resolver: PieceResolver | None = None,
) -> CanonicalPiece | None:
    if not is_migrated(piece):
        return None
    return (resolver or default_resolver()).resolve(piece.master_piece_id, catalog)


def piece_details(
    piece: PieceReference,
    catalog: Sequence[CanonicalPiece],
    *,
    resolver: PieceResolver | None = None,
) -> PieceDetails:
    """Return title, composer and difficulty for ``piece``.

    The canonical entry wins when it resolves. Otherwise the legacy fields on
    the reference are used, falling back to placeholder strings. Difficulty is
    only known from the catalog.
    """

    canonical = canonical_for(piece, catalog, resolver=resolver)
    if canonical is not None:
        return PieceDetails(
            title=canonical.title,
            composer=canonical.composer,
            difficulty=canonical.difficulty,
        )
    return PieceDetails(
        title=piece.title or UNKNOWN_TITLE,
        composer=piece.composer or UNKNOWN_COMPOSER,
    )


def piece_title(
    piece: PieceReference,
    catalog: Sequence[CanonicalPiece],
    *,
    resolver: PieceResolver | None = None,
) -> str:
    return piece_details(piece, catalog, resolver=resolver).title


def piece_composer(
    piece: PieceReference,
    catalog: Sequence[CanonicalPiece],
    *,
    resolver: PieceResolver | None = None,
) -> str:
    return piece_details(piece, catalog, resolver=resolver).composer


def piece_difficulty(
    piece: PieceReference,
    catalog: Sequence[CanonicalPiece],
    *,
    resolver: PieceResolver | None = None,
) -> Difficulty | None:
    return piece_details(piece, catalog, resolver=resolver).difficulty
