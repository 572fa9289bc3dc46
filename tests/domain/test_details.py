from __future__ import annotations

from dataclasses import replace

from repertipy.domain import (
    UNKNOWN_COMPOSER,
    UNKNOWN_TITLE,
    Catalog,
    PieceDetails,
    piece_composer,
    piece_details,
    piece_difficulty,
    piece_title,
)
from repertipy.domain.model import Difficulty, LegacyPiece
from tests.helpers.repertoire import canonical_piece, legacy_piece


def test_migrated_piece_uses_catalog_fields() -> None:
    entry = replace(
        canonical_piece("Sonata in C", "Mozart", piece_id="p-3"),
        difficulty=Difficulty.ADVANCED,
    )
    piece = legacy_piece("Old title", "Old composer").resolved("p-3")
    catalog = Catalog([entry])

    assert piece_details(piece, catalog) == PieceDetails(
        title="Sonata in C", composer="Mozart", difficulty=Difficulty.ADVANCED
    )
    assert piece_title(piece, catalog) == "Sonata in C"
    assert piece_composer(piece, catalog) == "Mozart"
    assert piece_difficulty(piece, catalog) is Difficulty.ADVANCED


def test_unresolvable_reference_falls_back_to_legacy_fields() -> None:
    piece = legacy_piece("Old title", "Old composer").resolved("p-missing")

    details = piece_details(piece, Catalog())

    assert details == PieceDetails(title="Old title", composer="Old composer")
    assert details.difficulty is None


def test_legacy_piece_uses_its_own_fields() -> None:
    piece = legacy_piece("Gymnopedie", "Satie")
    catalog = Catalog([canonical_piece("Gymnopedie", "Satie")])

    assert piece_title(piece, catalog) == "Gymnopedie"
    assert piece_composer(piece, catalog) == "Satie"
    assert piece_difficulty(piece, catalog) is None


def test_placeholders_when_nothing_is_known() -> None:
    piece = LegacyPiece(id="sp-1")

    assert piece_title(piece, []) == UNKNOWN_TITLE
    assert piece_composer(piece, []) == UNKNOWN_COMPOSER
    assert piece_difficulty(piece, []) is None


def test_placeholders_for_blank_legacy_fields_on_broken_reference() -> None:
    piece = LegacyPiece(id="sp-1", title="", composer="").resolved("p-gone")

    assert piece_title(piece, Catalog()) == UNKNOWN_TITLE
    assert piece_composer(piece, Catalog()) == UNKNOWN_COMPOSER
