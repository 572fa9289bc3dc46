from __future__ import annotations

import copy

from repertipy.domain import Catalog, ReconcileOptions, migration_status, reconcile
from repertipy.domain.model import is_migrated
from tests.helpers.repertoire import canonical_piece, legacy_piece, lesson, student


def test_two_students_share_one_new_entry() -> None:
    roster = [
        student("s-1", current=[legacy_piece("Bach Sonata", "J.S. Bach")]),
        student("s-2", current=[legacy_piece("Bach Sonata", "J.S. Bach")]),
    ]
    catalog = Catalog()

    stats = reconcile(roster, catalog, ReconcileOptions(create_missing=True, dry_run=False))

    assert stats.new_master_pieces_created == 1
    assert len(catalog) == 1
    entry = catalog[0]
    assert (entry.title, entry.composer) == ("Bach Sonata", "J.S. Bach")
    for owner in roster:
        (piece,) = owner.current_pieces
        assert is_migrated(piece)
        assert piece.master_piece_id == entry.id


def test_second_run_changes_nothing() -> None:
    roster = [
        student("s-1", current=[legacy_piece("Bach Sonata", "J.S. Bach")]),
        student("s-2", current=[legacy_piece("Bach Sonata", "J.S. Bach")]),
    ]
    catalog = Catalog()
    reconcile(roster, catalog)
    roster_after_first = copy.deepcopy(roster)
    catalog_after_first = list(catalog)

    stats = reconcile(roster, catalog)

    assert stats.new_master_pieces_created == 0
    assert stats.linked_pieces == 0
    assert stats.migrated_pieces == 2
    assert roster == roster_after_first
    assert catalog == catalog_after_first


def test_dedup_across_many_students() -> None:
    roster = [student(f"s-{n}", current=[legacy_piece("Etude", "Chopin")]) for n in range(6)]
    catalog = Catalog()

    stats = reconcile(roster, catalog, ReconcileOptions(create_missing=True))

    assert stats.new_master_pieces_created == 1
    ids = {owner.current_pieces[0].master_piece_id for owner in roster}  # type: ignore[union-attr]
    assert ids == {catalog[0].id}
    assert stats.pending[("Etude", "Chopin")] == 6


def test_walks_current_past_and_lesson_pieces() -> None:
    roster = [
        student(
            "s-1",
            current=[legacy_piece("A", "X")],
            past=[legacy_piece("B", "Y")],
            lessons=[lesson("l-1", legacy_piece("A", "X"), legacy_piece("C", "Z"))],
        )
    ]
    catalog = Catalog()

    stats = reconcile(roster, catalog)

    assert stats.total_pieces == 4
    assert stats.new_master_pieces_created == 3
    assert stats.linked_pieces == 4
    assert all(is_migrated(piece) for piece in roster[0].iter_pieces())
    by_key = {(entry.title, entry.composer): entry.id for entry in catalog}
    lesson_piece = roster[0].lessons[0].pieces[0]
    assert is_migrated(lesson_piece)
    assert lesson_piece.master_piece_id == by_key[("A", "X")]


def test_existing_catalog_entries_are_reused() -> None:
    catalog = Catalog([canonical_piece("Bach Sonata", "J.S. Bach", piece_id="p-1")])
    roster = [student(current=[legacy_piece("Bach Sonata", "J.S. Bach")])]

    stats = reconcile(roster, catalog)

    assert stats.new_master_pieces_created == 0
    assert stats.linked_pieces == 1
    assert not stats.pending
    assert roster[0].current_pieces[0].master_piece_id == "p-1"  # type: ignore[union-attr]
    assert len(catalog) == 1


def test_piece_with_empty_title_is_reported_and_left_legacy() -> None:
    incomplete = legacy_piece("", "Chopin", piece_id="sp-9")
    roster = [student(current=[incomplete])]
    catalog = Catalog()

    stats = reconcile(roster, catalog)

    assert stats.total_pieces == 1
    assert stats.errors == ["Piece sp-9 is missing title or composer"]
    assert roster[0].current_pieces == [incomplete]
    assert not is_migrated(roster[0].current_pieces[0])
    assert len(catalog) == 0


def test_lesson_errors_name_the_lesson() -> None:
    roster = [student(lessons=[lesson("l-4", legacy_piece("Song", None, piece_id="sp-5"))])]

    stats = reconcile(roster, Catalog())

    assert stats.errors == ["Piece sp-5 in lesson l-4 is missing title or composer"]


def test_every_complete_piece_is_linked_or_reported() -> None:
    roster = [
        student(
            "s-1",
            current=[legacy_piece("A", "X"), legacy_piece(None, "X")],
            past=[legacy_piece("B", "Y").resolved("p-old")],
        ),
        student("s-2", lessons=[lesson("l-1", legacy_piece("A", "X"), legacy_piece("C", ""))]),
    ]

    stats = reconcile(roster, Catalog(), ReconcileOptions(create_missing=True))

    unlinked = [
        piece for owner in roster for piece in owner.iter_pieces() if not is_migrated(piece)
    ]
    assert len(unlinked) == len(stats.errors) == 2
    assert stats.remaining_legacy == len(stats.errors)
    assert stats.total_pieces == 5
    assert stats.migrated_pieces == 1


def test_without_create_missing_only_existing_entries_are_linked() -> None:
    catalog = Catalog([canonical_piece("A", "X", piece_id="p-1")])
    roster = [student(current=[legacy_piece("A", "X"), legacy_piece("B", "Y")])]

    stats = reconcile(roster, catalog, ReconcileOptions(create_missing=False))

    assert stats.new_master_pieces_created == 0
    assert stats.linked_pieces == 1
    assert stats.remaining_legacy == 1
    assert stats.pending == {("B", "Y"): 1}
    assert len(catalog) == 1
    assert not is_migrated(roster[0].current_pieces[1])


def test_unmatched_count_uses_derived_formula() -> None:
    roster = [
        student(
            current=[
                legacy_piece("A", "X").resolved("p-1"),
                legacy_piece("B", "Y"),
                legacy_piece("B", "Y"),
                legacy_piece("C", "Z"),
            ]
        )
    ]

    stats = reconcile(roster, Catalog([canonical_piece("A", "X", piece_id="p-1")]))

    assert stats.unmatched_pieces == 4 - 1 - 2
    assert stats.remaining_legacy == 0


def test_status_does_not_mutate_inputs() -> None:
    roster = [
        student(
            "s-1",
            current=[legacy_piece("A", "X"), legacy_piece("", "X")],
            lessons=[lesson("l-1", legacy_piece("B", "Y"))],
        ),
        student("s-2", past=[legacy_piece("A", "X")]),
    ]
    catalog = Catalog([canonical_piece("B", "Y", piece_id="p-1")])
    roster_before = copy.deepcopy(roster)
    catalog_before = list(catalog)
    generation = catalog.generation

    stats = migration_status(roster, catalog)

    assert roster == roster_before
    assert catalog == catalog_before
    assert catalog.generation == generation
    assert stats.total_pieces == 4
    assert stats.new_master_pieces_created == 0
    assert stats.linked_pieces == 0
    assert stats.top_unmatched() == [("A", "X", 2)]
    assert len(stats.errors) == 1


def test_dry_run_with_create_missing_creates_nothing() -> None:
    roster = [student(current=[legacy_piece("A", "X")])]
    catalog = Catalog()

    stats = reconcile(roster, catalog, ReconcileOptions(create_missing=True, dry_run=True))

    assert stats.new_master_pieces_created == 0
    assert len(catalog) == 0
    assert not is_migrated(roster[0].current_pieces[0])


def test_plain_list_catalog_is_extended_in_place() -> None:
    catalog: list = []
    roster = [student(current=[legacy_piece("A", "X")])]

    reconcile(roster, catalog)

    assert len(catalog) == 1


def test_percent_migrated() -> None:
    roster = [
        student(current=[legacy_piece("A", "X").resolved("p-1"), legacy_piece("B", "Y")]),
    ]

    assert migration_status(roster, Catalog()).percent_migrated == 50
    assert reconcile(roster, Catalog()).percent_migrated == 100
    assert migration_status([], Catalog()).percent_migrated == 0
