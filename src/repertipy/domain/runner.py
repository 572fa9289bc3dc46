"""Startup entry point that brings a whole roster onto canonical references."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

from repertipy.domain.catalog import Catalog
from repertipy.domain.migrate import migrate_lesson_pieces, migrate_student_list
from repertipy.domain.model import MigrationStrategy
from repertipy.domain.reconcile import ReconcileOptions, reconcile

if TYPE_CHECKING:
    from collections.abc import Iterable

    from repertipy.domain.model import CanonicalPiece, Roster, Student
    from repertipy.domain.reconcile import MigrationStats


log = getLogger(__name__)


@dataclass(slots=True)
class MigrationRunResult:
    """Migrated copies of the inputs plus the catalog entries that were added."""

    roster: Roster
    catalog: Catalog
    created: list[CanonicalPiece] = field(default_factory=list["CanonicalPiece"])
    stats: MigrationStats | None = None


def run_migrations(
    roster: Iterable[Student],
    catalog: Iterable[CanonicalPiece],
    *,
    strategy: MigrationStrategy = MigrationStrategy.PER_STUDENT,
    include_lessons: bool = True,
) -> MigrationRunResult:
    """Run the data migrations the host performs once at startup.

    The inputs are left untouched. Running this again on its own result is a
    no-op because every piece it could link already carries a reference.
    """

    students = list(roster)
    base_catalog = list(catalog)
    log.info(
        "Running data migrations: strategy=%s, students=%s, catalog=%s",
        strategy,
        len(students),
        len(base_catalog),
    )

    if strategy == MigrationStrategy.DEDUPLICATED:
        result = _run_deduplicated(students, base_catalog)
    else:
        result = _run_per_student(students, base_catalog)

    if include_lessons:
        for student in result.roster:
            student.lessons = migrate_lesson_pieces(student.lessons, result.catalog)

    log.info("Data migrations finished: created=%s catalog entries", len(result.created))
    return result


def _run_per_student(
    students: list[Student], base_catalog: list[CanonicalPiece]
) -> MigrationRunResult:
    created: list[CanonicalPiece] = []
    migrated_students: Roster = []
    for student in students:
        current = migrate_student_list(student.current_pieces, base_catalog)
        past = migrate_student_list(student.past_pieces, base_catalog)
        created.extend(current.created)
        created.extend(past.created)
        migrated_students.append(
            replace(
                _copy_student(student),
                current_pieces=current.pieces,
                past_pieces=past.pieces,
            )
        )

    return MigrationRunResult(
        roster=migrated_students,
        catalog=Catalog([*base_catalog, *created]),
        created=created,
    )


def _run_deduplicated(
    students: list[Student], base_catalog: list[CanonicalPiece]
) -> MigrationRunResult:
    working_roster = [_copy_student(student) for student in students]
    working_catalog = Catalog(base_catalog)
    stats = reconcile(working_roster, working_catalog, ReconcileOptions(create_missing=True))
    return MigrationRunResult(
        roster=working_roster,
        catalog=working_catalog,
        created=list(working_catalog[len(base_catalog) :]),
        stats=stats,
    )


def _copy_student(student: Student) -> Student:
    return replace(
        student,
        current_pieces=list(student.current_pieces),
        past_pieces=list(student.past_pieces),
        lessons=[replace(lesson, pieces=list(lesson.pieces)) for lesson in student.lessons],
        extra=dict(student.extra),
    )
