"""Translate snapshot payloads to domain entities and back."""

from __future__ import annotations

from dataclasses import dataclass, field

from repertipy.domain.catalog import Catalog
from repertipy.domain.model import (
    CanonicalPiece,
    LegacyPiece,
    Lesson,
    PieceReference,
    Roster,
    Student,
    is_migrated,
)

from .schema import (
    CatalogPiecePayload,
    LessonPayload,
    PieceReferencePayload,
    SnapshotPayload,
    StudentPayload,
)


@dataclass(slots=True)
class Snapshot:
    """A roster together with the catalog it refers to."""

    roster: Roster = field(default_factory=list["Student"])
    catalog: Catalog = field(default_factory=Catalog)


def parse_snapshot(payload: SnapshotPayload) -> Snapshot:
    return Snapshot(
        roster=[parse_student(student) for student in payload.students],
        catalog=Catalog(parse_catalog_piece(entry) for entry in payload.catalog),
    )


def parse_catalog_piece(payload: CatalogPiecePayload) -> CanonicalPiece:
    return CanonicalPiece(
        id=payload.id,
        title=payload.title,
        composer=payload.composer,
        difficulty=payload.difficulty,
        notes=payload.notes,
        created_date=payload.created_date,
        extra=dict(payload.model_extra or {}),
    )


def parse_piece(payload: PieceReferencePayload) -> PieceReference:
    legacy = LegacyPiece(
        id=payload.id,
        status=payload.status,
        start_date=payload.start_date,
        notes=payload.notes,
        title=payload.title,
        composer=payload.composer,
        extra=dict(payload.model_extra or {}),
    )
    if payload.master_piece_id is None:
        return legacy
    return legacy.resolved(payload.master_piece_id)


def parse_lesson(payload: LessonPayload) -> Lesson:
    return Lesson(
        id=payload.id,
        lesson_date=payload.lesson_date,
        pieces=[parse_piece(piece) for piece in payload.repertoire],
        extra=dict(payload.model_extra or {}),
    )


def parse_student(payload: StudentPayload) -> Student:
    return Student(
        id=payload.id,
        name=payload.name,
        current_pieces=[parse_piece(piece) for piece in payload.current_repertoire],
        past_pieces=[parse_piece(piece) for piece in payload.past_repertoire],
        lessons=[parse_lesson(lesson) for lesson in payload.lessons],
        extra=dict(payload.model_extra or {}),
    )


def build_snapshot_payload(snapshot: Snapshot) -> SnapshotPayload:
    return SnapshotPayload(
        students=[build_student_payload(student) for student in snapshot.roster],
        catalog=[build_catalog_piece_payload(entry) for entry in snapshot.catalog],
    )


def build_catalog_piece_payload(piece: CanonicalPiece) -> CatalogPiecePayload:
    return CatalogPiecePayload.model_validate(
        {
            **piece.extra,
            "id": piece.id,
            "title": piece.title,
            "composer": piece.composer,
            "difficulty": piece.difficulty,
            "notes": piece.notes,
            "createdDate": piece.created_date,
        }
    )


def build_piece_payload(piece: PieceReference) -> PieceReferencePayload:
    return PieceReferencePayload.model_validate(
        {
            **piece.extra,
            "id": piece.id,
            "masterPieceId": piece.master_piece_id if is_migrated(piece) else None,
            "title": piece.title,
            "composer": piece.composer,
            "startDate": piece.start_date,
            "status": piece.status,
            "notes": piece.notes,
        }
    )


def build_lesson_payload(lesson: Lesson) -> LessonPayload:
    return LessonPayload.model_validate(
        {
            **lesson.extra,
            "id": lesson.id,
            "date": lesson.lesson_date,
            "repertoire": [build_piece_payload(piece) for piece in lesson.pieces],
        }
    )


def build_student_payload(student: Student) -> StudentPayload:
    return StudentPayload.model_validate(
        {
            **student.extra,
            "id": student.id,
            "name": student.name,
            "currentRepertoire": [build_piece_payload(piece) for piece in student.current_pieces],
            "pastRepertoire": [build_piece_payload(piece) for piece in student.past_pieces],
            "lessons": [build_lesson_payload(lesson) for lesson in student.lessons],
        }
    )
