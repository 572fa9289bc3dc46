"""Pydantic models describing host roster snapshots.

Field names follow the host application's camelCase records. Fields the
engine does not interpret are kept as model extras so they survive a
load/dump round trip.
"""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repertipy.domain.model import Difficulty, PieceStatus


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _date_part(value: object) -> object:
    # hosts store either plain dates or full ISO timestamps
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        return stripped[:10] if "T" in stripped else stripped
    return value


class SnapshotBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class CatalogPiecePayload(SnapshotBaseModel):
    id: str
    title: str
    composer: str
    difficulty: Difficulty | None = None
    notes: str | None = None
    created_date: date | None = Field(default=None, alias="createdDate")

    _normalize_optional = field_validator("difficulty", "notes", mode="before")(_blank_to_none)
    _normalize_date = field_validator("created_date", mode="before")(_date_part)


class PieceReferencePayload(SnapshotBaseModel):
    id: str
    master_piece_id: str | None = Field(default=None, alias="masterPieceId")
    title: str | None = None
    composer: str | None = None
    start_date: date | None = Field(default=None, alias="startDate")
    status: PieceStatus = PieceStatus.CURRENT
    notes: str | None = None

    _normalize_optional = field_validator("master_piece_id", "notes", mode="before")(
        _blank_to_none
    )
    _normalize_date = field_validator("start_date", mode="before")(_date_part)


class LessonPayload(SnapshotBaseModel):
    id: str
    lesson_date: date | None = Field(default=None, alias="date")
    repertoire: list[PieceReferencePayload] = Field(default_factory=list)

    _normalize_date = field_validator("lesson_date", mode="before")(_date_part)

    @field_validator("repertoire", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class StudentPayload(SnapshotBaseModel):
    id: str
    name: str | None = None
    current_repertoire: list[PieceReferencePayload] = Field(
        default_factory=list, alias="currentRepertoire"
    )
    past_repertoire: list[PieceReferencePayload] = Field(
        default_factory=list, alias="pastRepertoire"
    )
    lessons: list[LessonPayload] = Field(default_factory=list)

    @field_validator("current_repertoire", "past_repertoire", "lessons", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class SnapshotPayload(SnapshotBaseModel):
    students: list[StudentPayload] = Field(default_factory=list)
    catalog: list[CatalogPiecePayload] = Field(default_factory=list)
