"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Difficulty(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class PieceStatus(StrEnum):
    CURRENT = "current"
    COMPLETED = "completed"
    PLANNED = "planned"


class MigrationStrategy(StrEnum):
    """Which migration path the startup runner uses."""

    PER_STUDENT = "per-student"
    DEDUPLICATED = "deduplicated"
