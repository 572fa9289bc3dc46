"""Prefixed identifiers shared with the host application.

Ids look like ``s-1`` (student), ``p-2`` (canonical piece) or ``sp-1-2``
(student piece). Older records were written without prefixes, so lookups
compare ids with the prefix stripped.
"""

from __future__ import annotations

from typing import Final
from uuid import uuid4

STUDENT_PREFIX: Final[str] = "s-"
PIECE_PREFIX: Final[str] = "p-"
STUDENT_PIECE_PREFIX: Final[str] = "sp-"
LESSON_PREFIX: Final[str] = "l-"
FILE_PREFIX: Final[str] = "f-"
MESSAGE_PREFIX: Final[str] = "m-"
LINK_PREFIX: Final[str] = "link-"

# longest first so "sp-" wins over "s-"
ID_PREFIXES: Final[tuple[str, ...]] = tuple(
    sorted(
        (
            STUDENT_PREFIX,
            PIECE_PREFIX,
            STUDENT_PIECE_PREFIX,
            LESSON_PREFIX,
            FILE_PREFIX,
            MESSAGE_PREFIX,
            LINK_PREFIX,
        ),
        key=len,
        reverse=True,
    )
)


def with_prefix(prefix: str, value: str | int) -> str:
    text = str(value)
    if text.startswith(prefix):
        return text
    return f"{prefix}{text}"


def strip_id_prefix(value: str) -> str:
    """Return ``value`` without its first known prefix."""

    for prefix in ID_PREFIXES:
        if value.startswith(prefix):
            return value[len(prefix) :]
    return value


def ids_match(first: str, second: str) -> bool:
    return strip_id_prefix(first) == strip_id_prefix(second)


def new_piece_id() -> str:
    return with_prefix(PIECE_PREFIX, uuid4().hex)


def student_piece_id(student_id: str, piece_id: str) -> str:
    return f"{STUDENT_PIECE_PREFIX}{strip_id_prefix(student_id)}-{strip_id_prefix(piece_id)}"
