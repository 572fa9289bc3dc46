"""Load and store roster snapshots as JSON documents."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .schema import (
    CatalogPiecePayload,
    LessonPayload,
    PieceReferencePayload,
    SnapshotPayload,
    StudentPayload,
)
from .translator import Snapshot, build_snapshot_payload, parse_snapshot

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or does not validate."""


def load_snapshot(path: Path) -> Snapshot:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc

    try:
        payload = SnapshotPayload.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot {path}: {exc}") from exc

    snapshot = parse_snapshot(payload)
    log.info(
        "Loaded snapshot %s: students=%s, catalog=%s",
        path,
        len(snapshot.roster),
        len(snapshot.catalog),
    )
    return snapshot


def dump_snapshot(snapshot: Snapshot, path: Path) -> None:
    payload = build_snapshot_payload(snapshot)
    text = payload.model_dump_json(indent=2, by_alias=True, exclude_none=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_text(text + "\n", encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise SnapshotError(f"Cannot write snapshot {path}: {exc}") from exc
    log.info("Wrote snapshot %s", path)


__all__ = [
    "CatalogPiecePayload",
    "LessonPayload",
    "PieceReferencePayload",
    "Snapshot",
    "SnapshotError",
    "SnapshotPayload",
    "StudentPayload",
    "dump_snapshot",
    "load_snapshot",
]
