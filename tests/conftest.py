from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from repertipy.domain import clear_cache

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _fresh_resolver_cache() -> Iterator[None]:
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "REPERTIPY_MIGRATION_STRATEGY",
        "REPERTIPY_CREATE_MISSING",
        "REPERTIPY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def snapshot_document() -> dict[str, object]:
    return {
        "students": [
            {
                "id": "s-1",
                "name": "Ada",
                "email": "ada@example.com",
                "currentRepertoire": [
                    {
                        "id": "sp-1",
                        "title": "Bach Sonata",
                        "composer": "J.S. Bach",
                        "startDate": "2024-09-01",
                        "status": "current",
                    },
                    {
                        "id": "sp-2",
                        "masterPieceId": "p-1",
                        "title": "Clair de Lune",
                        "composer": "Debussy",
                        "startDate": "2024-02-01T10:00:00Z",
                        "status": "current",
                        "attachments": ["f-1"],
                    },
                ],
                "pastRepertoire": [
                    {
                        "id": "sp-3",
                        "title": "",
                        "composer": "Chopin",
                        "startDate": "2023-05-01",
                        "status": "completed",
                    }
                ],
                "lessons": [
                    {
                        "id": "l-1",
                        "date": "2024-10-01",
                        "summary": "Scales",
                        "repertoire": [
                            {
                                "id": "sp-1",
                                "title": "Bach Sonata",
                                "composer": "J.S. Bach",
                                "startDate": "2024-09-01",
                                "status": "current",
                            }
                        ],
                    }
                ],
            },
            {
                "id": "s-2",
                "name": "Grace",
                "currentRepertoire": [
                    {
                        "id": "sp-4",
                        "title": "Bach Sonata",
                        "composer": "J.S. Bach",
                        "startDate": "2024-09-15",
                        "status": "planned",
                    }
                ],
                "pastRepertoire": None,
            },
        ],
        "catalog": [
            {
                "id": "p-1",
                "title": "Clair de Lune",
                "composer": "Debussy",
                "difficulty": "intermediate",
                "createdDate": "2023-01-01",
            }
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_document: dict[str, object]) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_document), encoding="utf-8")
    return path
