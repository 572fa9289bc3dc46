"""Reference resolution against the canonical catalog.

Lookups try exact id equality first and then compare ids with their known
prefixes stripped, since catalog ids were written by several generations of
the host application (``p-12`` vs ``12``).

``PieceResolver`` memoizes successful lookups. The memo is tied to one
``Catalog`` object and its ``generation``; mutating the catalog or passing a
different one drops the memo. Misses are never memoized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from repertipy.domain.catalog import Catalog
from repertipy.domain.model import ids_match

if TYPE_CHECKING:
    from collections.abc import Sequence

    from repertipy.domain.model import CanonicalPiece


log = getLogger(__name__)


@dataclass(slots=True)
class PieceResolver:
    """Resolve canonical pieces by id, with a generation-checked memo."""

    _cache: dict[str, CanonicalPiece] = field(default_factory=dict["str", "CanonicalPiece"])
    _catalog: Catalog | None = None
    _generation: int = -1

    def resolve(
        self, piece_id: str | None, catalog: Sequence[CanonicalPiece]
    ) -> CanonicalPiece | None:
        if not piece_id:
            return None

        if not isinstance(catalog, Catalog):
            return _lookup(piece_id, catalog)

        self._sync(catalog)
        cached = self._cache.get(piece_id)
        if cached is not None:
            return cached

        found = _lookup(piece_id, catalog)
        if found is not None:
            self._cache[piece_id] = found
        return found

    def clear(self) -> None:
        self._cache.clear()
        self._catalog = None
        self._generation = -1

    @property
    def cached_ids(self) -> tuple[str, ...]:
        return tuple(self._cache)

    def _sync(self, catalog: Catalog) -> None:
        if catalog is self._catalog and catalog.generation == self._generation:
            return
        if self._cache:
            log.debug("Dropping %d memoized catalog lookups", len(self._cache))
        self._cache.clear()
        self._catalog = catalog
        self._generation = catalog.generation


def _lookup(piece_id: str, catalog: Sequence[CanonicalPiece]) -> CanonicalPiece | None:
    for entry in catalog:
        if entry.id == piece_id:
            return entry
    for entry in catalog:
        if ids_match(entry.id, piece_id):
            return entry
    return None


_default_resolver = PieceResolver()


def default_resolver() -> PieceResolver:
    return _default_resolver


def resolve(piece_id: str | None, catalog: Sequence[CanonicalPiece]) -> CanonicalPiece | None:
    """Look up ``piece_id`` using the process-wide resolver."""

    return _default_resolver.resolve(piece_id, catalog)


def clear_cache() -> None:
    _default_resolver.clear()
