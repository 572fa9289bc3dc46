"""The canonical catalog as seen by the migration engine.

The host owns the catalog contents; the engine only appends to it. Every
mutation bumps ``generation`` so that resolvers holding a memo cache can tell
when their cache went stale.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from repertipy.domain.model import CanonicalPiece


class Catalog(MutableSequence["CanonicalPiece"]):
    """Mutable list of canonical pieces with a mutation counter."""

    __slots__ = ("_generation", "_items")

    def __init__(self, items: Iterable[CanonicalPiece] = ()) -> None:
        self._items: list[CanonicalPiece] = list(items)
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def _touch(self) -> None:
        self._generation += 1

    @overload
    def __getitem__(self, index: int) -> CanonicalPiece: ...

    @overload
    def __getitem__(self, index: slice) -> list[CanonicalPiece]: ...

    def __getitem__(self, index: int | slice) -> CanonicalPiece | list[CanonicalPiece]:
        return self._items[index]

    @overload
    def __setitem__(self, index: int, value: CanonicalPiece) -> None: ...

    @overload
    def __setitem__(self, index: slice, value: Iterable[CanonicalPiece]) -> None: ...

    def __setitem__(self, index: int | slice, value: object) -> None:
        self._items[index] = value  # type: ignore[index,assignment]
        self._touch()

    def __delitem__(self, index: int | slice) -> None:
        del self._items[index]
        self._touch()

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Catalog):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Catalog({self._items!r})"

    def insert(self, index: int, value: CanonicalPiece) -> None:
        self._items.insert(index, value)
        self._touch()


def find_exact_match(
    catalog: Sequence[CanonicalPiece], title: str | None, composer: str | None
) -> CanonicalPiece | None:
    """Return the first entry whose title and composer are exactly equal.

    No case folding or whitespace trimming is applied.
    """

    for entry in catalog:
        if entry.title == title and entry.composer == composer:
            return entry
    return None
