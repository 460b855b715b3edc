"""Immutable ordered collection.

Every "mutating" operation returns a new :class:`ImmutableList` and
leaves the receiver untouched.  Element lookups for :meth:`replace`,
:meth:`remove` and :meth:`index_of` compare by identity, so a held value
is found even when another element is equal to it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar, overload

from data_objects.core.errors import ImmutableAttributeError

T = TypeVar("T")


class ImmutableList(Sequence[T], Generic[T]):
    """Tuple-backed list whose edits produce new lists."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        object.__setattr__(self, "_items", tuple(items))

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> ImmutableList[T]: ...

    def __getitem__(self, index: int | slice) -> T | ImmutableList[T]:
        if isinstance(index, slice):
            return ImmutableList(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    # ------------------------------------------------------------------
    # Derivations
    # ------------------------------------------------------------------

    def add(self, item: T) -> ImmutableList[T]:
        return ImmutableList((*self._items, item))

    def extend(self, items: Iterable[T]) -> ImmutableList[T]:
        return ImmutableList((*self._items, *items))

    def insert(self, index: int, item: T) -> ImmutableList[T]:
        items = list(self._items)
        items.insert(index, item)
        return ImmutableList(items)

    def set_item(self, index: int, item: T) -> ImmutableList[T]:
        items = list(self._items)
        items[index] = item
        return ImmutableList(items)

    def remove(self, item: T) -> ImmutableList[T]:
        """New list without the first element that *is* ``item``."""
        index = self._require_index(item)
        return ImmutableList(self._items[:index] + self._items[index + 1:])

    def replace(self, old: T, new: T) -> ImmutableList[T]:
        """New list with the first element that *is* ``old`` swapped for ``new``.

        Raises:
            ValueError: If ``old`` is not held by this list.
        """
        return self.set_item(self._require_index(old), new)

    def index_of(self, item: T) -> int:
        """Position of ``item`` by identity, or ``-1``."""
        for position, held in enumerate(self._items):
            if held is item:
                return position
        return -1

    def _require_index(self, item: T) -> int:
        index = self.index_of(item)
        if index < 0:
            raise ValueError(f"{item!r} is not in the list")
        return index

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise ImmutableAttributeError(type(self).__name__, name)

    def __delattr__(self, name: str) -> None:
        raise ImmutableAttributeError(type(self).__name__, name)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ImmutableList):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"ImmutableList({list(self._items)!r})"
