from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, TypeVar

from typing_extensions import Self

_ElementT = TypeVar('_ElementT')


class CountingMapping(MutableMapping[_ElementT, int]):
    """Multiset-style mapping from elements to signed integer counts.

    Absent elements count as zero: reading them never inserts an entry.
    Entries created by ``increment``, ``update`` or combination stay stored
    even when their count drops to zero or below.
    """

    def combine_add(self, other: Mapping[_ElementT, int], /) -> Self:
        for element, count in other.items():
            self.increment(element, count)
        return self

    def combine_subtract(self, other: Mapping[_ElementT, int], /) -> Self:
        for element, count in other.items():
            self.increment(element, -count)
        return self

    def copy(self, /) -> Self:
        return type(self)(self._counts)

    def count_of(self, element: _ElementT, /) -> int:
        return self._counts.get(element, 0)

    def elements(self, /) -> Iterator[_ElementT]:
        """Returns iterator over elements repeated as many times as counted.

        Elements with non-positive counts are skipped.
        Counts are taken at the moment of the call.
        """
        positive_counts = [
            (element, count)
            for element, count in self._counts.items()
            if count > 0
        ]
        return itertools.chain.from_iterable(
            itertools.repeat(element, count)
            for element, count in positive_counts
        )

    def increment(self, element: _ElementT, /, delta: int = 1) -> int:
        result = self._counts[element] = self._counts.get(element, 0) + delta
        return result

    def most_common(self, n: int = 0, /) -> list[tuple[_ElementT, int]]:
        """Returns ``n`` entries with the largest counts, all if ``n`` is 0.

        Entries are ordered by descending count,
        entries with equal counts keep their insertion order.
        """
        if n < 0:
            raise ValueError(
                f'Expected number of entries to be non-negative, but got {n}.'
            )
        if n == 0 or n >= len(self._counts):
            return sorted(self._counts.items(), key=_to_count, reverse=True)
        return heapq.nlargest(n, self._counts.items(), key=_to_count)

    def pop(self, element: _ElementT, /, *default: int) -> int:
        return self._counts.pop(element, *default)

    def setdefault(self, element: _ElementT, default: int = 0, /) -> int:
        return self._counts.setdefault(element, default)

    def total(self, /) -> int:
        return sum(self._counts.values())

    def update(  # type: ignore[override]
        self, elements: Iterable[_ElementT], /
    ) -> Self:
        for element in elements:
            self.increment(element)
        return self

    _counts: dict[_ElementT, int]

    __slots__ = ('_counts',)

    def __add__(self, other: Any, /) -> Self:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.copy().combine_add(other)

    def __contains__(self, element: object, /) -> bool:
        return element in self._counts

    def __delitem__(self, element: _ElementT, /) -> None:
        del self._counts[element]

    def __getitem__(self, element: _ElementT, /) -> int:
        return self.count_of(element)

    def __iadd__(self, other: Any, /) -> Self:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.combine_add(other)

    def __init__(
        self,
        counts: Mapping[_ElementT, int] | Iterable[tuple[_ElementT, int]] = (),
        /,
    ) -> None:
        self._counts = dict(counts)

    def __isub__(self, other: Any, /) -> Self:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.combine_subtract(other)

    def __iter__(self, /) -> Iterator[_ElementT]:
        return iter(self._counts)

    def __len__(self, /) -> int:
        return len(self._counts)

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._counts!r})'

    def __setitem__(self, element: _ElementT, count: int, /) -> None:
        self._counts[element] = count

    def __sub__(self, other: Any, /) -> Self:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.copy().combine_subtract(other)


def _to_count(entry: tuple[Any, int], /) -> int:
    return entry[1]
