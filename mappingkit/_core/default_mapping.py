from __future__ import annotations

from collections.abc import (
    Callable,
    Iterable,
    Iterator,
    Mapping,
    MutableMapping,
)
from typing import TypeVar

_Key = TypeVar('_Key')
_Value = TypeVar('_Value')


class DefaultMapping(MutableMapping[_Key, _Value]):
    """Mapping which fills missing keys from a zero-argument factory.

    Both ``get_or_create`` and ``read_or_create`` (as well as indexing)
    store the produced value, so a second lookup of the same key returns
    the stored value without calling the factory again.
    ``get``, ``pop`` and membership tests never call the factory.
    """

    @property
    def factory(self, /) -> Callable[[], _Value]:
        return self._factory

    def get(  # type: ignore[override]
        self, key: _Key, default: _Value | None = None, /
    ) -> _Value | None:
        return self._data.get(key, default)

    def get_or_create(self, key: _Key, /) -> _Value:
        try:
            return self._data[key]
        except KeyError:
            result = self._data[key] = self._factory()
            return result

    read_or_create = get_or_create

    def pop(self, key: _Key, /, *default: _Value) -> _Value:
        return self._data.pop(key, *default)

    _data: dict[_Key, _Value]
    _factory: Callable[[], _Value]

    __slots__ = '_data', '_factory'

    def __contains__(self, key: object, /) -> bool:
        return key in self._data

    def __delitem__(self, key: _Key, /) -> None:
        del self._data[key]

    def __getitem__(self, key: _Key, /) -> _Value:
        return self.get_or_create(key)

    def __init__(
        self,
        factory: Callable[[], _Value],
        entries: Mapping[_Key, _Value] | Iterable[tuple[_Key, _Value]] = (),
        /,
    ) -> None:
        self._factory = factory
        self._data = dict(entries)

    def __iter__(self, /) -> Iterator[_Key]:
        return iter(self._data)

    def __len__(self, /) -> int:
        return len(self._data)

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._factory!r}, {self._data!r})'

    def __setitem__(self, key: _Key, value: _Value, /) -> None:
        self._data[key] = value
