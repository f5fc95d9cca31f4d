from __future__ import annotations

import copy
import itertools
from collections.abc import Iterator, MutableMapping
from typing import TypeVar

from typing_extensions import Self

_Key = TypeVar('_Key')
_Value = TypeVar('_Value')


class LayeredMapping(MutableMapping[_Key, _Value]):
    """Single view over an ordered sequence of mappings.

    Lookups search the layers from the front one (index 0) to the back one
    and take the first match,
    writes and deletions touch the front layer only.
    Layers are referenced, never copied.
    """

    @property
    def layers(self, /) -> tuple[MutableMapping[_Key, _Value], ...]:
        return self._layers

    def erase(self, key: _Key, /) -> int:
        front = self._layers[0]
        if key not in front:
            return 0
        del front[key]
        return 1

    def flatten(self, /) -> dict[_Key, _Value]:
        result: dict[_Key, _Value] = {}
        for layer in self._layers:
            for key, value in layer.items():
                result.setdefault(key, value)
        return result

    def layer_at(self, index: int, /) -> MutableMapping[_Key, _Value]:
        if not (0 <= index < len(self._layers)):
            raise IndexError(
                f'{self!r} does not contain layer with index {index}, '
                f'expected index from 0 to {len(self._layers) - 1}.'
            )
        return self._layers[index]

    def pop(self, key: _Key, /, *default: _Value) -> _Value:
        try:
            return self._layers[0].pop(key, *default)
        except KeyError:
            raise KeyError(
                f'Front layer of {self!r} does not contain key {key!r}.'
            ) from None

    def popitem(self, /) -> tuple[_Key, _Value]:
        try:
            return self._layers[0].popitem()
        except KeyError:
            raise KeyError(f'Front layer of {self!r} is empty.') from None

    def prepend(self, layer: MutableMapping[_Key, _Value], /) -> Self:
        return type(self)(layer, *self._layers)

    def read(self, key: _Key, /) -> _Value:
        for layer in self._layers:
            if key in layer:
                return layer[key]
        raise KeyError(key)

    def read_write(self, key: _Key, /) -> _Value:
        """Returns value for the key stored in the front layer.

        If the key is present only in deeper layers,
        a shallow copy of the front-most value is stored in the front layer.
        If the key is missing everywhere,
        the front layer's own missing key handling applies:
        a front layer without defaults (e.g. ``dict``) raises ``KeyError``
        and stays unchanged.
        """
        front = self._layers[0]
        if key in front:
            return front[key]
        try:
            value = copy.copy(self.read(key))
        except KeyError:
            value = front[key]
        front[key] = value
        return value

    _layers: tuple[MutableMapping[_Key, _Value], ...]

    __slots__ = ('_layers',)

    def __contains__(self, key: object, /) -> bool:
        return any(key in layer for layer in self._layers)

    def __delitem__(self, key: _Key, /) -> None:
        if not self.erase(key):
            raise KeyError(
                f'Front layer of {self!r} does not contain key {key!r}.'
            )

    def __getitem__(self, key: _Key, /) -> _Value:
        return self.read(key)

    def __init__(
        self,
        front: MutableMapping[_Key, _Value],
        /,
        *rest: MutableMapping[_Key, _Value],
    ) -> None:
        self._layers = (front, *rest)

    def __iter__(self, /) -> Iterator[_Key]:
        return iter(self._to_keys())

    def __len__(self, /) -> int:
        return len(self._to_keys())

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({", ".join(map(repr, self._layers))})'
        )

    def __setitem__(self, key: _Key, value: _Value, /) -> None:
        self._layers[0][key] = value

    def _to_keys(self, /) -> dict[_Key, None]:
        return dict.fromkeys(itertools.chain.from_iterable(self._layers))
