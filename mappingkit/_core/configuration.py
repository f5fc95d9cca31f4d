from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from types import UnionType
from typing import Any, ClassVar, Generic, TypeVar, final

import tomli
from typing_extensions import Self

_RawT = TypeVar('_RawT')
_T = TypeVar('_T')


@final
class Configuration:
    @classmethod
    def from_toml_file_path(cls, file_path: Path, /) -> Self:
        try:
            raw = tomli.loads(file_path.read_text('utf-8'))
        except tomli.TOMLDecodeError as error:
            raise ValueError(
                f'{file_path.as_posix()} is not a valid TOML file: {error}.'
            ) from None
        return cls(ConfigurationSection(raw, JsonPath('$'), file_path))

    def get_section(self, key: str, /) -> ConfigurationSection:
        return self._root.get_subsection(key)

    def __init__(self, root: ConfigurationSection, /) -> None:
        self._root = root

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._root!r})'


class _ConfigurationNode(Generic[_RawT]):
    _kind: ClassVar[str]

    _file_path: Path
    _json_path: JsonPath
    _raw: _RawT

    __slots__ = '_file_path', '_json_path', '_raw'

    def __init__(
        self, raw: _RawT, json_path: JsonPath, file_path: Path, /
    ) -> None:
        self._file_path, self._json_path, self._raw = file_path, json_path, raw

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({self._raw!r}, {self._json_path!r}, {self._file_path!r})'
        )

    def __str__(self, /) -> str:
        return (
            f'{self._json_path} {self._kind} of '
            f'{self._file_path.as_posix()} configuration file'
        )


@final
class ConfigurationField(_ConfigurationNode[Any]):
    _kind = 'field'

    __slots__ = ()

    def extract_exact(self, type_: type[_T] | UnionType, /) -> _T:
        # ``bool`` is a subclass of ``int``, but TOML keeps them apart
        if not isinstance(self._raw, type_) or (
            isinstance(self._raw, bool) and not _accepts_bool(type_)
        ):
            raise TypeError(
                f'{self} expected to be {type_}, but got {type(self._raw)}.'
            )
        return self._raw  # type: ignore[no-any-return]


@final
class ConfigurationSection(
    _ConfigurationNode[dict[str, Any]], Mapping[str, ConfigurationField]
):
    _kind = 'section'

    __slots__ = ()

    def extract_values(
        self, type_: type[_T] | UnionType, /
    ) -> dict[str, _T]:
        return {key: field.extract_exact(type_) for key, field in self.items()}

    def get_list(self, key: str, /) -> ConfigurationList:
        return ConfigurationList(
            self[key].extract_exact(list),
            self._json_path.join_key(key),
            self._file_path,
        )

    def get_subsection(self, key: str, /) -> ConfigurationSection:
        return ConfigurationSection(
            self[key].extract_exact(dict),
            self._json_path.join_key(key),
            self._file_path,
        )

    def __getitem__(self, key: str, /) -> ConfigurationField:
        try:
            value = self._raw[key]
        except KeyError:
            raise KeyError(f'{self} does not contain "{key}" field.') from None
        return ConfigurationField(
            value, self._json_path.join_key(key), self._file_path
        )

    def __iter__(self, /) -> Iterator[str]:
        return iter(self._raw)

    def __len__(self, /) -> int:
        return len(self._raw)


@final
class ConfigurationList(
    _ConfigurationNode[list[Any]], Sequence[ConfigurationField]
):
    _kind = 'list'

    __slots__ = ()

    def extract_elements(self, type_: type[_T] | UnionType, /) -> list[_T]:
        return [field.extract_exact(type_) for field in self]

    def get_subsection(self, index: int, /) -> ConfigurationSection:
        return ConfigurationSection(
            self[index].extract_exact(dict),
            self._json_path.join_index(index),
            self._file_path,
        )

    def __getitem__(  # type: ignore[override]
        self, index: int, /
    ) -> ConfigurationField:
        if not (0 <= index < len(self._raw)):
            raise IndexError(
                f'{self} does not contain element with index {index}.'
            )
        return ConfigurationField(
            self._raw[index],
            self._json_path.join_index(index),
            self._file_path,
        )

    def __iter__(self, /) -> Iterator[ConfigurationField]:
        return (
            ConfigurationField(
                element, self._json_path.join_index(index), self._file_path
            )
            for index, element in enumerate(self._raw)
        )

    def __len__(self, /) -> int:
        return len(self._raw)


@final
class JsonPath:
    """Location of a configuration node, e.g. ``$.layers[0].front``."""

    def join_index(self, index: int, /) -> Self:
        if not isinstance(index, int):
            raise TypeError(
                f'Expected index to be {int}, but got {type(index)}.'
            )
        return type(self)(*self._components, f'[{index}]')

    def join_key(self, key: str, /) -> Self:
        if not isinstance(key, str):
            raise TypeError(f'Expected key to be {str}, but got {type(key)}.')
        return type(self)(*self._components, f'.{key}')

    _components: tuple[str, ...]

    __slots__ = ('_components',)

    def __init__(self, *components: str) -> None:
        if len(components) == 0:
            raise ValueError(
                f'{type(self).__qualname__} must contain '
                'at least one component.'
            )
        self._components = components

    def __eq__(self, other: Any, /) -> Any:
        return (
            self._components == other._components
            if isinstance(other, JsonPath)
            else NotImplemented
        )

    def __hash__(self, /) -> int:
        return hash(self._components)

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({", ".join(map(repr, self._components))})'
        )

    def __str__(self, /) -> str:
        return ''.join(self._components)


def _accepts_bool(type_: type[Any] | UnionType, /) -> bool:
    return (
        type_ is not int
        and isinstance(type_, type)
        and issubclass(bool, type_)
    )
