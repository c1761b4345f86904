from __future__ import annotations

from pathlib import Path
from types import UnionType
from typing import Any, Generic, TypeVar, final

import tomli
from typing_extensions import Self

_T = TypeVar('_T')

TABLE_KEY_SEPARATOR = '.'


@final
class Configuration:
    @classmethod
    def from_toml_file_path(cls, file_path: Path, /) -> Self:
        return cls(tomli.loads(file_path.read_text('utf-8')), file_path)

    def get_table(self, dotted_key: str, /) -> dict[str, Any]:
        """
        Returns nested table located by keys joined with dots,
        empty string stands for the whole document.
        """
        result, json_path = self._raw, JsonPath('$')
        if len(dotted_key) == 0:
            return result
        keys = dotted_key.split(TABLE_KEY_SEPARATOR)
        if not all(keys):
            raise ValueError(
                f'Invalid table path {dotted_key!r}: '
                'keys should not be empty.'
            )
        for key in keys:
            json_path = json_path.join_key(key)
            try:
                value = result[key]
            except KeyError:
                raise KeyError(
                    f'{ConfigurationField(None, json_path, self._file_path)} '
                    'is missing.'
                ) from None
            result = ConfigurationField(
                value, json_path, self._file_path
            ).extract_exact(dict)
        return result

    __slots__ = '_file_path', '_raw'

    def __init__(self, raw: dict[str, Any], file_path: Path, /) -> None:
        self._file_path, self._raw = file_path, raw

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._raw!r}, {self._file_path!r})'


@final
class ConfigurationField(Generic[_T]):
    __slots__ = '_file_path', '_json_path', '_value'

    def __init__(
        self, value: _T, json_path: JsonPath, file_path: Path, /
    ) -> None:
        self._file_path, self._json_path, self._value = (
            file_path,
            json_path,
            value,
        )

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            '('
            f'{self._value!r}, {self._json_path!r}, {self._file_path!r}'
            ')'
        )

    def __str__(self, /) -> str:
        return (
            f'{self._json_path} field of '
            f'{self._file_path.as_posix()} configuration file'
        )

    def extract_exact(self, type_: type[_T] | UnionType, /) -> _T:
        if not isinstance(self._value, type_):
            raise TypeError(
                f'{self} expected to be {type_}, but got {type(self._value)}.'
            )
        return self._value


@final
class JsonPath:
    def join_key(self, key: str, /) -> Self:
        return type(self)(*self._components, f'.{key}')

    def __init__(self, *components: str) -> None:
        if not all(isinstance(component, str) for component in components):
            raise TypeError(
                f'All components of {type(self).__qualname__} must be {str}.'
            )
        if len(components) == 0:
            raise ValueError(
                f'{type(self).__qualname__} must contain '
                'at least one component.'
            )
        self._components = components

    def __str__(self, /) -> str:
        return ''.join(self._components)

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({", ".join(map(repr, self._components))})'
        )
