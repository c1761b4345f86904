from collections.abc import Callable, Iterator, MutableMapping
from typing import Any, TypeVar

from .get_or_insert import get_or_insert_with_key

_Key = TypeVar('_Key')
_Value = TypeVar('_Value')


class DefaultMapping(MutableMapping[_Key, _Value]):
    """
    Mapping over a dictionary which constructs values
    for missing keys on lookup and stores them.
    """

    def get(self, key: _Key, default: Any = None, /) -> Any:
        return self._data.get(key, default)

    @property
    def constructor(self, /) -> Callable[[_Key], _Value]:
        return self._constructor

    def __contains__(self, key: object, /) -> bool:
        return key in self._data

    def __delitem__(self, key: _Key, /) -> None:
        del self._data[key]

    def __getitem__(self, key: _Key, /) -> _Value:
        return get_or_insert_with_key(self._data, key, self._constructor)

    def __init__(
        self,
        constructor: Callable[[_Key], _Value],
        data: dict[_Key, _Value] | None = None,
        /,
    ) -> None:
        if constructor is None:
            raise ValueError('Invalid constructor: should not be None.')
        self._constructor = constructor
        self._data: dict[_Key, _Value] = {} if data is None else data

    def __iter__(self, /) -> Iterator[_Key]:
        return iter(self._data)

    def __len__(self, /) -> int:
        return len(self._data)

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({self._constructor!r}, {self._data!r})'
        )

    def __setitem__(self, key: _Key, value: _Value, /) -> None:
        self._data[key] = value
