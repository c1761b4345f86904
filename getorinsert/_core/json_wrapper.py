import json
from typing import TypeAlias

from typing_extensions import Self

JsonObject: TypeAlias = dict[str, 'JsonValue']
JsonArray: TypeAlias = list['JsonValue']
JsonScalar: TypeAlias = bool | int | float | str | None
JsonValue: TypeAlias = JsonArray | JsonObject | JsonScalar


class JsonWrapper:
    """Renders wrapped value as JSON only when converted to string."""

    _value: JsonValue

    __slots__ = ('_value',)

    def __new__(cls, value: JsonValue, /) -> Self:
        self = super().__new__(cls)
        self._value = value
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._value!r})'

    def __str__(self, /) -> str:
        return json.dumps(self._value, default=str, ensure_ascii=False)
