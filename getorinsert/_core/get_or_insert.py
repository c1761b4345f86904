from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from typing import Any, Final, TypeVar

_ArgumentT = TypeVar('_ArgumentT')
_KeyT = TypeVar('_KeyT')
_ValueT = TypeVar('_ValueT')

_logger: Final[logging.Logger] = logging.getLogger(__name__)

_MISSING: Final[Any] = object()


def get_or_insert(
    mapping: MutableMapping[_KeyT, _ValueT], key: _KeyT, value: _ValueT, /
) -> _ValueT:
    """
    Returns value associated with given key in the mapping,
    inserting given value under the key first if it is absent.
    """
    _validate_mapping_and_key(mapping, key)
    result = mapping.get(key, _MISSING)
    if result is _MISSING:
        _logger.debug('Key %r is absent, inserting given value.', key)
        mapping[key] = result = value
    else:
        _logger.debug('Key %r is present, discarding given value.', key)
    return result


def get_or_insert_with(
    mapping: MutableMapping[_KeyT, _ValueT],
    key: _KeyT,
    factory: Callable[[], _ValueT],
    /,
) -> _ValueT:
    """
    Returns value associated with given key in the mapping,
    inserting result of calling the factory first if the key is absent.

    The factory is called at most once and only for an absent key.
    """
    _validate_mapping_and_key(mapping, key)
    _validate_factory(factory)
    result = mapping.get(key, _MISSING)
    if result is _MISSING:
        _logger.debug('Key %r is absent, calling %r.', key, factory)
        mapping[key] = result = factory()
    else:
        _logger.debug('Key %r is present, skipping factory call.', key)
    return result


def get_or_insert_with_argument(
    mapping: MutableMapping[_KeyT, _ValueT],
    key: _KeyT,
    factory: Callable[[_KeyT, _ArgumentT], _ValueT],
    argument: _ArgumentT,
    /,
) -> _ValueT:
    """
    Same as `get_or_insert_with`, but calls the factory
    with the key and given argument.
    """
    _validate_mapping_and_key(mapping, key)
    _validate_factory(factory)
    result = mapping.get(key, _MISSING)
    if result is _MISSING:
        _logger.debug(
            'Key %r is absent, calling %r with argument %r.',
            key,
            factory,
            argument,
        )
        mapping[key] = result = factory(key, argument)
    else:
        _logger.debug('Key %r is present, skipping factory call.', key)
    return result


def get_or_insert_with_key(
    mapping: MutableMapping[_KeyT, _ValueT],
    key: _KeyT,
    factory: Callable[[_KeyT], _ValueT],
    /,
) -> _ValueT:
    _validate_mapping_and_key(mapping, key)
    _validate_factory(factory)
    result = mapping.get(key, _MISSING)
    if result is _MISSING:
        _logger.debug('Key %r is absent, calling %r with it.', key, factory)
        mapping[key] = result = factory(key)
    else:
        _logger.debug('Key %r is present, skipping factory call.', key)
    return result


def _validate_factory(factory: Callable[..., Any] | None, /) -> None:
    if factory is None:
        raise ValueError('Invalid factory: should not be None.')


def _validate_mapping_and_key(
    mapping: MutableMapping[Any, Any] | None, key: Any, /
) -> None:
    if mapping is None:
        raise ValueError('Invalid mapping: should not be None.')
    if key is None:
        raise ValueError('Invalid key: should not be None.')
