"""Get-or-insert operations over mutable mappings."""

from typing import TypeAlias

from ._core import default_mapping as _default_mapping
from ._core.get_or_insert import (
    get_or_insert,
    get_or_insert_with,
    get_or_insert_with_argument,
    get_or_insert_with_key,
)

__version__ = '1.0.0'

__all__ = [
    'DefaultMapping',
    'get_or_insert',
    'get_or_insert_with',
    'get_or_insert_with_argument',
    'get_or_insert_with_key',
]

DefaultMapping: TypeAlias = _default_mapping.DefaultMapping
