import logging
from typing import Any


class LevelRangeFilter(logging.Filter):
    """Passes records with levels in inclusive range of given bounds."""

    def __init__(
        self,
        *,
        min_level: int | str | None = None,
        max_level: int | str | None = None,
    ) -> None:
        super().__init__()
        normalized_min_level = _normalize_level(min_level)
        normalized_max_level = _normalize_level(max_level)
        if normalized_min_level is None and normalized_max_level is None:
            raise ValueError('Either minimum or maximum level should be set.')
        if (
            normalized_min_level is not None
            and normalized_max_level is not None
            and normalized_min_level > normalized_max_level
        ):
            raise ValueError(
                f'Invalid level range: minimum level {min_level!r} '
                f'should not exceed maximum level {max_level!r}.'
            )
        self._max_level, self._min_level = (
            normalized_max_level,
            normalized_min_level,
        )

    def filter(self, record: logging.LogRecord) -> bool:
        return (
            self._min_level is None or self._min_level <= record.levelno
        ) and (self._max_level is None or record.levelno <= self._max_level)


def to_default_logging_configuration(
    *, min_level: int | str = logging.WARNING
) -> dict[str, Any]:
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'level_range': {
                '()': LevelRangeFilter,
                'min_level': min_level,
            }
        },
        'formatters': {
            'default': {
                'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'
            }
        },
        'handlers': {
            'stderr': {
                'class': 'logging.StreamHandler',
                'filters': ['level_range'],
                'formatter': 'default',
                'stream': 'ext://sys.stderr',
            }
        },
        'root': {'handlers': ['stderr'], 'level': 'NOTSET'},
    }


def _normalize_level(value: int | str | None, /) -> int | None:
    if isinstance(value, str):
        result = logging.getLevelName(value.upper())
        if not isinstance(result, int):
            raise ValueError(f'Unknown logging level: {value!r}.')
        return result
    return value
