import logging


class LevelRangeFilter(logging.Filter):
    """Passes records with levels from ``min_level`` to ``max_level``.

    Both bounds are inclusive and optional, levels can be given by names
    (e.g. ``'INFO'``) or numbers.
    """

    def __init__(
        self,
        *,
        min_level: int | str | None = None,
        max_level: int | str | None = None,
    ) -> None:
        super().__init__()
        normalized_min_level, normalized_max_level = (
            _normalize_level(min_level),
            _normalize_level(max_level),
        )
        if (
            normalized_min_level is not None
            and normalized_max_level is not None
            and normalized_min_level > normalized_max_level
        ):
            raise ValueError(
                f'Expected minimum level {min_level!r} '
                f'to not exceed maximum level {max_level!r}.'
            )
        self._max_level, self._min_level = (
            normalized_max_level,
            normalized_min_level,
        )

    def filter(self, record: logging.LogRecord) -> bool:
        return (
            self._min_level is None or self._min_level <= record.levelno
        ) and (self._max_level is None or record.levelno <= self._max_level)


def _normalize_level(level: int | str | None, /) -> int | None:
    if not isinstance(level, str):
        return level
    result = logging.getLevelName(level.upper())
    if not isinstance(result, int):
        raise ValueError(f'Unknown logging level name: {level!r}.')
    return result
