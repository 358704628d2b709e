"""
Configuration for the database logger, read from the DB_LOGGING setting.

    DB_LOGGING = {
        'FILTERS': {'django.db.backends': 'WARNING', 'accounts': 'DEBUG'},
        'MODEL': 'db_logging.LogEntry',
        'DATABASE': 'default',
    }
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .choices import LogLevel

logger = logging.getLogger(__name__)

FilterFunc = Callable[[str, LogLevel], bool]

DEFAULT_MODEL = 'db_logging.LogEntry'
DEFAULT_DATABASE = 'default'


@dataclass(frozen=True)
class DatabaseLoggerOptions:
    filters: Dict[str, LogLevel] = field(default_factory=dict)
    model: str = DEFAULT_MODEL
    database: str = DEFAULT_DATABASE

    def is_enabled(self, category: str, level: LogLevel) -> bool:
        """
        The first configured prefix matching the category decides; categories
        without a matching prefix are always enabled.
        """
        for prefix, minimum in self.filters.items():
            if category.startswith(prefix):
                return minimum <= level
        return True


_options: Optional[DatabaseLoggerOptions] = None


def _parse_filters(raw) -> Dict[str, LogLevel]:
    if not raw:
        return {}
    if not isinstance(raw, dict):
        raise ImproperlyConfigured("DB_LOGGING['FILTERS'] must be a dict of category prefix to level.")
    filters = {}
    for prefix, level in raw.items():
        try:
            filters[prefix] = LogLevel.coerce(level)
        except ValueError as e:
            raise ImproperlyConfigured(f"DB_LOGGING['FILTERS'][{prefix!r}]: {e}") from e
    return filters


def get_options() -> DatabaseLoggerOptions:
    """Return the parsed DB_LOGGING setting, cached until settings change."""
    global _options
    if _options is None:
        raw = getattr(settings, 'DB_LOGGING', None) or {}
        _options = DatabaseLoggerOptions(
            filters=_parse_filters(raw.get('FILTERS')),
            model=raw.get('MODEL', DEFAULT_MODEL),
            database=raw.get('DATABASE', DEFAULT_DATABASE),
        )
        logger.debug(f"Loaded database logging options: {_options}")
    return _options


def reset_options() -> None:
    global _options
    _options = None


def settings_filter(category: str, level: LogLevel) -> bool:
    """Filter predicate backed by DB_LOGGING['FILTERS']."""
    return get_options().is_enabled(category, level)
