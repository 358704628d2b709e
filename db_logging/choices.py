"""
Enums for database log levels.
"""

import logging
from enum import IntEnum, unique


@unique
class LogLevel(IntEnum):
    """Severity levels understood by the database logger, lowest first."""
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    NONE = 6

    @classmethod
    def from_stdlib(cls, levelno: int) -> 'LogLevel':
        """Map a standard `logging` level number onto a LogLevel."""
        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE

    @classmethod
    def coerce(cls, value) -> 'LogLevel':
        """
        Accept a LogLevel, a level name ('warning', 'WARN', 'Information')
        or a stdlib level number.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls.from_stdlib(value)
        if isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            try:
                return cls[name]
            except KeyError:
                pass
        raise ValueError(f"Unknown log level: {value!r}")


_ALIASES = {
    'WARN': 'WARNING',
    'INFORMATION': 'INFO',
    'FATAL': 'CRITICAL',
    'NOTSET': 'TRACE',
}
