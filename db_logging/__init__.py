"""
db_logging - Database-backed log storage for Django projects.

Records emitted through Python's logging pipeline are rendered (including
structured LogValues state), enriched with the current request's metadata
and stored as rows through the Django ORM.
"""

from .choices import LogLevel
from .formatting import LogValues, format_log_values
from .logger import (
    DatabaseLogger,
    DatabaseLoggerProvider,
    DatabaseLogHandler,
    add_database_logging,
)
from .sinks import LogPersistenceError, LogRecordData, ModelSink, Sink

__all__ = [
    # Rendering
    'LogValues',
    'format_log_values',
    # Enums
    'LogLevel',
    # Loggers
    'DatabaseLogger',
    'DatabaseLoggerProvider',
    'DatabaseLogHandler',
    'add_database_logging',
    # Persistence
    'Sink',
    'ModelSink',
    'LogRecordData',
    'LogPersistenceError',
]
