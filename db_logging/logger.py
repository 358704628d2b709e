"""
Database logger, its provider, and the `logging.Handler` that connects them
to Python's logging pipeline.

Responsibilities:
- Decides per category (logger name) and level whether a record is wanted.
- Renders the record: a caller-supplied formatter, structured LogValues
  state, or plain text.
- Adds request metadata when a request is being handled.
- Truncates oversized text and hands one flat record to a Sink.
- Reports sink failures on standard output and carries on.

Typical configuration through settings.LOGGING:

    'handlers': {
        'database': {
            'level': 'INFO',
            'class': 'db_logging.logger.DatabaseLogHandler',
        },
    },
"""

import copy
import logging
import threading
import traceback
from contextlib import nullcontext
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from django.utils.module_loading import import_string

from .choices import LogLevel
from .constants import (
    MAXIMUM_EXCEPTION_LENGTH,
    MAXIMUM_LOGGER_LENGTH,
    MAXIMUM_MESSAGE_LENGTH,
    MAXIMUM_THREAD_LENGTH,
)
from .formatting import format_log_values, is_log_values, trim
from .middleware import get_current_request
from .options import FilterFunc, settings_filter
from .sinks import LogRecordData, ModelSink, Sink
from .utils import request_context_fields

# Standard Python logger for internal messages WITHIN the logging app
_logger = logging.getLogger(__name__)

Formatter = Callable[[Any, Optional[BaseException]], str]

# Set while a record is being written, so log calls made by the sink itself
# (e.g. django.db.backends query logging) are not written again.
_writing: ContextVar[bool] = ContextVar('db_logging_writing', default=False)


def format_exception(exception: Optional[BaseException]) -> Optional[str]:
    if exception is None:
        return None
    return ''.join(traceback.format_exception(type(exception), exception, exception.__traceback__)).rstrip('\n')


def _default_message(state: Any, exception: Optional[BaseException]) -> str:
    message = '' if state is None else str(state)
    if exception is not None:
        message = f"{message}\n{format_exception(exception)}" if message else format_exception(exception)
    return message


class DatabaseLogger:
    """Writes log records for one category to a sink."""

    def __init__(
        self,
        name: str,
        sink: Sink,
        filter: Optional[FilterFunc] = None,
        request_accessor: Optional[Callable[[], Any]] = None,
    ):
        self.name = name
        self.sink = sink
        self._filter = filter or settings_filter
        self._request_accessor = request_accessor or get_current_request

    def is_enabled(self, level: LogLevel) -> bool:
        return self._filter(self.name, level)

    def begin_scope(self, state: Any):
        """Scopes carry no data into stored records."""
        return nullcontext()

    def log(
        self,
        level: LogLevel,
        event_id: Any,
        state: Any,
        exception: Optional[BaseException] = None,
        formatter: Optional[Formatter] = None,
    ) -> None:
        if not self.is_enabled(level):
            return

        if formatter is not None:
            message = formatter(state, exception)
        elif is_log_values(state):
            message = format_log_values(state)
            if message and exception is not None:
                message += '\n' + format_exception(exception)
        else:
            message = _default_message(state, exception)

        if not message:
            return

        record = LogRecordData(
            date=datetime.now(timezone.utc),
            level=level.name,
            logger=trim(self.name, MAXIMUM_LOGGER_LENGTH),
            thread=trim(str(event_id), MAXIMUM_THREAD_LENGTH),
            message=trim(message, MAXIMUM_MESSAGE_LENGTH),
            exception=trim(format_exception(exception), MAXIMUM_EXCEPTION_LENGTH),
            **request_context_fields(self._request_accessor()),
        )

        token = _writing.set(True)
        try:
            self.sink.write(record)
        except Exception as e:
            # Fallback channel; the record is dropped.
            print(f"Failed to write log entry for '{self.name}': {e}")
        finally:
            _writing.reset(token)


class DatabaseLoggerProvider:
    """
    Creates DatabaseLogger instances sharing one sink, filter and request accessor.

    Without arguments the sink stores rows through DB_LOGGING['MODEL'], the
    filter follows DB_LOGGING['FILTERS'] and the request comes from
    RequestContextMiddleware.
    """

    def __init__(
        self,
        sink: Optional[Sink] = None,
        filter: Optional[FilterFunc] = None,
        request_accessor: Optional[Callable[[], Any]] = None,
    ):
        self.sink = sink or ModelSink()
        self.filter = filter or settings_filter
        self.request_accessor = request_accessor or get_current_request
        self._loggers: Dict[str, DatabaseLogger] = {}
        self._lock = threading.Lock()

    def create_logger(self, name: str) -> DatabaseLogger:
        with self._lock:
            db_logger = self._loggers.get(name)
            if db_logger is None:
                db_logger = DatabaseLogger(name, self.sink, self.filter, self.request_accessor)
                self._loggers[name] = db_logger
            return db_logger

    def close(self) -> None:
        pass


def _load(value):
    """Accept an object or a dotted import path (as used in settings.LOGGING)."""
    if isinstance(value, str):
        value = import_string(value)
        if isinstance(value, type):
            value = value()
    return value


class DatabaseLogHandler(logging.Handler):
    """
    logging.Handler that stores records through a DatabaseLoggerProvider.

    The record's logger name is the category. Structured state is passed as
    the message itself: `logger.info(LogValues(user='alice', action='login'))`
    (or a plain dict). A `event_id` given through `extra` is stored as the
    thread column; otherwise the emitting thread id is used.
    """

    def __init__(self, level=logging.NOTSET, sink=None, filter=None, request_accessor=None, provider=None):
        super().__init__(level)
        self.provider = provider or DatabaseLoggerProvider(
            sink=_load(sink),
            filter=_load(filter),
            request_accessor=_load(request_accessor),
        )

    def emit(self, record: logging.LogRecord) -> None:
        if _writing.get() or record.name.split('.')[0] == 'db_logging':
            return
        try:
            db_logger = self.provider.create_logger(record.name)
            level = LogLevel.from_stdlib(record.levelno)
            event_id = getattr(record, 'event_id', record.thread)
            exception = record.exc_info[1] if record.exc_info else None

            if self.formatter is not None:
                if is_log_values(record.msg) and not record.args:
                    # Format a copy whose message is the rendered block
                    rendered = format_log_values(record.msg)
                    if not rendered:
                        return
                    record = copy.copy(record)
                    record.msg = rendered
                db_logger.log(level, event_id, record, exception, formatter=lambda state, exc: self.format(state))
            elif is_log_values(record.msg) and not record.args:
                db_logger.log(level, event_id, record.msg, exception)
            else:
                db_logger.log(level, event_id, record.getMessage(), exception)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.provider.close()
        super().close()


def add_database_logging(logger=None, sink=None, filter=None, level=logging.NOTSET) -> DatabaseLogHandler:
    """
    Attach a DatabaseLogHandler to a logger (a Logger, a logger name, or the
    root logger when omitted) and return the handler.
    """
    if not isinstance(logger, logging.Logger):
        logger = logging.getLogger(logger)
    handler = DatabaseLogHandler(level=level, sink=sink, filter=filter)
    logger.addHandler(handler)
    _logger.debug(f"Database logging attached to logger '{logger.name}'")
    return handler
