"""
Persistence sinks for rendered log records.

A sink accepts one flat LogRecordData per log call. Failures are raised as
LogPersistenceError; the caller decides what to do with them.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError

from .options import get_options

logger = logging.getLogger(__name__)


class LogPersistenceError(Exception):
    """Raised by a sink when a record could not be stored."""


@dataclass
class LogRecordData:
    date: datetime
    level: str
    logger: str
    thread: str
    message: str
    exception: Optional[str] = None
    host_address: Optional[str] = None
    username: Optional[str] = None
    browser: Optional[str] = None
    url: Optional[str] = None


class Sink:
    """Destination for log records. Subclasses implement write()."""

    def write(self, record: LogRecordData) -> None:
        raise NotImplementedError('Subclasses of Sink must implement write().')


class ModelSink(Sink):
    """
    Stores each record as one row of a Django model.

    The model (an AbstractLogEntry subclass) and database alias default to
    DB_LOGGING['MODEL'] and DB_LOGGING['DATABASE'] and are resolved on first
    write, so the sink can be built while logging is configured, before the
    app registry is ready.
    """

    def __init__(self, model=None, using: Optional[str] = None):
        self._model = model
        self._using = using

    @property
    def model(self):
        if self._model is None:
            self._model = resolve_log_model(get_options().model)
        return self._model

    @property
    def using(self) -> str:
        return self._using or get_options().database

    def write(self, record: LogRecordData) -> None:
        model = self.model
        try:
            model._default_manager.using(self.using).create(**asdict(record))
        except DatabaseError as e:
            raise LogPersistenceError(f"Failed to save {model.__name__}: {e}") from e


def resolve_log_model(label: str):
    """Look up an 'app_label.ModelName' string and check it stores log entries."""
    from .models import AbstractLogEntry  # Import model here; sinks are built before apps are ready

    try:
        model = apps.get_model(label, require_ready=False)
    except (LookupError, ValueError) as e:
        raise ImproperlyConfigured(f"DB_LOGGING['MODEL'] refers to an unknown model: {label!r}") from e
    if not issubclass(model, AbstractLogEntry):
        raise ImproperlyConfigured(f"DB_LOGGING['MODEL'] must subclass AbstractLogEntry, got {label!r}")
    logger.debug(f"Resolved log model: {model._meta.label}")
    return model
