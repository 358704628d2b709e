from django.db import models

from .constants import (
    MAXIMUM_BROWSER_LENGTH,
    MAXIMUM_EXCEPTION_LENGTH,
    MAXIMUM_HOST_ADDRESS_LENGTH,
    MAXIMUM_LEVEL_LENGTH,
    MAXIMUM_LOGGER_LENGTH,
    MAXIMUM_MESSAGE_LENGTH,
    MAXIMUM_THREAD_LENGTH,
    MAXIMUM_URL_LENGTH,
    MAXIMUM_USERNAME_LENGTH,
)


class AbstractLogEntry(models.Model):
    """
    Columns for one persisted log record.

    Subclass this to store entries in a project-specific table and point
    DB_LOGGING['MODEL'] at the subclass.
    """
    date = models.DateTimeField(db_index=True)
    thread = models.CharField(max_length=MAXIMUM_THREAD_LENGTH)  # Event id, or the emitting thread id
    level = models.CharField(max_length=MAXIMUM_LEVEL_LENGTH, db_index=True)
    logger = models.CharField(max_length=MAXIMUM_LOGGER_LENGTH)  # Category (logger name)
    message = models.CharField(max_length=MAXIMUM_MESSAGE_LENGTH)
    exception = models.CharField(max_length=MAXIMUM_EXCEPTION_LENGTH, null=True, blank=True)

    # Request-specific data
    host_address = models.CharField(max_length=MAXIMUM_HOST_ADDRESS_LENGTH, null=True, blank=True)
    username = models.CharField(max_length=MAXIMUM_USERNAME_LENGTH, null=True, blank=True)
    browser = models.CharField(max_length=MAXIMUM_BROWSER_LENGTH, null=True, blank=True)
    url = models.CharField(max_length=MAXIMUM_URL_LENGTH, null=True, blank=True)

    class Meta:
        abstract = True
        ordering = ['-date']

    def __str__(self):
        return f"{self.date} - {self.level} - {self.logger} - {self.message[:50]}"


class LogEntry(AbstractLogEntry):
    class Meta(AbstractLogEntry.Meta):
        verbose_name = 'log entry'
        verbose_name_plural = 'log entries'
