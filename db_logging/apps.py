from django.apps import AppConfig


class DbLoggingConfig(AppConfig):
    """
    Configuration for the db_logging app.

    Stores log records emitted through Python's logging pipeline as rows in
    the database. It does not provide any user-facing functionality.
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'db_logging'
    verbose_name = 'Database Logging'

    def ready(self):
        from . import signals  # noqa: F401
