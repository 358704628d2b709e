from django.core.management.base import BaseCommand
from django.db import DatabaseError
from django.db.models import Count

from db_logging.choices import LogLevel
from db_logging.formatting import LogValues
from db_logging.logger import DatabaseLoggerProvider
from db_logging.options import get_options
from db_logging.sinks import resolve_log_model


class Command(BaseCommand):
    """
    Management command to check database logging configuration and stored entries.
    """
    help = "Checks database logging configuration, stored entries, and optionally creates test log entries."

    def add_arguments(self, parser):
        parser.add_argument(
            '--create-test-logs',
            action='store_true',
            help='Create a test log entry for each log level',
        )

    def handle(self, *args, **options):
        db_options = get_options()
        model = resolve_log_model(db_options.model)

        self._check_configuration(db_options, model)
        if options['create_test_logs']:
            self._create_test_logs()
        self._check_entries(db_options, model)

    def _check_configuration(self, db_options, model):
        """Reports the model, database alias and category filters in use."""
        self.stdout.write(self.style.NOTICE("\n--- Database Logging Configuration ---"))
        self.stdout.write(f"  Model: {model._meta.label} (table {model._meta.db_table})")
        self.stdout.write(f"  Database: {db_options.database}")
        if db_options.filters:
            self.stdout.write("  Filters:")
            for prefix, minimum in db_options.filters.items():
                self.stdout.write(f"    - {prefix}: {minimum.name} and above")
        else:
            self.stdout.write(self.style.WARNING("  Filters: none (all categories enabled)"))

    def _check_entries(self, db_options, model):
        """Counts stored entries per level."""
        self.stdout.write(self.style.NOTICE("\n--- Stored Log Entries ---"))
        try:
            counts = (
                model._default_manager.using(db_options.database)
                .values('level')
                .annotate(total=Count('id'))
                .order_by('level')
            )
            counts = {row['level']: row['total'] for row in counts}
        except DatabaseError as e:
            self.stdout.write(self.style.ERROR(f"Error reading log entries: {e}"))
            return

        if not counts:
            self.stdout.write(self.style.WARNING("  No log entries stored."))
            return
        for level in LogLevel:
            if level.name in counts:
                self.stdout.write(f"  - {level.name}: {counts[level.name]} entr(y/ies)")
        latest = model._default_manager.using(db_options.database).order_by('-date').first()
        if latest is not None:
            self.stdout.write(self.style.SUCCESS(f"  Latest entry: {latest}"))

    def _create_test_logs(self):
        """
        Creates one test entry per level through the configured provider.
        Levels disabled by the filters for this category are skipped by the logger.
        """
        self.stdout.write(self.style.NOTICE("\n--- Creating Test Log Entries ---"))
        db_logger = DatabaseLoggerProvider().create_logger(__name__)
        for level in LogLevel:
            if level is LogLevel.NONE:
                continue
            db_logger.log(level, 0, LogValues(event='test_log', level=level.name, source='check_logs'))
            self.stdout.write(f"  - Logged test entry at {level.name}")
        self.stdout.write(self.style.SUCCESS("Test log creation finished."))
