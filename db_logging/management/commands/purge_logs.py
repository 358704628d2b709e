import logging
from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from db_logging.options import get_options
from db_logging.sinks import resolve_log_model

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """
    Management command to delete stored log entries older than a number of days.
    """
    help = "Deletes database log entries older than the specified number of days."

    def add_arguments(self, parser):
        parser.add_argument(
            'days',
            type=int,
            help='Number of days of log entries to keep (e.g., 30 keeps entries from the last 30 days)'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report how many entries would be deleted without removing them'
        )

    def handle(self, *args, **options):
        days_to_keep = options['days']
        dry_run = options['dry_run']

        if days_to_keep < 1:
            raise CommandError('Number of days to keep must be at least 1.')

        db_options = get_options()
        model = resolve_log_model(db_options.model)
        cutoff = timezone.now() - timedelta(days=days_to_keep)

        self.stdout.write(f"Purging {model._meta.label} entries older than {cutoff:%Y-%m-%d %H:%M:%S %Z}")
        stale = model._default_manager.using(db_options.database).filter(date__lt=cutoff)

        if dry_run:
            count = stale.count()
            self.stdout.write(self.style.WARNING(f"Dry run complete. Would have deleted {count} entr(y/ies)."))
            return

        deleted_count, _ = stale.delete()
        logger.info(f"Purged {deleted_count} log entries older than {cutoff.isoformat()}")
        self.stdout.write(self.style.SUCCESS(f"Purge complete. {deleted_count} entr(y/ies) deleted."))
