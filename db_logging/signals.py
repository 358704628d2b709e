"""
Signal receivers for the db_logging app.

Keeps cached configuration in step with settings overrides.
"""

from django.core.signals import setting_changed
from django.dispatch import receiver

from .options import reset_options


@receiver(setting_changed)
def reload_db_logging_options(sender, setting, **kwargs):
    if setting == 'DB_LOGGING':
        reset_options()
