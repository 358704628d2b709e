from django.contrib import admin

from .models import LogEntry


@admin.register(LogEntry)
class LogEntryAdmin(admin.ModelAdmin):
    """
    Read-only admin interface for stored log entries.
    Entries are written by the logging pipeline only.
    """
    list_display = ('date', 'level', 'logger', 'short_message', 'username', 'url')
    list_filter = ('level', 'date')
    search_fields = ('logger', 'message', 'username', 'url')
    date_hierarchy = 'date'
    ordering = ('-date',)
    readonly_fields = (
        'date', 'thread', 'level', 'logger', 'message', 'exception',
        'host_address', 'username', 'browser', 'url',
    )

    @admin.display(description='Message')
    def short_message(self, obj):
        return obj.message[:80]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
