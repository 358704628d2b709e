"""
Tests for DB_LOGGING settings parsing and the category filter.
"""
from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from db_logging.choices import LogLevel
from db_logging.options import DatabaseLoggerOptions, get_options, settings_filter


class DatabaseLoggerOptionsTest(SimpleTestCase):

    def test_first_matching_prefix_decides(self):
        options = DatabaseLoggerOptions(filters={
            'app.db': LogLevel.ERROR,
            'app': LogLevel.DEBUG,
        })
        self.assertFalse(options.is_enabled('app.db.query', LogLevel.WARNING))
        self.assertTrue(options.is_enabled('app.db.query', LogLevel.ERROR))
        self.assertTrue(options.is_enabled('app.views', LogLevel.DEBUG))
        self.assertFalse(options.is_enabled('app.views', LogLevel.TRACE))

    def test_unmatched_category_is_enabled(self):
        options = DatabaseLoggerOptions(filters={'app': LogLevel.CRITICAL})
        self.assertTrue(options.is_enabled('other', LogLevel.TRACE))
        self.assertTrue(DatabaseLoggerOptions().is_enabled('anything', LogLevel.TRACE))

    def test_none_minimum_disables_category(self):
        options = DatabaseLoggerOptions(filters={'quiet': LogLevel.NONE})
        self.assertFalse(options.is_enabled('quiet.module', LogLevel.CRITICAL))


class GetOptionsTest(SimpleTestCase):

    @override_settings(DB_LOGGING={'FILTERS': {'x': 'warning'}, 'DATABASE': 'logs'})
    def test_settings_are_parsed(self):
        options = get_options()
        self.assertEqual(options.filters, {'x': LogLevel.WARNING})
        self.assertEqual(options.database, 'logs')
        self.assertEqual(options.model, 'db_logging.LogEntry')

    @override_settings(DB_LOGGING=None)
    def test_missing_setting_uses_defaults(self):
        options = get_options()
        self.assertEqual(options.filters, {})
        self.assertEqual(options.database, 'default')

    def test_options_follow_setting_changes(self):
        with self.settings(DB_LOGGING={'FILTERS': {'cat': 'ERROR'}}):
            self.assertFalse(settings_filter('cat.sub', LogLevel.INFO))
        with self.settings(DB_LOGGING={'FILTERS': {'cat': 'DEBUG'}}):
            self.assertTrue(settings_filter('cat.sub', LogLevel.INFO))

    @override_settings(DB_LOGGING={'FILTERS': {'x': 'deafening'}})
    def test_unknown_level_is_improperly_configured(self):
        with self.assertRaises(ImproperlyConfigured):
            get_options()

    @override_settings(DB_LOGGING={'FILTERS': ['x']})
    def test_filters_must_be_a_dict(self):
        with self.assertRaises(ImproperlyConfigured):
            get_options()
