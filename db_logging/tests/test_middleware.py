"""
Tests for the request context middleware and request-backed log entries.
"""
import logging
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import RequestFactory, SimpleTestCase, TestCase

from db_logging.logger import add_database_logging
from db_logging.middleware import RequestContextMiddleware, get_current_request
from db_logging.models import LogEntry
from db_logging.utils import get_host_address, get_local_address, request_context_fields

User = get_user_model()


class RequestContextMiddlewareTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_request_is_available_during_the_request_only(self):
        request = self.factory.get('/somewhere/')
        seen = []

        def get_response(req):
            seen.append(get_current_request())
            return 'response'

        response = RequestContextMiddleware(get_response)(request)

        self.assertEqual(response, 'response')
        self.assertEqual(seen, [request])
        self.assertIsNone(get_current_request())

    def test_context_is_cleared_when_the_view_raises(self):
        def get_response(req):
            raise RuntimeError('boom')

        with self.assertRaises(RuntimeError):
            RequestContextMiddleware(get_response)(self.factory.get('/'))

        self.assertIsNone(get_current_request())


class RequestContextFieldsTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def tearDown(self):
        get_local_address.cache_clear()

    def test_no_request(self):
        self.assertEqual(request_context_fields(None), {})

    def test_host_address_prefers_server_addr(self):
        request = self.factory.get('/', SERVER_ADDR='10.0.0.2', REMOTE_ADDR='203.0.113.9')
        self.assertEqual(get_host_address(request), '10.0.0.2')

    @mock.patch('db_logging.utils.socket.gethostbyname', return_value='10.0.0.3')
    def test_host_address_falls_back_to_this_host(self, mock_gethostbyname):
        get_local_address.cache_clear()
        request = self.factory.get('/', REMOTE_ADDR='203.0.113.9')
        self.assertEqual(get_host_address(request), '10.0.0.3')
        self.assertEqual(request_context_fields(request)['host_address'], '10.0.0.3')

    @mock.patch('db_logging.utils.socket.gethostbyname', side_effect=OSError('no resolver'))
    def test_unresolvable_host_has_no_address(self, mock_gethostbyname):
        get_local_address.cache_clear()
        self.assertIsNone(get_host_address(self.factory.get('/')))

    def test_request_without_user_has_no_username(self):
        fields = request_context_fields(self.factory.get('/path/'))
        self.assertIsNone(fields['username'])
        self.assertIsNone(fields['browser'])
        self.assertEqual(fields['url'], '/path/')


class RequestLoggingIntegrationTest(TestCase):

    def setUp(self):
        self.handler = add_database_logging('example')
        logging.getLogger('example').setLevel(logging.DEBUG)

    def tearDown(self):
        example = logging.getLogger('example')
        example.removeHandler(self.handler)
        example.setLevel(logging.NOTSET)

    @mock.patch('db_logging.utils.get_local_address', return_value='10.20.30.40')
    def test_entry_carries_request_metadata(self, mock_local_address):
        user = User.objects.create_user(username='alice', password='secret-pass-123')
        self.client.force_login(user)

        self.client.get('/plain/', HTTP_USER_AGENT='TestAgent/2.0')

        entry = LogEntry.objects.get()
        self.assertEqual(entry.logger, 'example.views')
        self.assertEqual(entry.level, 'WARNING')
        self.assertEqual(entry.message, 'Plain message from /plain/')
        self.assertEqual(entry.url, '/plain/')
        self.assertEqual(entry.browser, 'TestAgent/2.0')
        self.assertEqual(entry.username, 'alice')
        self.assertEqual(entry.host_address, '10.20.30.40')

    def test_anonymous_request_has_no_username(self):
        self.client.get('/structured/')

        entry = LogEntry.objects.get()
        self.assertEqual(entry.level, 'INFO')
        self.assertEqual(entry.message, '\n  action: checkout\n  items: \n    book\n    pen')
        self.assertIsNone(entry.username)

    def test_entry_outside_a_request_has_no_request_fields(self):
        logging.getLogger('example.jobs').info('nightly job finished')

        entry = LogEntry.objects.get()
        self.assertEqual(entry.message, 'nightly job finished')
        self.assertIsNone(entry.url)
        self.assertIsNone(entry.host_address)

    def test_settings_filter_applies_to_category(self):
        noisy = logging.getLogger('example.noisy')
        noisy.warning('suppressed')
        noisy.error('stored')

        self.assertEqual(list(LogEntry.objects.values_list('message', flat=True)), ['stored'])

    def test_context_cleared_after_failing_view(self):
        with self.assertRaises(RuntimeError):
            self.client.get('/failing/')
        self.assertIsNone(get_current_request())
