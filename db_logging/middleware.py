"""
Middleware that exposes the current request to database loggers.

Add 'db_logging.middleware.RequestContextMiddleware' to settings.MIDDLEWARE
(after AuthenticationMiddleware so the username is available). Log calls
made while a request is being handled then carry its user agent, username,
client address and path.
"""
import logging
from contextvars import ContextVar
from typing import Optional

from django.http import HttpRequest

logger = logging.getLogger(__name__)

_current_request: ContextVar[Optional[HttpRequest]] = ContextVar('db_logging_current_request', default=None)


def get_current_request() -> Optional[HttpRequest]:
    """Request being handled in the current context, or None outside a request."""
    return _current_request.get()


class RequestContextMiddleware:
    """
    Stores the request in a context variable for the duration of the
    request-response cycle and clears it afterwards, including when the
    view raises.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        logger.debug("RequestContextMiddleware initialized.")

    def __call__(self, request: HttpRequest):
        token = _current_request.set(request)
        try:
            return self.get_response(request)
        finally:
            _current_request.reset(token)
