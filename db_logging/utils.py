"""
Helpers for pulling request metadata into log records.
"""

import socket
from functools import lru_cache
from typing import Dict, Optional

from django.http import HttpRequest

from .constants import (
    MAXIMUM_BROWSER_LENGTH,
    MAXIMUM_HOST_ADDRESS_LENGTH,
    MAXIMUM_URL_LENGTH,
    MAXIMUM_USERNAME_LENGTH,
)
from .formatting import trim


@lru_cache(maxsize=None)
def get_local_address() -> Optional[str]:
    """Address this host resolves to, looked up once per process."""
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError:
        return None


def get_host_address(request: HttpRequest) -> Optional[str]:
    """
    Server-side address the request was received on. Uses SERVER_ADDR when
    the server provides it, otherwise the address of this host.
    """
    return request.META.get('SERVER_ADDR') or get_local_address()


def get_username(request: HttpRequest) -> Optional[str]:
    user = getattr(request, 'user', None)
    if user is not None and getattr(user, 'is_authenticated', False):
        return user.get_username()
    return None


def request_context_fields(request: Optional[HttpRequest]) -> Dict[str, Optional[str]]:
    """
    Optional LogRecordData fields for the given request, truncated to their
    column sizes. Returns an empty dict when there is no request.
    """
    if request is None:
        return {}
    return {
        'browser': trim(request.META.get('HTTP_USER_AGENT'), MAXIMUM_BROWSER_LENGTH),
        'username': trim(get_username(request), MAXIMUM_USERNAME_LENGTH),
        'host_address': trim(get_host_address(request), MAXIMUM_HOST_ADDRESS_LENGTH),
        'url': trim(request.path, MAXIMUM_URL_LENGTH),
    }
