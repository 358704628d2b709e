"""
Column limits for persisted log records. Longer values are truncated.
"""

MAXIMUM_MESSAGE_LENGTH = 4000
MAXIMUM_EXCEPTION_LENGTH = 2000
MAXIMUM_HOST_ADDRESS_LENGTH = 20
MAXIMUM_USERNAME_LENGTH = 50
MAXIMUM_BROWSER_LENGTH = 200
MAXIMUM_URL_LENGTH = 100
MAXIMUM_THREAD_LENGTH = 255
MAXIMUM_LEVEL_LENGTH = 50
MAXIMUM_LOGGER_LENGTH = 255
