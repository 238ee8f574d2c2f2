"""src/httpget/exceptions.py

Httpget Exceptions hierarchy.
"""

# pylint: disable=redefined-builtin

from typing import Optional


class HttpgetError(Exception):
    """Base exception for all Httpget errors."""


class URLError(HttpgetError, ValueError):
    """Base exception for URL decomposition errors."""


class InvalidArgument(URLError):
    """
    A parser context or input string was missing or unusable.
    This is a programming error and is never retried.
    """


class NoMatch(URLError):
    """The input is not a syntactically acceptable URL."""

    def __init__(self, url: Optional[str] = None, message: Optional[str] = None):
        self.url = url
        if message is None:
            message = f"Could not parse URL {url!r}"
        super().__init__(message)


class InvalidGrammar(URLError):
    """
    The built-in URL pattern failed to compile.
    Indicates a broken build, not a runtime condition.
    """


class OutOfMemory(HttpgetError, MemoryError):
    """Allocation failed while compiling, matching or extracting."""


class RequestError(HttpgetError):
    """General exception for Request errors."""


class UnsupportedURLError(RequestError):
    """URL uses a scheme or credentials the client does not implement."""


class InvalidRequestError(UnsupportedURLError, ValueError):
    """
    Request line or headers would carry CR, LF or NUL characters.
    """


class NetworkError(RequestError):
    """
    Base exception for network-related errors.
    Wraps socket errors and other connection issues.
    """


class TimeoutError(RequestError):
    """
    Base exception for timeouts.
    """

    def __init__(self, message: str = "Operation timed out"):
        super().__init__(message)


class ConnectTimeout(TimeoutError):
    """Timeout during connection establishment."""


class ReadTimeout(TimeoutError):
    """Timeout during data reception."""


class ProtocolError(RequestError):
    """
    Errors related to HTTP protocol (parsing, violations).
    """


class InvalidResponseError(ProtocolError):
    """Server sent a response that could not be understood."""


class HTTPStatusError(RequestError):
    """Server replied with a status other than 200."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP request failed with status {status_code} {reason}".rstrip())
