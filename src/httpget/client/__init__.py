"""src/httpget/client/__init__.py"""

from .request import FetchResult, Request, fetch

__all__ = [
    "Request",
    "FetchResult",
    "fetch",
]
