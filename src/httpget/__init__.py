"""src/httpget/__init__.py

Httpget - URL decomposition and a minimal HTTP download client.

The core of the package splits URL strings into scheme, credentials, host,
port, path, query arguments and fragment with a permissive grammar where
only the host is mandatory. A small blocking HTTP/1.0 client built on top of
it downloads a URL to a file or stdout.

Key Features:
    - Zero external dependencies
    - Explicit, reusable and thread-safe parser contexts
    - Absent components are ``None``, never empty strings
    - Plain HTTP GET downloads from the command line
    - Full type hints (PEP 561)

Example:
    URL decomposition::

        import httpget

        context = httpget.init()
        url = httpget.parse(context, "http://user@example.com:8080/a?b#c")
        print(url.scheme, url.username, url.host, url.port, url.fullpath)
        httpget.release(url)
        httpget.free(context)

    Download::

        from httpget import fetch

        with open("index.html", "wb") as output:
            fetch("http://example.com/", output)

    Command line::

        $ httpget http://example.com/ index.html
"""

import logging

from httpget.client.request import FetchResult, Request, fetch
from httpget.config import ClientConfig, Timeout
from httpget.exceptions import (
    HttpgetError,
    InvalidArgument,
    InvalidGrammar,
    NoMatch,
    OutOfMemory,
    URLError,
)
from httpget.http.url import DecomposedURL, ParserContext, free, init, parse, release
from httpget.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "init",
    "free",
    "parse",
    "release",
    "ParserContext",
    "DecomposedURL",
    "fetch",
    "Request",
    "FetchResult",
    "ClientConfig",
    "Timeout",
    "HttpgetError",
    "URLError",
    "InvalidArgument",
    "NoMatch",
    "InvalidGrammar",
    "OutOfMemory",
    "__version__",
]
