"""src/httpget/client/request.py

HTTP GET request builder and download pipeline.
"""

import logging
from dataclasses import dataclass, field
from typing import IO, Callable, Dict, Optional, Union

from httpget.config import ClientConfig
from httpget.exceptions import (
    HTTPStatusError,
    InvalidRequestError,
    InvalidResponseError,
    UnsupportedURLError,
)
from httpget.http import url as urlparser
from httpget.http.http11 import HttpParser
from httpget.http.url import DecomposedURL, ParserContext
from httpget.transport.connection import Connection
from httpget.utils.validators import validate_target

__all__ = ["Request", "FetchResult", "fetch"]

logger = logging.getLogger(__name__)

Output = Union[IO[bytes], Callable[[], IO[bytes]]]

UNSAFE_CHARACTERS = ("\r", "\n", "\x00")


@dataclass
class FetchResult:
    """Outcome of a completed download."""

    status_code: int
    reason: str
    headers: Dict[str, str] = field(default_factory=dict)
    bytes_written: int = 0


class Request:
    """
    HTTP GET request for one decomposed URL.
    """

    __slots__ = ("url", "config", "parser")

    def __init__(self, url: DecomposedURL, config: Optional[ClientConfig] = None):
        self.url = url
        self.config = config or ClientConfig()
        self.parser = HttpParser(max_line_size=self.config.max_line_size)

    @staticmethod
    def request_target(url: DecomposedURL) -> str:
        """
        Path and query to put on the request line.
        The fragment stays on the client side.
        """
        target = url.path or "/"
        if url.args is not None:
            target += f"?{url.args}"
        return target

    @staticmethod
    def build_request(
        method: str,
        path: str,
        host: str,
        headers: Dict[str, str],
        http_version: str = "HTTP/1.0",
    ) -> bytes:
        """
        Builds the raw HTTP request bytes.

        Raises:
            InvalidRequestError: If the request line or a header holds CR,
                LF or NUL characters.
        """
        # Validate against request line and header injection attacks
        for part in (method, path, http_version):
            if any(c in part for c in UNSAFE_CHARACTERS):
                raise InvalidRequestError(f"Invalid character in request line: {part!r}")

        request_line = f"{method} {path} {http_version}\r\n"
        final_headers = {"Host": host, **headers}

        headers_str = ""
        for k, v in final_headers.items():
            if any(c in k or c in v for c in UNSAFE_CHARACTERS):
                raise InvalidRequestError(f"Invalid character in header {k}: {v!r}")
            headers_str += f"{k}: {v}\r\n"

        return (request_line + headers_str + "\r\n").encode("utf-8")

    @property
    def host(self) -> str:
        """Host to connect to."""
        if self.url.host is None:
            raise UnsupportedURLError("URL has no host")
        return self.url.host

    @property
    def port(self) -> int:
        """Port to connect to, falling back to the configured default."""
        port = self.url.port or self.config.default_port
        try:
            number = int(port)
        except ValueError as e:
            raise UnsupportedURLError(f"Invalid port {port!r}") from e

        if not 0 < number <= 65535:
            raise UnsupportedURLError(f"Port {port} is out of range")
        return number

    def to_bytes(self) -> bytes:
        """Encoded GET request for this URL."""
        return self.build_request(
            "GET",
            self.request_target(self.url),
            self.host,
            {"User-Agent": self.config.user_agent},
            http_version=self.config.http_version,
        )

    def read_reply_head(self, conn: Connection) -> FetchResult:
        """
        Read the status line and headers, leaving ``conn`` at the body.

        Raises:
            InvalidResponseError: On a missing or malformed status line, or
                if the connection closes inside the headers.
            HTTPStatusError: If the status is not 200.
        """
        raw = conn.recv_line(self.config.max_line_size)
        if not raw:
            raise InvalidResponseError("Empty response")

        status_line = self.parser.decode_line(raw)
        logger.info("%s", status_line)

        status_code, reason = self.parser.parse_status_line(status_line)
        logger.debug("HTTP reply status code %d", status_code)

        if status_code != 200:
            raise HTTPStatusError(status_code, reason)

        headers: Dict[str, str] = {}
        while True:
            raw = conn.recv_line(self.config.max_line_size)
            if not raw:
                raise InvalidResponseError("Connection closed before end of headers")

            line = self.parser.decode_line(raw)
            if not line:
                break

            header = self.parser.parse_header_line(line)
            if header is None:
                logger.debug("Skipping malformed header line %r", line)
                continue

            name, value = header
            if name in headers:
                headers[name] += f", {value}"
            else:
                headers[name] = value

        return FetchResult(status_code=status_code, reason=reason, headers=headers)

    def send(self, output: Output) -> FetchResult:
        """
        Connect, send the request and stream the reply body into ``output``.

        ``output`` is either a binary stream or a callable returning one. A
        callable is only invoked once a 200 reply head has been read, so
        nothing is opened for failed downloads.
        """
        request = self.to_bytes()
        with Connection(self.host, self.port, timeout=self.config.timeout) as conn:
            logger.info("Connected to %s", self.host)
            conn.sendall(request)

            result = self.read_reply_head(conn)
            stream = output() if callable(output) else output
            for chunk in conn.iter_chunks(self.config.chunk_size):
                stream.write(chunk)
                result.bytes_written += len(chunk)

        logger.debug("Received %d body bytes", result.bytes_written)
        return result


def fetch(
    urlstr: str,
    output: Output,
    config: Optional[ClientConfig] = None,
    context: Optional[ParserContext] = None,
) -> FetchResult:
    """
    Download ``urlstr`` with a plain HTTP GET and write the body to ``output``.

    Args:
        urlstr: URL to fetch. Only http is supported, without credentials.
        output: Binary writable stream, or a callable returning one that is
            called only after the server accepted the request.
        config: Client settings, defaults to :class:`ClientConfig`.
        context: Parser context to reuse. A private one is created and
            freed when omitted.

    Raises:
        URLError: If ``urlstr`` cannot be decomposed.
        UnsupportedURLError: For unsupported schemes, credentials or
            characters that cannot go on the request line.
        RequestError: On network, protocol or status failures.
    """
    own_context = context is None
    parser_context = urlparser.init() if context is None else context

    try:
        url = urlparser.parse(parser_context, urlstr)
        try:
            validate_target(url)
            return Request(url, config).send(output)
        finally:
            urlparser.release(url)
    finally:
        if own_context:
            urlparser.free(parser_context)
