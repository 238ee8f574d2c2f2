"""src/httpget/http/http11.py

HTTP reply line parser.
"""

import re
from typing import Optional, Tuple

from httpget.exceptions import InvalidResponseError, ProtocolError

STATUS_LINE_PATTERN = re.compile(r"^HTTP/1\.[01] ([0-9]+) (\w+)")


class HttpParser:
    """
    Line oriented HTTP/1.x reply parser.

    Handles:
    - Status Line parsing.
    - Header line parsing with name normalization.
    - Line length limits.
    """

    def __init__(self, max_line_size: int = 1024):
        self.max_line_size = max_line_size

    def decode_line(self, raw: bytes) -> str:
        """
        Decode a received line and strip its CRLF terminator.

        Raises:
            ProtocolError: If the line is too long or cannot be decoded.
        """
        if len(raw) >= self.max_line_size and not raw.endswith(b"\r\n"):
            raise ProtocolError(
                f"Reply line exceeds maximum size of {self.max_line_size} bytes"
            )

        try:
            text = raw.decode("iso-8859-1")
        except UnicodeDecodeError as e:
            raise ProtocolError(f"Reply line decoding failed: {e}") from e

        if text.endswith("\r\n"):
            return text[:-2]
        return text

    def parse_status_line(self, line: str) -> Tuple[int, str]:
        """
        Parse a status line such as ``HTTP/1.0 200 OK``.

        Returns:
            Tuple of (status_code, reason)

        Raises:
            InvalidResponseError: If status line is invalid.
        """
        match = STATUS_LINE_PATTERN.match(line)
        if match is None:
            raise InvalidResponseError(f"Invalid status line: {line!r}")

        return int(match.group(1)), match.group(2)

    @staticmethod
    def parse_header_line(line: str) -> Optional[Tuple[str, str]]:
        """
        Parse a ``Name: value`` header line.

        Returns ``None`` for lines that are not headers; those are skipped
        rather than treated as fatal.
        """
        if ":" not in line:
            return None

        key, value = line.split(":", 1)
        if not key.strip():
            return None

        # "content-type" -> "Content-Type"
        normalized_key = "-".join(
            [part.capitalize() for part in key.strip().split("-")]
        )
        return normalized_key, value.strip()
