"""src/httpget/transport/connection.py

TCP connection management module.

This module provides blocking connection handling with line and chunk
oriented receive helpers and proper error handling for network operations.
"""

import logging
import socket
from typing import Any, Iterator, Optional, Union

# pylint: disable=redefined-builtin
from httpget.exceptions import (
    ConnectTimeout,
    NetworkError,
    ReadTimeout,
)
from httpget.config import Timeout

logger = logging.getLogger(__name__)


class Connection:
    """
    Manages TCP connection creation and lifecycle.

    Attributes:
        host: The target hostname or IP address.
        port: The target port number.
        timeout: Connection timeout configuration.
        sock: The underlying socket object.
    """

    __slots__ = ("host", "port", "timeout", "sock")

    def __init__(
        self,
        host: str,
        port: int,
        timeout: Union[float, Timeout, None] = None,
    ) -> None:
        """
        Initialize connection parameters.
        """
        self.host = host
        self.port = port

        if timeout is None:
            self.timeout = None

        elif isinstance(timeout, Timeout):
            self.timeout = timeout

        else:
            self.timeout = Timeout.from_float(timeout)

        self.sock: Optional[socket.socket] = None

    def open(self) -> socket.socket:
        """
        Open TCP connection.
        """
        connect_to = self.timeout.connect_timeout if self.timeout else None

        try:
            self.sock = socket.create_connection(
                (self.host, self.port), timeout=connect_to
            )

            # After connection is established, switch timeout to 'read_timeout'
            self.sock.settimeout(self.timeout.read_timeout if self.timeout else None)

        except socket.timeout as e:
            raise ConnectTimeout(
                f"Timeout connecting to {self.host}:{self.port}"
            ) from e

        except socket.gaierror as e:
            raise NetworkError(
                f"Could not resolve {self.host}:{self.port} - {e}"
            ) from e

        except OSError as e:
            raise NetworkError(
                f"Connection error to {self.host}:{self.port} - {e}"
            ) from e

        logger.debug("Connected to %s:%s", self.host, self.port)
        return self.sock

    def close(self) -> None:
        """
        Close the connection if it is open.
        """
        if self.sock:
            try:
                self.sock.close()
            except OSError:
                pass
            self.sock = None

    def __enter__(self) -> "Connection":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> None:
        self.close()

    def _require_socket(self) -> socket.socket:
        if self.sock is None:
            raise NetworkError(f"Connection to {self.host}:{self.port} is not open")
        return self.sock

    def sendall(self, data: bytes) -> None:
        """Send all of ``data``."""
        sock = self._require_socket()
        try:
            sock.sendall(data)

        except socket.timeout as e:
            raise ReadTimeout(f"Timeout sending to {self.host}:{self.port}") from e

        except OSError as e:
            raise NetworkError(f"Send failed to {self.host}:{self.port} - {e}") from e

    def recv_chunk(self, size: int) -> bytes:
        """
        Receive up to ``size`` bytes.

        Returns:
            The received bytes, or ``b""`` once the peer closed the connection.
        """
        sock = self._require_socket()
        try:
            return sock.recv(size)

        except socket.timeout as e:
            raise ReadTimeout(
                f"Timeout reading from {self.host}:{self.port}"
            ) from e

        except OSError as e:
            raise NetworkError(
                f"Receive failed from {self.host}:{self.port} - {e}"
            ) from e

    def recv_line(self, max_size: int) -> bytes:
        """
        Receive one line, byte by byte.

        Reading stops after ``\\r\\n``, at end of stream, or once ``max_size``
        bytes were read. The terminator is kept, so ``b""`` means end of
        stream and ``b"\\r\\n"`` is an empty line.
        """
        line = bytearray()
        while len(line) < max_size:
            byte = self.recv_chunk(1)
            if not byte:
                break

            line += byte
            if line.endswith(b"\r\n"):
                break

        return bytes(line)

    def iter_chunks(self, size: int) -> Iterator[bytes]:
        """Yield chunks of up to ``size`` bytes until end of stream."""
        while True:
            chunk = self.recv_chunk(size)
            if not chunk:
                return
            yield chunk
