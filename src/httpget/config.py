"""src/httpget/config.py

Timeouts and client limits.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from httpget.version import __version__


@dataclass
class Timeout:
    """
    Timeout configuration.

    Attributes:
        connect: Maximum time to wait for connection establishment (socket connect).
        read: Maximum time to wait for data to be received (socket recv).
        total: Fallback for whichever of the above is not set.
    """

    connect: Optional[float] = None
    read: Optional[float] = None
    total: Optional[float] = None

    @classmethod
    def from_float(cls, timeout: Optional[float]) -> "Timeout":
        """Create a Timeout instance from a single float (total timeout fallback)."""
        if timeout is None:
            return cls()
        return cls(connect=timeout, read=timeout, total=timeout)

    @property
    def connect_timeout(self) -> Optional[float]:
        """Effective connect timeout."""
        return self.connect if self.connect is not None else self.total

    @property
    def read_timeout(self) -> Optional[float]:
        """Effective read timeout."""
        return self.read if self.read is not None else self.total


@dataclass
class ClientConfig:
    """
    Download client settings.

    Attributes:
        timeout: Socket timeouts.
        default_port: Port used when the URL does not name one.
        max_line_size: Longest status or header line accepted, in bytes.
        chunk_size: Size of body reads.
        user_agent: Value of the ``User-Agent`` request header.
        http_version: Protocol version sent on the request line.
    """

    timeout: Timeout = field(default_factory=Timeout)
    default_port: str = "80"
    max_line_size: int = 1024
    chunk_size: int = 1024
    user_agent: str = f"httpget/{__version__}"
    http_version: str = "HTTP/1.0"

    @classmethod
    def from_timeout(cls, timeout: Union[float, Timeout, None]) -> "ClientConfig":
        """Build a default config with the given timeout."""
        if isinstance(timeout, Timeout):
            return cls(timeout=timeout)
        return cls(timeout=Timeout.from_float(timeout))
