"""src/httpget/transport/__init__.py

Transport layer module for Httpget.

This module provides blocking TCP connection management with line and chunk
oriented receive helpers.
"""

from .connection import Connection

__all__ = ["Connection"]
