"""utils/validators.py

Validation utilities for Httpget.
"""

from typing import Optional

from httpget.exceptions import UnsupportedURLError
from httpget.http.url import DecomposedURL

SUPPORTED_SCHEMES = ("http",)


def is_supported_scheme(scheme: Optional[str]) -> bool:
    """A missing scheme counts as http."""
    return scheme is None or scheme.lower() in SUPPORTED_SCHEMES


def validate_target(url: DecomposedURL) -> None:
    """
    Check that the client can fetch ``url``.

    Raises:
        UnsupportedURLError: For schemes other than http, or when
            credentials are present since authentication is not implemented.
    """
    if not is_supported_scheme(url.scheme):
        raise UnsupportedURLError(f"Scheme '{url.scheme}' is not supported")

    if url.username is not None or url.password is not None:
        raise UnsupportedURLError("Authentication is not supported")
