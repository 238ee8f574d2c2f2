"""src/httpget/http/url.py

URL decomposition for Httpget.

Splits a URL string into its generic components::

    <scheme>://<username>:<password>@<host>:<port><path>?<args>#<anchor>

Everything except ``host`` is optional. Components that are missing, or that
matched an empty string, are reported as ``None``; a decomposed record never
holds a zero-length string.

Example::

    from httpget.http import url as urlparser

    with urlparser.init() as context:
        with urlparser.parse(context, "http://example.com/index.html") as url:
            print(url.host, url.fullpath)
"""

import re
from typing import Dict, Iterator, Optional, Tuple

from httpget.exceptions import InvalidArgument, InvalidGrammar, NoMatch, OutOfMemory

__all__ = [
    "URL_PATTERN",
    "URL_FIELDS",
    "ParserContext",
    "DecomposedURL",
    "init",
    "free",
    "parse",
    "release",
]

# RFC 2396 appendix B, reworked so that scheme, credentials and port are
# optional and host is mandatory.
URL_PATTERN = (
    r"(?:(?P<scheme>[^:/?#]+)://)?"
    r"(?:(?P<username>[^:/?#]*)(?::(?P<password>[^/?#]*))?@)?"
    r"(?P<host>[^:/?#]+)"
    r"(?::(?P<port>[0-9]+))?"
    r"(?P<fullpath>"
    r"(?P<path>[^?#]*)?"
    r"(?:\?(?P<args>[^#]*))?"
    r"(?:#(?P<anchor>[^#]*))?"
    r")?"
)

URL_FIELDS: Tuple[str, ...] = (
    "scheme",
    "username",
    "password",
    "host",
    "port",
    "path",
    "args",
    "anchor",
    "fullpath",
)


class ParserContext:
    """
    Holds one compiled instance of the URL grammar.

    A context is immutable once built and may be shared between threads:
    compiled patterns are safe for concurrent matching. Use :func:`init` to
    create one and :func:`free` (or a ``with`` block) to dispose of it.
    """

    __slots__ = ("pattern",)

    def __init__(self) -> None:
        self.pattern: Optional["re.Pattern[str]"] = None

        try:
            self.pattern = re.compile(URL_PATTERN, re.IGNORECASE)

        except MemoryError as e:
            raise OutOfMemory("No memory to compile URL pattern") from e

        except re.error as e:
            raise InvalidGrammar(f"Could not compile URL pattern: {e}") from e

    @property
    def is_ready(self) -> bool:
        """True until the context has been freed."""
        return self.pattern is not None

    def free(self) -> None:
        """Drop the compiled pattern. Safe to call more than once."""
        self.pattern = None

    def parse(self, urlstr: str, into: Optional["DecomposedURL"] = None) -> "DecomposedURL":
        """Shortcut for :func:`parse` with this context."""
        return parse(self, urlstr, into=into)

    def __enter__(self) -> "ParserContext":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.free()

    def __repr__(self) -> str:
        state = "ready" if self.is_ready else "freed"
        return f"<ParserContext {state}>"


class DecomposedURL:
    """
    Decomposed URL record.

    Attributes:
        scheme: Protocol identifier before ``://``.
        username: Identity before ``:password`` or ``@``.
        password: Secret between ``:`` and ``@``.
        host: Host name or IP address, always set after a successful parse.
        port: Port digits, kept as a string. Range checks are up to the caller.
        path: Text after the authority, up to ``?`` or ``#``.
        args: Raw query string without the leading ``?``.
        anchor: Raw fragment without the leading ``#``.
        fullpath: Path, query and fragment exactly as they appeared.
    """

    __slots__ = URL_FIELDS

    def __init__(
        self,
        scheme: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[str] = None,
        path: Optional[str] = None,
        args: Optional[str] = None,
        anchor: Optional[str] = None,
        fullpath: Optional[str] = None,
    ) -> None:
        self.scheme = scheme
        self.username = username
        self.password = password
        self.host = host
        self.port = port
        self.path = path
        self.args = args
        self.anchor = anchor
        self.fullpath = fullpath

    def release(self) -> None:
        """Reset every field to ``None``."""
        for name in URL_FIELDS:
            setattr(self, name, None)

    @property
    def is_empty(self) -> bool:
        """True when no field is set (fresh or released record)."""
        return all(value is None for _, value in self)

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Return the fields as a plain dictionary."""
        return dict(self)

    def __iter__(self) -> Iterator[Tuple[str, Optional[str]]]:
        for name in URL_FIELDS:
            yield name, getattr(self, name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecomposedURL):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    __hash__ = None  # type: ignore[assignment]

    def __enter__(self) -> "DecomposedURL":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={value!r}" for name, value in self if value is not None
        )
        return f"DecomposedURL({fields})"


def init() -> ParserContext:
    """
    Create a parser context with the default URL grammar.

    Raises:
        OutOfMemory: If compiling the pattern ran out of memory.
        InvalidGrammar: If the built-in pattern does not compile.
    """
    return ParserContext()


def free(context: Optional[ParserContext]) -> None:
    """Release a parser context. Accepts ``None`` and already freed contexts."""
    if context is not None:
        context.free()


def release(url: Optional[DecomposedURL]) -> None:
    """Release a decomposed URL. Accepts ``None`` and already released records."""
    if url is not None:
        url.release()


def parse(
    context: ParserContext,
    urlstr: str,
    into: Optional[DecomposedURL] = None,
) -> DecomposedURL:
    """
    Decompose ``urlstr`` into its URL components.

    Args:
        context: Context returned by :func:`init`.
        urlstr: URL string to decompose. May be empty, in which case it fails
            to match since the host is mandatory.
        into: Optional record to populate in place. It is released first and
            is left released if parsing fails.

    Returns:
        The populated record (``into`` when given).

    Raises:
        InvalidArgument: If the context is missing or freed, or ``urlstr``
            is not a string.
        NoMatch: If ``urlstr`` is not an acceptable URL.
        OutOfMemory: If matching or extraction ran out of memory.
    """
    if into is not None:
        into.release()

    if not isinstance(context, ParserContext) or context.pattern is None:
        raise InvalidArgument("A ready parser context is required")

    if not isinstance(urlstr, str):
        raise InvalidArgument(f"URL must be a string, got {type(urlstr).__name__}")

    url = into if into is not None else DecomposedURL()

    try:
        match = context.pattern.fullmatch(urlstr)
        if match is None:
            raise NoMatch(urlstr)

        for name in URL_FIELDS:
            # Empty matches are absent components.
            setattr(url, name, match.group(name) or None)

    except MemoryError as e:
        url.release()
        raise OutOfMemory(f"No memory to decompose URL {urlstr!r}") from e

    except NoMatch:
        url.release()
        raise

    return url
