"""
httpget CLI entry point.

Usage:
    httpget URL                      # Write URL contents to stdout
    httpget URL index.html           # Write URL contents to a file
    httpget URL --timeout 10 -v      # Connect/read timeout, debug logging

Only plain http URLs without credentials are accepted. Proxies are not
supported.
"""

import argparse
import errno
import logging
import sys
from typing import IO, List, Optional

from httpget.client.request import fetch
from httpget.config import ClientConfig
from httpget.exceptions import RequestError, UnsupportedURLError, URLError
from httpget.version import __version__

logger = logging.getLogger("httpget")


def build_parser() -> argparse.ArgumentParser:
    """Command line options."""
    parser = argparse.ArgumentParser(
        prog="httpget",
        description="httpget - simple HTTP client to download URL contents",
    )
    parser.add_argument(
        "url",
        help="HTTP url to download. Proxy is not supported.",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="Optional file name to store URL contents in. Uses stdout if not specified.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Connect and read timeout in seconds (default: none)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--version", action="version", version=f"httpget {__version__}")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Log to stderr so stdout stays free for the downloaded body."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def download(urlstr: str, output: Optional[str], config: ClientConfig) -> int:
    """Fetch ``urlstr`` into ``output`` (stdout when None) and return an exit status."""
    opened: List[IO[bytes]] = []

    def open_output() -> IO[bytes]:
        # Called only once the server replied 200
        if output is None:
            return sys.stdout.buffer

        stream = open(output, "wb")
        opened.append(stream)
        return stream

    try:
        try:
            fetch(urlstr, open_output, config=config)
            if output is None:
                sys.stdout.buffer.flush()
        finally:
            for stream in opened:
                stream.close()

    except URLError as e:
        logger.error("Could not parse URL '%s': %s", urlstr, e)
        return errno.EINVAL

    except UnsupportedURLError as e:
        logger.error("%s", e)
        return errno.ENOTSUP

    except RequestError as e:
        logger.error("%s", e)
        return 1

    except OSError as e:
        if output is not None and not opened:
            logger.error("Could not open output file '%s': %s", output, e)
        else:
            logger.error("Could not write output: %s", e)
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help and --version exit 0, usage errors exit EINVAL
        return errno.EINVAL if e.code else 0

    configure_logging(verbose=args.verbose, quiet=args.quiet)
    config = ClientConfig.from_timeout(args.timeout)

    try:
        return download(args.url, args.output, config)
    except KeyboardInterrupt:
        print("Terminated by signal", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
