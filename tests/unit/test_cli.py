"""tests/unit/test_cli.py

Unit tests for the httpget command line entry point.
"""

import errno
import logging
from unittest import mock

import pytest

from httpget.__main__ import build_parser, configure_logging, main
from httpget.config import Timeout
from httpget.exceptions import (
    HTTPStatusError,
    NetworkError,
    NoMatch,
    UnsupportedURLError,
)
from httpget.version import __version__


@pytest.fixture
def mock_fetch():
    """Patch fetch() as seen by the CLI."""
    with mock.patch("httpget.__main__.fetch") as patched:
        yield patched


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from reconfiguring the root logger during tests."""
    with mock.patch("httpget.__main__.logging.basicConfig"):
        yield


class TestArguments:
    """Tests for argument parsing."""

    def test_url_only(self):
        """Test output defaults to stdout."""
        args = build_parser().parse_args(["http://example.com"])

        assert args.url == "http://example.com"
        assert args.output is None
        assert args.timeout is None

    def test_url_and_output(self):
        """Test the optional output file."""
        args = build_parser().parse_args(["example.com", "out.html", "--timeout", "2.5"])

        assert args.output == "out.html"
        assert args.timeout == 2.5

    def test_missing_url(self, mock_fetch):
        """Test a missing URL is a usage error."""
        assert main([]) == errno.EINVAL
        mock_fetch.assert_not_called()

    def test_too_many_arguments(self, mock_fetch):
        """Test extra positional arguments are a usage error."""
        assert main(["a", "b", "c"]) == errno.EINVAL
        mock_fetch.assert_not_called()

    def test_version(self, capsys):
        """Test --version prints the version and succeeds."""
        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_verbose_and_quiet_exclusive(self):
        """Test -v and -q cannot be combined."""
        assert main(["-v", "-q", "example.com"]) == errno.EINVAL


class TestLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        "verbose, quiet, level",
        [
            (False, False, logging.INFO),
            (True, False, logging.DEBUG),
            (False, True, logging.WARNING),
        ],
    )
    def test_levels(self, verbose, quiet, level):
        """Test verbosity flags select the log level."""
        configure_logging(verbose=verbose, quiet=quiet)

        logging.basicConfig.assert_called_once()
        assert logging.basicConfig.call_args.kwargs["level"] == level


def write_payload(urlstr, output, config=None):
    """Stand-in for fetch() that opens the output and writes a body."""
    output().write(b"payload")


class TestDownload:
    """Tests for main() running a download."""

    def test_writes_to_file(self, mock_fetch, tmp_path):
        """Test the body goes to the named output file."""
        mock_fetch.side_effect = write_payload
        target = tmp_path / "out.bin"

        assert main(["http://example.com/", str(target), "--timeout", "3"]) == 0
        assert target.read_bytes() == b"payload"

        config = mock_fetch.call_args.kwargs["config"]
        assert config.timeout == Timeout(connect=3.0, read=3.0, total=3.0)

    def test_writes_to_stdout(self, mock_fetch, capsysbinary):
        """Test the body goes to stdout when no output file is given."""
        mock_fetch.side_effect = write_payload

        assert main(["http://example.com/"]) == 0
        assert capsysbinary.readouterr().out == b"payload"

    @pytest.mark.parametrize(
        "error, status",
        [
            (NoMatch(""), errno.EINVAL),
            (UnsupportedURLError("Scheme 'ftp' is not supported"), errno.ENOTSUP),
            (NetworkError("Connection refused"), 1),
            (HTTPStatusError(404, "Not"), 1),
        ],
    )
    def test_error_exit_status(self, mock_fetch, error, status, tmp_path):
        """Test failures map to exit statuses."""
        mock_fetch.side_effect = error

        assert main(["example.com", str(tmp_path / "out")]) == status
        assert not (tmp_path / "out").exists()

    def test_unwritable_output(self, mock_fetch, tmp_path, caplog):
        """Test an output path that cannot be opened."""
        mock_fetch.side_effect = write_payload
        target = tmp_path / "missing" / "out"

        assert main(["example.com", str(target)]) == 1
        assert f"Could not open output file '{target}'" in caplog.text

    def test_stdout_write_failure(self, mock_fetch, caplog):
        """Test a broken stdout is reported as a write failure."""
        mock_fetch.side_effect = BrokenPipeError(32, "Broken pipe")

        assert main(["example.com"]) == 1
        assert "Could not write output" in caplog.text
        assert "Could not open output file" not in caplog.text

    def test_interrupted(self, mock_fetch, capsys, tmp_path):
        """Test Ctrl-C ends the download with a message."""
        mock_fetch.side_effect = KeyboardInterrupt

        assert main(["example.com", str(tmp_path / "out")]) == 1
        assert "Terminated by signal" in capsys.readouterr().err


class TestOutputPreserved:
    """Failed downloads leave the output file alone."""

    @pytest.fixture
    def target(self, tmp_path):
        """An existing output file with content."""
        path = tmp_path / "page.html"
        path.write_bytes(b"precious")
        return path

    def test_unsupported_scheme(self, target):
        """Test an ftp URL does not truncate the output."""
        assert main(["ftp://example.com/x", str(target)]) == errno.ENOTSUP
        assert target.read_bytes() == b"precious"

    def test_credentials(self, target):
        """Test a URL with credentials does not truncate the output."""
        assert main(["root@example.com/x", str(target)]) == errno.ENOTSUP
        assert target.read_bytes() == b"precious"

    def test_request_line_injection(self, target):
        """Test a URL with CRLF in its path is refused without a traceback."""
        assert main(["example.com/a\r\nX-Injected: 1", str(target)]) == errno.ENOTSUP
        assert target.read_bytes() == b"precious"

    def test_unparsable_url_creates_nothing(self, tmp_path):
        """Test an empty URL does not create the output file."""
        target = tmp_path / "new.html"

        assert main(["", str(target)]) == errno.EINVAL
        assert not target.exists()

    def test_error_status(self, target):
        """Test a 404 reply does not truncate the output."""
        conn = mock.MagicMock()
        conn.__enter__.return_value = conn
        conn.recv_line.side_effect = [b"HTTP/1.0 404 Not Found\r\n"]

        with mock.patch("httpget.client.request.Connection", return_value=conn):
            assert main(["http://example.com/missing", str(target)]) == 1

        conn.sendall.assert_called_once()
        assert target.read_bytes() == b"precious"
