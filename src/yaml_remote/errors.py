"""Exception hierarchy for the fetch and decode phases.

Both exceptions are internal to the load pipeline: RemoteYamlLoader
captures them into tagged LoadResult values so they never escape
load(). Direct users of a fetcher or decoder see them raised.
"""

from __future__ import annotations


class YamlRemoteError(Exception):
    """Base class for errors raised by fetchers and decoders."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class FetchError(YamlRemoteError):
    """Raised when the HTTP exchange fails.

    Covers network failures, timeouts, and non-2xx responses.

    Attributes:
        message: Human-readable description of the failure.
        status_code: HTTP status when a response was received, else None.
        url: The URL that was requested, if known.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class YAMLDecodeError(YamlRemoteError):
    """Raised when response text cannot be decoded as YAML.

    Attributes:
        message: Human-readable description of the syntax error.
        line: 1-indexed line number where the error occurred.
        column: 1-indexed column number where the error occurred.
        source_name: Name of the document being decoded (usually the URL).
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        source_name: str = "<string>",
    ) -> None:
        self.line = line
        self.column = column
        self.source_name = source_name
        super().__init__(message)
