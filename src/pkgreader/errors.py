"""Errors raised while reading control files."""


class ParseError(ValueError):
    """Raised when a recognized field carries a malformed value."""


class StreamError(OSError):
    """Raised when a record stream cannot be read to its end."""


class LineTooLongError(StreamError):
    """Raised when a line exceeds the configured maximum length."""

    def __init__(self, lineno: int, limit: int):
        super().__init__(f"Excessively long line at {lineno} (over {limit} characters). Corrupt file?")
        self.lineno = lineno
        self.limit = limit
