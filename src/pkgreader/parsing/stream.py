"""Reading package records from control file streams."""

import gzip
import io
import logging
import zlib
from collections.abc import Iterable, Iterator
from enum import IntEnum
from pathlib import Path
from typing import TextIO

from pkgreader.config import ParserConfig, get_config
from pkgreader.errors import LineTooLongError, StreamError
from pkgreader.models.fields import FieldMask
from pkgreader.models.package import Package
from pkgreader.parsing.dispatch import LineResult, ParseSession

logger = logging.getLogger(__name__)


class ParseStatus(IntEnum):
    """Outcome of reading one record from a stream."""

    ERROR = -1
    RECORD = 0
    EMPTY = 1


class LineSource:
    """Iterate over the lines of a text stream, without their trailing newline.

    A final line lacking its newline is still returned, with a warning. A line longer than
    ``max_line_len`` raises :class:`~pkgreader.errors.LineTooLongError` and ends the source.
    Truncated or corrupt compressed input raises :class:`~pkgreader.errors.StreamError`.
    """

    def __init__(self, stream: TextIO, max_line_len: int | None = None, name: str | None = None):
        self._stream = stream
        self.max_line_len = max_line_len or get_config().max_line_len
        self.name = name or getattr(stream, "name", None) or "<stream>"
        self.lineno = 0
        self.exhausted = False

    def __iter__(self) -> "LineSource":
        return self

    def __next__(self) -> str:
        if self.exhausted:
            raise StopIteration

        try:
            line = self._stream.readline(self.max_line_len + 1)
        except (EOFError, zlib.error) as e:
            self.exhausted = True
            raise StreamError(f"{self.name}: corrupt or truncated data after line {self.lineno}: {e}") from e
        if not line:
            self.exhausted = True
            raise StopIteration

        self.lineno += 1
        if line.endswith("\n"):
            return line[:-1]

        self.exhausted = True
        if len(line) > self.max_line_len:
            raise LineTooLongError(self.lineno, self.max_line_len)

        logger.warning(f"{self.name}: missing newline character at end of file")
        return line


def parse_from_stream(
    package: Package,
    source: Iterable[str],
    mask: FieldMask = FieldMask.ALL,
    config: ParserConfig | None = None,
) -> ParseStatus:
    """Populate ``package`` from ``source`` until a blank line or the end of input.

    Args:
        package: The record to populate
        source: Logical lines without terminators; a :class:`LineSource` for files
        mask: Fields to populate; fields in the configured forced mask are always skipped
        config: Parser configuration, the process-wide one by default

    Returns:
        RECORD if a named package was read, EMPTY if the lines held no package name (e.g.
        trailing blank lines), ERROR if the source could not be read
    """
    session = ParseSession(package, mask, config)
    try:
        for line in source:
            if session.feed(line) is LineResult.END_OF_RECORD:
                break
    except OSError as e:
        logger.error(f"Failed to read control data: {e}")
        return ParseStatus.ERROR
    finally:
        session.finish()

    if package.name is None:
        return ParseStatus.EMPTY
    logger.debug(f"Parsed package {package.name} {package.full_version or ''}".rstrip())
    return ParseStatus.RECORD


def open_control_file(path: Path) -> TextIO:
    """Open a control file, plain or gzip-compressed, as text."""
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8", errors="ignore")
    return path.open("rt", encoding="utf-8", errors="ignore")


def iter_packages(
    source: LineSource | TextIO | Path | str,
    mask: FieldMask = FieldMask.ALL,
    config: ParserConfig | None = None,
) -> Iterator[Package]:
    """Stream every package record from a control file.

    Args:
        source: A path, an open text stream, or a :class:`LineSource`
        mask: Fields to populate
        config: Parser configuration, the process-wide one by default

    Raises:
        StreamError: if the input cannot be read to its end
    """
    if isinstance(source, str | Path):
        with open_control_file(Path(source)) as handle:
            yield from iter_packages(handle, mask, config)
        return

    config = config or get_config()
    if not isinstance(source, LineSource):
        source = LineSource(source, max_line_len=config.max_line_len)

    while not source.exhausted:
        package = Package()
        status = parse_from_stream(package, source, mask, config)
        if status is ParseStatus.ERROR:
            raise StreamError(f"{source.name}: unable to read records past line {source.lineno}")
        if status is ParseStatus.RECORD:
            yield package


def parse_control_text(
    text: str,
    mask: FieldMask = FieldMask.ALL,
    config: ParserConfig | None = None,
) -> list[Package]:
    """Parse every package record in an in-memory control text."""
    return list(iter_packages(io.StringIO(text), mask, config))
