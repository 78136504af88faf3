"""Decomposers for compound fields: versions, status triples and conffile entries."""

import logging

from pkgreader.errors import ParseError
from pkgreader.models.compound import Conffile, Version
from pkgreader.models.state import StateFlag, StateStatus, StateWant

logger = logging.getLogger(__name__)


def _strip_field_name(name: str, value: str) -> str:
    prefix = f"{name}:"
    if value.startswith(prefix):
        value = value[len(prefix) :]
    return value.strip()


def parse_version(value: str, package: str | None = None) -> Version:
    """Split a version string into epoch, upstream version and revision.

    The value may still carry its ``Version:`` prefix. Text before the first colon is the
    epoch; an epoch that is not an unsigned integer is logged and left at 0. Text after the
    last hyphen is the revision. An explicit zero epoch is not recorded, so ``"0:1.0-1"`` and
    ``"1.0-1"`` decompose to the same version and both reassemble as ``"1.0-1"``.

    Args:
        value: Raw version value (e.g. ``"2:1.4.2-3"`` or ``"Version: 1.4.2"``)
        package: Package name used in log messages

    Returns:
        The decomposed version

    Examples:
        >>> str(parse_version("Version: 2:1.4.2-3"))
        '2:1.4.2-3'
    """
    text = _strip_field_name("Version", value)
    epoch = 0

    epoch_text, colon, rest = text.partition(":")
    if colon:
        if epoch_text.isdecimal():
            epoch = int(epoch_text)
        else:
            logger.warning(f"{package}: invalid epoch '{epoch_text}' in version '{text}'")
        text = rest

    upstream, hyphen, revision = text.rpartition("-")
    if not hyphen:
        return Version(epoch=epoch, version=text)
    return Version(epoch=epoch, version=upstream, revision=revision)


def parse_status(value: str) -> tuple[StateWant, StateFlag, StateStatus]:
    """Split a status value into its want, flag and status codes.

    Raises:
        ParseError: if the value does not hold exactly three tokens
    """
    tokens = _strip_field_name("Status", value).split()
    if len(tokens) != 3:
        raise ParseError(f"Expected 3 status tokens, got {len(tokens)}: '{value}'")

    want, flag, status = tokens
    return StateWant.from_str(want), StateFlag.from_str(flag), StateStatus.from_str(status)


def parse_conffile(line: str) -> Conffile:
    """Split a ``Conffiles`` continuation line into path and checksum.

    Raises:
        ParseError: if the line does not hold exactly two tokens
    """
    tokens = line.split()
    if len(tokens) != 2:
        raise ParseError(f"Expected path and checksum, got {len(tokens)} tokens: '{line.strip()}'")

    path, md5sum = tokens
    return Conffile(path=path, md5sum=md5sum)
