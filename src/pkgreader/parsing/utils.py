"""Small helpers for pulling values out of control lines."""

from pkgreader.errors import ParseError


def is_field(name: str, line: str) -> bool:
    """Check whether ``line`` is a ``name:`` header (case-sensitive)."""
    return line.startswith(name) and line[len(name) : len(name) + 1] == ":"


def parse_simple(name: str, line: str) -> str:
    """Return the value of a ``name: value`` line, stripped of the separator and whitespace."""
    return line[len(name) + 1 :].strip()


def parse_list(value: str, delimiter: str = ",") -> list[str]:
    """Split a multi-value field into trimmed items, dropping empty ones.

    Args:
        value: The raw field value (e.g. ``"libc6 (>= 2.34), zlib1g"``)
        delimiter: The item separator

    Returns:
        The items in input order
    """
    return [item.strip() for item in value.split(delimiter) if item.strip()]


def parse_uint(value: str) -> int:
    """Parse an unsigned integer written in decimal or ``0x`` hexadecimal.

    Raises:
        ParseError: if the value is not an unsigned integer
    """
    text = value.strip()
    if text.isdecimal():
        return int(text)
    if text[:2].lower() == "0x":
        try:
            return int(text, 16)
        except ValueError:
            raise ParseError(f"Invalid unsigned integer '{value}'") from None
    raise ParseError(f"Invalid unsigned integer '{value}'")


def line_is_blank(line: str) -> bool:
    return not line.strip()
