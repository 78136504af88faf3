"""Architecture priority lookup."""

from collections.abc import Iterable

from pydantic import BaseModel


class ArchPriority(BaseModel):
    """An installable architecture and its priority; higher wins between same-named packages."""

    name: str
    priority: int = 0


def get_arch_priority(arch: str, arch_list: Iterable[ArchPriority]) -> int:
    """Return the priority of the first entry named exactly ``arch``, or 0 if there is none."""
    for entry in arch_list:
        if entry.name == arch:
            return entry.priority
    return 0


def parse_arch_list(text: str) -> list[ArchPriority]:
    """Parse ``name:priority`` entries separated by whitespace or commas.

    Args:
        text: The entries (e.g., ``"all:1 noarch:1 armv7a:10"``)

    Returns:
        The entries in the given order

    Raises:
        ValueError: if an entry has no name or its priority is not an integer
    """
    entries = []
    for token in text.replace(",", " ").split():
        name, _, priority = token.partition(":")
        if not name:
            raise ValueError(f"Architecture entry without a name: '{token}'")
        try:
            entries.append(ArchPriority(name=name, priority=int(priority, 0) if priority else 0))
        except ValueError:
            raise ValueError(f"Invalid priority for architecture '{name}': '{priority}'") from None
    return entries
