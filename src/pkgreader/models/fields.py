"""Field-selection mask for control file parsing."""

from collections.abc import Iterable
from enum import Flag


class FieldMask(Flag):
    """One bit per recognized control field.

    A parse pass only populates the fields whose bit is set in the effective mask.
    """

    ARCHITECTURE = 1 << 1
    AUTO_INSTALLED = 1 << 2
    CONFFILES = 1 << 3
    CONFLICTS = 1 << 4
    DESCRIPTION = 1 << 5
    DEPENDS = 1 << 6
    ESSENTIAL = 1 << 7
    FILENAME = 1 << 8
    INSTALLED_SIZE = 1 << 9
    INSTALLED_TIME = 1 << 10
    MD5SUM = 1 << 11
    MAINTAINER = 1 << 12
    PACKAGE = 1 << 13
    PRIORITY = 1 << 14
    PROVIDES = 1 << 15
    PRE_DEPENDS = 1 << 16
    RECOMMENDS = 1 << 17
    REPLACES = 1 << 18
    SECTION = 1 << 19
    SHA256SUM = 1 << 20
    SIZE = 1 << 21
    SOURCE = 1 << 22
    STATUS = 1 << 23
    SUGGESTS = 1 << 24
    TAGS = 1 << 25
    VERSION = 1 << 26

    NONE = 0
    ALL = (1 << 27) - 2

    @classmethod
    def from_name(cls, name: str) -> "FieldMask":
        """Look up a mask bit by control field name (e.g. ``Pre-Depends``) or member name.

        Raises:
            ValueError: if the name does not belong to a recognized field
        """
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown control field: {name!r}") from None

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "FieldMask":
        """Combine several field names into one mask, ignoring empty entries."""
        mask = cls.NONE
        for name in names:
            if name.strip():
                mask |= cls.from_name(name)
        return mask


def effective_mask(requested: FieldMask, forced: FieldMask) -> FieldMask:
    """Fields a parse pass may populate: requested ones that are not forced off."""
    return requested & ~forced
