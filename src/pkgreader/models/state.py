"""Package state codes carried by the ``Status`` field."""

import logging
from enum import Flag, IntEnum

logger = logging.getLogger(__name__)


class StateWant(IntEnum):
    """What the user asked for the package."""

    UNKNOWN = 1
    INSTALL = 2
    DEINSTALL = 3
    PURGE = 4

    @classmethod
    def from_str(cls, text: str) -> "StateWant":
        try:
            return cls[text.upper()]
        except KeyError:
            logger.debug(f"Unrecognized want state '{text}', using 'unknown'")
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.name.lower()


class StateFlag(Flag):
    """Flag bits; ``ok`` is the empty set and several flags are comma-joined."""

    OK = 0
    REINSTREQ = 1
    HOLD = 2
    REPLACE = 4
    NOPRUNE = 8
    PREFER = 16
    OBSOLETE = 32
    USER = 256

    @classmethod
    def from_str(cls, text: str) -> "StateFlag":
        """Parse ``ok`` or a comma-separated flag list such as ``hold,user``."""
        flags = cls.OK
        for token in text.split(","):
            token = token.strip()
            if not token or token == "ok":
                continue
            try:
                flags |= cls[token.upper()]
            except KeyError:
                logger.debug(f"Ignoring unrecognized state flag '{token}'")
        return flags

    def __str__(self) -> str:
        if not self:
            return "ok"
        return ",".join(member.name.lower() for member in type(self) if member and member in self)


class StateStatus(IntEnum):
    """Where the package is in its install lifecycle."""

    NOT_INSTALLED = 1
    UNPACKED = 2
    HALF_CONFIGURED = 3
    INSTALLED = 4
    HALF_INSTALLED = 5
    CONFIG_FILES = 6
    POST_INST_FAILED = 7
    REMOVAL_FAILED = 8

    @classmethod
    def from_str(cls, text: str) -> "StateStatus":
        try:
            return cls[text.upper().replace("-", "_")]
        except KeyError:
            logger.debug(f"Unrecognized status '{text}', using 'not-installed'")
            return cls.NOT_INSTALLED

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")
