"""The package record populated from one control paragraph."""

import logging
from collections.abc import Iterable
from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field

from pkgreader.arch import ArchPriority, get_arch_priority
from pkgreader.errors import ParseError
from pkgreader.models.compound import Conffile, Version
from pkgreader.models.state import StateFlag, StateStatus, StateWant
from pkgreader.parsing.decompose import parse_conffile, parse_status, parse_version
from pkgreader.parsing.utils import parse_list, parse_uint

logger = logging.getLogger(__name__)

OptionalStr: TypeAlias = str | None
OptionalInt: TypeAlias = int | None
StrListField = Annotated[list[str], Field(default_factory=list)]

IntField: TypeAlias = Literal["size", "installed_size", "installed_time"]
RelationField: TypeAlias = Literal[
    "depends", "pre_depends", "recommends", "suggests", "conflicts", "replaces", "provides"
]


class Package(BaseModel):
    """Metadata for one package, built up line by line from a control paragraph.

    Scalar fields follow last-write-wins; relation fields and conffiles append. The
    ``set_*``/``add_*`` builders report failure by returning False after logging, so a
    malformed value never aborts a parse.
    """

    name: OptionalStr = None
    architecture: OptionalStr = None
    arch_priority: int = 0

    epoch: int = 0
    version: OptionalStr = None
    revision: OptionalStr = None

    state_want: StateWant | None = None
    state_flag: StateFlag | None = None
    state_status: StateStatus | None = None

    size: OptionalInt = None
    installed_size: OptionalInt = None
    installed_time: OptionalInt = None

    maintainer: OptionalStr = None
    section: OptionalStr = None
    source: OptionalStr = None
    tags: OptionalStr = None
    priority: OptionalStr = None
    filename: OptionalStr = None
    md5sum: OptionalStr = None
    sha256sum: OptionalStr = None

    depends: StrListField
    pre_depends: StrListField
    recommends: StrListField
    suggests: StrListField
    conflicts: StrListField
    replaces: StrListField
    provides: StrListField

    description: OptionalStr = None
    conffiles: list[Conffile] = Field(default_factory=list)

    essential: bool = False
    auto_installed: bool = False

    @property
    def full_version(self) -> str | None:
        """The version reassembled as ``[epoch:]version[-revision]``, if one was parsed."""
        if self.version is None:
            return None
        return str(Version(epoch=self.epoch, version=self.version, revision=self.revision))

    @property
    def status(self) -> str | None:
        """The status triple as written in a ``Status`` field, if all three parts are set."""
        if self.state_want is None or self.state_flag is None or self.state_status is None:
            return None
        return " ".join(str(state) for state in (self.state_want, self.state_flag, self.state_status))

    def set_version(self, value: str) -> bool:
        version = parse_version(value, package=self.name)
        self.epoch = version.epoch
        self.version = version.version
        self.revision = version.revision
        return True

    def set_status(self, value: str) -> bool:
        try:
            self.state_want, self.state_flag, self.state_status = parse_status(value)
        except ParseError as e:
            logger.error(f"Failed to parse Status line for {self.name}: {e}")
            return False
        return True

    def add_conffile(self, line: str) -> bool:
        try:
            conffile = parse_conffile(line)
        except ParseError as e:
            logger.error(f"Failed to parse Conffiles line for {self.name}: {e}")
            return False
        self.conffiles.append(conffile)
        return True

    def set_architecture(self, arch: str, arch_list: Iterable[ArchPriority]) -> bool:
        """Set the architecture and annotate the record with its priority."""
        self.architecture = arch
        self.arch_priority = get_arch_priority(arch, arch_list)
        return True

    def set_int(self, field: IntField, value: str) -> bool:
        try:
            setattr(self, field, parse_uint(value))
        except ParseError as e:
            logger.error(f"Failed to parse {field} for {self.name}: {e}")
            return False
        return True

    def extend_relation(self, field: RelationField, value: str) -> bool:
        """Append the comma-separated relations in ``value`` to a relation field."""
        getattr(self, field).extend(parse_list(value, ","))
        return True
