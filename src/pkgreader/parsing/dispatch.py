"""Per-line field dispatch for control paragraphs.

Each recognized field is described by a :class:`FieldSpec` in :data:`FIELDS`. Lines are routed by
their first character to the few specs that can match, then by a ``Name:`` prefix compare.
``Description`` and ``Conffiles`` span several lines; their state lives in a :class:`ParseSession`,
which is created for one record and thrown away afterwards.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum, IntEnum, auto

from pkgreader.config import ParserConfig, get_config
from pkgreader.models.fields import FieldMask, effective_mask
from pkgreader.models.package import Package
from pkgreader.parsing.utils import is_field, line_is_blank, parse_simple

logger = logging.getLogger(__name__)


class FieldKind(Enum):
    """How a field's value is stored on the record."""

    STRING = auto()
    UINT = auto()
    YES_NO = auto()
    RELATION = auto()
    ARCHITECTURE = auto()
    VERSION = auto()
    STATUS = auto()
    DESCRIPTION = auto()
    CONFFILES = auto()


@dataclass(frozen=True)
class FieldSpec:
    name: str
    mask: FieldMask
    kind: FieldKind
    attr: str | None = None


FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("Architecture", FieldMask.ARCHITECTURE, FieldKind.ARCHITECTURE, "architecture"),
    FieldSpec("Auto-Installed", FieldMask.AUTO_INSTALLED, FieldKind.YES_NO, "auto_installed"),
    FieldSpec("Conffiles", FieldMask.CONFFILES, FieldKind.CONFFILES, "conffiles"),
    FieldSpec("Conflicts", FieldMask.CONFLICTS, FieldKind.RELATION, "conflicts"),
    FieldSpec("Description", FieldMask.DESCRIPTION, FieldKind.DESCRIPTION, "description"),
    FieldSpec("Depends", FieldMask.DEPENDS, FieldKind.RELATION, "depends"),
    FieldSpec("Essential", FieldMask.ESSENTIAL, FieldKind.YES_NO, "essential"),
    FieldSpec("Filename", FieldMask.FILENAME, FieldKind.STRING, "filename"),
    FieldSpec("Installed-Size", FieldMask.INSTALLED_SIZE, FieldKind.UINT, "installed_size"),
    FieldSpec("Installed-Time", FieldMask.INSTALLED_TIME, FieldKind.UINT, "installed_time"),
    FieldSpec("MD5sum", FieldMask.MD5SUM, FieldKind.STRING, "md5sum"),
    # status files written by older package managers used this casing
    FieldSpec("MD5Sum", FieldMask.MD5SUM, FieldKind.STRING, "md5sum"),
    FieldSpec("Maintainer", FieldMask.MAINTAINER, FieldKind.STRING, "maintainer"),
    FieldSpec("Package", FieldMask.PACKAGE, FieldKind.STRING, "name"),
    FieldSpec("Priority", FieldMask.PRIORITY, FieldKind.STRING, "priority"),
    FieldSpec("Provides", FieldMask.PROVIDES, FieldKind.RELATION, "provides"),
    FieldSpec("Pre-Depends", FieldMask.PRE_DEPENDS, FieldKind.RELATION, "pre_depends"),
    FieldSpec("Recommends", FieldMask.RECOMMENDS, FieldKind.RELATION, "recommends"),
    FieldSpec("Replaces", FieldMask.REPLACES, FieldKind.RELATION, "replaces"),
    FieldSpec("Section", FieldMask.SECTION, FieldKind.STRING, "section"),
    FieldSpec("SHA256sum", FieldMask.SHA256SUM, FieldKind.STRING, "sha256sum"),
    FieldSpec("Size", FieldMask.SIZE, FieldKind.UINT, "size"),
    FieldSpec("Source", FieldMask.SOURCE, FieldKind.STRING, "source"),
    FieldSpec("Status", FieldMask.STATUS, FieldKind.STATUS, "status"),
    FieldSpec("Suggests", FieldMask.SUGGESTS, FieldKind.RELATION, "suggests"),
    FieldSpec("Tags", FieldMask.TAGS, FieldKind.STRING, "tags"),
    FieldSpec("Version", FieldMask.VERSION, FieldKind.VERSION, "version"),
)


def _group_by_initial(fields: tuple[FieldSpec, ...]) -> dict[str, tuple[FieldSpec, ...]]:
    grouped: dict[str, list[FieldSpec]] = defaultdict(list)
    for spec in fields:
        grouped[spec.name[0]].append(spec)
    return {initial: tuple(specs) for initial, specs in grouped.items()}


FIELDS_BY_INITIAL = _group_by_initial(FIELDS)


class LineResult(IntEnum):
    ERROR = -1
    CONTINUE = 0
    END_OF_RECORD = 1


class ParseSession:
    """Continuation state for parsing a single record.

    At most one of ``reading_description`` and ``reading_conffiles`` is set. A session must not
    be shared between records; once it has seen the end of its record it refuses more lines.
    """

    def __init__(
        self,
        package: Package,
        mask: FieldMask = FieldMask.ALL,
        config: ParserConfig | None = None,
    ):
        self.package = package
        self.config = config or get_config()
        self.mask = effective_mask(mask, self.config.forced_mask)
        self.reading_conffiles = False
        self.reading_description = False
        self.finished = False
        self._description: list[str] | None = None

    def feed(self, line: str) -> LineResult:
        """Apply one logical line (without its newline) to the record.

        Returns:
            END_OF_RECORD on a blank line, ERROR if a recognized field held a malformed value,
            CONTINUE otherwise
        """
        if self.finished:
            raise RuntimeError("Parse session already finished; start a new one for the next record")

        if line.startswith(" ") and (self.reading_description or self.reading_conffiles):
            result = self._feed_continuation(line)
            if result is not None:
                return result

        spec = self._match(line)
        if spec is None:
            result = LineResult.END_OF_RECORD if line_is_blank(line) else LineResult.CONTINUE
        elif spec.kind in (FieldKind.DESCRIPTION, FieldKind.CONFFILES):
            self._start_continuation(spec, line)
            return LineResult.CONTINUE
        else:
            result = LineResult.CONTINUE if self._apply(spec, line) else LineResult.ERROR

        self._end_continuation()
        if result is LineResult.END_OF_RECORD:
            self.finished = True
        return result

    def finish(self) -> None:
        """Commit any pending multi-line value; called when the input runs out mid-record."""
        self._end_continuation()
        self.finished = True

    def _match(self, line: str) -> FieldSpec | None:
        for spec in FIELDS_BY_INITIAL.get(line[:1], ()):
            if not is_field(spec.name, line):
                continue
            if spec.mask in self.mask:
                return spec
            logger.debug("Skipping masked field %s for %s", spec.name, self.package.name)
        return None

    def _apply(self, spec: FieldSpec, line: str) -> bool:
        package = self.package
        value = parse_simple(spec.name, line)
        match spec.kind:
            case FieldKind.STRING:
                setattr(package, spec.attr, value)
                return True
            case FieldKind.UINT:
                return package.set_int(spec.attr, value)
            case FieldKind.YES_NO:
                if value == "yes":
                    setattr(package, spec.attr, True)
                return True
            case FieldKind.RELATION:
                return package.extend_relation(spec.attr, value)
            case FieldKind.ARCHITECTURE:
                return package.set_architecture(value, self.config.arch_list)
            case FieldKind.VERSION:
                return package.set_version(value)
            case FieldKind.STATUS:
                return package.set_status(value)
            case _:
                raise ValueError(f"Field {spec.name} is not a single-line field")

    def _start_continuation(self, spec: FieldSpec, line: str) -> None:
        self._commit_description()
        if spec.kind is FieldKind.DESCRIPTION:
            self._description = [parse_simple(spec.name, line)]
            self.reading_description = True
            self.reading_conffiles = False
        else:
            self.reading_conffiles = True
            self.reading_description = False

    def _feed_continuation(self, line: str) -> LineResult | None:
        if self.reading_description and FieldMask.DESCRIPTION in self.mask:
            self._description.append(line)
            return LineResult.CONTINUE
        if self.reading_conffiles and FieldMask.CONFFILES in self.mask:
            return LineResult.CONTINUE if self.package.add_conffile(line) else LineResult.ERROR
        return None

    def _commit_description(self) -> None:
        if self._description is not None:
            self.package.description = "\n".join(self._description)
            self._description = None
        self.reading_description = False

    def _end_continuation(self) -> None:
        self._commit_description()
        self.reading_conffiles = False
