"""pkgreader: streaming parser for Debian-style package control files."""

from .config import ParserConfig, get_config, set_config
from .errors import LineTooLongError, ParseError, StreamError
from .models import Conffile, FieldMask, StateFlag, StateStatus, StateWant, Version
from .models.package import Package
from .parsing.decompose import parse_conffile, parse_status, parse_version
from .parsing.dispatch import LineResult, ParseSession
from .parsing.stream import LineSource, ParseStatus, iter_packages, parse_control_text, parse_from_stream

__all__ = [
    "Conffile",
    "FieldMask",
    "LineResult",
    "LineSource",
    "LineTooLongError",
    "Package",
    "ParseError",
    "ParseSession",
    "ParseStatus",
    "ParserConfig",
    "StateFlag",
    "StateStatus",
    "StateWant",
    "StreamError",
    "Version",
    "get_config",
    "iter_packages",
    "parse_conffile",
    "parse_control_text",
    "parse_from_stream",
    "parse_status",
    "parse_version",
    "set_config",
]
