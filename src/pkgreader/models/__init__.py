"""Value types for parsed control data.

The record itself lives in :mod:`pkgreader.models.package`, which depends on the parsers.
"""

from .compound import Conffile, Version
from .fields import FieldMask, effective_mask
from .state import StateFlag, StateStatus, StateWant

__all__ = [
    "Conffile",
    "FieldMask",
    "StateFlag",
    "StateStatus",
    "StateWant",
    "Version",
    "effective_mask",
]
