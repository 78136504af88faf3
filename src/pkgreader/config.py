"""Process-wide parser configuration."""

import logging

from pydantic import BaseModel, ConfigDict, Field

from pkgreader.arch import ArchPriority, parse_arch_list
from pkgreader.constants import (
    ARCH_LIST_ENV,
    DEFAULT_ARCH_LIST,
    EXCESSIVE_LINE_LEN,
    FORCED_MASK_ENV,
    MAX_LINE_LEN_ENV,
    env_setting,
)
from pkgreader.models.fields import FieldMask

logger = logging.getLogger(__name__)


class ParserConfig(BaseModel):
    """Settings shared by every parse session; read-only while parsing."""

    model_config = ConfigDict(frozen=True)

    arch_list: list[ArchPriority] = Field(default_factory=lambda: parse_arch_list(DEFAULT_ARCH_LIST))
    forced_mask: FieldMask = FieldMask.NONE
    max_line_len: int = Field(default=EXCESSIVE_LINE_LEN, gt=0)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Build a configuration from ``PKGREADER_*`` environment variables.

        Raises:
            ValueError: if a variable holds an invalid value
        """
        max_line_len = env_setting(MAX_LINE_LEN_ENV, str(EXCESSIVE_LINE_LEN))
        try:
            max_line_len = int(max_line_len)
        except ValueError:
            raise ValueError(f"{MAX_LINE_LEN_ENV} must be an integer, got '{max_line_len}'") from None

        config = cls(
            arch_list=parse_arch_list(env_setting(ARCH_LIST_ENV, DEFAULT_ARCH_LIST)),
            forced_mask=FieldMask.from_names(env_setting(FORCED_MASK_ENV, "").split(",")),
            max_line_len=max_line_len,
        )
        logger.debug(f"Loaded parser configuration: {config}")
        return config


_config: ParserConfig | None = None


def get_config() -> ParserConfig:
    """Return the process-wide configuration, loading it from the environment on first use."""
    global _config
    if _config is None:
        _config = ParserConfig.from_env()
    return _config


def set_config(config: ParserConfig | None) -> None:
    """Replace the process-wide configuration; ``None`` reloads it from the environment on next use."""
    global _config
    _config = config
