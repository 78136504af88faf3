from os import getenv

# architectures every build can install, in priority order
DEFAULT_ARCH_LIST = "all:1 noarch:1"

# longest line a control file may carry before it is treated as corrupt
EXCESSIVE_LINE_LEN = 4096 << 8

ARCH_LIST_ENV = "PKGREADER_ARCH_LIST"
FORCED_MASK_ENV = "PKGREADER_FORCED_MASK"
MAX_LINE_LEN_ENV = "PKGREADER_MAX_LINE_LEN"


def env_setting(name: str, default: str) -> str:
    """Read a setting from the environment, falling back to ``default`` when unset or empty."""
    return getenv(name) or default
