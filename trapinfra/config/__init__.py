from .config import TrapConfig
from .constants import (
    DEFAULT_SECTION,
    ENV_APPEND,
    ENV_EDIT_PAUSED,
    ENV_LOG_LEVEL,
    MAX_CONFIG_SIZE_BYTES,
)

__all__ = [
    "TrapConfig",
    "DEFAULT_SECTION",
    "ENV_APPEND",
    "ENV_EDIT_PAUSED",
    "ENV_LOG_LEVEL",
    "MAX_CONFIG_SIZE_BYTES",
]
