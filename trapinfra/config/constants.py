"""
Configuration-related constants and resource limits.
"""

# Environment variables read by TrapConfig.from_env
ENV_APPEND = "TRAP_APPEND"
ENV_EDIT_PAUSED = "TRAP_EDIT_PAUSED"
ENV_LOG_LEVEL = "TRAP_LOG_LEVEL"

# Section of a YAML file holding trap settings
DEFAULT_SECTION = "trap"

# Maximum config file size (1MB)
MAX_CONFIG_SIZE_BYTES = 1024 * 1024
