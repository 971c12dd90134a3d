"""Config loading and schema."""

from .loader import CONFIG_ENV_VAR, ConfigLoadError, load_config, resolve_config_path
from .schema import PoolEntry, WheelConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigLoadError",
    "PoolEntry",
    "WheelConfig",
    "load_config",
    "resolve_config_path",
]
