"""Core infrastructure for wolf-inv."""

from .config import WolfConfig, find_config_path, load_config
from .errors import (
    ConfigError,
    DecodeError,
    InventoryError,
    RemoteError,
    TransportError,
    WolfInvError,
)

__all__ = [
    # Config
    "WolfConfig",
    "find_config_path",
    "load_config",
    # Errors
    "WolfInvError",
    "ConfigError",
    "InventoryError",
    "TransportError",
    "RemoteError",
    "DecodeError",
]
