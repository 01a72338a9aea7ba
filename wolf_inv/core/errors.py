"""Error types raised by configuration loading and the inventory client."""

from typing import Optional


class WolfInvError(Exception):
    """Base class for all wolf-inv errors."""


class ConfigError(WolfInvError):
    """Configuration is missing, unreadable or invalid. Fatal at startup."""


class InventoryError(WolfInvError):
    """A remote inventory call failed. Never fatal to the session."""


class TransportError(InventoryError):
    """No response was obtained from the service."""


class RemoteError(InventoryError):
    """The service answered with a non-success status code."""

    def __init__(self, message: str, status_code: int, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(InventoryError):
    """The response body could not be decoded."""
