"""Events delivered to the session controller, one at a time."""

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from ..types.inventory import InventoryEntry


@dataclass(frozen=True)
class KeyPressed:
    """A key press: a printable character or a key name such as ``enter``."""

    key: str


@dataclass(frozen=True)
class TextPasted:
    """Text pasted into the terminal in one piece."""

    text: str


@dataclass(frozen=True)
class Resized:
    """The terminal changed size."""

    width: int
    height: int


@dataclass(frozen=True)
class InventoryLoaded:
    """A list call (direct or chained after a write) succeeded."""

    entries: tuple[InventoryEntry, ...]
    received_at: datetime


@dataclass(frozen=True)
class RequestFailed:
    """A remote call failed. ``message`` is shown to the user as is."""

    message: str


@dataclass(frozen=True)
class RefreshTick:
    """The periodic refresh timer fired."""


@dataclass(frozen=True)
class MessageExpired:
    """The expiry timer identified by ``token`` fired."""

    token: int


Event = Union[
    KeyPressed,
    TextPasted,
    Resized,
    InventoryLoaded,
    RequestFailed,
    RefreshTick,
    MessageExpired,
]
