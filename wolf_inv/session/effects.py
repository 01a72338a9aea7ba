"""Effects: descriptions of asynchronous work returned by the controller.

The controller never performs I/O itself. ``EffectRunner`` executes these
and feeds results back as events.
"""

from dataclasses import dataclass
from typing import Union

from ..types.inventory import InventoryEntry


@dataclass(frozen=True)
class FetchInventory:
    """List the inventory; result arrives as InventoryLoaded or RequestFailed."""


@dataclass(frozen=True)
class UpsertEntry:
    """Create or update ``entry``, then list."""

    entry: InventoryEntry


@dataclass(frozen=True)
class DeleteEntry:
    """Delete the entry called ``name``, then list."""

    name: str


@dataclass(frozen=True)
class StartMessageTimer:
    """Deliver MessageExpired(token) after ``delay`` seconds."""

    token: int
    delay: float


@dataclass(frozen=True)
class CancelMessageTimer:
    """Cancel the expiry timer ``token`` if it has not fired yet."""

    token: int


@dataclass(frozen=True)
class ScheduleRefresh:
    """Deliver one RefreshTick after ``delay`` seconds."""

    delay: float


@dataclass(frozen=True)
class Quit:
    """End the session."""


Effect = Union[
    FetchInventory,
    UpsertEntry,
    DeleteEntry,
    StartMessageTimer,
    CancelMessageTimer,
    ScheduleRefresh,
    Quit,
]
