"""Session state owned by the controller.

Everything here is immutable; the controller returns a new ``SessionState``
for each transition.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..types.inventory import InventoryEntry
from .wizard import WizardState

MESSAGE_TTL = 2.0  # seconds an expiring message stays on screen
REFRESH_INTERVAL = 30.0  # seconds between background refreshes


class MessageStyle(str, Enum):
    """Style of the transient status line."""

    INFO = "info"
    SUCCESS = "success"
    CANCEL = "cancel"
    ERROR = "error"


@dataclass(frozen=True)
class TransientMessage:
    """Status line text. ``expires_in`` is None for messages that persist."""

    text: str
    style: MessageStyle = MessageStyle.INFO
    expires_in: Optional[float] = None


# Interaction modes


@dataclass(frozen=True)
class Viewing:
    """Browsing the table."""


@dataclass(frozen=True)
class AddingOrEditing:
    """The entry wizard is open."""

    wizard: WizardState

    @property
    def is_edit(self) -> bool:
        return self.wizard.is_edit


@dataclass(frozen=True)
class ConfirmingDelete:
    """Waiting for y/n on deleting ``target_name``."""

    target_name: str


@dataclass(frozen=True)
class Help:
    """Help screen."""


Mode = Union[Viewing, AddingOrEditing, ConfirmingDelete, Help]


@dataclass(frozen=True)
class SessionState:
    """Complete state of one dashboard session."""

    mode: Mode = Viewing()
    entries: tuple[InventoryEntry, ...] = ()
    cursor: int = 0
    loading: bool = False
    message: Optional[TransientMessage] = None
    # token of the expiry timer currently armed for ``message``
    pending_expiry: Optional[int] = None
    next_token: int = 1
    width: int = 80
    height: int = 24
    quitting: bool = False

    @property
    def selected(self) -> Optional[InventoryEntry]:
        """Entry under the cursor, if any."""
        if 0 <= self.cursor < len(self.entries):
            return self.entries[self.cursor]
        return None


def initial_state(width: int = 80, height: int = 24) -> SessionState:
    """State at startup: loading, with the first fetch about to start."""
    return SessionState(
        loading=True,
        message=TransientMessage("Initializing..."),
        width=width,
        height=height,
    )
