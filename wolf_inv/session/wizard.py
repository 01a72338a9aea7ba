"""Multi-step wizard that collects one inventory entry.

Steps run Name -> Address -> Location -> Status -> Confirm. Each step only
advances on ``enter``; ``escape`` at any step discards the whole entry. The
Confirm step is reached only after all four fields were committed, so a
submitted entry is always complete.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Union

from ..types.inventory import STATUS_CHOICES, InventoryEntry

CANCEL_KEYS = ("escape",)
SUBMIT_KEYS = ("y", "Y")
REJECT_KEYS = ("n", "N", "escape")


class WizardStep(IntEnum):
    """Wizard steps in order."""

    NAME = 0
    ADDRESS = 1
    LOCATION = 2
    STATUS = 3
    CONFIRM = 4


TEXT_STEPS = (WizardStep.NAME, WizardStep.ADDRESS, WizardStep.LOCATION)

# entry attribute and prompt label per text step
_TEXT_FIELDS = {
    WizardStep.NAME: ("name", "Name"),
    WizardStep.ADDRESS: ("address", "IP Address"),
    WizardStep.LOCATION: ("location", "Location"),
}


@dataclass(frozen=True)
class WizardState:
    """Working copy of the entry being added or edited."""

    entry: InventoryEntry
    is_edit: bool = False
    step: WizardStep = WizardStep.NAME
    buffer: str = ""
    status_index: int = 0

    @property
    def field_label(self) -> str:
        """Prompt label of the live text field, empty outside text steps."""
        if self.step in _TEXT_FIELDS:
            return _TEXT_FIELDS[self.step][1]
        return ""

    @property
    def highlighted_status(self) -> str:
        return STATUS_CHOICES[self.status_index]


@dataclass(frozen=True)
class Continue:
    """The wizard stays open with a new state."""

    wizard: WizardState


@dataclass(frozen=True)
class Cancelled:
    """The user abandoned the wizard."""


@dataclass(frozen=True)
class Submitted:
    """The user confirmed a complete entry."""

    entry: InventoryEntry


WizardOutcome = Union[Continue, Cancelled, Submitted]


def start_wizard(entry: InventoryEntry, is_edit: bool) -> WizardState:
    """Open the wizard on the Name step.

    Args:
        entry: Empty entry for add, a copy of the selected entry for edit.
        is_edit: Whether an existing entry is being edited.
    """
    return WizardState(entry=entry, is_edit=is_edit, step=WizardStep.NAME, buffer=entry.name)


def step_prompt(wizard: WizardState) -> str:
    """Progress line shown above the form; empty on the Confirm step."""
    if wizard.step == WizardStep.CONFIRM:
        return ""
    verb = "Editing server" if wizard.is_edit else "Adding new server"
    return f"{verb} (Step {int(wizard.step) + 1} of 4):"


def _initial_status_index(status: str) -> int:
    if status in STATUS_CHOICES:
        return STATUS_CHOICES.index(status)
    return 0


def _edit_buffer(buffer: str, key: str) -> str:
    if key == "backspace":
        return buffer[:-1]
    if key == "ctrl+u":
        return ""
    if len(key) == 1 and key.isprintable():
        return buffer + key
    return buffer


def _commit_text(wizard: WizardState) -> WizardState:
    attr, _ = _TEXT_FIELDS[wizard.step]
    entry = wizard.entry.model_copy(update={attr: wizard.buffer.strip()})
    next_step = WizardStep(wizard.step + 1)

    if next_step in _TEXT_FIELDS:
        next_attr, _ = _TEXT_FIELDS[next_step]
        return replace(wizard, entry=entry, step=next_step, buffer=getattr(entry, next_attr))

    return replace(
        wizard,
        entry=entry,
        step=next_step,
        buffer="",
        status_index=_initial_status_index(entry.status),
    )


def wizard_paste(wizard: WizardState, text: str) -> WizardState:
    """Append pasted text to the field being edited.

    Line breaks and other unprintable characters are dropped so the field
    stays on one line. Outside the text steps a paste does nothing.
    """
    if wizard.step not in TEXT_STEPS:
        return wizard
    pasted = "".join(ch for ch in text if ch.isprintable())
    return replace(wizard, buffer=wizard.buffer + pasted)


def wizard_key(wizard: WizardState, key: str) -> WizardOutcome:
    """Apply one key press to the wizard.

    Args:
        wizard: Current wizard state.
        key: Normalized key (a single character or a key name).

    Returns:
        Continue, Cancelled or Submitted.
    """
    if wizard.step in TEXT_STEPS:
        if key in CANCEL_KEYS:
            return Cancelled()
        if key == "enter":
            return Continue(_commit_text(wizard))
        return Continue(replace(wizard, buffer=_edit_buffer(wizard.buffer, key)))

    if wizard.step == WizardStep.STATUS:
        if key in CANCEL_KEYS:
            return Cancelled()
        if key == "enter":
            entry = wizard.entry.model_copy(update={"status": wizard.highlighted_status})
            return Continue(replace(wizard, entry=entry, step=WizardStep.CONFIRM))
        if key in ("up", "k"):
            return Continue(replace(wizard, status_index=max(0, wizard.status_index - 1)))
        if key in ("down", "j"):
            last = len(STATUS_CHOICES) - 1
            return Continue(replace(wizard, status_index=min(last, wizard.status_index + 1)))
        return Continue(wizard)

    # Confirm
    if key in SUBMIT_KEYS:
        return Submitted(wizard.entry)
    if key in REJECT_KEYS:
        return Cancelled()
    return Continue(wizard)
