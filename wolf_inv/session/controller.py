"""Session controller: the dashboard's state machine.

``handle_event`` is a pure transition function. It takes the current state
and one event and returns the next state plus the effects the runtime must
carry out. Resize and message-timer bookkeeping are applied before the
per-mode handlers; network results and timer events are handled the same
way in every mode.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..types.inventory import InventoryEntry
from .effects import (
    CancelMessageTimer,
    DeleteEntry,
    Effect,
    FetchInventory,
    Quit,
    ScheduleRefresh,
    StartMessageTimer,
    UpsertEntry,
)
from .events import (
    Event,
    InventoryLoaded,
    KeyPressed,
    MessageExpired,
    RefreshTick,
    RequestFailed,
    Resized,
    TextPasted,
)
from .state import (
    MESSAGE_TTL,
    REFRESH_INTERVAL,
    AddingOrEditing,
    ConfirmingDelete,
    Help,
    MessageStyle,
    SessionState,
    TransientMessage,
    Viewing,
)
from .table import clamp_cursor, move_cursor, visible_rows
from .wizard import Cancelled, Submitted, start_wizard, step_prompt, wizard_key, wizard_paste

logger = logging.getLogger(__name__)

Transition = tuple[SessionState, list[Effect]]

QUIT_KEYS = ("q", "ctrl+c")


def start(state: SessionState) -> list[Effect]:
    """Effects to run once when the session begins."""
    return [FetchInventory(), ScheduleRefresh(REFRESH_INTERVAL)]


# Message helpers


def set_message(
    state: SessionState,
    text: str,
    style: MessageStyle,
    expires: bool = False,
) -> Transition:
    """Install a new message, replacing and un-arming any previous one.

    Args:
        state: Current state.
        text: Message text.
        style: Message style.
        expires: Clear the message after MESSAGE_TTL seconds.

    Returns:
        New state and the timer effects to run.
    """
    effects: list[Effect] = []
    if state.pending_expiry is not None:
        effects.append(CancelMessageTimer(state.pending_expiry))

    if not expires:
        return replace(state, message=TransientMessage(text, style), pending_expiry=None), effects

    token = state.next_token
    effects.append(StartMessageTimer(token, MESSAGE_TTL))
    state = replace(
        state,
        message=TransientMessage(text, style, expires_in=MESSAGE_TTL),
        pending_expiry=token,
        next_token=token + 1,
    )
    return state, effects


def clear_message(state: SessionState) -> SessionState:
    return replace(state, message=None)


def _cancel_pending_timer(state: SessionState) -> Transition:
    if state.pending_expiry is None:
        return state, []
    return replace(state, pending_expiry=None), [CancelMessageTimer(state.pending_expiry)]


# Asynchronous results, handled in every mode


def _on_loaded(state: SessionState, event: InventoryLoaded) -> Transition:
    entries = tuple(event.entries)
    state = replace(
        state,
        entries=entries,
        loading=False,
        cursor=clamp_cursor(state.cursor, len(entries)),
    )
    if isinstance(state.mode, AddingOrEditing):
        # the step prompt stays up while the wizard is open
        return state, []
    stamp = event.received_at.strftime("%H:%M:%S")
    return set_message(state, f"Inventory refreshed at {stamp}", MessageStyle.SUCCESS, expires=True)


def _on_failed(state: SessionState, event: RequestFailed) -> Transition:
    state = replace(state, loading=False)
    return set_message(state, event.message, MessageStyle.ERROR)


def _on_tick(state: SessionState, event: RefreshTick) -> Transition:
    return state, [FetchInventory(), ScheduleRefresh(REFRESH_INTERVAL)]


def _on_expired(state: SessionState, event: MessageExpired) -> Transition:
    if event.token != state.pending_expiry:
        # superseded or cancelled before it fired
        return state, []
    return replace(state, message=None, pending_expiry=None), []


# Mode handlers, keys only


def _open_wizard(state: SessionState, entry: InventoryEntry, is_edit: bool) -> Transition:
    wizard = start_wizard(entry, is_edit)
    state = replace(state, mode=AddingOrEditing(wizard))
    return set_message(state, step_prompt(wizard), MessageStyle.INFO)


def viewing_key(state: SessionState, key: str) -> Transition:
    """Handle a key while browsing the table."""
    if key in QUIT_KEYS:
        return replace(state, quitting=True), [Quit()]

    if key == "r":
        state, effects = set_message(replace(state, loading=True), "Refreshing data...", MessageStyle.INFO)
        return state, effects + [FetchInventory()]

    if key == "a":
        return _open_wizard(state, InventoryEntry(), is_edit=False)

    if key == "e":
        selected = state.selected
        if selected is None:
            return state, []
        return _open_wizard(state, selected.model_copy(), is_edit=True)

    if key == "d":
        selected = state.selected
        if selected is None:
            return state, []
        return replace(state, mode=ConfirmingDelete(selected.name), message=None), []

    if key == "?":
        return replace(state, mode=Help()), []

    cursor = move_cursor(state.cursor, key, len(state.entries), visible_rows(state.height))
    return replace(state, cursor=cursor), []


def wizard_handler(state: SessionState, key: str) -> Transition:
    """Handle a key while the entry wizard is open."""
    outcome = wizard_key(state.mode.wizard, key)

    if isinstance(outcome, Cancelled):
        return set_message(replace(state, mode=Viewing()), "Cancelled.", MessageStyle.CANCEL, expires=True)

    if isinstance(outcome, Submitted):
        logger.info(f"Submitting entry {outcome.entry.name!r}")
        state = replace(state, mode=Viewing(), loading=True)
        state, effects = set_message(state, "Submitting server data...", MessageStyle.SUCCESS, expires=True)
        return state, effects + [UpsertEntry(outcome.entry)]

    previous = state.mode.wizard
    wizard = outcome.wizard
    state = replace(state, mode=AddingOrEditing(wizard))
    if wizard.step != previous.step:
        prompt = step_prompt(wizard)
        if prompt:
            return set_message(state, prompt, MessageStyle.INFO)
        return clear_message(state), []
    return state, []


def delete_handler(state: SessionState, key: str) -> Transition:
    """Handle a key on the delete confirmation prompt."""
    target = state.mode.target_name

    if key in ("y", "Y"):
        logger.info(f"Deleting entry {target!r}")
        state = replace(state, mode=Viewing(), loading=True)
        state, effects = set_message(state, f"Deleting server '{target}'...", MessageStyle.SUCCESS, expires=True)
        return state, effects + [DeleteEntry(target)]

    if key in ("n", "N", "escape"):
        return set_message(replace(state, mode=Viewing()), "Deletion cancelled.", MessageStyle.CANCEL, expires=True)

    return state, []


def help_handler(state: SessionState, key: str) -> Transition:
    """Any key leaves the help screen."""
    return replace(state, mode=Viewing()), []


_MODE_HANDLERS: dict[type, Callable[[SessionState, str], Transition]] = {
    Viewing: viewing_key,
    AddingOrEditing: wizard_handler,
    ConfirmingDelete: delete_handler,
    Help: help_handler,
}

_ASYNC_HANDLERS: dict[type, Callable] = {
    InventoryLoaded: _on_loaded,
    RequestFailed: _on_failed,
    RefreshTick: _on_tick,
    MessageExpired: _on_expired,
}


def handle_event(state: SessionState, event: Event) -> Transition:
    """Apply one event to the session.

    Args:
        state: Current session state.
        event: The next event in arrival order.

    Returns:
        The new state and the effects to execute, in order.
    """
    if isinstance(event, Resized):
        return replace(state, width=event.width, height=event.height), []

    if isinstance(event, KeyPressed):
        state, effects = _cancel_pending_timer(state)
        handler = _MODE_HANDLERS[type(state.mode)]
        state, more = handler(state, event.key)
        return state, effects + more

    if isinstance(event, TextPasted):
        state, effects = _cancel_pending_timer(state)
        if isinstance(state.mode, AddingOrEditing):
            state = replace(state, mode=AddingOrEditing(wizard_paste(state.mode.wizard, event.text)))
        return state, effects

    async_handler: Optional[Callable] = _ASYNC_HANDLERS.get(type(event))
    if async_handler is None:
        logger.warning(f"Ignoring unknown event {event!r}")
        return state, []
    return async_handler(state, event)
