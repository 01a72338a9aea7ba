"""Tests for the session controller state machine."""

from datetime import datetime

import pytest

from wolf_inv.session.controller import handle_event, start
from wolf_inv.session.effects import (
    CancelMessageTimer,
    DeleteEntry,
    FetchInventory,
    Quit,
    ScheduleRefresh,
    StartMessageTimer,
    UpsertEntry,
)
from wolf_inv.session.events import (
    InventoryLoaded,
    KeyPressed,
    MessageExpired,
    RefreshTick,
    RequestFailed,
    Resized,
    TextPasted,
)
from wolf_inv.session.state import (
    MESSAGE_TTL,
    REFRESH_INTERVAL,
    AddingOrEditing,
    ConfirmingDelete,
    Help,
    MessageStyle,
    SessionState,
    Viewing,
    initial_state,
)
from wolf_inv.session.wizard import WizardStep
from wolf_inv.types.inventory import InventoryEntry

NOON = datetime(2024, 5, 1, 12, 34, 56)


def feed(state, *events):
    """Apply events in order, collecting every effect."""
    effects = []
    for event in events:
        state, more = handle_event(state, event)
        effects.extend(more)
    return state, effects


def press(state, *keys):
    return feed(state, *(KeyPressed(k) for k in keys))


def type_text(state, text):
    return press(state, *text)


def of_type(effects, kind):
    return [e for e in effects if isinstance(e, kind)]


@pytest.fixture
def viewing(entries):
    """Viewing state with a loaded inventory and no message."""
    return SessionState(entries=entries)


class TestStartup:
    """Test session start."""

    def test_initial_state(self):
        state = initial_state()
        assert state.mode == Viewing()
        assert state.loading
        assert state.message.text == "Initializing..."

    def test_start_fetches_and_arms_refresh(self):
        assert start(initial_state()) == [FetchInventory(), ScheduleRefresh(REFRESH_INTERVAL)]


class TestViewing:
    """Test keys in Viewing mode."""

    @pytest.mark.parametrize("key", ["q", "ctrl+c"])
    def test_quit(self, viewing, key):
        state, effects = press(viewing, key)
        assert effects == [Quit()]
        assert state.quitting

    def test_refresh(self, viewing):
        """r sets loading and requests a fetch."""
        state, effects = press(viewing, "r")
        assert state.loading
        assert state.message.text == "Refreshing data..."
        assert effects == [FetchInventory()]

    def test_add_opens_empty_wizard(self, viewing):
        state, effects = press(viewing, "a")
        assert isinstance(state.mode, AddingOrEditing)
        assert not state.mode.is_edit
        assert state.mode.wizard.entry == InventoryEntry()
        assert state.mode.wizard.step == WizardStep.NAME
        assert state.message.text == "Adding new server (Step 1 of 4):"
        assert effects == []

    def test_edit_copies_selection(self, viewing, entries):
        """e opens the wizard on the selected entry."""
        state, _ = press(viewing, "down", "e")
        assert isinstance(state.mode, AddingOrEditing)
        assert state.mode.is_edit
        assert state.mode.wizard.entry == entries[1]
        assert state.mode.wizard.buffer == "db-1"
        assert state.message.text == "Editing server (Step 1 of 4):"

    def test_delete_asks_for_confirmation(self, viewing):
        state, effects = press(viewing, "d")
        assert state.mode == ConfirmingDelete("web-1")
        assert state.message is None
        assert effects == []

    @pytest.mark.parametrize("key", ["e", "d"])
    def test_edit_delete_need_a_selection(self, key):
        state, effects = press(SessionState(), key)
        assert state.mode == Viewing()
        assert effects == []

    def test_help(self, viewing):
        state, _ = press(viewing, "?")
        assert state.mode == Help()

    def test_other_keys_move_cursor(self, viewing):
        state, _ = press(viewing, "down", "down")
        assert state.cursor == 2
        state, _ = press(state, "home")
        assert state.cursor == 0


class TestAddScenario:
    """Full add flow from keystrokes to the remote call."""

    def test_add_submits_one_upsert(self, viewing):
        state, effects = press(viewing, "a")
        state, more = type_text(state, "edge-1")
        effects += more
        state, more = press(state, "enter")
        effects += more
        state, more = type_text(state, "10.0.0.1")
        effects += more
        state, more = press(state, "enter")
        effects += more
        state, more = type_text(state, "dc-1")
        effects += more
        state, more = press(state, "enter", "down", "enter", "y")
        effects += more

        upserts = of_type(effects, UpsertEntry)
        assert len(upserts) == 1
        payload = upserts[0].entry.to_payload()
        assert {k: payload[k] for k in ("name", "ip", "location", "status")} == {
            "name": "edge-1",
            "ip": "10.0.0.1",
            "location": "dc-1",
            "status": "Offline",
        }
        # the client chains the listing itself
        assert of_type(effects, FetchInventory) == []
        assert state.mode == Viewing()
        assert state.loading
        assert state.message.text == "Submitting server data..."
        assert state.message.style == MessageStyle.SUCCESS

    def test_confirm_step_clears_message(self, viewing):
        state, _ = press(viewing, "a", "enter", "enter", "enter", "enter")
        assert state.mode.wizard.step == WizardStep.CONFIRM
        assert state.message is None


class TestWizardCancel:
    """Cancelling leaves the session exactly as it was."""

    @pytest.mark.parametrize(
        "keys",
        [
            ["escape"],
            ["x", "escape"],
            ["x", "enter", "y", "escape"],
            ["x", "enter", "y", "enter", "z", "enter", "escape"],
            ["x", "enter", "y", "enter", "z", "enter", "down", "enter", "n"],
            ["x", "enter", "y", "enter", "z", "enter", "down", "enter", "N"],
            ["x", "enter", "y", "enter", "z", "enter", "down", "enter", "escape"],
        ],
    )
    @pytest.mark.parametrize("open_key", ["a", "e"])
    def test_cancel_restores_state(self, viewing, open_key, keys):
        state, effects = press(viewing, open_key, *keys)

        assert state.mode == Viewing()
        assert state.entries == viewing.entries
        assert state.cursor == viewing.cursor
        assert not state.loading
        assert of_type(effects, UpsertEntry) == []
        assert of_type(effects, DeleteEntry) == []
        assert state.message.text == "Cancelled."
        assert state.message.style == MessageStyle.CANCEL


class TestDelete:
    """Test the delete confirmation."""

    def test_cancel_with_n(self, viewing):
        state, effects = press(viewing, "d", "n")
        assert state.mode == Viewing()
        assert state.message.text == "Deletion cancelled."
        assert of_type(effects, DeleteEntry) == []

    @pytest.mark.parametrize("key", ["N", "escape"])
    def test_other_cancel_keys(self, viewing, key):
        state, effects = press(viewing, "d", key)
        assert state.mode == Viewing()
        assert of_type(effects, DeleteEntry) == []

    def test_confirm(self, viewing):
        state, effects = press(viewing, "down", "d", "y")
        assert of_type(effects, DeleteEntry) == [DeleteEntry("db-1")]
        assert state.mode == Viewing()
        assert state.loading
        assert state.message.text == "Deleting server 'db-1'..."

    def test_unrelated_key_ignored(self, viewing):
        state, effects = press(viewing, "d", "x")
        assert state.mode == ConfirmingDelete("web-1")
        assert effects == []


class TestHelp:
    def test_any_key_returns(self, viewing):
        state, effects = press(viewing, "?", "z")
        assert state.mode == Viewing()
        assert effects == []


class TestNetworkResults:
    """Test asynchronous results."""

    def test_fetch_replaces_list(self, viewing):
        """A successful fetch fully replaces entries and clears loading."""
        new = (InventoryEntry(name="only-one"),)
        state, effects = feed(SessionState(entries=viewing.entries, loading=True), InventoryLoaded(new, NOON))

        assert state.entries == new
        assert not state.loading
        assert state.message.text == "Inventory refreshed at 12:34:56"
        assert state.message.style == MessageStyle.SUCCESS
        assert effects == [StartMessageTimer(state.pending_expiry, MESSAGE_TTL)]

    def test_fetch_clamps_cursor(self, viewing):
        state, _ = press(viewing, "end")
        state, _ = feed(state, InventoryLoaded((InventoryEntry(name="a"),), NOON))
        assert state.cursor == 0

    def test_failure_keeps_entries(self, viewing):
        """HTTP 500: still Viewing, loading cleared, error message, same entries."""
        state, _ = press(viewing, "r")
        state, effects = feed(state, RequestFailed("API request failed with status code 500"))

        assert state.mode == Viewing()
        assert not state.loading
        assert state.entries == viewing.entries
        assert state.message.text == "API request failed with status code 500"
        assert state.message.style == MessageStyle.ERROR
        assert state.message.style != MessageStyle.SUCCESS
        assert state.message.expires_in is None
        assert of_type(effects, StartMessageTimer) == []

    def test_refresh_tick_fetches_and_rearms(self, viewing):
        state, effects = feed(viewing, RefreshTick())
        assert effects == [FetchInventory(), ScheduleRefresh(REFRESH_INTERVAL)]
        assert state == viewing

    def test_background_refresh_during_wizard(self, viewing):
        """A refresh landing while the wizard is open leaves the edit alone."""
        state, _ = press(viewing, "a")
        state, _ = type_text(state, "edge")
        state, _ = press(state, "enter")
        state, _ = type_text(state, "10.1")
        wizard_before = state.mode.wizard

        new = (InventoryEntry(name="fresh"),)
        state, effects = feed(state, InventoryLoaded(new, NOON))

        assert state.entries == new
        assert state.mode == AddingOrEditing(wizard_before)
        assert of_type(effects, UpsertEntry) == []

    def test_background_refresh_keeps_step_prompt(self, viewing):
        """The wizard prompt is not replaced by the refresh notice."""
        state, _ = press(viewing, "a")
        state, _ = type_text(state, "edge")
        state, _ = press(state, "enter")

        state, effects = feed(state, InventoryLoaded((InventoryEntry(name="fresh"),), NOON))

        assert state.message.text == "Adding new server (Step 2 of 4):"
        assert state.pending_expiry is None
        assert of_type(effects, StartMessageTimer) == []

    def test_failure_during_wizard_keeps_wizard(self, viewing):
        state, _ = press(viewing, "a", "x")
        state, _ = feed(state, RequestFailed("boom"))
        assert isinstance(state.mode, AddingOrEditing)
        assert state.mode.wizard.buffer == "x"


class TestMessageExpiry:
    """Test transient message timers."""

    def loaded(self, state):
        return feed(state, InventoryLoaded(state.entries, NOON))

    def test_expiry_clears_message(self, viewing):
        state, _ = self.loaded(viewing)
        token = state.pending_expiry
        state, effects = feed(state, MessageExpired(token))
        assert state.message is None
        assert state.pending_expiry is None
        assert effects == []

    def test_superseding_cancels_previous_timer(self, viewing):
        """A new expiring message cancels the old timer; the old expiry is ignored."""
        state, _ = self.loaded(viewing)
        first = state.pending_expiry
        state, effects = self.loaded(state)
        second = state.pending_expiry

        assert second != first
        assert effects == [CancelMessageTimer(first), StartMessageTimer(second, MESSAGE_TTL)]

        state, _ = feed(state, MessageExpired(first))
        assert state.message is not None
        state, _ = feed(state, MessageExpired(second))
        assert state.message is None

    def test_keypress_cancels_timer(self, viewing):
        """Any key stops the pending expiry; the message stays."""
        state, _ = self.loaded(viewing)
        token = state.pending_expiry
        state, effects = press(state, "down")

        assert effects[0] == CancelMessageTimer(token)
        assert state.pending_expiry is None
        assert state.message.text == "Inventory refreshed at 12:34:56"

        state, _ = feed(state, MessageExpired(token))
        assert state.message is not None

    def test_error_cancels_pending_timer(self, viewing):
        state, _ = self.loaded(viewing)
        token = state.pending_expiry
        state, effects = feed(state, RequestFailed("down"))
        assert effects == [CancelMessageTimer(token)]
        state, _ = feed(state, MessageExpired(token))
        assert state.message.text == "down"

    def test_cancel_message_expires(self, viewing):
        state, effects = press(viewing, "a", "escape")
        assert of_type(effects, StartMessageTimer) == [StartMessageTimer(state.pending_expiry, MESSAGE_TTL)]


class TestResize:
    def test_resize_updates_dimensions_in_any_mode(self, viewing):
        state, _ = press(viewing, "a")
        state, effects = feed(state, Resized(120, 40))
        assert (state.width, state.height) == (120, 40)
        assert isinstance(state.mode, AddingOrEditing)
        assert effects == []

    def test_resize_does_not_cancel_timer(self, viewing):
        state, _ = feed(viewing, InventoryLoaded(viewing.entries, NOON))
        token = state.pending_expiry
        state, effects = feed(state, Resized(100, 30))
        assert state.pending_expiry == token
        assert effects == []


class TestPaste:
    """Test pasted text."""

    def test_paste_fills_wizard_field(self, viewing):
        state, _ = press(viewing, "a")
        state, _ = press(state, "e", "enter")
        state, effects = feed(state, TextPasted("10.0.0.1"))

        assert state.mode.wizard.step == WizardStep.ADDRESS
        assert state.mode.wizard.buffer == "10.0.0.1"
        assert effects == []

    def test_paste_cancels_pending_timer(self, viewing):
        state, _ = feed(viewing, InventoryLoaded(viewing.entries, NOON))
        token = state.pending_expiry
        state, effects = feed(state, TextPasted("x"))

        assert effects == [CancelMessageTimer(token)]
        assert state.pending_expiry is None

    def test_paste_ignored_while_viewing(self, viewing):
        """Pasted text is never read as commands."""
        state, effects = feed(viewing, TextPasted("qd"))
        assert state == viewing
        assert effects == []
