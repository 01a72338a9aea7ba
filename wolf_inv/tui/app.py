"""Main Textual application for wolf-inv.

Hosts the session loop: key and resize events are queued, a single worker
applies them to the controller in arrival order, effects go to the
EffectRunner and the screen is repainted after every transition.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from ..clients.rest_client import InventoryClient
from ..core.config import WolfConfig
from ..session.controller import handle_event, start
from ..session.events import Event, KeyPressed, Resized, TextPasted
from ..session.render import render
from ..session.runtime import EffectRunner
from ..session.state import SessionState, initial_state
from ..theme import to_rich_text

logger = logging.getLogger(__name__)


def normalize_key(event: events.Key) -> str:
    """Printable keys become their character, others keep Textual's key name."""
    if event.is_printable and event.character:
        return event.character
    return event.key


class InventoryApp(App):
    """Server Inventory Dashboard TUI Application."""

    TITLE = "Server Inventory Dashboard"

    CSS = """
    Screen {
        background: $surface;
    }

    #frame {
        width: 100%;
        height: 100%;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "session_quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        config: WolfConfig,
        client: Optional[InventoryClient] = None,
        **kwargs,
    ):
        """Initialize the application.

        Args:
            config: Service configuration.
            client: Inventory client. Built from ``config`` if None.
        """
        super().__init__(**kwargs)
        self._client = client or InventoryClient(config)
        self._events: "asyncio.Queue[Event]" = asyncio.Queue()
        self._runner = EffectRunner(self._client, self._events, on_quit=self.exit)
        self._state = initial_state()

    @property
    def state(self) -> SessionState:
        """Current session state."""
        return self._state

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Static(id="frame")

    def on_mount(self) -> None:
        """Start the event worker, the first fetch and the refresh timer."""
        self._state = replace(self._state, width=self.size.width, height=self.size.height)
        self._repaint()
        self.run_worker(self._drain_events(), name="session-events", exclusive=True)
        self._runner.run(start(self._state))

    async def _drain_events(self) -> None:
        while True:
            event = await self._events.get()
            self.apply_event(event)

    def apply_event(self, event: Event) -> None:
        """Run one transition, start its effects and repaint."""
        logger.debug(f"Event {event!r}")
        self._state, effects = handle_event(self._state, event)
        self._runner.run(effects)
        if not self._state.quitting:
            self._repaint()

    def _repaint(self) -> None:
        self.query_one("#frame", Static).update(to_rich_text(render(self._state)))

    def on_key(self, event: events.Key) -> None:
        """Queue the key for the controller."""
        event.stop()
        event.prevent_default()
        self._events.put_nowait(KeyPressed(normalize_key(event)))

    def on_paste(self, event: events.Paste) -> None:
        """Queue pasted text as a single event."""
        event.stop()
        self._events.put_nowait(TextPasted(event.text))

    def on_resize(self, event: events.Resize) -> None:
        """Queue the new terminal size."""
        self._events.put_nowait(Resized(event.size.width, event.size.height))

    def action_session_quit(self) -> None:
        """Route ctrl+c through the controller like any other key."""
        self._events.put_nowait(KeyPressed("ctrl+c"))

    def on_unmount(self) -> None:
        """Stop timers and in-flight requests."""
        self._runner.shutdown()


def run_tui(config: WolfConfig) -> None:
    """Run the TUI application."""
    app = InventoryApp(config)
    app.run()
