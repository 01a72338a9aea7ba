"""Effect runner: executes controller effects on the asyncio loop.

Network effects run as tasks and report back by putting events on the
queue the host injected; timers are ``loop.call_later`` handles. Nothing
here touches session state.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional

from ..clients.rest_client import InventoryClient
from ..core.errors import InventoryError
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
from .events import Event, InventoryLoaded, MessageExpired, RefreshTick, RequestFailed

logger = logging.getLogger(__name__)


class EffectRunner:
    """Runs effects without blocking the event loop."""

    def __init__(
        self,
        client: InventoryClient,
        events: "asyncio.Queue[Event]",
        on_quit: Optional[Callable[[], Any]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the runner.

        Args:
            client: Inventory client used for network effects.
            events: Queue that result and timer events are delivered to.
            on_quit: Called for the Quit effect.
            clock: Timestamp source for InventoryLoaded events.
        """
        self._client = client
        self._events = events
        self._on_quit = on_quit
        self._clock = clock
        self._message_timers: dict[int, asyncio.TimerHandle] = {}
        self._refresh_timer: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending_message_timers(self) -> list[int]:
        """Tokens of expiry timers that have not fired or been cancelled."""
        return sorted(self._message_timers)

    @property
    def in_flight(self) -> int:
        """Number of network calls still running."""
        return len(self._tasks)

    def run(self, effects: list[Effect]) -> None:
        """Start every effect, in order. Must be called from the running loop."""
        for effect in effects:
            self._execute(effect)

    def _execute(self, effect: Effect) -> None:
        if isinstance(effect, FetchInventory):
            self._spawn(self._client.list_entries_async)
        elif isinstance(effect, UpsertEntry):
            self._spawn(self._client.upsert_async, effect.entry)
        elif isinstance(effect, DeleteEntry):
            self._spawn(self._client.delete_async, effect.name)
        elif isinstance(effect, StartMessageTimer):
            self._start_message_timer(effect.token, effect.delay)
        elif isinstance(effect, CancelMessageTimer):
            handle = self._message_timers.pop(effect.token, None)
            if handle is not None:
                handle.cancel()
        elif isinstance(effect, ScheduleRefresh):
            loop = asyncio.get_running_loop()
            self._refresh_timer = loop.call_later(effect.delay, self._events.put_nowait, RefreshTick())
        elif isinstance(effect, Quit):
            if self._on_quit is not None:
                self._on_quit()
        else:
            raise TypeError(f"Unknown effect: {effect!r}")

    def _start_message_timer(self, token: int, delay: float) -> None:
        loop = asyncio.get_running_loop()
        self._message_timers[token] = loop.call_later(delay, self._fire_message_timer, token)

    def _fire_message_timer(self, token: int) -> None:
        if self._message_timers.pop(token, None) is not None:
            self._events.put_nowait(MessageExpired(token))

    def _spawn(self, operation: Callable[..., Awaitable[list[InventoryEntry]]], *args: Any) -> None:
        task = asyncio.get_running_loop().create_task(self._call(operation, *args))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _call(self, operation: Callable[..., Awaitable[list[InventoryEntry]]], *args: Any) -> None:
        try:
            entries = await operation(*args)
        except InventoryError as e:
            logger.warning(f"Inventory request failed: {e}")
            self._events.put_nowait(RequestFailed(str(e)))
            return
        except Exception as e:
            logger.exception("Unexpected error during inventory request")
            self._events.put_nowait(RequestFailed(f"unexpected error: {e}"))
            return
        self._events.put_nowait(InventoryLoaded(tuple(entries), self._clock()))

    def shutdown(self) -> None:
        """Cancel timers and in-flight requests."""
        for handle in self._message_timers.values():
            handle.cancel()
        self._message_timers.clear()
        if self._refresh_timer is not None:
            self._refresh_timer.cancel()
            self._refresh_timer = None
        for task in list(self._tasks):
            task.cancel()
