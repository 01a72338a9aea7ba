"""Session core: controller state machine, wizard, table and renderer."""

from .controller import handle_event, start
from .render import Frame, render
from .runtime import EffectRunner
from .state import SessionState, initial_state

__all__ = [
    "handle_event",
    "start",
    "render",
    "Frame",
    "EffectRunner",
    "SessionState",
    "initial_state",
]
