"""Terminal UI for wolf-inv."""

from .app import InventoryApp, run_tui

__all__ = [
    "InventoryApp",
    "run_tui",
]
