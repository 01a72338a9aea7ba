"""Data models for inventory entries."""

from .inventory import STATUS_CHOICES, InventoryEntry, ServerStatus

__all__ = [
    "InventoryEntry",
    "ServerStatus",
    "STATUS_CHOICES",
]
