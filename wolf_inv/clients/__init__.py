"""API client for the remote inventory service."""

from .rest_client import InventoryClient

__all__ = ["InventoryClient"]
