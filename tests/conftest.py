"""Shared fixtures for wolf-inv tests."""

import pytest

from wolf_inv.core.config import WolfConfig
from wolf_inv.types.inventory import InventoryEntry


@pytest.fixture
def config():
    """Configuration pointing at a fake service."""
    return WolfConfig(api_base_url="http://inventory.test", api_token="tok")


@pytest.fixture
def entries():
    """A small inventory with every status value."""
    return (
        InventoryEntry(name="web-1", address="10.0.0.10", location="dc-1", status="Online", last_report="2024-05-01 10:00:00"),
        InventoryEntry(name="db-1", address="10.0.0.20", location="dc-1", status="Offline", last_report="2024-05-01 10:01:00"),
        InventoryEntry(name="cache-1", address="10.0.1.5", location="dc-2", status="Maintenance", last_report="2024-05-01 10:02:00"),
        InventoryEntry(name="edge-9", address="10.9.9.9", location="pop-3", status="Online", last_report="2024-05-01 10:03:00"),
    )


@pytest.fixture
def wire_entries():
    """The same kind of data as the service sends it."""
    return [
        {"name": "web-1", "ip": "10.0.0.10", "location": "dc-1", "status": "Online", "last_report": "2024-05-01 10:00:00"},
        {"name": "db-1", "ip": "10.0.0.20", "location": "dc-1", "status": "Offline", "last_report": "2024-05-01 10:01:00"},
    ]
