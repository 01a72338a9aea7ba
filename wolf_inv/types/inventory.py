"""Inventory entry model as exchanged with the inventory service."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServerStatus(str, Enum):
    """Status values the dashboard offers when adding or editing."""

    ONLINE = "Online"
    OFFLINE = "Offline"
    MAINTENANCE = "Maintenance"


STATUS_CHOICES: tuple[str, ...] = tuple(s.value for s in ServerStatus)


class InventoryEntry(BaseModel):
    """One server record.

    The service names the address field ``ip``; the model exposes it as
    ``address`` and accepts either name on input. ``status`` stays a plain
    string so values outside ``ServerStatus`` still load.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", description="Unique, user-chosen identifier")
    address: str = Field(default="", alias="ip", description="Network address")
    location: str = Field(default="")
    status: str = Field(default="")
    last_report: str = Field(
        default="",
        description="Server-assigned timestamp, opaque to the client",
    )

    @field_validator("name", "address", "location", "status", "last_report", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        """The service may send null for a field it never filled in."""
        return "" if value is None else value

    def to_payload(self) -> dict[str, Any]:
        """Serialize using the service's field names."""
        return self.model_dump(by_alias=True)
