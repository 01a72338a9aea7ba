"""Projection of inventory entries into a styled table.

Style classes are attached to cells here, before any text layout, so the
renderer never has to locate a cell inside an already formatted row.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..types.inventory import InventoryEntry, ServerStatus
from .styles import StyleClass


@dataclass(frozen=True)
class Column:
    """A fixed-width table column."""

    title: str
    width: int


COLUMNS: tuple[Column, ...] = (
    Column("Name", 20),
    Column("IP Address", 18),
    Column("Location", 18),
    Column("Status", 12),
    Column("Last Report", 35),
)

STATUS_COLUMN = 3


@dataclass(frozen=True)
class Cell:
    """Raw cell text plus an optional style class."""

    text: str
    style: Optional[StyleClass] = None


@dataclass(frozen=True)
class TableRow:
    """One projected entry."""

    cells: tuple[Cell, ...]
    row_style: Optional[StyleClass] = None


@dataclass(frozen=True)
class InventoryTable:
    """Renderable table: fixed columns, one row per entry."""

    columns: tuple[Column, ...]
    rows: tuple[TableRow, ...]
    cursor: int = 0

    def __len__(self) -> int:
        return len(self.rows)


def status_style(status: str) -> StyleClass:
    """Map a status value to its style class."""
    if status == ServerStatus.ONLINE.value:
        return StyleClass.POSITIVE
    if status == ServerStatus.OFFLINE.value:
        return StyleClass.NEGATIVE
    return StyleClass.NEUTRAL


def _row_style(index: int, cursor: int) -> Optional[StyleClass]:
    if index == cursor:
        return StyleClass.SELECTED
    if index % 2 == 1:
        return StyleClass.STRIPE
    return None


def project(entries: Sequence[InventoryEntry], cursor: int = 0) -> InventoryTable:
    """Build a table from entries.

    Args:
        entries: Entries in display order.
        cursor: Index of the selected row.

    Returns:
        InventoryTable with exactly ``len(entries)`` rows.
    """
    rows = tuple(
        TableRow(
            cells=(
                Cell(entry.name),
                Cell(entry.address),
                Cell(entry.location),
                Cell(entry.status, status_style(entry.status)),
                Cell(entry.last_report),
            ),
            row_style=_row_style(i, cursor),
        )
        for i, entry in enumerate(entries)
    )
    return InventoryTable(columns=COLUMNS, rows=rows, cursor=cursor)


def clamp_cursor(cursor: int, count: int) -> int:
    """Keep a cursor inside ``[0, count)``; 0 for an empty table."""
    if count <= 0:
        return 0
    return max(0, min(cursor, count - 1))


def move_cursor(cursor: int, key: str, count: int, page: int = 10) -> int:
    """Apply a navigation key to the cursor.

    Unknown keys leave the cursor where it is.

    Args:
        cursor: Current selected index.
        key: Normalized key name.
        count: Number of rows.
        page: Rows moved by pageup/pagedown.

    Returns:
        New cursor position, clamped to the table.
    """
    if key in ("up", "k"):
        cursor -= 1
    elif key in ("down", "j"):
        cursor += 1
    elif key in ("pageup", "b"):
        cursor -= page
    elif key in ("pagedown", "f"):
        cursor += page
    elif key in ("home", "g"):
        cursor = 0
    elif key in ("end", "G"):
        cursor = count - 1
    return clamp_cursor(cursor, count)


# title, blank, message, blank, column header, rule, blank, key hint
CHROME_ROWS = 8


def visible_rows(height: int) -> int:
    """Table rows that fit on a terminal ``height`` lines tall."""
    return max(1, height - CHROME_ROWS)
