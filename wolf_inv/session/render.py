"""Render pipeline: session state to a styled text frame.

``render`` is pure. It decides the text and the style class of every span;
turning style classes into terminal colors is left to ``wolf_inv.theme``.
"""

from dataclasses import dataclass
from typing import Optional

from ..types.inventory import STATUS_CHOICES
from .state import AddingOrEditing, ConfirmingDelete, Help, SessionState, Viewing
from .styles import StyleClass
from .table import InventoryTable, TableRow, project, visible_rows
from .wizard import WizardState, WizardStep

TITLE = "Server Inventory Dashboard"
SPINNER = "⠋"
CURSOR_BLOCK = "█"
EMPTY_INVENTORY = "No servers in inventory. Press 'a' to add one."
VIEWING_HINT = "'r' refresh | 'a' add | 'd' delete | 'e' edit | '?' help | 'q' quit"
FIELD_HINT = "Press 'Enter' to confirm, 'Esc' to cancel."
CONFIRM_HINT = "Press 'y' to submit, 'n' or 'Esc' to cancel."
DELETE_HINT = "Press 'y' to confirm, 'n' or 'Esc' to cancel."
STATUS_LIST_TITLE = "Select Server Status"
COLUMN_SEPARATOR = " "

HELP_TEXT = (
    "--- Help ---",
    "",
    "  a: Add a new server",
    "  e: Edit selected server",
    "  d: Delete selected server",
    "  r: Refresh server list",
    "  ?: Show this help menu",
    "  q: Quit the application",
    "",
    "Press any key to return to the main view.",
)


@dataclass(frozen=True)
class Span:
    """A run of text with one style class."""

    text: str
    style: Optional[StyleClass] = None


@dataclass(frozen=True)
class Line:
    """One frame line. ``style`` is the base style under its spans."""

    spans: tuple[Span, ...] = ()
    style: Optional[StyleClass] = None

    @property
    def plain(self) -> str:
        return "".join(span.text for span in self.spans)


@dataclass(frozen=True)
class Frame:
    """A complete screen."""

    lines: tuple[Line, ...]

    def plain(self) -> str:
        """Frame text without styling."""
        return "\n".join(line.plain for line in self.lines)


def text_line(text: str = "", style: Optional[StyleClass] = None) -> Line:
    if not text:
        return Line()
    return Line((Span(text, style),))


def fit(text: str, width: int) -> str:
    """Pad or truncate ``text`` to exactly ``width`` columns."""
    if len(text) > width:
        return text[: max(0, width - 1)] + "…"
    return text.ljust(width)


# Table


def visible_window(cursor: int, count: int, height: int) -> tuple[int, int]:
    """Rows ``[start, stop)`` to show so the cursor stays on screen."""
    capacity = visible_rows(height)
    start = max(0, cursor - capacity + 1)
    return start, min(count, start + capacity)


def _row_line(row: TableRow, table: InventoryTable) -> Line:
    spans = []
    for i, (cell, column) in enumerate(zip(row.cells, table.columns)):
        if i:
            spans.append(Span(COLUMN_SEPARATOR))
        spans.append(Span(fit(cell.text, column.width), cell.style))
    return Line(tuple(spans), row.row_style)


def render_table(table: InventoryTable, height: int) -> list[Line]:
    """Lay out the header, a rule and the visible rows."""
    header = COLUMN_SEPARATOR.join(fit(c.title, c.width) for c in table.columns)
    rule_width = sum(c.width for c in table.columns) + len(COLUMN_SEPARATOR) * (len(table.columns) - 1)

    lines = [text_line(header, StyleClass.COLUMN_HEADER), text_line("─" * rule_width, StyleClass.RULE)]
    start, stop = visible_window(table.cursor, len(table.rows), height)
    lines.extend(_row_line(row, table) for row in table.rows[start:stop])
    return lines


# Mode bodies


def render_viewing(state: SessionState) -> list[Line]:
    if state.entries:
        lines = render_table(project(state.entries, state.cursor), state.height)
    else:
        lines = [text_line(EMPTY_INVENTORY)]
    lines += [Line(), text_line(VIEWING_HINT, StyleClass.HINT)]
    return lines


def render_wizard(wizard: WizardState) -> list[Line]:
    if wizard.step == WizardStep.STATUS:
        lines = [text_line("Select a Status:"), Line(), text_line(STATUS_LIST_TITLE, StyleClass.HEADER)]
        for i, status in enumerate(STATUS_CHOICES):
            if i == wizard.status_index:
                lines.append(Line((Span("> "), Span(status, StyleClass.HIGHLIGHT))))
            else:
                lines.append(text_line(f"  {status}"))
        return lines + [Line(), text_line(FIELD_HINT, StyleClass.HINT)]

    if wizard.step == WizardStep.CONFIRM:
        entry = wizard.entry
        return [
            text_line("Confirm entry?"),
            Line(),
            text_line(f"  Name:     {entry.name}"),
            text_line(f"  IP:       {entry.address}"),
            text_line(f"  Location: {entry.location}"),
            text_line(f"  Status:   {entry.status}"),
            Line(),
            text_line(CONFIRM_HINT, StyleClass.HINT),
        ]

    return [
        text_line(f"Enter {wizard.field_label}:"),
        Line(),
        Line((Span("> "), Span(wizard.buffer, StyleClass.INPUT), Span(CURSOR_BLOCK, StyleClass.INPUT))),
        Line(),
        text_line(FIELD_HINT, StyleClass.HINT),
    ]


def render_delete(target_name: str) -> list[Line]:
    return [
        text_line(f"Are you sure you want to delete '{target_name}'?"),
        Line(),
        text_line(DELETE_HINT, StyleClass.HINT),
    ]


def render_status(state: SessionState) -> Line:
    """The loading indicator, or the current message."""
    if state.loading:
        return Line((Span(SPINNER, StyleClass.SPINNER), Span(" Loading...")))
    if state.message is None:
        return Line()
    return text_line(state.message.text, StyleClass(state.message.style.value))


def render(state: SessionState) -> Frame:
    """Produce the frame for ``state``.

    Args:
        state: Session state to draw.

    Returns:
        Frame with one Line per terminal row.
    """
    mode = state.mode
    if isinstance(mode, Help):
        return Frame(tuple(text_line(text, StyleClass.HELP) for text in HELP_TEXT))

    lines = [text_line(TITLE, StyleClass.HEADER), Line(), render_status(state), Line()]

    if isinstance(mode, Viewing):
        lines += render_viewing(state)
    elif isinstance(mode, AddingOrEditing):
        lines += render_wizard(mode.wizard)
    elif isinstance(mode, ConfirmingDelete):
        lines += render_delete(mode.target_name)

    return Frame(tuple(lines))
