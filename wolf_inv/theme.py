"""Terminal colors for the dashboard's style classes."""

from typing import Optional

from rich.style import Style
from rich.text import Text

from .session.render import Frame
from .session.styles import StyleClass

_MESSAGE = Style(color="color(7)", italic=True)

STYLES: dict[StyleClass, Style] = {
    StyleClass.HEADER: Style(color="color(3)", bold=True),
    StyleClass.SPINNER: Style(color="color(12)"),
    StyleClass.HINT: _MESSAGE,
    StyleClass.HELP: Style(color="color(6)"),
    StyleClass.INFO: _MESSAGE,
    StyleClass.SUCCESS: _MESSAGE + Style(color="color(10)"),
    StyleClass.CANCEL: _MESSAGE + Style(color="color(11)"),
    StyleClass.ERROR: Style(color="color(9)", bold=True),
    StyleClass.COLUMN_HEADER: Style(bold=True),
    StyleClass.RULE: Style(color="color(240)"),
    StyleClass.POSITIVE: Style(color="color(10)"),
    StyleClass.NEGATIVE: Style(color="color(9)"),
    StyleClass.NEUTRAL: Style(color="color(11)"),
    StyleClass.STRIPE: Style(bgcolor="color(236)"),
    StyleClass.SELECTED: Style(color="color(229)", bgcolor="color(99)"),
    StyleClass.INPUT: Style(color="#5696E3"),
    StyleClass.HIGHLIGHT: Style(color="#5696E3"),
}


def style_for(style_class: Optional[StyleClass]) -> Style:
    """Resolve a style class; unstyled text gets the null style."""
    if style_class is None:
        return Style.null()
    return STYLES.get(style_class, Style.null())


def to_rich_text(frame: Frame) -> Text:
    """Convert a rendered frame into a rich Text."""
    text = Text(no_wrap=True, overflow="crop")
    for i, line in enumerate(frame.lines):
        if i:
            text.append("\n")
        line_text = Text(style=style_for(line.style))
        for span in line.spans:
            line_text.append(span.text, style=style_for(span.style))
        text.append_text(line_text)
    return text
