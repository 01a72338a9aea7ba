"""Semantic style classes attached to rendered text.

The session layer only names a class; ``wolf_inv.theme`` maps each one
to concrete terminal colors.
"""

from enum import Enum


class StyleClass(str, Enum):
    """What a piece of text is, for styling purposes."""

    HEADER = "header"
    SPINNER = "spinner"
    HINT = "hint"
    HELP = "help"

    # Transient message styles
    INFO = "info"
    SUCCESS = "success"
    CANCEL = "cancel"
    ERROR = "error"

    # Table
    COLUMN_HEADER = "column-header"
    RULE = "rule"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    STRIPE = "stripe"
    SELECTED = "selected"

    # Wizard
    INPUT = "input"
    HIGHLIGHT = "highlight"
