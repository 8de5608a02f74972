"""
ANSI color codes for terminal output.

Colour is dropped when the target stream is not a terminal or when
``NO_COLOR`` is set, so piped output (``quickmeet | xargs ...``) stays clean.
"""

import os
import sys
from typing import Optional, TextIO


class Colors:
    """ANSI color codes for terminal styling."""

    RESET = "\033[0m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"

    BOLD = "\033[1m"
    DIM = "\033[2m"


def supports_color(stream: Optional[TextIO] = None) -> bool:
    """Return True if ANSI codes should be written to ``stream``."""
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, color: str, stream: Optional[TextIO] = None) -> str:
    """Apply color to text."""
    if not supports_color(stream):
        return text
    return f"{color}{text}{Colors.RESET}"


def success(text: str, stream: Optional[TextIO] = None) -> str:
    """Green success text."""
    return colorize(text, Colors.GREEN, stream)


def error(text: str, stream: Optional[TextIO] = None) -> str:
    """Red error text."""
    return colorize(text, Colors.RED, stream)


def warning(text: str, stream: Optional[TextIO] = None) -> str:
    """Yellow warning text."""
    return colorize(text, Colors.YELLOW, stream)


def bold(text: str, stream: Optional[TextIO] = None) -> str:
    """Bold text."""
    return colorize(text, Colors.BOLD, stream)


def dim(text: str, stream: Optional[TextIO] = None) -> str:
    """Dimmed text."""
    return colorize(text, Colors.DIM, stream)
