"""Hand the finished link to the clipboard and the default browser."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
import webbrowser
from typing import Optional, Sequence

from .errors import BrowserLaunchError, ClipboardError


def clipboard_command() -> list[str]:
    """Pick the clipboard utility for this platform."""
    if sys.platform == "darwin":
        return ["pbcopy"]
    if sys.platform.startswith("win"):
        return ["clip"]
    if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
        return ["wl-copy"]
    return ["xclip", "-selection", "clipboard"]


def copy_to_clipboard(text: str, command: Optional[Sequence[str]] = None) -> None:
    """Pipe ``text`` into the clipboard utility.

    Raises:
        ClipboardError: utility missing, timed out or exited non-zero
    """
    cmd = list(command) if command else clipboard_command()
    try:
        subprocess.run(
            cmd,
            input=text.encode("utf-8"),
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=10,
        )
    except FileNotFoundError:
        raise ClipboardError(f"Clipboard utility not found: {cmd[0]}") from None
    except subprocess.TimeoutExpired:
        raise ClipboardError(f"Clipboard utility timed out: {cmd[0]}") from None
    except subprocess.CalledProcessError as exc:
        raise ClipboardError(f"{cmd[0]} exited with status {exc.returncode}") from exc


def open_in_browser(url: str) -> None:
    """Open ``url`` in the default browser.

    Raises:
        BrowserLaunchError: no browser accepted the URL
    """
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as exc:
        raise BrowserLaunchError(f"Could not open browser: {exc}") from exc
    if not opened:
        raise BrowserLaunchError("No browser available to open the link")
