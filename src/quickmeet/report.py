"""Console output and the persistent error log.

stdout carries the meeting link and status lines.  Warnings and errors
go to stderr.  API and auth failures are also appended to
``<data>/error.log`` with a fix suggestion keyed by HTTP status.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .ui.colors import dim, error, success, warning

# Error classification for actionable messages
GOOGLE_API_ERRORS = {
    400: ("Bad Request", "Check the event payload and conferenceDataVersion parameter"),
    401: ("Unauthorized", "Delete tokencache.json in the data directory and run quickmeet again"),
    403: ("Forbidden", "Enable the Google Calendar API in Google Cloud Console or check the granted scope"),
    404: ("Not Found", "The event no longer exists; nothing is left on your calendar"),
    409: ("Conflict", "A conference with this request id already exists; run quickmeet again"),
    410: ("Gone", "The event was already deleted"),
    429: ("Rate Limited", "Too many requests. Wait a few minutes and retry"),
    500: ("Server Error", "Google server issue. Retry in a few minutes"),
    502: ("Bad Gateway", "Google server issue. Retry in a few minutes"),
    503: ("Service Unavailable", "Google service temporarily unavailable. Retry shortly"),
}


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


def status(msg: str) -> None:
    """Print a status line to stdout."""
    print(msg, flush=True)


def done(msg: str) -> None:
    """Print a success line to stdout."""
    print(success(msg, sys.stdout), flush=True)


def warn(msg: str) -> None:
    """Print a warning to stderr."""
    print(warning(f"WARN: {msg}", sys.stderr), file=sys.stderr)


def fail(msg: str) -> None:
    """Print an error to stderr."""
    print(error(f"Error: {msg}", sys.stderr), file=sys.stderr)


def hint(msg: str) -> None:
    """Print an indented follow-up suggestion to stderr."""
    print(dim(f"  {msg}", sys.stderr), file=sys.stderr)


# ---------------------------------------------------------------------------
# Error log
# ---------------------------------------------------------------------------


def describe_status(status_code: Optional[int]) -> tuple[str, str]:
    """Return ``(name, fix)`` for an HTTP status."""
    if status_code is None:
        return "Request Failed", "Check your network connection and run quickmeet again"
    return GOOGLE_API_ERRORS.get(
        status_code, ("Unknown Error", "Check the error details")
    )


def log_error(
    log_file: Path,
    operation: str,
    status_code: Optional[int],
    details: str,
    fix_suggestion: Optional[str] = None,
) -> str:
    """Append a failure record to the error log and return the fix hint.

    Args:
        log_file: Path of ``error.log``
        operation: What was being attempted (e.g. "Calendar API - create event")
        status_code: HTTP status code, or None for transport/auth failures
        details: Error details
        fix_suggestion: Overrides the status-derived suggestion
    """
    error_name, default_fix = describe_status(status_code)
    fix = fix_suggestion or default_fix
    code = status_code if status_code is not None else "-"

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    entry = (
        f"[{timestamp}] {operation} - {code} {error_name}\n"
        f"  Fix: {fix}\n"
        f"  Details: {details}\n\n"
    )

    try:
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(entry)
    except OSError as exc:
        warn(f"Could not write error log {log_file}: {exc}")

    return fix
