"""Error taxonomy for quickmeet.

Fatal errors abort the run and map to a process exit code.  The
best-effort errors (delete, ledger write, clipboard, browser) are raised
by their components and downgraded to warnings by the orchestrator.
"""

from __future__ import annotations

from typing import Optional


class QuickMeetError(Exception):
    """Base class for every error quickmeet raises on purpose."""

    exit_code = 1


class ConfigError(QuickMeetError):
    """Data directory, client secret file or ledger is missing or unreadable."""

    pass


class AuthError(QuickMeetError):
    """Client secret is malformed, consent was denied or token exchange failed."""

    exit_code = 2


class ApiError(QuickMeetError):
    """The Calendar API returned a non-success status or an unusable body."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        event_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.status = status
        # Set when the event exists server-side despite the failure
        self.event_id = event_id


class LedgerWriteError(QuickMeetError):
    """The request identifier could not be written back."""

    pass


class ClipboardError(QuickMeetError):
    """The clipboard utility is missing or failed."""

    pass


class BrowserLaunchError(QuickMeetError):
    """No browser could be launched for the link."""

    pass
