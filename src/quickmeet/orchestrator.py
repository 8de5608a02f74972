"""
Instant meeting run - main orchestrator.

Sequences one run: read the ledger, authorize, create the event with a
conferencing request, deliver the link, advance the ledger, delete the
event, open the link.  Fatal errors stop the run in ABORTED; the steps
after link delivery are best-effort and only add warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, List, Optional

from . import report
from .auth import authorize
from .calendar_session import CalendarSession, CreatedMeeting, GoogleCalendarSession, build_meeting_event
from .config import Settings
from .errors import (
    ApiError,
    AuthError,
    BrowserLaunchError,
    ClipboardError,
    LedgerWriteError,
    QuickMeetError,
)
from .handoff import copy_to_clipboard, open_in_browser
from .ledger import RequestLedger
from .store import CredentialStore


class RunState(Enum):
    INIT = "init"
    AUTHORIZED = "authorized"
    CREATED = "created"
    LINK_DELIVERED = "link_delivered"
    ADVANCED_LEDGER = "advanced_ledger"
    DELETED = "deleted"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class RunResult:
    """Outcome of a single run."""

    state: RunState = RunState.INIT
    request_id: Optional[int] = None
    link: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    error: Optional[QuickMeetError] = None

    @property
    def ok(self) -> bool:
        return self.state is RunState.DONE

    @property
    def exit_code(self) -> int:
        if self.ok:
            return 0
        return self.error.exit_code if self.error is not None else 1


class InstantMeeting:
    """
    Mint one Meet link and leave no event behind.

    Collaborators are injectable so tests can drive the run without a
    browser, a clipboard or the network.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        store: Optional[CredentialStore] = None,
        ledger: Optional[RequestLedger] = None,
        authorizer: Callable[..., Any] = authorize,
        session_factory: Callable[[Any], CalendarSession] = GoogleCalendarSession,
        clipboard: Callable[[str], None] = copy_to_clipboard,
        browser: Callable[[str], None] = open_in_browser,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings
        self.store = store or CredentialStore(settings)
        self.ledger = ledger or RequestLedger(settings.ledger_file)
        self.authorizer = authorizer
        self.session_factory = session_factory
        self.clipboard = clipboard
        self.browser = browser
        self.clock = clock or (lambda: datetime.now(timezone.utc))

        self.result = RunResult()
        self.credentials: Any = None
        self.session: Optional[CalendarSession] = None
        self.meeting: Optional[CreatedMeeting] = None

    def run(self) -> RunResult:
        """
        Run every step in order.

        Returns:
            RunResult; ``result.ok`` is True once the link was delivered,
            even if cleanup steps produced warnings.
        """
        try:
            self._step_read_ledger()
            self._step_authorize()
            self._step_create()
        except QuickMeetError as exc:
            self._abort(exc)
            return self.result

        self._step_deliver()
        self._step_advance_ledger()
        self._step_delete()
        self._step_open()
        self.result.state = RunState.DONE
        return self.result

    # -----------------------------------------------------------------------
    # Fatal steps
    # -----------------------------------------------------------------------

    def _step_read_ledger(self) -> None:
        self.settings.require_data_dir()
        self.result.request_id = self.ledger.read()

    def _step_authorize(self) -> None:
        secret = self.store.load_client_secret()
        self.credentials = self.authorizer(secret, self.store.token_cache_path)
        self.result.state = RunState.AUTHORIZED

    def _step_create(self) -> None:
        self.session = self.session_factory(self.credentials)
        event = build_meeting_event(self.result.request_id, now=self.clock())
        try:
            self.meeting = self.session.create_event(event)
        except ApiError as exc:
            if exc.event_id:
                self._remove_orphan(exc.event_id)
            raise
        self.result.link = self.meeting.link
        self.result.state = RunState.CREATED

    # -----------------------------------------------------------------------
    # Best-effort steps
    # -----------------------------------------------------------------------

    def _step_deliver(self) -> None:
        link = self.meeting.link
        report.status(f"Google Meet Link: {link}")

        if self.settings.use_clipboard:
            try:
                self.clipboard(link)
                report.done("Link is copied to the clipboard!")
            except ClipboardError as exc:
                self._warn(f"{exc}. Copy the link above manually.")

        self.result.state = RunState.LINK_DELIVERED

    def _step_advance_ledger(self) -> None:
        try:
            self.ledger.advance(self.result.request_id)
        except LedgerWriteError as exc:
            self._warn(str(exc))
            report.hint(
                f"The next run will reuse request id {self.result.request_id} "
                f"and may get this same meeting back. Write "
                f"{self.result.request_id + 1} to {self.ledger.path} to avoid it."
            )
            return
        self.result.state = RunState.ADVANCED_LEDGER

    def _step_delete(self) -> None:
        try:
            self.session.delete_event(self.meeting.event_id)
        except ApiError as exc:
            fix = report.log_error(
                self.settings.error_log_file,
                "Calendar API - delete event",
                exc.status,
                str(exc),
            )
            self._warn(f"{exc}. The temporary event may still be on your calendar.")
            report.hint(fix)
            return
        self.result.state = RunState.DELETED

    def _step_open(self) -> None:
        if not self.settings.open_browser:
            return
        try:
            self.browser(self.meeting.link)
        except BrowserLaunchError as exc:
            self._warn(str(exc))

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _remove_orphan(self, event_id: str) -> None:
        """Delete an event whose creation response was unusable."""
        try:
            self.session.delete_event(event_id)
        except ApiError as exc:
            report.log_error(
                self.settings.error_log_file,
                "Calendar API - delete event",
                exc.status,
                str(exc),
            )
            self._warn(f"{exc}. Event {event_id} may still be on your calendar.")

    def _warn(self, message: str) -> None:
        self.result.warnings.append(message)
        report.warn(message)

    def _abort(self, exc: QuickMeetError) -> None:
        self.result.state = RunState.ABORTED
        self.result.error = exc
        report.fail(str(exc))

        if isinstance(exc, ApiError):
            fix = report.log_error(
                self.settings.error_log_file, "Calendar API - create event", exc.status, str(exc)
            )
            report.hint(fix)
            report.hint(
                f"Request id {self.result.request_id} was not consumed; "
                "running quickmeet again is safe."
            )
        elif isinstance(exc, AuthError):
            fix = report.log_error(
                self.settings.error_log_file,
                "OAuth authorization",
                None,
                str(exc),
                "Check credentials.json, or delete tokencache.json and authorize again",
            )
            report.hint(fix)
