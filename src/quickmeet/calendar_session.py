"""Create-then-delete access to the calendar provider.

A Meet link is generated server-side when a calendar event is created
with a conferencing request.  The event itself is deleted straight
after, so only the meeting survives on the provider's side.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .errors import ApiError

MEETING_DURATION = timedelta(hours=1)
CONFERENCE_SOLUTION_TYPE = "hangoutsMeet"

# Transport failures surface as ApiError without a status code
_TRANSPORT_ERRORS = (httplib2.HttpLib2Error, OSError, GoogleAuthError)


@dataclass(frozen=True)
class CreatedMeeting:
    """Server-assigned event id and the generated meeting link."""

    event_id: str
    link: str


def build_meeting_event(request_id: int, now: Optional[datetime] = None) -> dict[str, Any]:
    """Build the insert body for a one-hour event starting now.

    ``request_id`` becomes the conference ``requestId`` so the server
    deduplicates repeated creation attempts.
    """
    start = now or datetime.now(timezone.utc)
    end = start + MEETING_DURATION
    return {
        "start": {"dateTime": start.isoformat()},
        "end": {"dateTime": end.isoformat()},
        "conferenceData": {
            "createRequest": {
                "requestId": str(request_id),
                "conferenceSolutionKey": {"type": CONFERENCE_SOLUTION_TYPE},
            }
        },
    }


def _extract_link(created: dict[str, Any]) -> Optional[str]:
    """Return ``hangoutLink`` or the first video entry point."""
    link = created.get("hangoutLink")
    if isinstance(link, str) and link:
        return link
    conference = created.get("conferenceData")
    if not isinstance(conference, dict):
        return None
    entry_points = conference.get("entryPoints")
    if not isinstance(entry_points, list):
        return None
    for entry in entry_points:
        if not isinstance(entry, dict) or entry.get("entryPointType") != "video":
            continue
        uri = entry.get("uri")
        if isinstance(uri, str) and uri:
            return uri
    return None


def _http_error_details(exc: HttpError) -> str:
    """Pull the API's error message out of an HttpError body."""
    details = str(exc)
    try:
        content = json.loads(exc.content.decode("utf-8"))
        if "error" in content:
            details = content["error"].get("message", details)
    except (ValueError, KeyError, AttributeError, UnicodeDecodeError):
        pass
    return details


class CalendarSession(ABC):
    """Provider interface the orchestrator drives."""

    @abstractmethod
    def create_event(self, event: dict[str, Any]) -> CreatedMeeting:
        """Create a conferencing-enabled event and return its id and link."""

    @abstractmethod
    def delete_event(self, event_id: str) -> None:
        """Delete a previously created event."""


class GoogleCalendarSession(CalendarSession):
    """Google Calendar v3 implementation.

    Args:
        credentials: google-auth credentials; their bearer token is
            attached to every request
        calendar_id: Calendar that temporarily holds the event
        http: Optional base transport (tests pass an ``HttpMockSequence``)
    """

    def __init__(self, credentials: Any, calendar_id: str = "primary", http: Any = None):
        self.calendar_id = calendar_id
        if http is None:
            self._service = build(
                "calendar", "v3", credentials=credentials, cache_discovery=False
            )
        else:
            self._service = build(
                "calendar",
                "v3",
                http=AuthorizedHttp(credentials, http=http),
                cache_discovery=False,
            )

    def create_event(self, event: dict[str, Any]) -> CreatedMeeting:
        try:
            created = (
                self._service.events()
                .insert(calendarId=self.calendar_id, body=event, conferenceDataVersion=1)
                .execute()
            )
        except HttpError as exc:
            raise ApiError(
                f"Event creation failed: {_http_error_details(exc)}", status=exc.resp.status
            ) from exc
        except _TRANSPORT_ERRORS as exc:
            raise ApiError(f"Event creation failed: {exc}") from exc

        if not isinstance(created, dict):
            raise ApiError("Event creation returned an unexpected response body")

        event_id = created.get("id")
        if not isinstance(event_id, str) or not event_id:
            raise ApiError("Event creation response is missing the event id")

        link = _extract_link(created)
        if not link:
            # The event exists; the caller must still remove it
            raise ApiError(
                "Event creation response is missing the meeting link", event_id=event_id
            )
        return CreatedMeeting(event_id=event_id, link=link)

    def delete_event(self, event_id: str) -> None:
        try:
            self._service.events().delete(
                calendarId=self.calendar_id, eventId=event_id
            ).execute()
        except HttpError as exc:
            raise ApiError(
                f"Event deletion failed: {_http_error_details(exc)}", status=exc.resp.status
            ) from exc
        except _TRANSPORT_ERRORS as exc:
            raise ApiError(f"Event deletion failed: {exc}") from exc
