"""
Google OAuth authorization for quickmeet.

Reuses the cached token when it is still valid, refreshes it when it has
expired, and otherwise runs the installed-app consent flow: a temporary
localhost HTTP server captures the redirect while the user grants access
in the browser.  The resulting authorized-user JSON is written back to the
token cache so later runs stay silent.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional, Sequence

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from . import report
from .config import ensure_secure_directory
from .errors import AuthError

SCOPES = ["https://www.googleapis.com/auth/calendar"]


# ---------------------------------------------------------------------------
# Token cache
# ---------------------------------------------------------------------------


def _try_cached_token(token_cache_path: Path, scopes: Sequence[str]) -> Optional[Credentials]:
    """Load and refresh a cached token if possible.

    Returns valid Credentials or None.
    """
    if not token_cache_path.exists():
        return None

    try:
        creds = Credentials.from_authorized_user_file(str(token_cache_path), list(scopes))
    except (ValueError, OSError) as exc:
        report.warn(f"Could not load token cache: {exc}")
        return None

    if creds.valid:
        return creds

    if creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except GoogleAuthError as exc:
            # Refresh token revoked or expired; fall through to consent
            report.warn(f"Token refresh failed: {exc}")
            return None
        _save_token(creds, token_cache_path)
        return creds

    return None


def _save_token(creds: Credentials, token_cache_path: Path) -> None:
    """Persist credentials to disk with owner-only permissions.

    A write failure is not fatal: the token still works for this run.
    """
    try:
        ensure_secure_directory(token_cache_path.parent)
        token_cache_path.write_text(creds.to_json(), encoding="utf-8")
        os.chmod(token_cache_path, 0o600)
    except OSError as exc:
        report.warn(f"Could not save token to {token_cache_path}: {exc}")


# ---------------------------------------------------------------------------
# Consent flow
# ---------------------------------------------------------------------------


def _run_consent_flow(secret: dict[str, Any], scopes: Sequence[str]) -> Credentials:
    """Run the full OAuth consent flow via the system browser."""
    report.status("Opening your browser to authorize Google Calendar access...")
    try:
        flow = InstalledAppFlow.from_client_config(secret, list(scopes))
        # port=0 lets the OS pick a free port for the redirect listener
        creds = flow.run_local_server(port=0)
    except Exception as exc:
        raise AuthError(f"OAuth consent flow failed: {exc}") from exc

    if creds is None or not creds.token:
        raise AuthError("OAuth consent flow returned no access token")
    return creds


def authorize(
    secret: dict[str, Any],
    token_cache_path: Path,
    scopes: Sequence[str] = SCOPES,
) -> Credentials:
    """Return credentials carrying a usable bearer token.

    Raises:
        AuthError: consent denied, token exchange failed, or the secret
            was rejected by the OAuth client.
    """
    creds = _try_cached_token(token_cache_path, scopes)
    if creds is not None:
        return creds

    creds = _run_consent_flow(secret, scopes)
    _save_token(creds, token_cache_path)
    return creds
