"""
Pytest configuration and fixtures for quickmeet tests.
"""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from google.oauth2.credentials import Credentials
from googleapiclient.http import HttpMockSequence


# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickmeet.config import Settings  # noqa: E402


VALID_SECRET = {
    "installed": {
        "client_id": "123456789-abc.apps.googleusercontent.com",
        "project_id": "quickmeet-test",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
        "client_secret": "GOCSPX-secret123",
        "redirect_uris": ["http://localhost"],
    }
}


class RecordingHttp(HttpMockSequence):
    """HttpMockSequence that remembers every request it answered."""

    def __init__(self, responses):
        super().__init__(responses)
        self.calls = []

    def request(self, uri, method="GET", body=None, headers=None, **kwargs):
        self.calls.append({
            "uri": uri,
            "method": method,
            "body": body,
            "headers": {k.lower(): v for k, v in (headers or {}).items()},
        })
        return super().request(uri, method, body=body, headers=headers, **kwargs)


def ok(payload):
    """200 response carrying ``payload`` as JSON."""
    return ({"status": "200"}, json.dumps(payload))


def no_content():
    return ({"status": "204"}, "")


def api_error(status, message="error"):
    body = {"error": {"code": status, "message": message, "errors": []}}
    return ({"status": str(status)}, json.dumps(body))


@pytest.fixture
def valid_credentials_json():
    """Return valid OAuth Desktop App credentials JSON content."""
    return json.dumps(VALID_SECRET, indent=2)


@pytest.fixture
def web_credentials_json():
    """Return web app credentials JSON (should be rejected)."""
    return json.dumps({
        "web": {
            "client_id": "123456789-abc.apps.googleusercontent.com",
            "client_secret": "GOCSPX-secret123",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
        }
    })


@pytest.fixture
def data_dir(tmp_path, valid_credentials_json):
    """Data directory with a client secret and a ledger holding 5."""
    data = tmp_path / ".meet_data"
    data.mkdir()
    (data / "credentials.json").write_text(valid_credentials_json)
    (data / "request_id_cache").write_text("5")
    return data


@pytest.fixture
def settings(data_dir):
    return Settings(data_dir=data_dir)


@pytest.fixture
def bearer_credentials():
    """Credentials with a non-expiring access token."""
    return Credentials(token="ya29.test-token")


@pytest.fixture
def recording_http():
    """Factory for RecordingHttp instances."""
    return RecordingHttp


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for the clipboard utility."""
    with patch("quickmeet.handoff.subprocess.run") as mock_run:
        yield mock_run


@pytest.fixture
def mock_webbrowser():
    """Mock webbrowser.open."""
    with patch("quickmeet.handoff.webbrowser.open") as mock_open:
        mock_open.return_value = True
        yield mock_open
