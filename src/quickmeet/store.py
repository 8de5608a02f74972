"""OAuth client secret and token cache locations."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from .config import Settings
from .errors import AuthError, ConfigError

REQUIRED_SECRET_FIELDS = ("client_id", "client_secret", "auth_uri", "token_uri")


def validate_client_secret(content: str) -> tuple[bool, Optional[str]]:
    """
    Validate that content is a Google OAuth Desktop App client secret.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return False, f"Invalid JSON: {e}"

    if data is None:
        return False, "Invalid credentials format: null value"

    if not isinstance(data, dict):
        return False, "Invalid credentials format: expected JSON object"

    if "installed" in data:
        installed = data["installed"]
        if not isinstance(installed, dict):
            return False, "Invalid credentials format: 'installed' must be an object"
        missing = [f for f in REQUIRED_SECRET_FIELDS if f not in installed]
        if missing:
            return False, f"Missing required fields: {', '.join(missing)}"
        return True, None

    if "web" in data:
        return False, (
            "This appears to be a Web Application credential. "
            "Please use Desktop App type instead."
        )

    return False, "Invalid credentials format. Expected 'installed' key for Desktop App credentials."


class CredentialStore:
    """Reads the client secret from the data directory.

    The token cache is only located here; reading and writing it belongs
    to the authorizer.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def token_cache_path(self) -> Path:
        return self.settings.token_cache_file

    def load_client_secret(self) -> dict[str, Any]:
        path = self.settings.credentials_file
        if not path.exists():
            raise ConfigError(
                f"Google credentials not found at {path}. "
                "Download credentials.json from Google Cloud Console "
                "(OAuth 2.0 Desktop App) and place it there."
            )

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Could not read {path}: {exc}") from exc

        ok, message = validate_client_secret(content)
        if not ok:
            raise AuthError(f"{path.name}: {message}")

        return json.loads(content)
