"""Persisted request identifier used as the conference creation key.

The Calendar API deduplicates ``conferenceData.createRequest`` calls by
``requestId``.  Re-running after a failed create therefore reuses the
same identifier and cannot mint a second conference.  The ledger only
moves forward once a create call has been confirmed.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from .errors import ConfigError, LedgerWriteError


class RequestLedger:
    """Single decimal integer stored in ``request_id_cache``."""

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> int:
        """Return the current identifier.

        Raises:
            ConfigError: the file is missing, unreadable or not a
                non-negative integer.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigError(
                f"Request id ledger not found at {self.path}. "
                "Create it with: quickmeet --init"
            ) from None
        except OSError as exc:
            raise ConfigError(f"Could not read request id ledger {self.path}: {exc}") from exc

        text = raw.strip()
        if not (text.isascii() and text.isdigit()):
            raise ConfigError(
                f"Request id ledger {self.path} must hold a non-negative integer, got {text!r}"
            )
        return int(text)

    def advance(self, current: int) -> int:
        """Write ``current + 1`` and return it.

        The new value goes to a temporary file in the same directory and
        is moved over the ledger with ``os.replace``, so a reader sees
        either the old or the new value.
        """
        new_value = current + 1
        tmp_name = None
        try:
            mode = self.path.stat().st_mode & 0o777
        except OSError:
            mode = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(str(new_value))
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates 0600; keep the ledger's existing permissions
            if mode is not None:
                os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise LedgerWriteError(
                f"Could not advance request id ledger {self.path} to {new_value}: {exc}"
            ) from exc
        return new_value

    def initialize(self, value: int = 0) -> bool:
        """Create the ledger holding ``value`` unless it already exists.

        Returns:
            True if created, False if a ledger was already present
        """
        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(str(value), encoding="utf-8")
        return True
