"""Runtime configuration: the data directory and the files inside it.

The data directory is resolved once at startup and carried around as a
frozen ``Settings`` value.  Every component that touches disk receives
it explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

DEFAULT_DATA_DIR = Path.home() / ".meet_data"
DATA_DIR_ENV = "QUICKMEET_DATA"

CREDENTIALS_FILENAME = "credentials.json"
TOKEN_CACHE_FILENAME = "tokencache.json"
LEDGER_FILENAME = "request_id_cache"
ERROR_LOG_FILENAME = "error.log"


@dataclass(frozen=True)
class Settings:
    """Immutable per-process configuration."""

    data_dir: Path
    open_browser: bool = True
    use_clipboard: bool = True
    verbose: bool = False

    @property
    def credentials_file(self) -> Path:
        return self.data_dir / CREDENTIALS_FILENAME

    @property
    def token_cache_file(self) -> Path:
        return self.data_dir / TOKEN_CACHE_FILENAME

    @property
    def ledger_file(self) -> Path:
        return self.data_dir / LEDGER_FILENAME

    @property
    def error_log_file(self) -> Path:
        return self.data_dir / ERROR_LOG_FILENAME

    def require_data_dir(self) -> None:
        """Raise ConfigError unless the data directory exists."""
        if not self.data_dir.is_dir():
            raise ConfigError(
                f"Data directory does not exist: {self.data_dir}. "
                "Create it with: quickmeet --init"
            )


def resolve_data_dir(
    cli_value: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Determine the data directory.

    Priority order:
        1. ``--data`` flag
        2. ``QUICKMEET_DATA`` environment variable
        3. ``~/.meet_data``
    """
    env = os.environ if environ is None else environ

    if cli_value:
        raw = cli_value
    elif env.get(DATA_DIR_ENV):
        raw = env[DATA_DIR_ENV]
    else:
        return DEFAULT_DATA_DIR

    return Path(raw).expanduser()


def ensure_secure_directory(path: Path) -> None:
    """Create ``path`` with owner-only permissions if it is missing."""
    if not path.exists():
        path.mkdir(parents=True, exist_ok=True)
        os.chmod(path, 0o700)
