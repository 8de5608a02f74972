#!/usr/bin/env python3
"""
quickmeet CLI - mint an instant Google Meet link.

Usage:
    quickmeet                    Create a link, copy it, open it
    quickmeet --data ~/meet      Use another data directory
    quickmeet --init             Create the data directory and ledger

Exit codes:
    0   - Link delivered (cleanup warnings do not change this)
    1   - Configuration, Calendar API or unexpected error
    2   - Authorization failure
    130 - Interrupted
"""

import argparse
import sys
from typing import List, Optional

from . import __version__, report
from .config import Settings, ensure_secure_directory, resolve_data_dir
from .errors import QuickMeetError
from .ledger import RequestLedger
from .orchestrator import InstantMeeting
from .ui.colors import bold


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quickmeet",
        description="Create an instant Google Meet link without leaving an event on your calendar",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Data directory contents:
    credentials.json    OAuth client secret (Desktop App)
    tokencache.json     Cached authorization, written on first run
    request_id_cache    Request id ledger (create with --init)
    error.log           API and authorization failures
        """,
    )

    parser.add_argument(
        "--data", "-d",
        metavar="PATH",
        help="Data directory (default: $QUICKMEET_DATA or ~/.meet_data/)",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open the link in the default browser",
    )
    parser.add_argument(
        "--no-clipboard",
        action="store_true",
        help="Do not copy the link to the clipboard",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Create the data directory and request id ledger, then exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show tracebacks for unexpected errors",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def cmd_init(settings: Settings) -> int:
    """Create the data directory and an empty ledger."""
    ensure_secure_directory(settings.data_dir)
    ledger = RequestLedger(settings.ledger_file)

    if ledger.initialize():
        report.done(f"Created {ledger.path}")
    else:
        report.status(f"Ledger already present at {ledger.path} (value {ledger.read()})")

    if not settings.credentials_file.exists():
        report.status(
            f"\nNext: place your OAuth Desktop App {bold('credentials.json')} in {settings.data_dir}"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    settings = Settings(
        data_dir=resolve_data_dir(args.data),
        open_browser=not args.no_browser,
        use_clipboard=not args.no_clipboard,
        verbose=args.verbose,
    )

    try:
        if args.init:
            exit_code = cmd_init(settings)
        else:
            exit_code = InstantMeeting(settings).run().exit_code
        sys.exit(exit_code)

    except QuickMeetError as e:
        report.fail(str(e))
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        print("\n\nInterrupted.")
        sys.exit(130)
    except Exception as e:
        report.fail(f"Unexpected error: {e}")
        if settings.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
