"""quickmeet - instant Google Meet links without calendar clutter.

Modules:
    config            Data directory resolution and file locations
    store             OAuth client secret loading and validation
    auth              Token cache, refresh and installed-app consent flow
    ledger            Persisted request id used as the idempotency key
    calendar_session  Create-then-delete against Google Calendar
    handoff           Clipboard and browser collaborators
    orchestrator      The run state machine
    cli               Command-line entry point
"""

__version__ = "0.3.0"
