#!/usr/bin/env python3
"""
Ledger Error Types

Fatal precondition violations raised by the ledger engine. User input
problems (bad amounts, over-budget spends) are reported through result
values instead, so the process can continue normally.
"""


class LedgerError(Exception):
    """Base class for fatal ledger errors."""

    pass


class ClockMovedBackwardError(LedgerError):
    """Raised when the stored ledger was last updated on a later day than now."""

    def __init__(self, last_day: str, today: str):
        self.last_day = last_day
        self.today = today
        super().__init__(f"Clock moved backward: ledger last updated {last_day}, today is {today}")


class NothingToUndoError(LedgerError):
    """Raised by undo when the history is empty."""

    def __init__(self) -> None:
        super().__init__("Nothing to undo: history is empty")


class NothingToRedoError(LedgerError):
    """Raised by redo when the redo stack is empty."""

    def __init__(self) -> None:
        super().__init__("Nothing to redo: redo stack is empty")


class UnsupportedLedgerVersionError(LedgerError):
    """Raised when a persisted ledger carries a schema version we cannot read."""

    def __init__(self, version: object, supported: int):
        self.version = version
        self.supported = supported
        super().__init__(f"Unsupported ledger version {version!r} (this build reads version {supported})")


class CorruptLedgerError(LedgerError):
    """Raised when a stored ledger exists but cannot be read back into a Ledger."""

    pass
