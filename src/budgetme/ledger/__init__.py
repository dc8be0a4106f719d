"""
Ledger Engine

The spending ledger and everything that changes it:
- models: Ledger and HistoryItem, plus the persisted document layout
- accrual: daily balance growth with debt repayment
- categories: cringe factors and synonym groups
- history: spend / undo / redo / garnish
- reconcile: write-time check against the currently persisted ledger
- session: load / accrue / commit cycle for one invocation
"""

from .accrual import AccrualEngine, apply_accrual
from .categories import CategoryResolver, effective_multiplier, set_cringe, set_synonym, synonym_group
from .errors import (
    ClockMovedBackwardError,
    CorruptLedgerError,
    LedgerError,
    NothingToRedoError,
    NothingToUndoError,
    UnsupportedLedgerVersionError,
)
from .history import HistoryManager, SpendResult, SpendStatus
from .models import DEFAULT_BALANCE, DEFAULT_RATE, LEDGER_VERSION, HistoryItem, Ledger
from .reconcile import ReconciliationEngine, ReconciliationOutcome, ReconciliationResult, verify
from .session import LedgerSession

__all__ = [
    "DEFAULT_BALANCE",
    "DEFAULT_RATE",
    "LEDGER_VERSION",
    "AccrualEngine",
    "CategoryResolver",
    "ClockMovedBackwardError",
    "CorruptLedgerError",
    "HistoryItem",
    "HistoryManager",
    "Ledger",
    "LedgerError",
    "LedgerSession",
    "NothingToRedoError",
    "NothingToUndoError",
    "ReconciliationEngine",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "SpendResult",
    "SpendStatus",
    "UnsupportedLedgerVersionError",
    "apply_accrual",
    "effective_multiplier",
    "set_cringe",
    "set_synonym",
    "synonym_group",
    "verify",
]
