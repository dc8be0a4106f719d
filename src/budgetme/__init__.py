"""
budgetme - Personal Spending Ledger

Tracks a daily allowance: the balance grows by a fixed rate every day, spends
are deducted (scaled by per-category "cringe factors"), and the whole ledger
is kept in a local file or an S3 bucket shared between machines.

Domain Packages:
- core: Money, timestamps, configuration
- ledger: accrual, history, categories and write-time reconciliation
- storage: local and S3 ledger stores
- cli: the ``budgetme`` command

Example Usage:
    from budgetme.core import Money
    from budgetme.ledger import LedgerSession
    from budgetme.storage import LocalStorageProvider

    session = LedgerSession(LocalStorageProvider("~/.config/budgetme"))
    session.open()
    session.history.spend(Money.from_dollars(4), "coffee")
    session.commit()
"""

__version__ = "1.0.0"
__author__ = "budgetme contributors"

from .core.config import Environment, get_config
from .core.money import Money
from .ledger.models import HistoryItem, Ledger

__all__ = [
    "Environment",
    "HistoryItem",
    "Ledger",
    "Money",
    "get_config",
]
