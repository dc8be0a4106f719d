#!/usr/bin/env python3
"""
Ledger Domain Models

The Ledger is the single persisted aggregate: balance, debt, the two-stack
undo history, the accrual rate and the category tables. Every write replaces
the whole document, so these models also own the document layout.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.dates import now_millis, to_millis
from ..core.money import Money
from .errors import CorruptLedgerError, UnsupportedLedgerVersionError

LEDGER_VERSION = 1
DEFAULT_BALANCE = Money.from_dollars(10)
DEFAULT_RATE = Money.from_dollars(5)


@dataclass
class HistoryItem:
    """
    One committed spend.

    ``amount`` is the scaled amount actually deducted, after the category's
    cringe factor was applied.
    """

    amount: Money
    reason: str
    time: int  # epoch milliseconds
    specific: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryItem":
        """
        Create HistoryItem from its document form.

        Args:
            data: Dictionary with amount (dollars), reason, time and optional specific

        Returns:
            HistoryItem instance
        """
        return cls(
            amount=Money.from_dollars(data["amount"]),
            reason=data["reason"],
            time=int(data["time"]),
            specific=data.get("specific"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount.to_dollars(),
            "reason": self.reason,
            "specific": self.specific,
            "time": self.time,
        }


@dataclass
class Ledger:
    """
    Personal spending ledger.

    Equality is structural on every field except ``last_updated``, so two
    ledgers accrued to the same day compare equal regardless of the exact
    moment the accrual ran.
    """

    balance: Money = DEFAULT_BALANCE
    debt: Money = field(default_factory=Money.zero)
    rate: Money | None = DEFAULT_RATE
    history: list[HistoryItem] = field(default_factory=list)
    redo_stack: list[HistoryItem] = field(default_factory=list)
    cringe_factors: dict[str, float] = field(default_factory=dict)
    synonyms: dict[str, set[str]] = field(default_factory=dict)
    last_updated: int = field(default_factory=now_millis, compare=False)
    version: int = LEDGER_VERSION

    @classmethod
    def new(cls, now: datetime | None = None) -> "Ledger":
        """Fresh ledger: $10.00 balance, $5.00/day, empty history."""
        ledger = cls()
        if now is not None:
            ledger.last_updated = to_millis(now)
        return ledger

    def effective_rate(self) -> Money:
        """Accrual rate, falling back to the default when unset."""
        return self.rate if self.rate is not None else DEFAULT_RATE

    def total_balance(self) -> Money:
        """Spendable figure once debt exists: balance minus debt."""
        return self.balance - self.debt

    def copy(self) -> "Ledger":
        return copy.deepcopy(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ledger":
        """
        Create Ledger from its persisted document.

        Documents written before the schema carried a version are read as
        version 1.

        Raises:
            UnsupportedLedgerVersionError: If the document has any other version
            CorruptLedgerError: If the document is not shaped like a ledger
        """
        if not isinstance(data, dict):
            raise CorruptLedgerError(f"Ledger document must be an object, got {type(data).__name__}")

        version = data.get("version", LEDGER_VERSION)
        try:
            supported = float(version) == LEDGER_VERSION
        except (TypeError, ValueError):
            supported = False
        if not supported:
            raise UnsupportedLedgerVersionError(version, LEDGER_VERSION)

        try:
            rate = data.get("rate")
            return cls(
                balance=Money.from_dollars(data.get("balance", 0)),
                debt=Money.from_dollars(data.get("debt", 0)),
                rate=Money.from_dollars(rate) if rate is not None else None,
                history=[HistoryItem.from_dict(item) for item in data.get("history") or []],
                redo_stack=[HistoryItem.from_dict(item) for item in data.get("redo_stack") or []],
                cringe_factors={key: float(value) for key, value in (data.get("cringe_factors") or {}).items()},
                synonyms={key: set(values) for key, values in (data.get("synonyms") or {}).items()},
                last_updated=int(data.get("last_updated", now_millis())),
                version=LEDGER_VERSION,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CorruptLedgerError(f"Malformed ledger document: {e!r}") from e

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted document layout."""
        return {
            "version": self.version,
            "balance": self.balance.to_dollars(),
            "debt": self.debt.to_dollars(),
            "rate": self.rate.to_dollars() if self.rate is not None else None,
            "last_updated": self.last_updated,
            "history": [item.to_dict() for item in self.history],
            "redo_stack": [item.to_dict() for item in self.redo_stack],
            "cringe_factors": dict(self.cringe_factors),
            "synonyms": {key: sorted(values) for key, values in self.synonyms.items()},
        }
