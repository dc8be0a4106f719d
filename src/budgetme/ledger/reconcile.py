#!/usr/bin/env python3
"""
Write-Time Reconciliation

There is no lock on the ledger store. Instead, right before writing, the
ledger is fetched again and compared against the one this process computed.
The write only goes ahead when the difference is explained by nothing, by a
single undo, by a single new spend, or by configuration alone. Anything else
means another invocation changed the ledger in the meantime and the write is
refused.

This is a bounded race detector, not a merge: concurrent edits are never
combined.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..core.money import Money
from .accrual import AccrualEngine
from .models import Ledger

logger = logging.getLogger(__name__)

# Larger length differences are never reasoned about.
MAX_LENGTH_DIFFERENCE = 2


class ReconciliationOutcome(Enum):
    """Classification of a local-vs-persisted comparison."""

    IDENTICAL = "identical"
    UNDO_DETECTED = "undo_detected"
    SPEND_DETECTED = "spend_detected"
    CONFIGURATION_ONLY = "configuration_only"
    HISTORIES_DIVERGE = "histories_diverge"
    UNDO_BALANCE_MISMATCH = "undo_balance_mismatch"
    SPEND_BALANCE_MISMATCH = "spend_balance_mismatch"
    INCOMPATIBLE = "incompatible"
    UNKNOWN = "unknown"

    @property
    def is_safe(self) -> bool:
        return self in _SAFE_OUTCOMES


_SAFE_OUTCOMES = {
    ReconciliationOutcome.IDENTICAL,
    ReconciliationOutcome.UNDO_DETECTED,
    ReconciliationOutcome.SPEND_DETECTED,
    ReconciliationOutcome.CONFIGURATION_ONLY,
}


@dataclass
class ReconciliationResult:
    """Verdict on whether the local ledger may overwrite the persisted one."""

    outcome: ReconciliationOutcome
    message: str

    @property
    def ok(self) -> bool:
        return self.outcome.is_safe

    def __bool__(self) -> bool:
        return self.ok


class ReconciliationEngine:
    """Decides commit safety for a locally mutated ledger."""

    def __init__(self, accrual: AccrualEngine | None = None):
        self.accrual = accrual or AccrualEngine()

    def verify(
        self,
        local: Ledger,
        remote: Ledger,
        now: datetime | None = None,
        rate: Money | None = None,
    ) -> ReconciliationResult:
        """
        Compare ``local`` against the currently persisted ``remote``.

        ``remote`` is not modified; a copy of it is accrued to ``now`` so both
        sides describe the same point in time.

        Args:
            local: Ledger computed by this invocation (accrued and mutated)
            remote: Ledger fetched from storage immediately before the write
            now: Point in time both sides are aligned to
            rate: Rate ``local`` was accrued with, when it has since been
                changed (default: ``local.rate``)

        Returns:
            ReconciliationResult; truthy when the write is safe
        """
        aligned = remote.copy()
        aligned.rate = rate if rate is not None else local.rate
        self.accrual.update(aligned, now)

        if local == aligned:
            return self._result(ReconciliationOutcome.IDENTICAL, "Ledgers match")

        local_len = len(local.history)
        remote_len = len(aligned.history)
        if (
            abs(remote_len - local_len) > MAX_LENGTH_DIFFERENCE
            or abs(len(aligned.redo_stack) - len(local.redo_stack)) > MAX_LENGTH_DIFFERENCE
        ):
            return self._result(
                ReconciliationOutcome.HISTORIES_DIVERGE,
                "Histories diverge by more than two entries",
            )

        if remote_len > local_len:
            return self._check_undo(local, aligned)

        if local_len > remote_len:
            return self._check_spend(local, aligned)

        if local.history != aligned.history:
            return self._result(ReconciliationOutcome.INCOMPATIBLE, "Histories are incompatible")

        if local.total_balance() == aligned.total_balance():
            return self._result(ReconciliationOutcome.CONFIGURATION_ONLY, "Only configuration differs")

        return self._result(
            ReconciliationOutcome.UNKNOWN,
            f"Unknown verification failure (local total {local.total_balance()}, "
            f"stored total {aligned.total_balance()})",
        )

    def _check_undo(self, local: Ledger, aligned: Ledger) -> ReconciliationResult:
        """Stored ledger has one more entry: this invocation must have undone it."""
        if len(aligned.history) - len(local.history) != 1 or aligned.history[:-1] != local.history:
            return self._result(ReconciliationOutcome.INCOMPATIBLE, "Histories are incompatible")

        missing = aligned.history[-1]
        aligned.balance = aligned.balance + missing.amount
        if local.total_balance() == aligned.total_balance():
            return self._result(ReconciliationOutcome.UNDO_DETECTED, f"Undo of {missing.amount} {missing.reason}")

        return self._result(
            ReconciliationOutcome.UNDO_BALANCE_MISMATCH,
            f"Data missing entry but balances disagree "
            f"(expected {local.total_balance()} but found {aligned.total_balance()})",
        )

    def _check_spend(self, local: Ledger, aligned: Ledger) -> ReconciliationResult:
        """Local ledger has one more entry: this invocation must have spent it."""
        if len(local.history) - len(aligned.history) != 1 or local.history[:-1] != aligned.history:
            return self._result(ReconciliationOutcome.INCOMPATIBLE, "Histories are incompatible")

        added = local.history[-1]
        aligned.balance = aligned.balance - added.amount
        if local.total_balance() == aligned.total_balance():
            return self._result(ReconciliationOutcome.SPEND_DETECTED, f"New spend of {added.amount} {added.reason}")

        return self._result(
            ReconciliationOutcome.SPEND_BALANCE_MISMATCH,
            f"Data has new entry but diverges from stored data "
            f"(expected {local.total_balance()} but found {aligned.total_balance()})",
        )

    def _result(self, outcome: ReconciliationOutcome, message: str) -> ReconciliationResult:
        if outcome.is_safe:
            logger.debug(f"Reconciliation passed: {message}")
        else:
            logger.warning(f"Reconciliation failed ({outcome.value}): {message}")
        return ReconciliationResult(outcome=outcome, message=message)


def verify(local: Ledger, remote: Ledger, now: datetime | None = None) -> ReconciliationResult:
    """
    Convenience function for a one-off reconciliation check.

    Args:
        local: Ledger computed by this invocation
        remote: Ledger currently persisted
        now: Point in time to align both sides to (default: current time)

    Returns:
        ReconciliationResult
    """
    return ReconciliationEngine().verify(local, remote, now)
