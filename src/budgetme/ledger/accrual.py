#!/usr/bin/env python3
"""
Balance Accrual

Advances a ledger's balance by ``rate`` for every whole local calendar day
elapsed since it was last updated. While debt is outstanding, up to half of
each accrual goes to repaying it.
"""

import logging
from datetime import datetime

from ..core.dates import LedgerDate, to_millis
from ..core.money import Money
from .errors import ClockMovedBackwardError
from .models import Ledger

logger = logging.getLogger(__name__)


class AccrualEngine:
    """
    Applies time-based accrual to a Ledger.

    Accrual must run exactly once per loaded snapshot, before any other
    mutation; calling it twice across a day boundary pays out twice.
    """

    def __init__(self, clock=datetime.now):
        """
        Args:
            clock: Callable returning the current datetime
        """
        self.clock = clock

    def update(self, ledger: Ledger, now: datetime | None = None) -> Ledger:
        """
        Accrue the ledger forward to ``now``.

        Args:
            ledger: Ledger to mutate in place
            now: Point in time to accrue to (default: the engine's clock)

        Returns:
            The same ledger, for chaining

        Raises:
            ClockMovedBackwardError: If ``now`` falls on an earlier day than
                the ledger's last update
        """
        if now is None:
            now = self.clock()

        last_day = LedgerDate.from_millis(ledger.last_updated)
        today = LedgerDate.from_datetime(now)
        elapsed = last_day.days_until(today)
        if elapsed < 0:
            raise ClockMovedBackwardError(str(last_day), str(today))

        gross = ledger.effective_rate() * elapsed

        # only positive accrual repays debt
        if ledger.debt.is_positive() and gross.is_positive():
            half = gross.halve()
            if ledger.debt > half:
                ledger.debt = ledger.debt - half
                gross = gross - half
            else:
                gross = gross - ledger.debt
                ledger.debt = Money.zero()

        ledger.balance = ledger.balance + gross
        ledger.last_updated = to_millis(now)

        if elapsed:
            logger.debug(f"Accrued {elapsed} day(s): +{gross}, balance {ledger.balance}, debt {ledger.debt}")

        return ledger


def apply_accrual(ledger: Ledger, now: datetime | None = None) -> Ledger:
    """
    Convenience function for accruing a ledger to now.

    Args:
        ledger: Ledger to mutate in place
        now: Point in time to accrue to (default: current time)

    Returns:
        The same ledger
    """
    return AccrualEngine().update(ledger, now)
