#!/usr/bin/env python3
"""
Ledger Session

One invocation of the tool is one logical transaction against the store:
load once, accrue once, mutate in memory, reconcile once, write once.
"""

import logging
from datetime import datetime

from ..storage.provider import StorageProvider
from .accrual import AccrualEngine
from .history import HistoryManager
from .models import DEFAULT_RATE, Ledger
from .reconcile import ReconciliationEngine, ReconciliationResult

logger = logging.getLogger(__name__)


class LedgerSession:
    """
    Load / verify / commit cycle for a ledger held by a StorageProvider.

    Example:
        session = LedgerSession(provider)
        session.open()
        session.history.spend(Money.from_dollars(5), "food")
        result = session.commit()
        if not result:
            print(result.message)
    """

    def __init__(self, provider: StorageProvider, clock=datetime.now):
        """
        Args:
            provider: Store holding the ledger
            clock: Callable returning the current datetime
        """
        self.provider = provider
        self.clock = clock
        self.now = clock()
        self.accrual = AccrualEngine(clock=lambda: self.now)
        self.reconciler = ReconciliationEngine(self.accrual)
        self._ledger: Ledger | None = None
        self._accrued_rate = DEFAULT_RATE

    @property
    def ledger(self) -> Ledger:
        if self._ledger is None:
            raise RuntimeError("Session not opened. Call open() first.")
        return self._ledger

    @property
    def history(self) -> HistoryManager:
        return HistoryManager(self.ledger, clock=lambda: self.now)

    def _fetch_or_default(self) -> Ledger:
        ledger = self.provider.fetch()
        if ledger is None:
            logger.info(f"No ledger found at {self.provider.describe()}, starting fresh")
            return Ledger.new(self.now)
        return ledger

    def open(self) -> Ledger:
        """
        Load the ledger (or a fresh default) and accrue it to now.

        Returns:
            The session's working ledger

        Raises:
            ClockMovedBackwardError: If the stored ledger is dated after today
            UnsupportedLedgerVersionError: If the stored document has an unknown version
            CorruptLedgerError: If the stored document cannot be parsed
        """
        ledger = self._fetch_or_default()
        if ledger.rate is None:
            ledger.rate = DEFAULT_RATE
        self.accrual.update(ledger, self.now)
        self._accrued_rate = ledger.rate
        self._ledger = ledger
        return ledger

    def commit(self) -> ReconciliationResult:
        """
        Write the working ledger if it still reconciles with what is stored.

        The store is re-read right before writing so that changes made by a
        concurrent invocation since ``open()`` are detected. The stored copy
        is accrued at the rate ``open()`` used, so a rate change made during
        this session counts as configuration only. On failure nothing is
        written.

        Returns:
            ReconciliationResult; truthy when the ledger was stored
        """
        remote = self._fetch_or_default()
        result = self.reconciler.verify(self.ledger, remote, self.now, rate=self._accrued_rate)
        if result.ok:
            self.provider.store(self.ledger)
            logger.debug(f"Committed ledger to {self.provider.describe()} ({result.outcome.value})")
        else:
            logger.warning(f"Refusing to overwrite {self.provider.describe()}: {result.message}")
        return result
