#!/usr/bin/env python3
"""
Spend History Management

Spend, undo, redo and garnish over a Ledger's two stacks. Every operation
keeps ``balance`` consistent with the entries it moves:

- spend appends an item and deducts its scaled amount
- undo pops the history tail back onto the redo stack and refunds it
- redo moves the redo tail back onto the history and deducts it again
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..core.dates import to_millis
from ..core.money import Money
from .categories import CategoryResolver
from .errors import NothingToRedoError, NothingToUndoError
from .models import HistoryItem, Ledger

logger = logging.getLogger(__name__)


class SpendStatus(Enum):
    """Outcome of a spend request."""

    APPLIED = "applied"
    NON_POSITIVE_AMOUNT = "non_positive_amount"
    OVER_BUDGET = "over_budget"


@dataclass
class SpendResult:
    """Result of a spend request; ``item`` is only set when applied."""

    status: SpendStatus
    balance: Money
    item: HistoryItem | None = None
    multiplier: float = 1.0

    @property
    def applied(self) -> bool:
        return self.status == SpendStatus.APPLIED


class HistoryManager:
    """
    Spend / undo / redo / garnish operations on one Ledger.

    Refused spends (non-positive amount, over budget without a loan) leave the
    ledger untouched and are reported through ``SpendResult``. Undo and redo
    on an empty stack are fatal and raise.
    """

    def __init__(self, ledger: Ledger, clock=datetime.now):
        """
        Args:
            ledger: Ledger to operate on (mutated in place)
            clock: Callable returning the current datetime, stamped on new items
        """
        self.ledger = ledger
        self.clock = clock
        self.categories = CategoryResolver(ledger)

    def spend(self, amount: Money, reason: str, specific: str | None = None, loan: bool = False) -> SpendResult:
        """
        Record a spend, scaled by the category's cringe factor.

        The redo stack is left as it is.

        Args:
            amount: Unscaled amount to spend
            reason: Spend category
            specific: Optional free-text note
            loan: Allow the balance to go negative

        Returns:
            SpendResult describing whether the spend was applied
        """
        ledger = self.ledger
        if not amount.is_positive():
            logger.warning(f"Refusing spend of {amount}: amount must be positive")
            return SpendResult(status=SpendStatus.NON_POSITIVE_AMOUNT, balance=ledger.balance)

        multiplier = self.categories.multiplier(reason)
        scaled = amount.scale(multiplier)
        new_balance = ledger.balance - scaled

        if new_balance.is_negative() and not loan:
            logger.warning(f"Refusing spend of {scaled}: over budget (balance {ledger.balance})")
            return SpendResult(status=SpendStatus.OVER_BUDGET, balance=ledger.balance, multiplier=multiplier)

        item = HistoryItem(amount=scaled, reason=reason, time=to_millis(self.clock()), specific=specific)
        ledger.history.append(item)
        ledger.balance = new_balance

        logger.info(f"Spent {scaled} on {reason} (x{multiplier}), balance {new_balance}")
        return SpendResult(status=SpendStatus.APPLIED, balance=new_balance, item=item, multiplier=multiplier)

    def undo(self) -> HistoryItem:
        """
        Undo the most recent spend.

        Returns:
            The item moved onto the redo stack

        Raises:
            NothingToUndoError: If the history is empty
        """
        ledger = self.ledger
        if not ledger.history:
            raise NothingToUndoError()

        item = ledger.history.pop()
        ledger.balance = ledger.balance + item.amount
        ledger.redo_stack.append(item)
        return item

    def redo(self) -> HistoryItem:
        """
        Redo the most recently undone spend.

        Returns:
            The item moved back onto the history

        Raises:
            NothingToRedoError: If the redo stack is empty
        """
        ledger = self.ledger
        if not ledger.redo_stack:
            raise NothingToRedoError()

        item = ledger.redo_stack.pop()
        ledger.balance = ledger.balance - item.amount
        ledger.history.append(item)
        return item

    def garnish(self) -> Money | None:
        """
        Convert a negative balance into debt.

        Returns:
            The amount moved into debt, or None when the balance was not negative
        """
        ledger = self.ledger
        if not ledger.balance.is_negative():
            logger.warning(f"Nothing to garnish: balance is {ledger.balance}")
            return None

        garnished = -ledger.balance
        ledger.debt = ledger.debt + garnished
        ledger.balance = Money.zero()
        logger.info(f"Garnished {garnished}, debt is now {ledger.debt}")
        return garnished
