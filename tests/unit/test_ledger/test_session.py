#!/usr/bin/env python3
"""
Unit tests for the load / verify / commit cycle.
"""

from datetime import timedelta

import pytest

from budgetme.core.money import Money
from budgetme.ledger.errors import ClockMovedBackwardError, UnsupportedLedgerVersionError
from budgetme.ledger.models import Ledger
from budgetme.ledger.reconcile import ReconciliationOutcome
from budgetme.ledger.session import LedgerSession
from tests.fixtures.memory_store import MemoryStorageProvider


def session_at(provider, moment) -> LedgerSession:
    return LedgerSession(provider, clock=lambda: moment)


@pytest.mark.unit
@pytest.mark.ledger
class TestSessionOpen:
    """Test loading a ledger."""

    def test_empty_store_starts_fresh(self, memory_store, now):
        session = session_at(memory_store, now)
        ledger = session.open()

        assert ledger == Ledger.new(now)
        assert session.ledger is ledger

    def test_ledger_requires_open(self, memory_store, now):
        with pytest.raises(RuntimeError, match="not opened"):
            session_at(memory_store, now).ledger

    def test_open_accrues(self, now):
        provider = MemoryStorageProvider(Ledger.new(now))

        ledger = session_at(provider, now + timedelta(days=3)).open()

        assert ledger.balance == Money.from_dollars(25)

    def test_missing_rate_gets_default(self, now):
        stored = Ledger.new(now)
        stored.rate = None
        provider = MemoryStorageProvider(stored)

        ledger = session_at(provider, now + timedelta(days=1)).open()

        assert ledger.rate == Money.from_dollars(5)
        assert ledger.balance == Money.from_dollars(15)

    def test_clock_moved_backward(self, now):
        provider = MemoryStorageProvider(Ledger.new(now))

        with pytest.raises(ClockMovedBackwardError):
            session_at(provider, now - timedelta(days=1)).open()

    def test_unsupported_version(self, now):
        provider = MemoryStorageProvider(Ledger.new(now))
        provider.document["version"] = 7

        with pytest.raises(UnsupportedLedgerVersionError):
            session_at(provider, now).open()


@pytest.mark.unit
@pytest.mark.ledger
class TestSessionCommit:
    """Test writing a ledger back."""

    def test_spend_then_undo_across_invocations(self, now):
        provider = MemoryStorageProvider(Ledger.new(now))
        later = now + timedelta(days=3)

        session = session_at(provider, later)
        session.open()
        assert session.ledger.balance == Money.from_dollars(25)
        session.history.spend(Money.from_dollars(5), "food")
        assert session.commit().outcome == ReconciliationOutcome.SPEND_DETECTED

        session = session_at(provider, later)
        session.open()
        assert session.ledger.balance == Money.from_dollars(20)
        session.history.undo()
        assert session.commit().outcome == ReconciliationOutcome.UNDO_DETECTED

        stored = provider.fetch()
        assert stored.balance == Money.from_dollars(25)
        assert stored.history == []
        assert len(stored.redo_stack) == 1

    def test_first_commit_to_empty_store(self, memory_store, now):
        session = session_at(memory_store, now)
        session.open()
        session.history.spend(Money.from_dollars(2), "gum")

        assert session.commit()
        assert memory_store.store_count == 1
        assert memory_store.fetch().balance == Money.from_dollars(8)

    def test_commit_refetches(self, memory_store, now):
        session = session_at(memory_store, now)
        session.open()
        session.commit()

        assert memory_store.fetch_count == 2

    def test_concurrent_modification_is_refused(self, now):
        provider = MemoryStorageProvider(Ledger.new(now))

        mine = session_at(provider, now)
        mine.open()
        theirs = session_at(provider, now)
        theirs.open()

        theirs.history.spend(Money.from_dollars(3), "bus")
        assert theirs.commit()

        mine.history.spend(Money.from_dollars(4), "coffee")
        result = mine.commit()

        assert not result
        assert result.outcome == ReconciliationOutcome.INCOMPATIBLE
        stored = provider.fetch()
        assert [item.reason for item in stored.history] == ["bus"]
        assert provider.store_count == 1

    def test_rate_change_commits_after_accrual(self, now):
        provider = MemoryStorageProvider(Ledger.new(now))

        session = session_at(provider, now + timedelta(days=1))
        session.open()
        session.ledger.rate = Money.from_dollars(8)
        result = session.commit()

        assert result.outcome == ReconciliationOutcome.CONFIGURATION_ONLY
        stored = provider.fetch()
        assert stored.rate == Money.from_dollars(8)
        assert stored.balance == Money.from_dollars(15)

    def test_local_store_round_trip(self, local_store, now):
        session = session_at(local_store, now)
        session.open()
        session.history.spend(Money.from_dollars(1.1), "candy", "gummy bears")
        assert session.commit()

        reopened = session_at(local_store, now + timedelta(days=1))
        ledger = reopened.open()

        assert ledger.balance == Money.from_dollars(13.9)
        assert ledger.history[0].specific == "gummy bears"
