#!/usr/bin/env python3
"""
Unit tests for the spending report.
"""

from datetime import timedelta

import pytest

from budgetme.ledger.report import REPORT_COLUMNS, history_frame, spending_by_category


@pytest.fixture
def spent_ledger(fresh_ledger, make_item):
    fresh_ledger.history = [
        make_item(4.5, "coffee", "latte"),
        make_item(3, "bus", minutes=10),
        make_item(2, "Coffee", minutes=40),
    ]
    return fresh_ledger


@pytest.mark.unit
class TestHistoryFrame:
    """Test the per-item DataFrame."""

    def test_one_row_per_item(self, spent_ledger):
        df = history_frame(spent_ledger)

        assert list(df.columns) == ["time", "category", "specific", "amount"]
        assert len(df) == 3
        assert df["amount"].tolist() == [4.5, 3.0, 2.0]
        assert df["category"].tolist() == ["coffee", "bus", "coffee"]

    def test_empty_history(self, fresh_ledger):
        assert history_frame(fresh_ledger).empty


@pytest.mark.unit
class TestSpendingByCategory:
    """Test the category summary."""

    def test_groups_case_insensitively(self, spent_ledger):
        summary = spending_by_category(spent_ledger)

        assert list(summary.columns) == REPORT_COLUMNS
        assert summary["category"].tolist() == ["coffee", "bus"]
        assert summary["count"].tolist() == [2, 1]
        assert summary["total"].tolist() == [6.5, 3.0]

    def test_shares_sum_to_one(self, spent_ledger):
        summary = spending_by_category(spent_ledger)

        assert summary["share"].sum() == pytest.approx(1.0)
        assert summary["share"].iloc[0] == pytest.approx(6.5 / 9.5)

    def test_since_filters_older_items(self, spent_ledger, now):
        summary = spending_by_category(spent_ledger, since=now - timedelta(minutes=30))

        assert summary["category"].tolist() == ["coffee"]
        assert summary["total"].tolist() == [2.0]
        assert summary["share"].tolist() == [1.0]

    def test_empty_history(self, fresh_ledger):
        summary = spending_by_category(fresh_ledger)

        assert summary.empty
        assert list(summary.columns) == REPORT_COLUMNS

    def test_does_not_modify_ledger(self, spent_ledger, now):
        before = spent_ledger.copy()
        spending_by_category(spent_ledger, since=now)
        assert spent_ledger == before
