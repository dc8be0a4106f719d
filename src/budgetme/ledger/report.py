#!/usr/bin/env python3
"""
Spending Report

Summarizes a ledger's history by category with pandas.
"""

from datetime import datetime

import pandas as pd

from ..core.dates import to_millis
from .categories import normalize
from .models import Ledger

REPORT_COLUMNS = ["category", "count", "total", "share"]


def history_frame(ledger: Ledger) -> pd.DataFrame:
    """
    One row per history item.

    Columns: time (datetime), category (case-folded), specific, amount (dollars).
    """
    rows = [
        {
            "time": pd.to_datetime(item.time, unit="ms"),
            "category": normalize(item.reason),
            "specific": item.specific,
            "amount": item.amount.to_cents() / 100,
        }
        for item in ledger.history
    ]
    return pd.DataFrame(rows, columns=["time", "category", "specific", "amount"])


def spending_by_category(ledger: Ledger, since: datetime | None = None) -> pd.DataFrame:
    """
    Total spend per category, largest first.

    Args:
        ledger: Ledger to summarize
        since: Only include items recorded at or after this moment

    Returns:
        DataFrame with columns category, count, total (dollars) and share
        (fraction of all spend in the window); empty when nothing matches
    """
    if since is not None:
        cutoff = to_millis(since)
        items = [item for item in ledger.history if item.time >= cutoff]
        ledger = Ledger(history=items)

    df = history_frame(ledger)
    if df.empty:
        return pd.DataFrame(columns=REPORT_COLUMNS)

    summary = df.groupby("category")["amount"].agg(["count", "sum"]).reset_index()
    summary.columns = ["category", "count", "total"]
    summary["total"] = summary["total"].round(2)

    grand_total = summary["total"].sum()
    summary["share"] = summary["total"] / grand_total if grand_total else 0.0

    return summary.sort_values(["total", "category"], ascending=[False, True]).reset_index(drop=True)
