#!/usr/bin/env python3
"""Console formatting shared by the CLI commands."""

import click

from ..core.dates import format_item_time
from ..core.money import Money
from ..ledger.models import HistoryItem, Ledger


def style_money(amount: Money) -> str:
    """Red for negative amounts, green otherwise."""
    return click.style(str(amount), fg="red" if amount.is_negative() else "green")


def format_item(item: HistoryItem) -> str:
    """One history line, e.g. ``Mar 04 09:15am: $4.50 coffee (latte)``."""
    when = click.style(format_item_time(item.time), fg="blue")
    amount = click.style(str(item.amount), fg="bright_red")
    reason = click.style(item.reason, fg="yellow")
    line = f"{when}: {amount} {reason}"
    if item.specific:
        line += f" ({item.specific})"
    return line


def echo_item(item: HistoryItem) -> None:
    click.echo(format_item(item))


def echo_balance(ledger: Ledger) -> None:
    """Print the balance, and the debt and total once debt exists."""
    click.echo(f"Balance: {style_money(ledger.balance)}")
    if ledger.debt.is_positive():
        click.echo(f"Debt: {click.style(str(ledger.debt), fg='red')}")
        click.echo(f"Total: {style_money(ledger.total_balance())}")


def echo_rate(ledger: Ledger) -> None:
    click.echo(f"Rate is {style_money(ledger.effective_rate())} per day")


def warn(message: str) -> None:
    """User-input problems: reported, but not fatal."""
    click.secho(message, fg="bright_red", err=True)
