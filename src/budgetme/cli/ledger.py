#!/usr/bin/env python3
"""
Ledger Commands

spend / undo / redo / garnish / list / report, plus the session helpers the
settings commands share.
"""

from datetime import datetime, timedelta
from typing import Any

import click

from ..core.config import Config
from ..core.money import Money
from ..ledger.errors import LedgerError
from ..ledger.history import SpendStatus
from ..ledger.report import spending_by_category
from ..ledger.session import LedgerSession
from ..storage.factory import build_provider
from .output import echo_balance, echo_item, warn


class MoneyParamType(click.ParamType):
    """Dollar amount such as ``4.50`` or ``$4.50``."""

    name = "amount"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Money:
        if isinstance(value, Money):
            return value
        try:
            return Money.from_dollars(value)
        except (ValueError, TypeError):
            self.fail(f"{value!r} is not a valid dollar amount", param, ctx)


MONEY = MoneyParamType()


def open_session(ctx: click.Context) -> LedgerSession:
    """
    Load and accrue the ledger from the configured store.

    Fatal ledger errors (clock skew, unreadable version) abort the command.
    """
    config: Config = ctx.obj["config"]
    provider = build_provider(config.load_storage_settings())
    session = LedgerSession(provider)
    try:
        session.open()
    except LedgerError as e:
        raise click.ClickException(str(e))

    if ctx.obj.get("verbose"):
        click.echo(f"Ledger: {provider.describe()}")
    return session


def commit_session(session: LedgerSession) -> None:
    """Write the ledger back, or fail the command if it no longer reconciles."""
    try:
        result = session.commit()
    except LedgerError as e:
        raise click.ClickException(str(e))

    if not result:
        click.secho(result.message, fg="red", err=True)
        raise click.ClickException("Refusing to overwrite unrelated histories")


@click.command()
@click.argument("amount", type=MONEY)
@click.argument("reason")
@click.argument("specific", required=False)
@click.option("--loan", "-o", is_flag=True, help="Allow spending beyond the current balance")
@click.pass_context
def spend(ctx: click.Context, amount: Money, reason: str, specific: str | None, loan: bool) -> None:
    """
    Spend AMOUNT from the balance under category REASON.

    The amount is scaled by the category's cringe factor before it is
    deducted.

    Examples:
      budgetme spend 4.50 coffee
      budgetme spend 60 dinner "birthday" --loan
    """
    session = open_session(ctx)
    result = session.history.spend(amount, reason, specific, loan=loan)

    if result.status == SpendStatus.NON_POSITIVE_AMOUNT:
        warn("Amount must be positive!")
    elif result.status == SpendStatus.OVER_BUDGET:
        warn("Request is over budget!")
        if result.multiplier != 1.0:
            warn(f"({amount} x {result.multiplier} for {reason})")
    elif result.item is not None:
        echo_item(result.item)

    echo_balance(session.ledger)
    commit_session(session)


@click.command()
@click.pass_context
def undo(ctx: click.Context) -> None:
    """Undo the most recent spend."""
    session = open_session(ctx)
    try:
        item = session.history.undo()
    except LedgerError as e:
        raise click.ClickException(str(e))

    echo_item(item)
    echo_balance(session.ledger)
    commit_session(session)


@click.command()
@click.pass_context
def redo(ctx: click.Context) -> None:
    """Redo the most recently undone spend."""
    session = open_session(ctx)
    try:
        item = session.history.redo()
    except LedgerError as e:
        raise click.ClickException(str(e))

    echo_item(item)
    echo_balance(session.ledger)
    commit_session(session)


@click.command()
@click.pass_context
def garnish(ctx: click.Context) -> None:
    """
    Turn a negative balance into debt.

    The balance is reset to zero and half of each day's accrual goes towards
    the debt until it is repaid.
    """
    session = open_session(ctx)
    garnished = session.history.garnish()
    if garnished is None:
        warn("Balance is not negative, nothing to garnish")
    else:
        click.echo(f"Garnished {garnished} into debt")

    echo_balance(session.ledger)
    commit_session(session)


@click.command(name="list")
@click.pass_context
def list_history(ctx: click.Context) -> None:
    """Print the spending history, most recent last."""
    session = open_session(ctx)
    for item in session.ledger.history:
        echo_item(item)
    echo_balance(session.ledger)


@click.command()
@click.option("--days", type=click.IntRange(min=1), help="Only include the last N days")
@click.pass_context
def report(ctx: click.Context, days: int | None) -> None:
    """Summarize spending by category."""
    session = open_session(ctx)
    since = datetime.now() - timedelta(days=days) if days else None
    summary = spending_by_category(session.ledger, since=since)

    if summary.empty:
        click.echo("No spending recorded.")
    else:
        click.echo(f"{'Category':<20} {'Count':>5} {'Total':>12} {'Share':>7}")
        click.echo("-" * 47)
        for row in summary.to_dict("records"):
            total = Money.from_dollars(float(row["total"]))
            click.echo(f"{row['category']:<20} {int(row['count']):>5} {str(total):>12} {float(row['share']):>7.1%}")
        click.echo("-" * 47)
        grand_total = Money.from_dollars(float(summary["total"].sum()))
        click.echo(f"{'Total':<20} {int(summary['count'].sum()):>5} {str(grand_total):>12}")
