#!/usr/bin/env python3
"""
Settings Commands

``budgetme set KEY VALUES...`` and ``budgetme get KEY [VALUES...]``.

Ledger keys (rate, cringe, synonym) live in the ledger document and go
through the normal load / reconcile / commit cycle. Storage keys (provider,
path, access-key, secret-key, bucket-name, region) only rewrite config.yaml.
"""

from pathlib import Path

import click

from ..core.config import Config, StorageKind, StorageSettings
from ..core.money import Money
from ..ledger.categories import effective_multiplier, normalize, set_cringe, set_synonym, synonym_group
from .ledger import commit_session, open_session
from .output import echo_rate, warn

LEDGER_KEYS = ["rate", "cringe", "synonym"]
STORAGE_KEYS = ["provider", "path", "access-key", "secret-key", "bucket-name", "region"]
ALL_KEYS = LEDGER_KEYS + STORAGE_KEYS

KEY_ARITY = {"cringe": 2, "synonym": 2}


def _expect_values(key: str, values: tuple[str, ...], count: int) -> None:
    if len(values) != count:
        noun = "value" if count == 1 else "values"
        raise click.UsageError(f"'{key}' takes {count} {noun}, got {len(values)}")


def _mask(secret: str) -> str:
    if not secret:
        return "(not set)"
    return f"{secret[:4]}{'*' * max(len(secret) - 4, 0)}"


@click.command(name="set")
@click.argument("key", type=click.Choice(ALL_KEYS, case_sensitive=False))
@click.argument("values", nargs=-1)
@click.pass_context
def set_value(ctx: click.Context, key: str, values: tuple[str, ...]) -> None:
    """
    Set a configuration value.

    Examples:
      budgetme set rate 7.50
      budgetme set cringe coffee 1.5
      budgetme set synonym coffee cafe
      budgetme set provider s3
      budgetme set path ~/Dropbox/budget
    """
    key = key.lower()
    _expect_values(key, values, KEY_ARITY.get(key, 1))

    if key in STORAGE_KEYS:
        _set_storage_value(ctx.obj["config"], key, values[0])
        return

    session = open_session(ctx)
    ledger = session.ledger

    if key == "rate":
        try:
            rate = Money.from_dollars(values[0])
        except ValueError:
            raise click.ClickException(f"Invalid rate: {values[0]!r}")
        if rate.is_negative():
            warn("Rate must not be negative!")
            return
        ledger.rate = rate
        echo_rate(ledger)

    elif key == "cringe":
        keyword, raw_factor = values
        try:
            factor = float(raw_factor)
        except ValueError:
            raise click.ClickException(f"Invalid cringe factor: {raw_factor!r}")
        try:
            stored_under = set_cringe(ledger, keyword, factor)
        except ValueError as e:
            warn(str(e))
            return
        click.echo(f"Cringe factor for {normalize(keyword)}: {factor} (stored under {stored_under})")

    elif key == "synonym":
        first, second = values
        try:
            set_synonym(ledger, first, second)
        except ValueError as e:
            warn(str(e))
            return
        group = ", ".join(sorted(synonym_group(ledger, first)))
        click.echo(f"Synonyms: {group}")

    commit_session(session)


def _set_storage_value(config: Config, key: str, value: str) -> None:
    settings = config.load_storage_settings()

    if key == "provider":
        try:
            settings.kind = StorageKind.parse(value)
        except ValueError as e:
            raise click.ClickException(str(e))
        click.echo(f"Provider: {settings.kind.value}")

    elif key == "path":
        if value.strip().lower() == "none":
            settings.local.path = StorageSettings.default(config.config_dir).local.path
        else:
            settings.local.path = Path(value)
        click.echo(f"Data path: {settings.local.path}")

    elif key == "access-key":
        settings.s3.access_key = value
        click.echo(f"Access key: {_mask(value)}")

    elif key == "secret-key":
        settings.s3.secret_key = value
        click.echo(f"Secret key: {_mask(value)}")

    elif key == "bucket-name":
        settings.s3.bucket_name = value
        click.echo(f"Bucket name: {value}")

    elif key == "region":
        settings.s3.region = value
        click.echo(f"Region: {value}")

    errors = settings.validate()
    if errors:
        raise click.ClickException("; ".join(errors))

    config.save_storage_settings(settings)


@click.command(name="get")
@click.argument("key", type=click.Choice(ALL_KEYS, case_sensitive=False))
@click.argument("values", nargs=-1)
@click.pass_context
def get_value(ctx: click.Context, key: str, values: tuple[str, ...]) -> None:
    """
    Show a current configuration value.

    ``cringe`` and ``synonym`` take the keyword to look up.
    """
    key = key.lower()
    config: Config = ctx.obj["config"]

    if key in STORAGE_KEYS:
        _expect_values(key, values, 0)
        settings = config.load_storage_settings()
        shown = {
            "provider": settings.kind.value,
            "path": str(settings.local.path),
            "access-key": _mask(settings.s3.access_key),
            "secret-key": _mask(settings.s3.secret_key),
            "bucket-name": settings.s3.bucket_name,
            "region": settings.s3.region,
        }
        click.echo(f"{key}: {shown[key]}")
        return

    session = open_session(ctx)
    ledger = session.ledger

    if key == "rate":
        _expect_values(key, values, 0)
        echo_rate(ledger)

    elif key == "cringe":
        _expect_values(key, values, 1)
        click.echo(f"Cringe factor for {normalize(values[0])}: {effective_multiplier(ledger, values[0])}")

    elif key == "synonym":
        _expect_values(key, values, 1)
        others = sorted(synonym_group(ledger, values[0]) - {normalize(values[0])})
        if others:
            click.echo(f"Synonyms of {normalize(values[0])}: {', '.join(others)}")
        else:
            click.echo(f"{normalize(values[0])} has no synonyms")
