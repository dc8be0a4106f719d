#!/usr/bin/env python3
"""
Main CLI Entry Point for budgetme

Run without a command to print the current balance.
"""

import logging
import os

import click

from ..core.config import get_config
from .ledger import garnish, list_history, open_session, redo, report, spend, undo
from .output import echo_balance
from .settings import get_value, set_value


@click.group(invoke_without_command=True)
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    budgetme - a daily allowance you can spend, undo and share between machines.

    With no command, prints the current balance.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["BUDGETME_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("budgetme").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Config directory: {ctx.obj['config'].config_dir}")

    if debug:
        click.echo("Debug logging enabled")

    if ctx.invoked_subcommand is None:
        session = open_session(ctx)
        echo_balance(session.ledger)


@main.command()
def version() -> None:
    """Show version information."""
    from budgetme import __author__, __version__

    click.echo(f"budgetme v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]
    settings = config_obj.load_storage_settings()

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Config Directory: {config_obj.config_dir}")
    click.echo(f"  Settings File: {config_obj.settings_file}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")
    click.echo(f"  Provider: {settings.kind.value}")
    click.echo(f"  Data Path: {settings.local.path}")
    click.echo(f"  Bucket: {settings.s3.bucket_name} ({settings.s3.region})")


main.add_command(spend)
main.add_command(undo)
main.add_command(redo)
main.add_command(garnish)
main.add_command(list_history)
main.add_command(report)
main.add_command(set_value)
main.add_command(get_value)


if __name__ == "__main__":
    main()
