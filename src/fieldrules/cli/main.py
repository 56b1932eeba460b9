"""fieldrules CLI entry point."""

import dataclasses
import logging
from pathlib import Path

import click

from fieldrules.config import SessionConfig
from fieldrules.messages.catalog import MessageCatalog
from fieldrules.rules.registry import RuleCategory, RuleRegistry
from fieldrules.session import ValidationSession
from fieldrules.types import ConfigurationError


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log rule evaluation.")
def cli(verbose: bool):
    """fieldrules: declarative field validation CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.argument("rules")
@click.argument("value")
@click.option("--field", "field_name", default="", help="Field name used in messages.")
@click.option(
    "--messages",
    default=None,
    help="Custom messages, pipe-delimited; prefix with {i,j} to cover several rules.",
)
@click.option("--locale", default=None, help="Message locale (default: en).")
@click.option(
    "--collect-all",
    is_flag=True,
    default=False,
    help="Report every failing rule instead of stopping at the first.",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with session settings.",
)
def check(
    rules: str,
    value: str,
    field_name: str,
    messages: str | None,
    locale: str | None,
    collect_all: bool,
    config_path: Path | None,
):
    """Validate VALUE against a RULES expression such as 'required|min:3'."""
    try:
        config = SessionConfig.from_yaml(config_path) if config_path else SessionConfig.from_env()
        if locale is not None:
            config = dataclasses.replace(config, locale=locale)
        if collect_all:
            config = dataclasses.replace(config, fail_fast=False)

        session = ValidationSession(rules, field_name=field_name, messages=messages, config=config)
        passed = session.validate(value)
    except ConfigurationError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    if passed:
        click.echo(click.style("✓ valid", fg="green"))
        return

    for rule, message in session.get_errors().items():
        click.echo(click.style(f"✗ {rule}: {message}", fg="red"))
    raise SystemExit(1)


@cli.command("rules")
def rules_cmd():
    """List registered rules by category."""
    for category in RuleCategory:
        definitions = sorted(RuleRegistry.list_by_category(category), key=lambda r: r.name)
        if not definitions:
            continue
        click.echo(click.style(category.value.title(), bold=True))
        for definition in definitions:
            click.echo(f"  {definition.name:<16} {definition.description}")


@cli.command()
def locales():
    """List shipped message locales."""
    for locale in MessageCatalog.default().locales():
        click.echo(locale)
